"""Quiz lifecycle: authoring, serving, scoring.

A quiz carries ``timeLimit`` and ``maxTries`` but neither is enforced here.
The time limit is a client-side countdown and every submission is recorded,
however many results the user already has for that quiz.
"""
import json
import logging
import re
from collections import namedtuple

from flask import current_app

from ..errors import NotFoundError, ParseError
from ..store import new_id, now_ms, quizzes, results

logger = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT = 600
DEFAULT_MAX_TRIES = 3

ParseResult = namedtuple('ParseResult', ['questions', 'error'])


def parse_questions(raw):
    try:
        questions = json.loads(raw or '[]')
    except (TypeError, ValueError) as e:
        return ParseResult(None, f'Questions are not valid JSON: {e}')
    if not isinstance(questions, list) or not all(isinstance(q, dict) for q in questions):
        return ParseResult(None, 'Questions must be a JSON array of objects')
    return ParseResult(questions, None)


def lenient(result):
    if result.error:
        logger.warning(f"Dropping malformed quiz questions: {result.error}")
        return []
    return result.questions


def strict(result):
    if result.error:
        raise ParseError(result.error)
    return result.questions


POLICIES = {'lenient': lenient, 'strict': strict}


def resolve_policy(name):
    key = (name or 'lenient').strip().lower()
    if key not in POLICIES:
        logger.warning(f"Unknown QUIZ_QUESTIONS_POLICY {name!r}, using lenient")
        key = 'lenient'
    return POLICIES[key]


def _to_int(value, default):
    # leading digits count, like "600s"; zero or negative falls back to the default
    match = re.match(r'\s*([+-]?\d+)', str(value)) if value is not None else None
    if match is None:
        return default
    number = int(match.group(1))
    return number if number > 0 else default


def create_quiz(batch_id, title, time_limit, max_tries, questions_json, policy=None):
    if policy is None:
        policy = resolve_policy(current_app.config.get('QUIZ_QUESTIONS_POLICY'))
    questions = policy(parse_questions(questions_json))
    quiz = {
        'id': new_id(),
        'batchId': batch_id,
        'title': title,
        'timeLimit': _to_int(time_limit, DEFAULT_TIME_LIMIT),
        'maxTries': _to_int(max_tries, DEFAULT_MAX_TRIES),
        'questions': questions,
    }
    quizzes.append(quiz)
    logger.info(f"Created quiz {quiz['id']} with {len(questions)} questions for batch {batch_id}")
    return quiz


def get_quizzes_for_batch(batch_id):
    return quizzes.filter(batchId=batch_id)


def get_quiz(quiz_id):
    quiz = quizzes.find(id=quiz_id)
    if quiz is None:
        raise NotFoundError('Quiz not found')
    return quiz


def record_forfeit(quiz_id, user_id):
    # Reported by the browser when the quiz tab loses focus; nothing is stored yet.
    logger.info(f"User {user_id} left quiz {quiz_id} during an attempt")


def _normalize(value):
    if value is None:
        return ''
    return str(value).strip().lower()


def score_answers(questions, answers):
    score = 0
    for idx, question in enumerate(questions):
        if _normalize(answers.get(f'q{idx}')) == _normalize(question.get('answer')):
            score += 1
    return score


def submit(quiz_id, user_id, answers, now=None):
    quiz = get_quiz(quiz_id)
    score = score_answers(quiz.get('questions') or [], answers)
    result = {
        'id': new_id(),
        'quizId': quiz['id'],
        'userId': user_id,
        'score': score,
        'at': now_ms() if now is None else now,
    }
    results.append(result)
    logger.info(f"User {user_id} scored {score} on quiz {quiz['id']}")
    return result


def results_for_user(user_id):
    return results.filter(userId=user_id)


def attempts_for(quiz_id, user_id):
    return len(results.filter(quizId=quiz_id, userId=user_id))
