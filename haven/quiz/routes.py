from flask import Blueprint, flash, jsonify, redirect, render_template, url_for, request
from flask_login import current_user, login_required

from ..errors import NotFoundError
from .service import attempts_for, get_quiz, record_forfeit, submit

quiz_bp = Blueprint('quiz', __name__, url_prefix='/quiz')


@quiz_bp.route('/<quiz_id>')
@login_required
def take_quiz(quiz_id):
    try:
        quiz = get_quiz(quiz_id)
    except NotFoundError as e:
        return e.message
    return render_template('quiz.html', quiz=quiz, attempts=attempts_for(quiz_id, current_user.id))


@quiz_bp.route('/<quiz_id>/forfeit', methods=['POST'])
@login_required
def forfeit(quiz_id):
    record_forfeit(quiz_id, current_user.id)
    return jsonify({'ok': True})


@quiz_bp.route('/<quiz_id>/submit', methods=['POST'])
@login_required
def submit_quiz(quiz_id):
    try:
        result = submit(quiz_id, current_user.id, request.form)
    except NotFoundError as e:
        return e.message
    quiz = get_quiz(quiz_id)
    flash(f"You scored {result['score']} / {len(quiz.get('questions') or [])} on {quiz.get('title')}.", 'success')
    return redirect(url_for('main.portal'))
