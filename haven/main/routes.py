from flask import Blueprint, render_template
from flask_login import current_user, login_required

from ..attendance.service import has_marked_today
from ..enrollment.service import get_batch, get_enrollment_for_user, payment_status
from ..quiz.service import get_quizzes_for_batch, results_for_user

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def home():
    return render_template('home.html')


@main_bp.route('/portal')
@login_required
def portal():
    enrollment = get_enrollment_for_user(current_user.id)
    if enrollment is None:
        return render_template('not_enrolled.html')

    my_results = results_for_user(current_user.id)
    attempts = {}
    for r in my_results:
        attempts[r['quizId']] = attempts.get(r['quizId'], 0) + 1

    return render_template(
        'portal.html',
        enrollment=enrollment,
        batch=get_batch(enrollment.get('batchId')),
        paid_label=payment_status(enrollment),
        quizzes=get_quizzes_for_batch(enrollment.get('batchId')),
        attempts=attempts,
        results=my_results,
        marked_today=has_marked_today(current_user.id),
    )
