from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..auth.service import admin_required
from ..enrollment.service import create_batch, payment_status
from ..errors import ParseError, ValidationError
from ..quiz.service import create_quiz
from ..store import batches, enrollments, quizzes, results, users

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


@admin_bp.route('')
@admin_required
def dashboard():
    all_users = users.list_all()
    all_batches = batches.list_all()
    all_quizzes = quizzes.list_all()

    users_by_id = {u['id']: u for u in all_users}
    batches_by_id = {b['id']: b for b in all_batches}
    quizzes_by_id = {q['id']: q for q in all_quizzes}

    rows = []
    for e in enrollments.list_all():
        rows.append({
            'enrollment': e,
            'user': users_by_id.get(e.get('userId')),
            'batch': batches_by_id.get(e.get('batchId')),
            'status': payment_status(e),
        })

    return render_template(
        'admin.html',
        users=all_users,
        enrollments=rows,
        batches=all_batches,
        quizzes=all_quizzes,
        results=results.list_all(),
        users_by_id=users_by_id,
        quizzes_by_id=quizzes_by_id,
    )


@admin_bp.route('/batch/new', methods=['POST'])
@admin_required
def new_batch():
    try:
        batch = create_batch(request.form.get('name'), request.form.get('timeSlot'))
    except ValidationError as e:
        flash(e.message, e.category)
    else:
        flash(f"Batch {batch['name']} created.", 'success')
    return redirect(url_for('admin.dashboard'))


@admin_bp.route('/quiz/new', methods=['POST'])
@admin_required
def new_quiz():
    try:
        quiz = create_quiz(
            request.form.get('batchId'),
            request.form.get('title'),
            request.form.get('timeLimit'),
            request.form.get('maxTries'),
            request.form.get('questions'),
        )
    except ParseError as e:
        flash(e.message, e.category)
    else:
        flash(f"Quiz created with {len(quiz['questions'])} questions.", 'success')
    return redirect(url_for('admin.dashboard'))
