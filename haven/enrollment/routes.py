from flask import Blueprint, Response, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from ..auth.service import admin_required
from ..errors import NotFoundError, StorageError, ValidationError
from .service import enroll as enroll_user
from .service import list_batches, load_proof

enrollment_bp = Blueprint('enrollment', __name__)


@enrollment_bp.route('/enroll', methods=['GET', 'POST'])
@login_required
def enroll():
    if request.method == 'POST':
        try:
            enroll_user(
                current_user.id,
                request.form.get('batchId'),
                request.form.get('timing'),
                request.form.get('method'),
                proof=request.files.get('proof'),
            )
        except ValidationError as e:
            flash(e.message, e.category)
            return render_template('enroll.html', batches=list_batches()), 400
        return redirect(url_for('main.portal'))
    return render_template('enroll.html', batches=list_batches())


@enrollment_bp.route('/proof/<user_id>')
@admin_required
def proof(user_id):
    try:
        data, mimetype = load_proof(user_id)
    except (NotFoundError, StorageError) as e:
        return e.message
    return Response(data, mimetype=mimetype)
