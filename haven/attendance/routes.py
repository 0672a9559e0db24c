from flask import Blueprint, flash, redirect, url_for
from flask_login import current_user, login_required

from .service import mark_today

attendance_bp = Blueprint('attendance', __name__, url_prefix='/attendance')


@attendance_bp.route('/mark', methods=['POST'])
@login_required
def mark():
    if mark_today(current_user.id):
        flash('Attendance marked for today.', 'success')
    else:
        flash('You have already checked in today.', 'info')
    return redirect(url_for('main.portal'))
