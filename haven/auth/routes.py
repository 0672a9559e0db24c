from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import current_user

from ..errors import AuthError, ConflictError, ValidationError
from .service import log_in, log_out, safe_next, sign_up, start_session

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    if request.method == 'POST':
        try:
            user = sign_up(
                request.form.get('name'),
                request.form.get('email'),
                request.form.get('phone'),
                request.form.get('password'),
            )
        except (ValidationError, ConflictError) as e:
            flash(e.message, e.category)
            return render_template('signup.html', form=request.form), 400
        start_session(user)
        return redirect(url_for('enrollment.enroll'))
    return render_template('signup.html', form={})


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    next_page = safe_next(request.values.get('next'))
    if request.method == 'POST':
        try:
            user = log_in(request.form.get('email'), request.form.get('password'))
        except AuthError as e:
            flash(e.message, e.category)
            return render_template('login.html', next=next_page), 401
        start_session(user)
        flash(f'Welcome back, {user.name}!', 'success')
        return redirect(next_page)
    if current_user.is_authenticated:
        return redirect(next_page)
    return render_template('login.html', next=next_page)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    log_out()
    return redirect(url_for('main.home'))
