import logging
from functools import wraps

from flask import current_app, redirect, session, url_for
from flask_login import UserMixin, current_user, login_user, logout_user

from ..errors import AuthError, ConflictError, ValidationError
from ..extensions import bcrypt, login_manager
from ..store import new_id, users

logger = logging.getLogger(__name__)

SESSION_KEY = 'user'


class SessionUser(UserMixin):
    """Identity fields copied from the User record at login time.

    The snapshot lives in the signed session cookie and is not refreshed when
    the stored User changes.
    """

    def __init__(self, id, name, email, role):
        self.id = id
        self.name = name
        self.email = email
        self.role = role

    @classmethod
    def from_record(cls, record):
        return cls(record['id'], record['name'], record['email'], record['role'])

    @classmethod
    def from_snapshot(cls, data):
        return cls(data['id'], data['name'], data['email'], data['role'])

    def to_snapshot(self):
        return {'id': self.id, 'name': self.name, 'email': self.email, 'role': self.role}

    @property
    def is_admin(self):
        return self.role == 'admin'


@login_manager.user_loader
def load_user(user_id):
    snapshot = session.get(SESSION_KEY)
    if snapshot and snapshot.get('id') == user_id:
        return SessionUser.from_snapshot(snapshot)
    return None


def is_authenticated(user):
    return user is not None and bool(getattr(user, 'is_authenticated', False))


def is_admin(user):
    return is_authenticated(user) and getattr(user, 'role', None) == 'admin'


def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not is_admin(current_user):
            return redirect(url_for('auth.login'))
        return view(*args, **kwargs)
    return wrapped


def _hash(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def sign_up(name, email, phone, password):
    name = (name or '').strip()
    email = (email or '').strip()
    if not name or not email or not password:
        raise ValidationError('All fields required')

    with users.mutate() as records:
        if any(u.get('email') == email for u in records):
            raise ConflictError('Email already exists')
        user = {
            'id': new_id(),
            'name': name,
            'email': email,
            'phone': (phone or '').strip(),
            'role': 'student',
            'passwordHash': _hash(password),
        }
        records.append(user)

    logger.info(f"New student account {user['id']} for {email}")
    return SessionUser.from_record(user)


def log_in(email, password):
    email = (email or '').strip()
    user = users.find(email=email)
    if user is None or not password or not bcrypt.check_password_hash(user['passwordHash'], password):
        logger.info(f"Failed login for {email}")
        raise AuthError('Invalid credentials')
    return SessionUser.from_record(user)


def start_session(user):
    login_user(user)
    session[SESSION_KEY] = user.to_snapshot()
    session.permanent = True


def log_out():
    logout_user()
    session.clear()


def ensure_admin_seed():
    """Create the configured admin account unless it already exists."""
    email = current_app.config['ADMIN_EMAIL']
    if users.find(email=email) is not None:
        return False
    users.append({
        'id': new_id(),
        'name': 'Admin',
        'email': email,
        'phone': '',
        'role': 'admin',
        'passwordHash': _hash(current_app.config['ADMIN_PASSWORD']),
    })
    logger.info(f"Seeded admin account {email}")
    return True


def safe_next(target, default='/portal'):
    if target and target.startswith('/') and not target.startswith('//') and '\\' not in target:
        return target
    return default
