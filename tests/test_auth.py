import pytest
from markupsafe import escape

from haven.auth.service import ensure_admin_seed, is_admin, is_authenticated, log_in, safe_next, sign_up
from haven.errors import AuthError, ConflictError, ValidationError
from haven.store import users

from .conftest import ADMIN_EMAIL, get_user


def test_signup_creates_student_and_logs_in(client, app, user_data):
    """Test signup redirects to enrollment with an active session"""
    response = client.post('/signup', data=user_data)

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/enroll')

    user = get_user(app, user_data['email'])
    assert user['role'] == 'student'
    assert user['passwordHash'] != user_data['password']

    portal = client.get('/portal')
    assert portal.status_code == 200
    assert b'not enrolled' in portal.data


def test_signup_duplicate_email_rejected(app_ctx, user_data):
    """Test second signup with the same email raises ConflictError"""
    sign_up(user_data['name'], user_data['email'], None, user_data['password'])

    with pytest.raises(ConflictError):
        sign_up('Someone Else', user_data['email'], None, 'other-password')

    assert len(users.filter(email=user_data['email'])) == 1


def test_signup_email_match_is_case_sensitive(app_ctx, user_data):
    sign_up(user_data['name'], user_data['email'], None, user_data['password'])
    sign_up(user_data['name'], user_data['email'].upper(), None, user_data['password'])

    assert len(users.list_all()) == 3  # admin plus two students


def test_signup_duplicate_email_route(client, user_data):
    client.post('/signup', data=user_data)
    client.post('/logout')

    response = client.post('/signup', data=user_data)

    assert response.status_code == 400
    assert b'Email already exists' in response.data


@pytest.mark.parametrize('missing', ['name', 'email', 'password'])
def test_signup_requires_fields(app_ctx, user_data, missing):
    user_data[missing] = ''
    with pytest.raises(ValidationError):
        sign_up(user_data['name'], user_data['email'], user_data['phone'], user_data['password'])


def test_login_errors_do_not_leak_which_field(app_ctx, user_data):
    """Test unknown email and wrong password produce the same error"""
    sign_up(user_data['name'], user_data['email'], None, user_data['password'])

    with pytest.raises(AuthError) as unknown:
        log_in('nobody@example.com', user_data['password'])
    with pytest.raises(AuthError) as wrong:
        log_in(user_data['email'], 'wrongpassword')

    assert unknown.value.message == wrong.value.message == 'Invalid credentials'


def test_login_success_redirects_to_next(client, user_data):
    client.post('/signup', data=user_data)
    client.post('/logout')

    response = client.post('/login', data={
        'email': user_data['email'],
        'password': user_data['password'],
        'next': '/enroll',
    })

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/enroll')


def test_login_invalid_credentials(client, user_data):
    response = client.post('/login', data={'email': user_data['email'], 'password': 'nope'})

    assert response.status_code == 401
    assert b'Invalid credentials' in response.data


def test_safe_next_rejects_offsite_targets():
    assert safe_next('/quiz/abc') == '/quiz/abc'
    assert safe_next('https://evil.example.com') == '/portal'
    assert safe_next('//evil.example.com') == '/portal'
    assert safe_next(None) == '/portal'


def test_logout_destroys_session(student_client):
    student_client.post('/logout')

    response = student_client.get('/portal')
    assert response.status_code == 302
    assert '/login' in response.headers['Location']


def test_logout_without_session_is_accepted(client):
    response = client.post('/logout')
    assert response.status_code == 302


def test_anonymous_user_redirected_with_next(client):
    response = client.get('/portal')

    assert response.status_code == 302
    assert '/login' in response.headers['Location']
    assert 'next=' in response.headers['Location']


def test_student_cannot_open_admin(student_client):
    response = student_client.get('/admin')

    assert response.status_code == 302
    assert '/login' in response.headers['Location']


def test_admin_can_open_dashboard(admin_client):
    response = admin_client.get('/admin')
    assert response.status_code == 200
    assert b'Admin dashboard' in response.data


def test_admin_seed_is_idempotent(app_ctx):
    """Test the admin account is created once at startup and never again"""
    assert ensure_admin_seed() is False
    admins = users.filter(email=ADMIN_EMAIL)
    assert len(admins) == 1
    assert admins[0]['role'] == 'admin'


def test_session_is_a_snapshot(app, student_client, user_data):
    """Test later edits to the stored user do not reach the active session"""
    with app.app_context():
        with users.mutate() as records:
            for record in records:
                if record['email'] == user_data['email']:
                    record['name'] = 'Renamed Student'

    response = student_client.get('/portal')
    assert str(escape(user_data['name'])).encode() in response.data
    assert b'Renamed Student' not in response.data


def test_guard_predicates():
    class Anonymous:
        is_authenticated = False

    class Student:
        is_authenticated = True
        role = 'student'

    class Admin:
        is_authenticated = True
        role = 'admin'

    assert not is_authenticated(None)
    assert not is_authenticated(Anonymous())
    assert is_authenticated(Student())
    assert not is_admin(Student())
    assert is_admin(Admin())
