"""
English Haven - Test Configuration and Fixtures
"""
import pytest
from faker import Faker

from haven import create_app

fake = Faker()

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'admin-pass'


@pytest.fixture
def app(tmp_path):
    """Fresh app with an in-memory document store for each test"""
    app = create_app('haven.config.TestConfig')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'proofs')
    yield app


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user_data():
    return {
        'name': fake.name(),
        'email': fake.unique.email(),
        'phone': fake.phone_number(),
        'password': 'testpassword123',
    }


@pytest.fixture
def student_client(client, user_data):
    """Test client with a freshly signed-up student session"""
    response = client.post('/signup', data=user_data)
    assert response.status_code == 302
    return client


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    response = client.post('/login', data={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 302
    return client


def get_user(app, email):
    from haven.store import users
    with app.app_context():
        return users.find(email=email)
