import os
import tempfile
from datetime import timedelta


class Config:
    SECRET_KEY = os.environ.get('SESSION_SECRET') or 'dev_secret'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///haven.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_NAME = 'eh_sess'
    PERMANENT_SESSION_LIFETIME = timedelta(days=50 * 365)

    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL') or 'admin@englishhaven.com'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'enghaven(f)'

    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(tempfile.gettempdir(), 'haven-proofs')
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

    # 'lenient' drops malformed question JSON to an empty list, 'strict' rejects it
    QUIZ_QUESTIONS_POLICY = os.environ.get('QUIZ_QUESTIONS_POLICY') or 'lenient'

    WHATSAPP_NUMBER = os.environ.get('WHATSAPP_NUMBER') or '+92 322 2694045'


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ADMIN_EMAIL = 'admin@example.com'
    ADMIN_PASSWORD = 'admin-pass'
    QUIZ_QUESTIONS_POLICY = 'lenient'
    BCRYPT_LOG_ROUNDS = 4
