import os
from dotenv import load_dotenv

load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'your-secret-key'
    # no default; create_app refuses to start without it
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET')
    TOKEN_TTL_SECONDS = int(os.environ.get('TOKEN_TTL_SECONDS', 3600))
    PASSWORD_HASH_METHOD = os.environ.get('PASSWORD_HASH_METHOD', 'scrypt')

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'ticketdesk.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # API is authenticated with bearer tokens, not cookies
    WTF_CSRF_ENABLED = False

    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp-mail.outlook.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS', 'true').lower() == 'true'
    MAIL_USERNAME = os.environ.get('EMAIL')
    MAIL_PASSWORD = os.environ.get('EMAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('EMAIL')

    NOTIFY_MAX_WORKERS = int(os.environ.get('NOTIFY_MAX_WORKERS', 4))


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    # scrypt at full cost makes the suite crawl
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'support@example.com'
    NOTIFY_MAX_WORKERS = 1
