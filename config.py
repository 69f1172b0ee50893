import os
import secrets


def _as_bool(value, default=False):
    if value is None:
        return default
    return str(value).strip().lower() in {'1', 'true', 'yes', 'on'}


def _redis_url(url):
    # Heroku Redis uses self-signed certificates in chain
    if url and url.startswith('rediss://'):
        return url + '?ssl_cert_reqs=none'
    return url


class Config:
    """Base configuration"""
    # Generate a temporary key for development if not set
    _secret = os.environ.get('SECRET_KEY')
    if not _secret:
        _secret = secrets.token_hex(32)
        print("WARNING: Using auto-generated SECRET_KEY. Set SECRET_KEY environment variable for production.")
    SECRET_KEY = _secret

    # Bearer tokens
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or _secret
    JWT_ALGORITHM = os.environ.get('JWT_ALGORITHM', 'HS256')
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get('ACCESS_TOKEN_EXPIRE_MINUTES', '60'))

    # Database - Handle Heroku's postgres:// -> postgresql:// conversion
    database_url = os.environ.get('DATABASE_URL') or 'postgresql://localhost/jobboard'
    if database_url.startswith('postgres://'):
        database_url = database_url.replace('postgres://', 'postgresql://', 1)
    SQLALCHEMY_DATABASE_URI = database_url
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'max_overflow': 20,
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # Redis (SocketIO message queue and rate limit storage)
    REDIS_URL = os.environ.get('REDIS_URL') or 'redis://localhost:6379/0'

    # SocketIO
    SOCKETIO_MESSAGE_QUEUE = _redis_url(REDIS_URL)
    SOCKETIO_ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE', 'eventlet')
    SOCKETIO_CORS_ORIGINS = os.environ.get('SOCKETIO_CORS_ORIGINS', 'http://localhost:5173').split(',')

    # Rate limiting (Flask-Limiter reads these keys)
    RATELIMIT_STORAGE_URI = _redis_url(REDIS_URL)
    RATELIMIT_ENABLED = _as_bool(os.environ.get('RATELIMIT_ENABLED'), default=True)
    RATELIMIT_DEFAULT = '200 per hour'

    # Error Tracking
    SENTRY_DSN = os.environ.get('SENTRY_DSN')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Hiring workflow policy
    STRICT_APPLICATION_TRANSITIONS = _as_bool(os.environ.get('STRICT_APPLICATION_TRANSITIONS'), default=True)
    NOTIFY_ON_REJECTION = _as_bool(os.environ.get('NOTIFY_ON_REJECTION'), default=False)
    APPLICANT_LIST_OWNER_ONLY = _as_bool(os.environ.get('APPLICANT_LIST_OWNER_ONLY'), default=True)

    # Recommendations
    RECOMMENDATION_LIMIT = int(os.environ.get('RECOMMENDATION_LIMIT', '10'))
    RECOMMENDATION_FALLBACK_APPROVED_ONLY = _as_bool(
        os.environ.get('RECOMMENDATION_FALLBACK_APPROVED_ONLY'), default=False
    )


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    SQLALCHEMY_ECHO = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    # Add SSL mode for Postgres on Heroku if not already present
    if 'postgresql://' in Config.database_url and 'sslmode' not in Config.database_url:
        SQLALCHEMY_DATABASE_URI = Config.database_url + '?sslmode=require'


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    JWT_SECRET_KEY = 'testing-jwt-secret-key'
    # Use TEST_DATABASE_URL from environment if set (for CI), otherwise in-memory SQLite
    SQLALCHEMY_DATABASE_URI = os.environ.get('TEST_DATABASE_URL') or 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False  # Disable rate limiting in tests
    RATELIMIT_STORAGE_URI = 'memory://'
    SOCKETIO_ASYNC_MODE = 'threading'  # Use threading mode for tests
    SOCKETIO_MESSAGE_QUEUE = None  # Disable Redis message queue for tests
    SENTRY_DSN = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
