"""
Configuration for the job-search CRM.

Values come from the environment (a local ``.env`` is loaded first). Pick a
class with ``create_app('development' | 'production' | 'testing')``.
"""
import hashlib
import logging
import os
from dotenv import load_dotenv

load_dotenv()

INSTANCE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'instance')
SQLITE_URL = f"sqlite:///{os.path.join(INSTANCE_DIR, 'jobsearch.db')}"


def _env(*names):
    """First non-blank value among the given environment variables."""
    for name in names:
        value = (os.environ.get(name) or '').strip()
        if value:
            return value
    return None


def database_url(default):
    """DATABASE_URL (or ``default``), with Heroku/Railway ``postgres://`` rewritten."""
    url = _env('DATABASE_URL') or default
    if url.startswith('postgres://'):
        url = 'postgresql://' + url[len('postgres://'):]
    return url


def _derived_secret():
    """Stable secret derived from DATABASE_URL so every gunicorn worker signs alike."""
    url = _env('DATABASE_URL')
    if not url:
        return None
    return hashlib.sha256(url.encode()).hexdigest()


class Config:
    """Settings shared by every environment."""
    SECRET_KEY = _env('SECRET_KEY', 'FLASK_SECRET_KEY')

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # Import documents arrive as one JSON body
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    # Bearer tokens; an unset JWT_SECRET falls back to SECRET_KEY in create_app()
    JWT_SECRET = _env('JWT_SECRET')
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_HOURS = int(_env('JWT_EXPIRES_HOURS') or 168)

    EXPORT_SCHEMA_VERSION = '1.0'
    LOG_LEVEL = _env('LOG_LEVEL') or 'INFO'


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = database_url(SQLITE_URL)
    SECRET_KEY = Config.SECRET_KEY or 'dev-secret-key-change-in-production'


class ProductionConfig(Config):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = database_url(SQLITE_URL)
    # create_app() refuses to start when no signing key can be found
    SECRET_KEY = Config.SECRET_KEY or _derived_secret()
    if SECRET_KEY and not Config.SECRET_KEY:
        logging.warning("SECRET_KEY not set; using a key derived from DATABASE_URL.")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET = 'test-jwt-secret'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
