"""
Configuration settings for the Quote Wall application
"""
import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _database_uri(basedir):
    """Build the database URI from the environment.

    ``DATABASE_URL`` wins; otherwise the RDS_* variables describe a
    PostgreSQL server. Without either, a local SQLite file is used.
    """
    if os.environ.get('DATABASE_URL'):
        return os.environ['DATABASE_URL']

    if not os.environ.get('RDS_HOSTNAME'):
        return 'sqlite:///' + os.path.join(basedir, 'instance', 'quotewall.db')

    uri = 'postgresql://{user}:{password}@{host}:{port}/{name}'.format(
        user=os.environ.get('RDS_USERNAME') or 'postgres',
        password=os.environ.get('RDS_PASSWORD') or 'admin',
        host=os.environ.get('RDS_HOSTNAME'),
        port=os.environ.get('RDS_PORT') or 5432,
        name=os.environ.get('RDS_DB_NAME') or 'usersdb',
    )
    if os.environ.get('DB_SSL'):
        uri += '?sslmode=require'
    return uri


class Config:
    """Flask application configuration"""

    # Session signing secret
    SECRET_KEY = os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY') or \
        'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = _database_uri(basedir)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Sessions expire a fixed time after the last write
    PERMANENT_SESSION_LIFETIME = timedelta(hours=int(os.environ.get('SESSION_TTL_HOURS') or 24))
    SESSION_REFRESH_EACH_REQUEST = True

    PORT = int(os.environ.get('PORT') or 3000)
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'test-secret'
