"""
Configuration for the Student Records module
"""

import os
from urllib.parse import quote_plus
import dotenv
from sqlalchemy.pool import StaticPool
dotenv.load_dotenv()  # Load environment variables from .env file

class Config:
    """Base configuration"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'supersecretkey'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Database settings (DATABASE_URL wins, then DB_* for MySQL, then local SQLite)
    DATABASE_URL = os.environ.get('DATABASE_URL')
    MYSQL_HOST = os.environ.get('DB_HOST')
    MYSQL_PORT = int(os.environ.get('DB_PORT', 3306))
    MYSQL_USERNAME = os.environ.get('DB_USER')
    MYSQL_PASSWORD = os.environ.get('DB_PASS', '')
    MYSQL_DATABASE = os.environ.get('DB_NAME')
    MYSQL_CHARSET = 'utf8mb4'
    SQLITE_PATH = os.environ.get('SQLITE_PATH', 'school.db')

    # SQLAlchemy settings
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 280,
        'pool_pre_ping': True,
    }

    # Werkzeug hashing method per identity class; 'default' covers the rest
    PASSWORD_HASH_METHODS = {
        'default': os.environ.get('PASSWORD_HASH_METHOD', 'scrypt'),
    }

    def _encoded_password(self) -> str:
        """Percent-encode special characters for URL usage."""
        return quote_plus(self.MYSQL_PASSWORD) if self.MYSQL_PASSWORD else ''

    def get_database_uri(self) -> str:
        """Get the database URI for this environment."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if self.MYSQL_HOST and self.MYSQL_USERNAME and self.MYSQL_DATABASE:
            user = self.MYSQL_USERNAME
            pwd = self._encoded_password()
            host = self.MYSQL_HOST
            port = self.MYSQL_PORT
            database = self.MYSQL_DATABASE

            if pwd:
                return f"mysql+pymysql://{user}:{pwd}@{host}:{port}/{database}?charset={self.MYSQL_CHARSET}"
            return f"mysql+pymysql://{user}@{host}:{port}/{database}?charset={self.MYSQL_CHARSET}"

        return f"sqlite:///{self.SQLITE_PATH}"


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    # One shared in-memory SQLite connection for every session
    SQLALCHEMY_ENGINE_OPTIONS = {
        'poolclass': StaticPool,
        'connect_args': {'check_same_thread': False},
    }
    PASSWORD_HASH_METHODS = {
        'default': 'pbkdf2:sha256:1000',
    }

    def get_database_uri(self) -> str:
        return 'sqlite:///:memory:'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
