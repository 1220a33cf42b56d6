import os
import logging
from datetime import timedelta


def _env_flag(name, default='false'):
    return os.environ.get(name, default).lower() in ['true', 'on', '1']


class BaseConfig:
    """
    Base configuration class using environment variables
    """

    # Application settings
    APP_NAME = os.environ.get('APP_NAME', 'Solar Scheduler')

    # Secret Key
    SECRET_KEY = os.environ.get('SECRET_KEY', 'fallback-secret-key-for-development')

    # Security settings
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE', 'true')
    REMEMBER_COOKIE_SECURE = _env_flag('REMEMBER_COOKIE_SECURE', 'true')
    REMEMBER_COOKIE_DURATION = timedelta(days=14)
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:3000').split(',')

    # Pagination
    ITEMS_PER_PAGE = int(os.environ.get('ITEMS_PER_PAGE', 20))

    # Logging Configuration
    LOG_TO_STDOUT = _env_flag('LOG_TO_STDOUT')
    LOGGING_LEVEL = os.environ.get('LOGGING_LEVEL', 'INFO').upper()
    SLOW_QUERY_THRESHOLD = float(os.environ.get('SLOW_QUERY_THRESHOLD', 0.5))

    # Sign-in shortcuts
    DEMO_ACCOUNT = ('demo@solarscheduler.app', 'Demo User')
    GUEST_ACCOUNT = ('guest@solarscheduler.app', 'Guest User')

    @classmethod
    def init_app(cls, app):
        """
        Configure logging and other app-specific initialization.
        :param app: Flask application instance
        """
        app.logger.setLevel(cls.LOGGING_LEVEL)
        app.logger.info(f"{cls.APP_NAME} initialized with {cls.__name__}")

        app.logger.debug(f"SESSION_COOKIE_SECURE: {cls.SESSION_COOKIE_SECURE}")
        app.logger.debug(f"ITEMS_PER_PAGE: {cls.ITEMS_PER_PAGE}")
        app.logger.debug(f"LOGGING_LEVEL: {cls.LOGGING_LEVEL}")


class DatabaseConfig:
    """
    Database configuration with environment variable support
    """
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Connection Pool Settings
    SQLALCHEMY_POOL_SIZE = int(os.environ.get('DATABASE_POOL_SIZE', 10))
    SQLALCHEMY_POOL_RECYCLE = int(os.environ.get('DATABASE_POOL_RECYCLE', 1800))  # 30 minutes

    SQLALCHEMY_ECHO = _env_flag('SQLALCHEMY_ECHO')

    @staticmethod
    def get_database_uri(config_name):
        """
        Generate database URI based on configuration environment

        Args:
            config_name: Name of the configuration environment
        Returns:
            str: Database connection URI
        """
        if config_name == 'testing':
            return 'sqlite:///:memory:'

        db_url = os.environ.get('DATABASE_URL')
        if db_url:
            return db_url

        db_user = os.environ.get('DATABASE_USER')
        db_password = os.environ.get('DATABASE_PASSWORD')
        db_host = os.environ.get('DATABASE_HOST', 'localhost')
        db_port = os.environ.get('DATABASE_PORT', '3306')
        db_name = os.environ.get('DATABASE_NAME', 'solar_scheduler_db')

        if all([db_user, db_password, db_host, db_name]):
            return f'mysql+pymysql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}'

        # Fallback to SQLite
        default_db_path = os.path.join(
            os.path.abspath(os.path.dirname(__file__)),
            '..',
            'solar_scheduler.db'
        )
        return f'sqlite:///{os.path.normpath(default_db_path)}'


class DevelopmentConfig(BaseConfig, DatabaseConfig):
    """
    Development-specific configuration
    """
    DEBUG = True
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    LOGGING_LEVEL = logging.getLevelName(logging.DEBUG)
    SQLALCHEMY_DATABASE_URI = DatabaseConfig.get_database_uri('development')


class ProductionConfig(BaseConfig, DatabaseConfig):
    """
    Production-specific configuration
    """
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = DatabaseConfig.get_database_uri('production')


class TestingConfig(BaseConfig, DatabaseConfig):
    """
    Testing-specific configuration
    """
    TESTING = True
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    SQLALCHEMY_DATABASE_URI = DatabaseConfig.get_database_uri('testing')


def get_config(config_name):
    """
    Factory function to return the appropriate configuration class

    :param config_name: Name of the configuration ('development', 'production', 'testing')
    :return: Configuration class
    """
    config_mapping = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig
    }

    return config_mapping.get((config_name or '').lower(), DevelopmentConfig)
