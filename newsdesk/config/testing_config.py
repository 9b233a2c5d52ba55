"""
Testing environment configuration module.
"""
from newsdesk.config.base_config import BaseConfig


class TestingConfig(BaseConfig):
    """Testing environment configuration class."""

    TESTING = True
    DEBUG = True

    # In-memory SQLite, one database per application instance
    DB_NAME = "newspaper_subscription_test"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = "WARNING"

    # Tests create tables themselves and drive the sweep explicitly
    CREATE_TABLES_ON_STARTUP = False
    EXPIRE_ON_STARTUP = False
