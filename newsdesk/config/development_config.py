"""
Development environment configuration module.
"""
import os

from newsdesk.config.base_config import BaseConfig, _env_flag


class DevelopmentConfig(BaseConfig):
    """Development environment configuration class."""

    DEBUG = True
    SQLALCHEMY_ECHO = _env_flag("SQLALCHEMY_ECHO", False)

    DB_NAME = os.getenv("DB_NAME", "newspaper_subscription_dev")
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "SQLALCHEMY_DATABASE_URI",
        f"mysql+pymysql://{BaseConfig.DB_USER}:{BaseConfig.DB_PASSWORD}"
        f"@{BaseConfig.DB_HOST}:{BaseConfig.DB_PORT}/{DB_NAME}",
    )

    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

    # Local databases are usually created by hand, so build the tables for convenience
    CREATE_TABLES_ON_STARTUP = _env_flag("CREATE_TABLES_ON_STARTUP", True)
