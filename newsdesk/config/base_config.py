"""
Base configuration module with common settings.
"""
import os


def _env_flag(name, default):
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    """Base configuration class with common settings."""

    # Flask settings
    SECRET_KEY = os.getenv("SECRET_KEY", "default-dev-key-not-for-production")
    DEBUG = False
    TESTING = False

    # Database settings
    DB_ENGINE = os.getenv("DB_ENGINE", "mysql")
    DB_USER = os.getenv("DB_USER", "root")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "3306")
    DB_NAME = os.getenv("DB_NAME", "newspaper_subscription")

    # Use pymysql if DB_ENGINE doesn't specify dialect
    if DB_ENGINE == "mysql":
        SQLALCHEMY_DATABASE_URI = f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    else:
        SQLALCHEMY_DATABASE_URI = f"{DB_ENGINE}://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 1800,
    }

    # HTTP server settings
    PORT = int(os.getenv("PORT", 8001))
    CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:3000")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Startup behaviour
    CREATE_TABLES_ON_STARTUP = _env_flag("CREATE_TABLES_ON_STARTUP", False)
    EXPIRE_ON_STARTUP = _env_flag("EXPIRE_ON_STARTUP", True)

    # API settings
    API_TITLE = "Newspaper Subscription API"
    API_VERSION = "1.0"
    API_DESCRIPTION = "A RESTful API for managing subscribers, newspapers and subscriptions"
    API_PREFIX = "/api"
    ERROR_404_HELP = False
    RESTX_ERROR_404_HELP = False
    RESTX_MASK_SWAGGER = False
