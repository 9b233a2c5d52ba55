"""
Production environment configuration module.
"""
import os

from newsdesk.config.base_config import BaseConfig


class ProductionConfig(BaseConfig):
    """Production environment configuration class."""

    # Production should never run in debug mode
    DEBUG = False

    SECRET_KEY = os.getenv("SECRET_KEY")

    # Database settings from environment with no defaults
    DB_HOST = os.getenv("DB_HOST")
    DB_PORT = os.getenv("DB_PORT", "3306")
    DB_NAME = os.getenv("DB_NAME")
    DB_USER = os.getenv("DB_USER")
    DB_PASSWORD = os.getenv("DB_PASSWORD")

    # Build database URI - default to pymysql dialect
    SQLALCHEMY_DATABASE_URI = f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Schema is managed with Flask-Migrate in production
    CREATE_TABLES_ON_STARTUP = False
