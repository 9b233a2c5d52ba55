"""
Newspaper Subscription API Application Factory.
"""
import importlib
import os
from http import HTTPStatus

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_migrate import Migrate
from flask_restx import Api
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from werkzeug.exceptions import HTTPException

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()

CONFIG_MAPPING = {
    'development': ('newsdesk.config.development_config', 'DevelopmentConfig'),
    'testing': ('newsdesk.config.testing_config', 'TestingConfig'),
    'production': ('newsdesk.config.production_config', 'ProductionConfig'),
}


def create_app(config_name=None, config_overrides=None):
    """
    Application Factory Pattern implementation.

    Args:
        config_name: Configuration name to use (development, testing, production).
        config_overrides (dict, optional): Settings applied on top of the
            configuration class, before any extension is initialized.

    Returns:
        Flask application instance.
    """
    # Load environment variables
    load_dotenv()

    app = Flask(__name__)

    app_config = config_name or os.getenv("FLASK_ENV", "development")
    if app_config not in CONFIG_MAPPING:
        # Fall back to development config
        app.logger.warning(f"Unknown configuration '{app_config}', using development")
        app_config = 'development'

    module_path, class_name = CONFIG_MAPPING[app_config]
    config_class = getattr(importlib.import_module(module_path), class_name)
    app.config.from_object(config_class)
    if config_overrides:
        app.config.update(config_overrides)
    app.config['ENVIRONMENT'] = app_config

    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    app.logger.info(f"Loaded configuration class: {class_name}")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models to ensure they're registered with SQLAlchemy
    from newsdesk import models  # noqa: F401

    api = Api(
        app,
        version=app.config.get("API_VERSION", "1.0"),
        title=app.config.get("API_TITLE", "Newspaper Subscription API"),
        description=app.config.get("API_DESCRIPTION", ""),
        doc="/api/docs",
    )

    # Register namespaces
    from newsdesk.api.newspapers import newspaper_ns
    from newsdesk.api.subscribers import subscriber_ns
    from newsdesk.api.subscriptions import subscription_ns

    prefix = app.config.get("API_PREFIX", "/api")
    api.add_namespace(subscriber_ns, path=f'{prefix}/subscribers')
    api.add_namespace(newspaper_ns, path=f'{prefix}/newspapers')
    api.add_namespace(subscription_ns, path=f'{prefix}/subscriptions')

    _register_error_handlers(app, api)
    _register_cors(app)

    @app.route(f'{prefix}/health')
    def health_check():
        """Health check endpoint to verify the application is running."""
        connected = _check_db_connection(app)
        return jsonify({
            'success': True,
            'status': 'healthy',
            'message': 'Newspaper Subscription API is running',
            'environment': app_config,
            'database_connected': connected,
            'mode': 'normal' if connected else 'degraded',
        })

    from newsdesk.cli import register_commands
    register_commands(app)

    # Shell context processor
    @app.shell_context_processor
    def shell_context():
        return {"app": app, "db": db, "models": models}

    _prepare_database(app)

    return app


def _check_db_connection(app):
    """Check if the database connection is working."""
    try:
        with app.app_context():
            db.session.execute(text('SELECT 1'))
            return True
    except Exception as e:
        app.logger.warning(f"Database connection error: {str(e)}")
        return False


def _prepare_database(app):
    """
    Probe the database once at start-up.

    An unreachable database puts the application in degraded mode instead
    of aborting start-up. When connected, tables are created and overdue
    subscriptions expired according to configuration.
    """
    connected = _check_db_connection(app)
    app.config['DATABASE_CONNECTED'] = connected
    if not connected:
        app.logger.warning("Database unavailable, running in degraded mode")
        return

    with app.app_context():
        if app.config.get('CREATE_TABLES_ON_STARTUP'):
            db.create_all()
            app.logger.info("Database tables created")

        if app.config.get('EXPIRE_ON_STARTUP'):
            from newsdesk.services import build_subscription_service
            try:
                build_subscription_service(db.session).expire_overdue()
            except Exception as e:
                # The sweep runs again on next start or via the CLI
                app.logger.warning(f"Expiring overdue subscriptions failed: {str(e)}")
                db.session.rollback()


def _register_error_handlers(app, api):
    from newsdesk.api.common import error_body
    from newsdesk.errors import ApiError

    # Flask-RESTX logs every handled error with a 5xx status itself

    @api.errorhandler(ApiError)
    def handle_api_error(error):
        """Business and validation errors raised by services"""
        return error_body(error.message, error=error.message), error.status_code

    @api.errorhandler(HTTPException)
    def handle_http_error(error):
        """HTTP errors raised by Flask inside API routes"""
        return error_body(error.description, error=error.name), error.code

    @api.errorhandler(Exception)
    def handle_unexpected_error(error):
        """Anything else is reported as a 500"""
        db.session.rollback()
        return error_body("Internal server error", error=str(error)), HTTPStatus.INTERNAL_SERVER_ERROR

    @app.errorhandler(HTTPStatus.NOT_FOUND)
    def handle_not_found(error):
        return jsonify(error_body(f"Route {request.path} not found", error="Not Found")), HTTPStatus.NOT_FOUND

    @app.errorhandler(HTTPStatus.METHOD_NOT_ALLOWED)
    def handle_method_not_allowed(error):
        return jsonify(error_body(f"Method {request.method} not allowed on {request.path}",
                                  error="Method Not Allowed")), HTTPStatus.METHOD_NOT_ALLOWED

    @app.errorhandler(HTTPStatus.INTERNAL_SERVER_ERROR)
    def handle_internal_error(error):
        return jsonify(error_body("Internal server error")), HTTPStatus.INTERNAL_SERVER_ERROR


def _register_cors(app):
    """Allow the configured front-end origin to call the API."""

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = app.config['CORS_ORIGIN']
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
        return response
