"""
Pytest configuration and fixtures.
"""
from datetime import date, timedelta
from decimal import Decimal

import pytest

from newsdesk import create_app
from newsdesk.models import Newspaper, Subscriber, Subscription


@pytest.fixture(scope="function")
def app():
    """
    Create a Flask application configured for testing.

    Every test gets its own in-memory SQLite database, so data written and
    committed by the services never leaks between tests.

    Returns:
        Flask: The Flask application instance.
    """
    app = create_app('testing')

    # Use the app context for the duration of the test
    with app.app_context():
        from newsdesk import db

        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for the Flask application.

    Args:
        app: The Flask application fixture.

    Returns:
        FlaskClient: A test client for the Flask application.
    """
    return app.test_client()


@pytest.fixture(scope="function")
def db(app):
    """
    Fixture for the SQLAlchemy database object.

    Args:
        app: The Flask application fixture.

    Returns:
        SQLAlchemy db: The database object for testing.
    """
    from newsdesk import db as _db
    return _db


@pytest.fixture
def degraded_app():
    """Application started while its database is unreachable."""
    app = create_app('testing', {
        'SQLALCHEMY_DATABASE_URI': 'sqlite:////nonexistent-directory/newsdesk.db',
    })
    return app


@pytest.fixture
def degraded_client(degraded_app):
    return degraded_app.test_client()


@pytest.fixture
def make_subscriber(db):
    """Factory creating committed subscribers with unique emails."""
    counter = {'n': 0}

    def _make(name=None, email=None, phone="0123456789", address="1 Main Street"):
        counter['n'] += 1
        subscriber = Subscriber(
            name=name or f"Reader {counter['n']}",
            email=email or f"reader{counter['n']}@example.com",
            phone=phone,
            address=address,
        )
        db.session.add(subscriber)
        db.session.commit()
        return subscriber

    return _make


@pytest.fixture
def make_newspaper(db):
    """Factory creating committed newspapers with unique names."""
    counter = {'n': 0}

    def _make(name=None, publisher="Daily Press", frequency="daily", price="10.00", description=None):
        counter['n'] += 1
        newspaper = Newspaper(
            name=name or f"Gazette {counter['n']}",
            publisher=publisher,
            frequency=frequency,
            price=Decimal(price),
            description=description,
        )
        db.session.add(newspaper)
        db.session.commit()
        return newspaper

    return _make


@pytest.fixture
def make_subscription(db):
    """Factory creating committed subscriptions, by default active for a year from today."""

    def _make(subscriber, newspaper, start_date=None, end_date=None, status="active"):
        start_date = start_date or date.today()
        end_date = end_date or start_date + timedelta(days=365)
        subscription = Subscription(
            subscriber_id=subscriber.id,
            newspaper_id=newspaper.id,
            start_date=start_date,
            end_date=end_date,
            status=status,
        )
        db.session.add(subscription)
        db.session.commit()
        return subscription

    return _make
