"""
Flask CLI commands for database maintenance.

Usage::

    flask --app app init-db
    flask --app app expire-subscriptions [--date YYYY-MM-DD]
"""
import click
from flask.cli import with_appcontext

from newsdesk import db


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("Database tables created")


@click.command('expire-subscriptions')
@click.option('--date', 'today', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
              help='Reference day, defaults to today.')
@with_appcontext
def expire_subscriptions_command(today):
    """Mark active subscriptions whose end date has passed as expired."""
    from newsdesk.services import build_subscription_service

    reference = today.date() if today else None
    expired = build_subscription_service(db.session).expire_overdue(reference)
    click.echo(f"Expired {expired} subscription(s)")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(expire_subscriptions_command)
