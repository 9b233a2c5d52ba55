"""
Common plumbing for repositories.
"""
from functools import wraps

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session


def logged(action):
    """
    Decorator that logs database failures and re-raises them unchanged.

    Args:
        action (str): Human readable description used in the log line
    """
    def wrapper(fn):
        @wraps(fn)
        def decorator(self, *args, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                current_app.logger.error(f"{action} failed: {e}")
                raise
        return decorator
    return wrapper


class BaseRepository:
    """Repository bound to one SQLAlchemy session."""

    model = None

    def __init__(self, session: Session):
        self.session = session

    @logged("Loading record")
    def get(self, record_id):
        return self.session.get(self.model, record_id)

    @logged("Counting records")
    def count(self) -> int:
        return self.session.query(self.model).count()

    @logged("Counting recent records")
    def count_created_since(self, since) -> int:
        return self.session.query(self.model).filter(self.model.created_at >= since).count()

    def save(self, record):
        """
        Persist a new or modified record and commit.

        Integrity errors roll the session back before propagating.
        """
        try:
            self.session.add(record)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.error(f"Saving {record!r} failed: {e}")
            raise
        return record

    def delete(self, record) -> None:
        try:
            self.session.delete(record)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.error(f"Deleting {record!r} failed: {e}")
            raise

    def rollback(self) -> None:
        self.session.rollback()
