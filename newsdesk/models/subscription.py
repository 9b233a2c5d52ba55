"""
Subscription model linking a subscriber to a newspaper for a date range.
"""
from datetime import date
from enum import Enum

from sqlalchemy import Index, text

from newsdesk import db

from .base import BaseModel


class SubscriptionStatus(Enum):
    """Enum for subscription status values."""
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class Subscription(BaseModel):
    """
    Subscription model.

    Attributes:
        subscriber_id (int): Foreign key to Subscriber
        newspaper_id (int): Foreign key to Newspaper
        start_date (date): First day of delivery
        end_date (date): Last day of delivery
        status (str): One of SubscriptionStatus values

    Status moves from active to expired through the expiry sweep, or from
    active to cancelled through an explicit update. Expired and cancelled
    are terminal for automatic transitions.
    """
    __tablename__ = 'subscriptions'

    subscriber_id = db.Column(db.Integer, db.ForeignKey('subscribers.id'), nullable=False)
    newspaper_id = db.Column(db.Integer, db.ForeignKey('newspapers.id'), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=SubscriptionStatus.ACTIVE.value)

    # Relationships
    subscriber = db.relationship('Subscriber', back_populates='subscriptions')
    newspaper = db.relationship('Newspaper', back_populates='subscriptions')

    __table_args__ = (
        Index('idx_subscription_subscriber_id', 'subscriber_id'),
        Index('idx_subscription_newspaper_id', 'newspaper_id'),
        Index('idx_subscription_status', 'status'),
        Index('idx_subscription_status_end_date', 'status', 'end_date'),
        Index('idx_subscription_pair_status', 'subscriber_id', 'newspaper_id', 'status'),

        # At most one active subscription per pair. MySQL has no partial
        # indexes, so there the service layer row lock is the only guard.
        Index(
            'uq_subscription_active_pair',
            'subscriber_id',
            'newspaper_id',
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ).ddl_if(dialect=('sqlite', 'postgresql')),
    )

    def __init__(self, subscriber_id, newspaper_id, start_date, end_date,
                 status=SubscriptionStatus.ACTIVE.value):
        """
        Initialize a new Subscription instance.

        Args:
            subscriber_id (int): Subscriber ID
            newspaper_id (int): Newspaper ID
            start_date (date): Subscription start date
            end_date (date): Subscription end date
            status (str, optional): Subscription status, active by default
        """
        self.subscriber_id = subscriber_id
        self.newspaper_id = newspaper_id
        self.start_date = start_date
        self.end_date = end_date
        self.status = status

    @property
    def is_active(self):
        return self.status == SubscriptionStatus.ACTIVE.value

    def days_remaining(self, today=None):
        """
        Days left until the end date, negative once it has passed.

        Args:
            today (date, optional): Reference day, defaults to the local date

        Returns:
            int: Number of days between today and end_date
        """
        today = today or date.today()
        return (self.end_date - today).days

    def is_overdue(self, today=None):
        """Whether an active subscription should have been expired already."""
        today = today or date.today()
        return self.is_active and self.end_date < today

    def cancel(self):
        """Mark the subscription as cancelled."""
        self.status = SubscriptionStatus.CANCELLED.value
        return self

    def expire(self):
        """Mark the subscription as expired."""
        self.status = SubscriptionStatus.EXPIRED.value
        return self

    def __repr__(self):
        """String representation of the Subscription model."""
        return (f"<Subscription {self.id} subscriber={self.subscriber_id} "
                f"newspaper={self.newspaper_id} {self.status}>")
