"""
Newspaper model for the publications that can be subscribed to.
"""
from enum import Enum

from newsdesk import db

from .base import BaseModel


class NewspaperFrequency(Enum):
    """Enum for publication frequency values."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @classmethod
    def values(cls):
        return [frequency.value for frequency in cls]


class Newspaper(BaseModel):
    """
    Newspaper model.

    Attributes:
        name (str): Newspaper title (unique)
        publisher (str): Publishing house
        frequency (str): How often an issue is published
        price (Decimal): Subscription price
        description (str): Optional free text description
    """
    __tablename__ = 'newspapers'

    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    publisher = db.Column(db.String(100), nullable=False, index=True)
    frequency = db.Column(db.String(20), nullable=False, default=NewspaperFrequency.DAILY.value)
    price = db.Column(db.Numeric(10, 2), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)

    # Relationships
    subscriptions = db.relationship('Subscription', back_populates='newspaper', lazy='dynamic')

    def __init__(self, name, publisher, frequency, price, description=None):
        self.name = name
        self.publisher = publisher
        self.frequency = frequency
        self.price = price
        self.description = description

    def __repr__(self):
        """String representation of the Newspaper model."""
        return f"<Newspaper {self.name} - {self.price}>"
