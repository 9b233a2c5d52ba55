"""
Subscriber model for people who receive newspapers.
"""
from newsdesk import db

from .base import BaseModel


class Subscriber(BaseModel):
    """
    Subscriber model.

    Attributes:
        name (str): Full name
        email (str): Contact email address (unique)
        phone (str): Contact phone number
        address (str): Delivery address
    """
    __tablename__ = 'subscribers'

    name = db.Column(db.String(100), nullable=False, index=True)
    email = db.Column(db.String(100), unique=True, nullable=False, index=True)
    phone = db.Column(db.String(30), nullable=False)
    address = db.Column(db.String(255), nullable=False)

    # Relationships
    subscriptions = db.relationship('Subscription', back_populates='subscriber', lazy='dynamic')

    def __init__(self, name, email, phone, address):
        """
        Initialize a new Subscriber instance.

        Args:
            name (str): Subscriber name
            email (str): Subscriber email
            phone (str): Subscriber phone number
            address (str): Subscriber address
        """
        self.name = name
        self.email = email
        self.phone = phone
        self.address = address

    def __repr__(self):
        """String representation of the Subscriber model."""
        return f"<Subscriber {self.name} <{self.email}>>"
