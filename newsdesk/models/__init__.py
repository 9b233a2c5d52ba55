"""
Models package for SQLAlchemy database models.
"""
from .base import BaseModel
from .newspaper import Newspaper, NewspaperFrequency
from .subscriber import Subscriber
from .subscription import Subscription, SubscriptionStatus

__all__ = [
    'BaseModel',
    'Newspaper',
    'NewspaperFrequency',
    'Subscriber',
    'Subscription',
    'SubscriptionStatus'
]
