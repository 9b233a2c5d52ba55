"""
Data access layer: one repository per table, bound to an injected session.
"""
from .newspaper_repository import NewspaperRepository
from .subscriber_repository import SubscriberRepository
from .subscription_repository import SubscriptionRepository

__all__ = [
    'NewspaperRepository',
    'SubscriberRepository',
    'SubscriptionRepository',
]
