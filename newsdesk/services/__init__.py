"""
Service layer: invariant checks on top of the repositories.

The builders wire a service to repositories sharing one session, which is
how the API layer obtains them for each request.
"""
from newsdesk.repositories import NewspaperRepository, SubscriberRepository, SubscriptionRepository

from .newspaper_service import NewspaperService
from .subscriber_service import SubscriberService
from .subscription_service import SubscriptionService


def build_subscriber_service(session):
    return SubscriberService(SubscriberRepository(session), SubscriptionRepository(session))


def build_newspaper_service(session):
    return NewspaperService(NewspaperRepository(session), SubscriptionRepository(session))


def build_subscription_service(session):
    return SubscriptionService(
        SubscriptionRepository(session),
        SubscriberRepository(session),
        NewspaperRepository(session),
    )


__all__ = [
    'NewspaperService',
    'SubscriberService',
    'SubscriptionService',
    'build_newspaper_service',
    'build_subscriber_service',
    'build_subscription_service',
]
