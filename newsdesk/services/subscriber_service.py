"""
Business rules for subscribers.
"""
from datetime import timedelta
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from newsdesk.errors import DuplicateEmail, EmailConflict, HasDependentSubscriptions
from newsdesk.models.base import utcnow
from newsdesk.models.subscriber import Subscriber
from newsdesk.repositories import SubscriberRepository, SubscriptionRepository
from newsdesk.utils.validation import clean_email, clean_text, require_fields

REQUIRED_FIELDS = ('name', 'email', 'phone', 'address')
RECENT_DAYS = 30


class SubscriberService:
    def __init__(self, subscribers: SubscriberRepository, subscriptions: SubscriptionRepository):
        self.subscribers = subscribers
        self.subscriptions = subscriptions

    def list_subscribers(self) -> List[Subscriber]:
        return self.subscribers.list_all()

    def get_subscriber(self, subscriber_id: int) -> Optional[Subscriber]:
        return self.subscribers.get(subscriber_id)

    def create_subscriber(self, data: Dict) -> Subscriber:
        """
        Create a subscriber after checking the email is not taken.

        Raises:
            ValidationError: If a field is missing or malformed
            DuplicateEmail: If another subscriber already uses the email
        """
        require_fields(data, REQUIRED_FIELDS,
                       "Please provide complete subscriber information (name, email, phone, address)")
        fields = _clean_fields(data)

        if self.subscribers.find_by_email(fields['email']):
            raise DuplicateEmail()

        subscriber = Subscriber(**fields)
        try:
            self.subscribers.save(subscriber)
        except IntegrityError:
            raise DuplicateEmail()

        current_app.logger.info(f"Created subscriber {subscriber.id} <{subscriber.email}>")
        return subscriber

    def update_subscriber(self, subscriber_id: int, data: Dict) -> Optional[Subscriber]:
        """
        Apply a partial update.

        Only keys present in ``data`` are changed; an empty update returns
        the current record untouched.

        Returns:
            Subscriber or None: Updated subscriber, None if it does not exist
        """
        subscriber = self.subscribers.get(subscriber_id)
        if subscriber is None:
            return None

        fields = _clean_fields({k: v for k, v in data.items() if k in REQUIRED_FIELDS})
        if not fields:
            return subscriber

        if 'email' in fields and fields['email'] != subscriber.email:
            if self.subscribers.find_by_email(fields['email'], exclude_id=subscriber_id):
                raise EmailConflict()

        for name, value in fields.items():
            setattr(subscriber, name, value)
        try:
            self.subscribers.save(subscriber)
        except IntegrityError:
            raise EmailConflict()
        return subscriber

    def delete_subscriber(self, subscriber_id: int) -> bool:
        """
        Delete a subscriber that has no subscriptions.

        Returns:
            bool: False if the subscriber does not exist

        Raises:
            HasDependentSubscriptions: If any subscription references it
        """
        subscriber = self.subscribers.get(subscriber_id)
        if subscriber is None:
            return False

        if self.subscriptions.count_for_subscriber(subscriber_id) > 0:
            raise HasDependentSubscriptions(
                "Subscriber has subscriptions and cannot be deleted"
            )

        self.subscribers.delete(subscriber)
        current_app.logger.info(f"Deleted subscriber {subscriber_id}")
        return True

    def search_subscribers(self, keyword: str) -> List[Subscriber]:
        return self.subscribers.search(keyword.strip())

    def get_stats(self) -> Dict:
        since = utcnow() - timedelta(days=RECENT_DAYS)
        return {
            'total': self.subscribers.count(),
            'recent': self.subscribers.count_created_since(since),
        }


def _clean_fields(data):
    cleaned = {}
    for name, value in data.items():
        if name == 'email':
            cleaned[name] = clean_email(value)
        elif name == 'address':
            cleaned[name] = clean_text(value, name, max_length=255)
        elif name == 'phone':
            cleaned[name] = clean_text(value, name, max_length=30)
        elif name == 'name':
            cleaned[name] = clean_text(value, name, max_length=100)
    return cleaned
