"""
Business rules for subscriptions.

Two rules live here: a subscriber may hold at most one active subscription
per newspaper, and active subscriptions whose end date has passed are
moved to expired by an explicit sweep.
"""
from datetime import date, timedelta
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from newsdesk.errors import (
    DuplicateActiveSubscription,
    NewspaperNotFound,
    SubscriberNotFound,
    ValidationError,
)
from newsdesk.models.base import utcnow
from newsdesk.models.subscription import Subscription, SubscriptionStatus
from newsdesk.repositories import NewspaperRepository, SubscriberRepository, SubscriptionRepository
from newsdesk.utils.validation import parse_choice, parse_date, parse_id, require_fields

REQUIRED_FIELDS = ('subscriber_id', 'newspaper_id', 'start_date', 'end_date')
UPDATABLE_FIELDS = REQUIRED_FIELDS + ('status',)
RECENT_DAYS = 30
DEFAULT_EXPIRING_DAYS = 30
MAX_EXPIRING_DAYS = 365


class SubscriptionService:
    def __init__(self, subscriptions: SubscriptionRepository,
                 subscribers: SubscriberRepository,
                 newspapers: NewspaperRepository):
        self.subscriptions = subscriptions
        self.subscribers = subscribers
        self.newspapers = newspapers

    def list_subscriptions(self) -> List[Subscription]:
        return self.subscriptions.list_all()

    def get_subscription(self, subscription_id: int) -> Optional[Subscription]:
        return self.subscriptions.get(subscription_id)

    def create_subscription(self, data: Dict) -> Subscription:
        """
        Create a subscription.

        The subscriber row is locked for the rest of the transaction so two
        concurrent requests for the same subscriber cannot both pass the
        active-subscription check.

        Args:
            data (dict): subscriber_id, newspaper_id, start_date, end_date
                and an optional status (defaults to active)

        Raises:
            ValidationError: If a field is missing or malformed
            SubscriberNotFound: If the subscriber does not exist
            NewspaperNotFound: If the newspaper does not exist
            DuplicateActiveSubscription: If the pair already has an active subscription
        """
        require_fields(data, REQUIRED_FIELDS,
                       "Please provide complete subscription information "
                       "(subscriber_id, newspaper_id, start_date, end_date)")
        fields = _clean_fields({k: v for k, v in data.items() if k in UPDATABLE_FIELDS})
        fields.setdefault('status', SubscriptionStatus.ACTIVE.value)
        _check_dates(fields['start_date'], fields['end_date'])

        try:
            if self.subscribers.get_for_update(fields['subscriber_id']) is None:
                raise SubscriberNotFound()
            if self.newspapers.get(fields['newspaper_id']) is None:
                raise NewspaperNotFound()
            if fields['status'] == SubscriptionStatus.ACTIVE.value:
                self._ensure_no_other_active(fields['subscriber_id'], fields['newspaper_id'])
        except Exception:
            # Release the row lock
            self.subscriptions.rollback()
            raise

        subscription = Subscription(**fields)
        try:
            self.subscriptions.save(subscription)
        except IntegrityError:
            raise DuplicateActiveSubscription()

        current_app.logger.info(
            f"Created subscription {subscription.id} "
            f"(subscriber {subscription.subscriber_id}, newspaper {subscription.newspaper_id})"
        )
        return self.subscriptions.get(subscription.id)

    def update_subscription(self, subscription_id: int, data: Dict) -> Optional[Subscription]:
        """
        Apply a partial update.

        Changed subscriber or newspaper references are re-validated. An
        empty update returns the current record untouched.

        Returns:
            Subscription or None: Updated subscription, None if it does not exist
        """
        subscription = self.subscriptions.get(subscription_id)
        if subscription is None:
            return None

        fields = _clean_fields({k: v for k, v in data.items() if k in UPDATABLE_FIELDS})
        if not fields:
            return subscription

        if 'subscriber_id' in fields and self.subscribers.get(fields['subscriber_id']) is None:
            raise SubscriberNotFound()
        if 'newspaper_id' in fields and self.newspapers.get(fields['newspaper_id']) is None:
            raise NewspaperNotFound()

        _check_dates(fields.get('start_date', subscription.start_date),
                     fields.get('end_date', subscription.end_date))

        subscriber_id = fields.get('subscriber_id', subscription.subscriber_id)
        newspaper_id = fields.get('newspaper_id', subscription.newspaper_id)
        status = fields.get('status', subscription.status)
        pair_or_status_changed = (
            subscriber_id != subscription.subscriber_id
            or newspaper_id != subscription.newspaper_id
            or status != subscription.status
        )
        if status == SubscriptionStatus.ACTIVE.value and pair_or_status_changed:
            self._ensure_no_other_active(subscriber_id, newspaper_id, exclude_id=subscription_id)

        for name, value in fields.items():
            setattr(subscription, name, value)
        try:
            self.subscriptions.save(subscription)
        except IntegrityError:
            raise DuplicateActiveSubscription()
        return self.subscriptions.get(subscription_id)

    def delete_subscription(self, subscription_id: int) -> bool:
        subscription = self.subscriptions.get(subscription_id)
        if subscription is None:
            return False
        self.subscriptions.delete(subscription)
        current_app.logger.info(f"Deleted subscription {subscription_id}")
        return True

    def search_subscriptions(self, keyword: str) -> List[Subscription]:
        return self.subscriptions.search(keyword.strip())

    def list_by_subscriber(self, subscriber_id: int) -> List[Subscription]:
        return self.subscriptions.list_by_subscriber(subscriber_id)

    def list_by_newspaper(self, newspaper_id: int) -> List[Subscription]:
        return self.subscriptions.list_by_newspaper(newspaper_id)

    def list_by_status(self, status: str) -> List[Subscription]:
        status = parse_choice(status, SubscriptionStatus.values(), "status")
        return self.subscriptions.list_by_status(status)

    def list_expiring_soon(self, days=DEFAULT_EXPIRING_DAYS, today=None) -> List[Subscription]:
        """
        Active subscriptions ending within the next ``days`` days.

        Args:
            days (int): Window length, between 1 and 365 inclusive
            today (date, optional): Reference day, defaults to the local date

        Returns:
            list: Subscriptions with end_date in [today, today + days], soonest first
        """
        if isinstance(days, bool) or not isinstance(days, int) or not 1 <= days <= MAX_EXPIRING_DAYS:
            raise ValidationError(f"days must be a number between 1 and {MAX_EXPIRING_DAYS}")
        today = today or date.today()
        return self.subscriptions.list_active_ending_between(today, today + timedelta(days=days))

    def expire_overdue(self, today=None) -> int:
        """
        Move every active subscription whose end date is before today to expired.

        Args:
            today (date, optional): Reference day, defaults to the local date

        Returns:
            int: Number of subscriptions expired
        """
        today = today or date.today()
        expired = self.subscriptions.expire_active_ending_before(today, utcnow())
        current_app.logger.info(f"Expired {expired} overdue subscription(s)")
        return expired

    def get_stats(self) -> Dict:
        since = utcnow() - timedelta(days=RECENT_DAYS)
        return {
            'total': self.subscriptions.count(),
            'active': self.subscriptions.count_by_status(SubscriptionStatus.ACTIVE.value),
            'expired': self.subscriptions.count_by_status(SubscriptionStatus.EXPIRED.value),
            'cancelled': self.subscriptions.count_by_status(SubscriptionStatus.CANCELLED.value),
            'recent': self.subscriptions.count_created_since(since),
        }

    def _ensure_no_other_active(self, subscriber_id, newspaper_id, exclude_id=None):
        if self.subscriptions.find_active(subscriber_id, newspaper_id, exclude_id=exclude_id):
            raise DuplicateActiveSubscription()


def _check_dates(start_date, end_date):
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date")


def _clean_fields(data):
    cleaned = {}
    for name, value in data.items():
        if name in ('subscriber_id', 'newspaper_id'):
            cleaned[name] = parse_id(value, name)
        elif name in ('start_date', 'end_date'):
            cleaned[name] = parse_date(value, name)
        elif name == 'status':
            cleaned[name] = parse_choice(value, SubscriptionStatus.values(), name)
    return cleaned
