from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import contains_eager, joinedload

from newsdesk.models.newspaper import Newspaper
from newsdesk.models.subscriber import Subscriber
from newsdesk.models.subscription import Subscription, SubscriptionStatus

from .base import BaseRepository, logged


class SubscriptionRepository(BaseRepository):
    """
    Data access for subscriptions.

    Reads eagerly load the subscriber and newspaper through LEFT OUTER
    JOINs, so a row whose parent has gone missing is still returned with
    empty display fields.
    """
    model = Subscription

    def _enriched(self):
        return self.session.query(Subscription).options(
            joinedload(Subscription.subscriber),
            joinedload(Subscription.newspaper),
        )

    @logged("Listing subscriptions")
    def list_all(self) -> List[Subscription]:
        return (
            self._enriched()
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
            .all()
        )

    @logged("Loading subscription")
    def get(self, subscription_id: int) -> Optional[Subscription]:
        return self._enriched().filter(Subscription.id == subscription_id).one_or_none()

    @logged("Listing subscriptions for subscriber")
    def list_by_subscriber(self, subscriber_id: int) -> List[Subscription]:
        return (
            self._enriched()
            .filter(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.start_date.desc(), Subscription.id.desc())
            .all()
        )

    @logged("Listing subscriptions for newspaper")
    def list_by_newspaper(self, newspaper_id: int) -> List[Subscription]:
        return (
            self._enriched()
            .filter(Subscription.newspaper_id == newspaper_id)
            .order_by(Subscription.start_date.desc(), Subscription.id.desc())
            .all()
        )

    @logged("Listing subscriptions by status")
    def list_by_status(self, status: str) -> List[Subscription]:
        return (
            self._enriched()
            .filter(Subscription.status == status)
            .order_by(Subscription.start_date.desc(), Subscription.id.desc())
            .all()
        )

    @logged("Listing expiring subscriptions")
    def list_active_ending_between(self, first_day: date, last_day: date) -> List[Subscription]:
        return (
            self._enriched()
            .filter(
                Subscription.status == SubscriptionStatus.ACTIVE.value,
                Subscription.end_date >= first_day,
                Subscription.end_date <= last_day,
            )
            .order_by(Subscription.end_date.asc(), Subscription.id.asc())
            .all()
        )

    @logged("Searching subscriptions")
    def search(self, keyword: str) -> List[Subscription]:
        return (
            self.session.query(Subscription)
            .outerjoin(Subscription.subscriber)
            .outerjoin(Subscription.newspaper)
            .options(
                contains_eager(Subscription.subscriber),
                contains_eager(Subscription.newspaper),
            )
            .filter(
                or_(
                    Subscriber.name.icontains(keyword, autoescape=True),
                    Subscriber.email.icontains(keyword, autoescape=True),
                    Newspaper.name.icontains(keyword, autoescape=True),
                    Newspaper.publisher.icontains(keyword, autoescape=True),
                )
            )
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
            .all()
        )

    @logged("Looking up active subscription")
    def find_active(self, subscriber_id: int, newspaper_id: int,
                    exclude_id: Optional[int] = None) -> Optional[Subscription]:
        query = self.session.query(Subscription).filter(
            Subscription.subscriber_id == subscriber_id,
            Subscription.newspaper_id == newspaper_id,
            Subscription.status == SubscriptionStatus.ACTIVE.value,
        )
        if exclude_id is not None:
            query = query.filter(Subscription.id != exclude_id)
        return query.first()

    @logged("Counting subscriptions for subscriber")
    def count_for_subscriber(self, subscriber_id: int) -> int:
        return (
            self.session.query(Subscription)
            .filter(Subscription.subscriber_id == subscriber_id)
            .count()
        )

    @logged("Counting subscriptions for newspaper")
    def count_for_newspaper(self, newspaper_id: int) -> int:
        return (
            self.session.query(Subscription)
            .filter(Subscription.newspaper_id == newspaper_id)
            .count()
        )

    @logged("Counting subscriptions by status")
    def count_by_status(self, status: str) -> int:
        return self.session.query(Subscription).filter(Subscription.status == status).count()

    @logged("Expiring overdue subscriptions")
    def expire_active_ending_before(self, today: date, now: datetime) -> int:
        """
        Flip every active subscription with end_date before today to expired.

        Returns:
            int: Number of rows updated
        """
        try:
            updated = (
                self.session.query(Subscription)
                .filter(
                    Subscription.status == SubscriptionStatus.ACTIVE.value,
                    Subscription.end_date < today,
                )
                .update(
                    {
                        Subscription.status: SubscriptionStatus.EXPIRED.value,
                        Subscription.updated_at: now,
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return updated
