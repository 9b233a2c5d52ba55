from typing import List, Optional

from sqlalchemy import or_

from newsdesk.models.subscriber import Subscriber

from .base import BaseRepository, logged


class SubscriberRepository(BaseRepository):
    model = Subscriber

    @logged("Listing subscribers")
    def list_all(self) -> List[Subscriber]:
        return (
            self.session.query(Subscriber)
            .order_by(Subscriber.created_at.desc(), Subscriber.id.desc())
            .all()
        )

    @logged("Locking subscriber")
    def get_for_update(self, subscriber_id: int) -> Optional[Subscriber]:
        """Load a subscriber and hold a row lock until the transaction ends."""
        return (
            self.session.query(Subscriber)
            .filter(Subscriber.id == subscriber_id)
            .with_for_update()
            .one_or_none()
        )

    @logged("Looking up subscriber by email")
    def find_by_email(self, email: str, exclude_id: Optional[int] = None) -> Optional[Subscriber]:
        query = self.session.query(Subscriber).filter(Subscriber.email == email)
        if exclude_id is not None:
            query = query.filter(Subscriber.id != exclude_id)
        return query.first()

    @logged("Searching subscribers")
    def search(self, keyword: str) -> List[Subscriber]:
        return (
            self.session.query(Subscriber)
            .filter(
                or_(
                    Subscriber.name.icontains(keyword, autoescape=True),
                    Subscriber.email.icontains(keyword, autoescape=True),
                    Subscriber.phone.icontains(keyword, autoescape=True),
                )
            )
            .order_by(Subscriber.created_at.desc(), Subscriber.id.desc())
            .all()
        )
