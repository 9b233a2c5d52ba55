from typing import Dict, List, Optional

from sqlalchemy import func, or_

from newsdesk.models.newspaper import Newspaper

from .base import BaseRepository, logged


class NewspaperRepository(BaseRepository):
    model = Newspaper

    @logged("Listing newspapers")
    def list_all(self) -> List[Newspaper]:
        return (
            self.session.query(Newspaper)
            .order_by(Newspaper.created_at.desc(), Newspaper.id.desc())
            .all()
        )

    @logged("Looking up newspaper by name")
    def find_by_name(self, name: str, exclude_id: Optional[int] = None) -> Optional[Newspaper]:
        query = self.session.query(Newspaper).filter(Newspaper.name == name)
        if exclude_id is not None:
            query = query.filter(Newspaper.id != exclude_id)
        return query.first()

    @logged("Searching newspapers")
    def search(self, keyword: str) -> List[Newspaper]:
        return (
            self.session.query(Newspaper)
            .filter(
                or_(
                    Newspaper.name.icontains(keyword, autoescape=True),
                    Newspaper.publisher.icontains(keyword, autoescape=True),
                    Newspaper.description.icontains(keyword, autoescape=True),
                )
            )
            .order_by(Newspaper.created_at.desc(), Newspaper.id.desc())
            .all()
        )

    @logged("Filtering newspapers by price")
    def list_by_price_range(self, min_price, max_price) -> List[Newspaper]:
        return (
            self.session.query(Newspaper)
            .filter(Newspaper.price.between(min_price, max_price))
            .order_by(Newspaper.price.asc(), Newspaper.id.asc())
            .all()
        )

    @logged("Filtering newspapers by publisher")
    def list_by_publisher(self, publisher: str) -> List[Newspaper]:
        return (
            self.session.query(Newspaper)
            .filter(Newspaper.publisher == publisher)
            .order_by(Newspaper.name.asc())
            .all()
        )

    @logged("Computing newspaper price statistics")
    def price_stats(self) -> Dict:
        total, avg_price, min_price, max_price = self.session.query(
            func.count(Newspaper.id),
            func.avg(Newspaper.price),
            func.min(Newspaper.price),
            func.max(Newspaper.price),
        ).one()
        return {
            'total': total or 0,
            'avg_price': avg_price or 0,
            'min_price': min_price or 0,
            'max_price': max_price or 0,
        }
