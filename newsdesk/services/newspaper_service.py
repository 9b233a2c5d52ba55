"""
Business rules for newspapers.
"""
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from newsdesk.errors import DuplicateName, HasDependentSubscriptions, NameConflict, ValidationError
from newsdesk.models.newspaper import Newspaper, NewspaperFrequency
from newsdesk.repositories import NewspaperRepository, SubscriptionRepository
from newsdesk.utils.validation import clean_text, parse_choice, parse_price, require_fields

REQUIRED_FIELDS = ('name', 'publisher', 'frequency', 'price')
UPDATABLE_FIELDS = REQUIRED_FIELDS + ('description',)


class NewspaperService:
    def __init__(self, newspapers: NewspaperRepository, subscriptions: SubscriptionRepository):
        self.newspapers = newspapers
        self.subscriptions = subscriptions

    def list_newspapers(self) -> List[Newspaper]:
        return self.newspapers.list_all()

    def get_newspaper(self, newspaper_id: int) -> Optional[Newspaper]:
        return self.newspapers.get(newspaper_id)

    def create_newspaper(self, data: Dict) -> Newspaper:
        """
        Create a newspaper after checking the name is not taken.

        Raises:
            ValidationError: If a field is missing or malformed
            DuplicateName: If another newspaper already has the name
        """
        require_fields(data, REQUIRED_FIELDS,
                       "Please provide complete newspaper information (name, publisher, frequency, price)")
        fields = _clean_fields({k: v for k, v in data.items() if k in UPDATABLE_FIELDS})

        if self.newspapers.find_by_name(fields['name']):
            raise DuplicateName()

        newspaper = Newspaper(**fields)
        try:
            self.newspapers.save(newspaper)
        except IntegrityError:
            raise DuplicateName()

        current_app.logger.info(f"Created newspaper {newspaper.id} '{newspaper.name}'")
        return newspaper

    def update_newspaper(self, newspaper_id: int, data: Dict) -> Optional[Newspaper]:
        """
        Apply a partial update; an empty update returns the current record.

        Returns:
            Newspaper or None: Updated newspaper, None if it does not exist
        """
        newspaper = self.newspapers.get(newspaper_id)
        if newspaper is None:
            return None

        fields = _clean_fields({k: v for k, v in data.items() if k in UPDATABLE_FIELDS})
        if not fields:
            return newspaper

        if 'name' in fields and fields['name'] != newspaper.name:
            if self.newspapers.find_by_name(fields['name'], exclude_id=newspaper_id):
                raise NameConflict()

        for name, value in fields.items():
            setattr(newspaper, name, value)
        try:
            self.newspapers.save(newspaper)
        except IntegrityError:
            raise NameConflict()
        return newspaper

    def delete_newspaper(self, newspaper_id: int) -> bool:
        """
        Delete a newspaper nobody subscribes to.

        Returns:
            bool: False if the newspaper does not exist

        Raises:
            HasDependentSubscriptions: If any subscription references it
        """
        newspaper = self.newspapers.get(newspaper_id)
        if newspaper is None:
            return False

        if self.subscriptions.count_for_newspaper(newspaper_id) > 0:
            raise HasDependentSubscriptions(
                "Newspaper has subscriptions and cannot be deleted"
            )

        self.newspapers.delete(newspaper)
        current_app.logger.info(f"Deleted newspaper {newspaper_id}")
        return True

    def search_newspapers(self, keyword: str) -> List[Newspaper]:
        return self.newspapers.search(keyword.strip())

    def list_by_price_range(self, min_price, max_price) -> List[Newspaper]:
        """
        Newspapers priced within [min_price, max_price], cheapest first.

        Raises:
            ValidationError: If a bound is negative or min_price > max_price
        """
        low = parse_price(min_price, "min_price", upper_bound=None)
        high = parse_price(max_price, "max_price", upper_bound=None)
        if low > high:
            raise ValidationError("Invalid price range")
        return self.newspapers.list_by_price_range(low, high)

    def list_by_publisher(self, publisher: str) -> List[Newspaper]:
        publisher = clean_text(publisher, "publisher")
        return self.newspapers.list_by_publisher(publisher)

    def get_stats(self) -> Dict:
        """Row count plus average, minimum and maximum price (0 when empty)."""
        stats = self.newspapers.price_stats()
        return {
            'total': stats['total'],
            'avg_price': round(float(stats['avg_price']), 2),
            'min_price': round(float(stats['min_price']), 2),
            'max_price': round(float(stats['max_price']), 2),
        }


def _clean_fields(data):
    cleaned = {}
    for name, value in data.items():
        if name == 'price':
            cleaned[name] = parse_price(value)
        elif name == 'frequency':
            cleaned[name] = parse_choice(value, NewspaperFrequency.values(), name)
        elif name == 'description':
            cleaned[name] = value.strip() if isinstance(value, str) and value.strip() else None
        else:
            cleaned[name] = clean_text(value, name, max_length=100)
    return cleaned
