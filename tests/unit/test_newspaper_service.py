"""
Unit tests for NewspaperService.
"""
from decimal import Decimal

import pytest

from newsdesk.errors import DuplicateName, HasDependentSubscriptions, NameConflict, ValidationError
from newsdesk.services import build_newspaper_service

pytestmark = pytest.mark.unit


@pytest.fixture
def service(db):
    return build_newspaper_service(db.session)


def _payload(**overrides):
    data = {
        "name": "The Morning Post",
        "publisher": "Post Group",
        "frequency": "daily",
        "price": 12.5,
        "description": "National daily",
    }
    data.update(overrides)
    return data


class TestCreateNewspaper:

    def test_create_newspaper(self, service):
        newspaper = service.create_newspaper(_payload())
        assert newspaper.id is not None
        assert newspaper.price == Decimal("12.50")
        assert newspaper.frequency == "daily"

    def test_price_as_string(self, service):
        newspaper = service.create_newspaper(_payload(price="7.25"))
        assert newspaper.price == Decimal("7.25")

    def test_zero_price_is_allowed(self, service):
        assert service.create_newspaper(_payload(price=0)).price == Decimal("0.00")

    @pytest.mark.parametrize("price", [-1, "abc", "NaN", True])
    def test_invalid_price(self, service, price):
        with pytest.raises(ValidationError):
            service.create_newspaper(_payload(price=price))

    def test_invalid_frequency(self, service):
        with pytest.raises(ValidationError) as exc:
            service.create_newspaper(_payload(frequency="hourly"))
        assert "frequency must be one of" in exc.value.message

    @pytest.mark.parametrize("missing", ["name", "publisher", "frequency", "price"])
    def test_missing_field(self, service, missing):
        data = _payload()
        del data[missing]
        with pytest.raises(ValidationError) as exc:
            service.create_newspaper(data)
        assert "Please provide complete newspaper information" in exc.value.message

    def test_description_is_optional(self, service):
        data = _payload()
        del data["description"]
        assert service.create_newspaper(data).description is None

    def test_duplicate_name(self, service):
        service.create_newspaper(_payload())
        with pytest.raises(DuplicateName):
            service.create_newspaper(_payload(publisher="Someone Else"))


class TestUpdateNewspaper:

    def test_partial_update(self, service):
        newspaper = service.create_newspaper(_payload())
        updated = service.update_newspaper(newspaper.id, {"price": "15"})
        assert updated.price == Decimal("15.00")
        assert updated.name == "The Morning Post"

    def test_clear_description(self, service):
        newspaper = service.create_newspaper(_payload())
        assert service.update_newspaper(newspaper.id, {"description": ""}).description is None

    def test_name_taken_by_other_newspaper(self, service):
        service.create_newspaper(_payload())
        other = service.create_newspaper(_payload(name="Evening Star"))
        with pytest.raises(NameConflict):
            service.update_newspaper(other.id, {"name": "The Morning Post"})

    def test_missing_newspaper(self, service):
        assert service.update_newspaper(4040, {"name": "Ghost"}) is None

    def test_empty_update_returns_record(self, service):
        newspaper = service.create_newspaper(_payload())
        assert service.update_newspaper(newspaper.id, {}).id == newspaper.id


class TestDeleteNewspaper:

    def test_delete(self, service):
        newspaper = service.create_newspaper(_payload())
        assert service.delete_newspaper(newspaper.id) is True
        assert service.get_newspaper(newspaper.id) is None

    def test_delete_missing(self, service):
        assert service.delete_newspaper(1) is False

    def test_delete_with_subscriptions_is_blocked(self, service, make_subscriber, make_subscription):
        newspaper = service.create_newspaper(_payload())
        make_subscription(make_subscriber(), newspaper, status="cancelled")
        with pytest.raises(HasDependentSubscriptions):
            service.delete_newspaper(newspaper.id)


class TestQueries:

    def test_search(self, service):
        service.create_newspaper(_payload(name="Tech Weekly", publisher="Gadget House",
                                          frequency="weekly", description="Reviews and news"))
        service.create_newspaper(_payload(name="Farm Monthly", publisher="Rural Press",
                                          frequency="monthly", description="Crops"))

        assert [n.name for n in service.search_newspapers("gadget")] == ["Tech Weekly"]
        assert [n.name for n in service.search_newspapers("CROPS")] == ["Farm Monthly"]
        assert len(service.search_newspapers("ly")) == 2

    def test_price_range_is_inclusive_and_sorted(self, service):
        service.create_newspaper(_payload(name="A", price=20))
        service.create_newspaper(_payload(name="B", price=5))
        service.create_newspaper(_payload(name="C", price=10))
        service.create_newspaper(_payload(name="D", price=30))

        assert [n.name for n in service.list_by_price_range("5", "20")] == ["B", "C", "A"]

    def test_price_range_min_above_max(self, service):
        with pytest.raises(ValidationError) as exc:
            service.list_by_price_range("20", "10")
        assert exc.value.message == "Invalid price range"

    def test_price_range_negative_bound(self, service):
        with pytest.raises(ValidationError):
            service.list_by_price_range("-1", "10")

    def test_by_publisher_sorted_by_name(self, service):
        service.create_newspaper(_payload(name="Zeta", publisher="Acme"))
        service.create_newspaper(_payload(name="Alpha", publisher="Acme"))
        service.create_newspaper(_payload(name="Other", publisher="Globex"))

        assert [n.name for n in service.list_by_publisher("Acme")] == ["Alpha", "Zeta"]

    def test_stats(self, service):
        assert service.get_stats() == {'total': 0, 'avg_price': 0, 'min_price': 0, 'max_price': 0}

        service.create_newspaper(_payload(name="A", price=10))
        service.create_newspaper(_payload(name="B", price=20))
        service.create_newspaper(_payload(name="C", price=45))

        assert service.get_stats() == {'total': 3, 'avg_price': 25.0, 'min_price': 10.0, 'max_price': 45.0}
