"""
Unit tests for SubscriberService.
"""
import pytest

from newsdesk.errors import (
    DuplicateEmail,
    EmailConflict,
    HasDependentSubscriptions,
    ValidationError,
)
from newsdesk.services import build_subscriber_service

pytestmark = pytest.mark.unit


@pytest.fixture
def service(db):
    return build_subscriber_service(db.session)


def _payload(**overrides):
    data = {
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "phone": "555-0199",
        "address": "1 Compiler Way",
    }
    data.update(overrides)
    return data


class TestCreateSubscriber:

    def test_create_subscriber(self, service):
        subscriber = service.create_subscriber(_payload())
        assert subscriber.id is not None
        assert subscriber.name == "Grace Hopper"

    def test_values_are_trimmed(self, service):
        subscriber = service.create_subscriber(_payload(name="  Grace  ", email=" g@example.com "))
        assert subscriber.name == "Grace"
        assert subscriber.email == "g@example.com"

    @pytest.mark.parametrize("missing", ["name", "email", "phone", "address"])
    def test_missing_field(self, service, missing):
        data = _payload()
        del data[missing]
        with pytest.raises(ValidationError) as exc:
            service.create_subscriber(data)
        assert "Please provide complete subscriber information" in exc.value.message

    def test_blank_field_counts_as_missing(self, service):
        with pytest.raises(ValidationError):
            service.create_subscriber(_payload(name="   "))

    def test_invalid_email(self, service):
        with pytest.raises(ValidationError) as exc:
            service.create_subscriber(_payload(email="not-an-email"))
        assert exc.value.message == "Invalid email format"

    def test_duplicate_email(self, service):
        service.create_subscriber(_payload())
        with pytest.raises(DuplicateEmail):
            service.create_subscriber(_payload(name="Someone Else"))
        assert service.get_stats()['total'] == 1


class TestUpdateSubscriber:

    def test_partial_update(self, service):
        subscriber = service.create_subscriber(_payload())
        updated = service.update_subscriber(subscriber.id, {"phone": "555-0000"})
        assert updated.phone == "555-0000"
        assert updated.name == "Grace Hopper"

    def test_unknown_keys_are_ignored(self, service):
        subscriber = service.create_subscriber(_payload())
        updated = service.update_subscriber(subscriber.id, {"id": 999, "created_at": "x"})
        assert updated.id == subscriber.id

    def test_empty_update_returns_record(self, service):
        subscriber = service.create_subscriber(_payload())
        assert service.update_subscriber(subscriber.id, {}).id == subscriber.id

    def test_missing_subscriber(self, service):
        assert service.update_subscriber(12345, {"name": "Nobody"}) is None

    def test_email_taken_by_other_subscriber(self, service):
        service.create_subscriber(_payload())
        other = service.create_subscriber(_payload(email="other@example.com"))
        with pytest.raises(EmailConflict):
            service.update_subscriber(other.id, {"email": "grace@example.com"})

    def test_keeping_own_email_is_allowed(self, service):
        subscriber = service.create_subscriber(_payload())
        updated = service.update_subscriber(subscriber.id, {"email": "grace@example.com", "name": "G"})
        assert updated.name == "G"


class TestDeleteSubscriber:

    def test_delete(self, service):
        subscriber = service.create_subscriber(_payload())
        assert service.delete_subscriber(subscriber.id) is True
        assert service.get_subscriber(subscriber.id) is None

    def test_delete_missing(self, service):
        assert service.delete_subscriber(999) is False

    def test_delete_with_subscriptions_is_blocked(self, service, make_newspaper, make_subscription):
        subscriber = service.create_subscriber(_payload())
        make_subscription(subscriber, make_newspaper(), status="expired")
        with pytest.raises(HasDependentSubscriptions):
            service.delete_subscriber(subscriber.id)
        assert service.get_subscriber(subscriber.id) is not None


class TestQueries:

    def test_list_newest_first(self, service):
        first = service.create_subscriber(_payload(email="a@example.com"))
        second = service.create_subscriber(_payload(email="b@example.com"))
        assert [s.id for s in service.list_subscribers()] == [second.id, first.id]

    def test_search_is_case_insensitive(self, service):
        service.create_subscriber(_payload(name="Alice Smith", email="alice@example.com", phone="111"))
        service.create_subscriber(_payload(name="Bob Jones", email="bob@example.com", phone="222"))

        assert [s.name for s in service.search_subscribers("SMITH")] == ["Alice Smith"]
        assert [s.name for s in service.search_subscribers("bob@")] == ["Bob Jones"]
        assert [s.name for s in service.search_subscribers("222")] == ["Bob Jones"]

    def test_search_treats_wildcards_literally(self, service):
        service.create_subscriber(_payload(name="Alice", email="alice@example.com"))
        assert service.search_subscribers("%") == []
        assert service.search_subscribers("_") == []

    def test_stats(self, service):
        assert service.get_stats() == {'total': 0, 'recent': 0}
        service.create_subscriber(_payload())
        assert service.get_stats() == {'total': 1, 'recent': 1}
