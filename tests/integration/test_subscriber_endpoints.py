"""
Integration tests for subscriber API endpoints.
"""
import json

import pytest

pytestmark = pytest.mark.integration


def _subscriber_data(**overrides):
    data = {
        "name": "Margaret Hamilton",
        "email": "margaret@example.com",
        "phone": "555-0142",
        "address": "42 Apollo Street",
    }
    data.update(overrides)
    return data


def test_create_subscriber(client):
    """Test creating a subscriber."""
    response = client.post('/api/subscribers', json=_subscriber_data())
    data = json.loads(response.data)

    assert response.status_code == 201
    assert data['success'] is True
    assert data['message'] == 'Subscriber created successfully'
    assert data['data']['id'] > 0
    assert data['data']['email'] == 'margaret@example.com'
    assert data['data']['created_at'] is not None


def test_create_subscriber_missing_fields(client):
    response = client.post('/api/subscribers', json={"name": "No Contact"})
    data = json.loads(response.data)

    assert response.status_code == 400
    assert data['success'] is False
    assert 'Please provide complete subscriber information' in data['message']


def test_create_subscriber_duplicate_email(client):
    client.post('/api/subscribers', json=_subscriber_data())
    response = client.post('/api/subscribers', json=_subscriber_data(name="Copy Cat"))
    data = json.loads(response.data)

    assert response.status_code == 400
    assert data['message'] == 'Email already exists'

    listing = json.loads(client.get('/api/subscribers').data)
    assert len(listing['data']) == 1


def test_list_subscribers(client, make_subscriber):
    older = make_subscriber(name="Older")
    newer = make_subscriber(name="Newer")

    response = client.get('/api/subscribers')
    data = json.loads(response.data)

    assert response.status_code == 200
    assert [s['id'] for s in data['data']] == [newer.id, older.id]


def test_get_subscriber(client, make_subscriber):
    subscriber = make_subscriber(name="Findable")

    response = client.get(f'/api/subscribers/{subscriber.id}')
    data = json.loads(response.data)

    assert response.status_code == 200
    assert data['data']['name'] == 'Findable'


def test_get_nonexistent_subscriber(client):
    response = client.get('/api/subscribers/9999')
    data = json.loads(response.data)

    assert response.status_code == 404
    assert data['success'] is False
    assert data['message'] == 'Subscriber not found'


def test_get_subscriber_with_invalid_id(client):
    response = client.get('/api/subscribers/abc')
    data = json.loads(response.data)

    assert response.status_code == 400
    assert data['message'] == 'ID must be a number'


def test_update_subscriber(client, make_subscriber):
    subscriber = make_subscriber(name="Before")

    response = client.put(f'/api/subscribers/{subscriber.id}', json={"name": "After"})
    data = json.loads(response.data)

    assert response.status_code == 200
    assert data['data']['name'] == 'After'
    assert data['data']['email'] == subscriber.email


def test_update_subscriber_with_empty_body(client, make_subscriber):
    subscriber = make_subscriber(name="Unchanged")

    response = client.put(f'/api/subscribers/{subscriber.id}', json={})

    assert response.status_code == 200
    assert json.loads(response.data)['data']['name'] == 'Unchanged'


def test_update_subscriber_email_conflict(client, make_subscriber):
    make_subscriber(email="taken@example.com")
    other = make_subscriber()

    response = client.put(f'/api/subscribers/{other.id}', json={"email": "taken@example.com"})

    assert response.status_code == 400
    assert json.loads(response.data)['success'] is False


def test_update_nonexistent_subscriber(client):
    response = client.put('/api/subscribers/9999', json={"name": "Ghost"})
    assert response.status_code == 404


def test_delete_subscriber(client, make_subscriber):
    subscriber_id = make_subscriber().id

    response = client.delete(f'/api/subscribers/{subscriber_id}')
    data = json.loads(response.data)

    assert response.status_code == 200
    assert data['success'] is True
    assert 'data' not in data
    assert client.get(f'/api/subscribers/{subscriber_id}').status_code == 404


def test_delete_subscriber_with_subscriptions(client, make_subscriber, make_newspaper, make_subscription):
    subscriber = make_subscriber()
    make_subscription(subscriber, make_newspaper())

    response = client.delete(f'/api/subscribers/{subscriber.id}')

    assert response.status_code == 400
    assert client.get(f'/api/subscribers/{subscriber.id}').status_code == 200


def test_search_subscribers(client, make_subscriber):
    make_subscriber(name="Katherine Johnson", email="kj@example.com")
    make_subscriber(name="Dorothy Vaughan", email="dv@example.com")

    response = client.get('/api/subscribers/search/katherine')
    data = json.loads(response.data)

    assert response.status_code == 200
    assert [s['name'] for s in data['data']] == ['Katherine Johnson']
    assert data['message'] == 'Found 1 subscriber(s)'


@pytest.mark.parametrize("keyword", ["%20", "%20%20"])
def test_search_subscribers_blank_keyword(client, keyword):
    response = client.get(f'/api/subscribers/search/{keyword}')
    assert response.status_code == 400


def test_subscriber_stats(client, make_subscriber):
    make_subscriber()
    make_subscriber()

    response = client.get('/api/subscribers/stats')
    data = json.loads(response.data)

    assert response.status_code == 200
    assert data['data'] == {'total': 2, 'recent': 2}


def test_update_changes_only_given_field(client):
    created = json.loads(client.post('/api/subscribers', json=_subscriber_data()).data)['data']
    subscriber_id = created['id']

    before = json.loads(client.get(f'/api/subscribers/{subscriber_id}').data)['data']
    client.put(f'/api/subscribers/{subscriber_id}', json={"address": "7 New Road"})
    after = json.loads(client.get(f'/api/subscribers/{subscriber_id}').data)['data']

    assert after['address'] == '7 New Road'
    for field in ('id', 'name', 'email', 'phone', 'created_at'):
        assert after[field] == before[field]


def test_malformed_json_body(client):
    response = client.post('/api/subscribers', data='{"name": ', content_type='application/json')

    assert response.status_code == 400
    assert json.loads(response.data)['success'] is False


@pytest.mark.parametrize("subscriber_id", ["²", "٣"])
def test_get_subscriber_with_non_ascii_digit_id(client, subscriber_id):
    response = client.get(f'/api/subscribers/{subscriber_id}')

    assert response.status_code == 400
    assert json.loads(response.data)['message'] == 'ID must be a number'


def test_get_subscriber_with_oversized_id(client):
    response = client.get('/api/subscribers/99999999999999999999999')

    assert response.status_code == 400
    assert json.loads(response.data)['message'] == 'ID is out of range'

    assert client.delete('/api/subscribers/2147483648').status_code == 400
