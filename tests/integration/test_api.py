"""
Integration tests for application-wide API behaviour.
"""
import json

import pytest

pytestmark = pytest.mark.integration


def test_health_check(client):
    """Test the health check endpoint."""
    response = client.get('/api/health')
    data = json.loads(response.data)

    assert response.status_code == 200
    assert data['success'] is True
    assert data['status'] == 'healthy'
    assert data['environment'] == 'testing'
    assert data['database_connected'] is True
    assert data['mode'] == 'normal'


def test_swagger_docs(client):
    """Test the interactive documentation and its spec are served."""
    assert client.get('/api/docs').status_code == 200

    response = client.get('/swagger.json')
    spec = json.loads(response.data)
    assert response.status_code == 200
    assert '/api/subscribers' in spec['paths']
    assert '/api/newspapers/price-range/{min_price}/{max_price}' in spec['paths']
    assert '/api/subscriptions/expiring-soon/{days}' in spec['paths']


def test_unknown_route_uses_envelope(client):
    response = client.get('/api/does-not-exist')
    data = json.loads(response.data)

    assert response.status_code == 404
    assert data['success'] is False
    assert '/api/does-not-exist' in data['message']


def test_method_not_allowed_uses_envelope(client):
    response = client.patch('/api/subscribers')
    data = json.loads(response.data)

    assert response.status_code == 405
    assert data['success'] is False


def test_non_json_body_is_rejected(client):
    response = client.post('/api/subscribers', data='name=x', content_type='text/plain')
    data = json.loads(response.data)

    assert response.status_code == 400
    assert data['success'] is False
    assert data['message'] == 'Request body must be a JSON object'


def test_cors_headers(client):
    response = client.get('/api/health', headers={'Origin': 'http://localhost:3000'})

    assert response.headers['Access-Control-Allow-Origin'] == 'http://localhost:3000'
    assert response.headers['Access-Control-Allow-Credentials'] == 'true'
    assert 'PUT' in response.headers['Access-Control-Allow-Methods']


def test_cors_preflight(client):
    response = client.options('/api/subscribers', headers={
        'Origin': 'http://localhost:3000',
        'Access-Control-Request-Method': 'POST',
    })

    assert response.status_code == 200
    assert 'Content-Type' in response.headers['Access-Control-Allow-Headers']


class TestDegradedMode:
    """The application keeps answering when its database is unreachable."""

    def test_health_reports_degraded(self, degraded_client):
        data = json.loads(degraded_client.get('/api/health').data)
        assert data['database_connected'] is False
        assert data['mode'] == 'degraded'

    @pytest.mark.parametrize("url", [
        '/api/subscribers',
        '/api/newspapers',
        '/api/subscriptions',
        '/api/subscribers/search/ann',
        '/api/newspapers/price-range/1/10',
        '/api/newspapers/publisher/Acme',
        '/api/subscriptions/status/active',
        '/api/subscriptions/expiring-soon',
        '/api/subscriptions/subscriber/1',
    ])
    def test_lists_are_empty(self, degraded_client, url):
        response = degraded_client.get(url)
        data = json.loads(response.data)

        assert response.status_code == 200
        assert data['success'] is True
        assert data['data'] == []
        assert data['mode'] == 'degraded'

    def test_stats_are_zero(self, degraded_client):
        subscribers = json.loads(degraded_client.get('/api/subscribers/stats').data)
        newspapers = json.loads(degraded_client.get('/api/newspapers/stats').data)
        subscriptions = json.loads(degraded_client.get('/api/subscriptions/stats').data)

        assert subscribers['data'] == {'total': 0, 'recent': 0}
        assert newspapers['data'] == {'total': 0, 'avg_price': 0, 'min_price': 0, 'max_price': 0}
        assert subscriptions['data'] == {'total': 0, 'active': 0, 'expired': 0, 'cancelled': 0, 'recent': 0}

    @pytest.mark.parametrize("method,url", [
        ('get', '/api/subscribers/1'),
        ('post', '/api/subscribers'),
        ('put', '/api/newspapers/1'),
        ('delete', '/api/subscriptions/1'),
    ])
    def test_single_reads_and_writes_fail(self, degraded_client, method, url):
        response = getattr(degraded_client, method)(url, json={'name': 'x'})
        data = json.loads(response.data)

        assert response.status_code == 503
        assert data['success'] is False
        assert data['message'] == 'Database is not connected'
