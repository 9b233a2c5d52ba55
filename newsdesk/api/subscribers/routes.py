"""
Routes for subscribers.
"""
from http import HTTPStatus

from flask_restx import Resource, fields

from newsdesk.api.common import (
    database_required,
    envelope,
    envelope_model,
    parse_path_id,
    read_json,
    require_keyword,
    subscriber_service,
)
from newsdesk.errors import NotFoundError

from . import subscriber_ns

# Define the subscriber model for API
subscriber_model = subscriber_ns.model('Subscriber', {
    'id': fields.Integer(description='Subscriber ID'),
    'name': fields.String(required=True, description='Full name'),
    'email': fields.String(required=True, description='Email address, unique'),
    'phone': fields.String(required=True, description='Phone number'),
    'address': fields.String(required=True, description='Postal address'),
    'created_at': fields.DateTime(description='Creation date'),
    'updated_at': fields.DateTime(description='Last update date'),
})

# Input model for creating/updating subscribers
subscriber_input_model = subscriber_ns.model('SubscriberInput', {
    'name': fields.String(required=True, description='Full name'),
    'email': fields.String(required=True, description='Email address, unique'),
    'phone': fields.String(required=True, description='Phone number'),
    'address': fields.String(required=True, description='Postal address'),
})

subscriber_stats_model = subscriber_ns.model('SubscriberStats', {
    'total': fields.Integer(description='Number of subscribers'),
    'recent': fields.Integer(description='Subscribers created in the last 30 days'),
})

subscriber_response = envelope_model(
    subscriber_ns, 'SubscriberResponse', fields.Nested(subscriber_model))
subscriber_list_response = envelope_model(
    subscriber_ns, 'SubscriberListResponse', fields.List(fields.Nested(subscriber_model)))
subscriber_stats_response = envelope_model(
    subscriber_ns, 'SubscriberStatsResponse', fields.Nested(subscriber_stats_model))

NOT_FOUND = "Subscriber not found"


@subscriber_ns.route('')
class SubscriberList(Resource):
    """Resource for listing and creating subscribers"""

    @subscriber_ns.doc('list_subscribers')
    @subscriber_ns.response(200, 'Success', subscriber_list_response)
    @database_required(empty=list)
    def get(self):
        """List all subscribers, newest first"""
        subscribers = subscriber_service().list_subscribers()
        return envelope(subscribers, "Subscribers retrieved successfully", model=subscriber_model)

    @subscriber_ns.doc('create_subscriber')
    @subscriber_ns.expect(subscriber_input_model)
    @subscriber_ns.response(201, 'Subscriber created', subscriber_response)
    @subscriber_ns.response(400, 'Missing fields or email already registered')
    @database_required()
    def post(self):
        """Create a subscriber"""
        subscriber = subscriber_service().create_subscriber(read_json())
        return envelope(subscriber, "Subscriber created successfully",
                        HTTPStatus.CREATED, model=subscriber_model)


@subscriber_ns.route('/stats')
class SubscriberStats(Resource):
    """Resource for subscriber statistics"""

    @subscriber_ns.doc('subscriber_stats')
    @subscriber_ns.response(200, 'Success', subscriber_stats_response)
    @database_required(empty=lambda: {'total': 0, 'recent': 0})
    def get(self):
        """Total subscribers and those created in the last 30 days"""
        stats = subscriber_service().get_stats()
        return envelope(stats, "Subscriber statistics retrieved successfully")


@subscriber_ns.route('/search/<keyword>')
@subscriber_ns.param('keyword', 'Matched against name, email and phone')
class SubscriberSearch(Resource):
    """Resource for searching subscribers"""

    @subscriber_ns.doc('search_subscribers')
    @subscriber_ns.response(200, 'Success', subscriber_list_response)
    @subscriber_ns.response(400, 'Empty keyword')
    @database_required(empty=list)
    def get(self, keyword):
        """Case-insensitive substring search"""
        keyword = require_keyword(keyword)
        subscribers = subscriber_service().search_subscribers(keyword)
        return envelope(subscribers, f"Found {len(subscribers)} subscriber(s)", model=subscriber_model)


@subscriber_ns.route('/<id>')
@subscriber_ns.param('id', 'The subscriber identifier')
class SubscriberResource(Resource):
    """Resource for individual subscriber operations"""

    @subscriber_ns.doc('get_subscriber')
    @subscriber_ns.response(200, 'Success', subscriber_response)
    @subscriber_ns.response(404, NOT_FOUND)
    @database_required()
    def get(self, id):
        """Get a subscriber"""
        subscriber = subscriber_service().get_subscriber(parse_path_id(id))
        if subscriber is None:
            raise NotFoundError(NOT_FOUND)
        return envelope(subscriber, "Subscriber retrieved successfully", model=subscriber_model)

    @subscriber_ns.doc('update_subscriber')
    @subscriber_ns.expect(subscriber_input_model)
    @subscriber_ns.response(200, 'Subscriber updated', subscriber_response)
    @subscriber_ns.response(400, 'Invalid fields or email used by another subscriber')
    @subscriber_ns.response(404, NOT_FOUND)
    @database_required()
    def put(self, id):
        """Partially update a subscriber"""
        subscriber_id = parse_path_id(id)
        subscriber = subscriber_service().update_subscriber(subscriber_id, read_json())
        if subscriber is None:
            raise NotFoundError(NOT_FOUND)
        return envelope(subscriber, "Subscriber updated successfully", model=subscriber_model)

    @subscriber_ns.doc('delete_subscriber')
    @subscriber_ns.response(200, 'Subscriber deleted')
    @subscriber_ns.response(400, 'Subscriber still has subscriptions')
    @subscriber_ns.response(404, NOT_FOUND)
    @database_required()
    def delete(self, id):
        """Delete a subscriber without subscriptions"""
        if not subscriber_service().delete_subscriber(parse_path_id(id)):
            raise NotFoundError(NOT_FOUND)
        return envelope(message="Subscriber deleted successfully")
