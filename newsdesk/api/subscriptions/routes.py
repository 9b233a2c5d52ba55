"""
Routes for subscriptions.

Every subscription is returned together with the subscriber's name and
email and the newspaper's name, publisher and price.
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
    subscription_service,
)
from newsdesk.errors import NotFoundError, ValidationError
from newsdesk.models.subscription import SubscriptionStatus
from newsdesk.services.subscription_service import DEFAULT_EXPIRING_DAYS, MAX_EXPIRING_DAYS
from newsdesk.utils.validation import is_ascii_digits

from . import subscription_ns

# Define the subscription model for API
subscription_model = subscription_ns.model('Subscription', {
    'id': fields.Integer(description='Subscription ID'),
    'subscriber_id': fields.Integer(description='Subscriber ID'),
    'newspaper_id': fields.Integer(description='Newspaper ID'),
    'start_date': fields.Date(description='First day of the subscription'),
    'end_date': fields.Date(description='Last day of the subscription'),
    'status': fields.String(description='Subscription status', enum=SubscriptionStatus.values()),
    'subscriber_name': fields.String(attribute='subscriber.name', description='Subscriber name'),
    'subscriber_email': fields.String(attribute='subscriber.email', description='Subscriber email'),
    'newspaper_name': fields.String(attribute='newspaper.name', description='Newspaper name'),
    'publisher': fields.String(attribute='newspaper.publisher', description='Newspaper publisher'),
    'price': fields.Float(attribute='newspaper.price', description='Newspaper price'),
    'created_at': fields.DateTime(description='Creation date'),
    'updated_at': fields.DateTime(description='Last update date'),
})

expiring_subscription_model = subscription_ns.inherit('ExpiringSubscription', subscription_model, {
    'days_remaining': fields.Integer(attribute=lambda s: s.days_remaining(),
                                     description='Days left until end_date'),
})

# Input model for creating/updating subscriptions
subscription_input_model = subscription_ns.model('SubscriptionInput', {
    'subscriber_id': fields.Integer(required=True, description='Subscriber ID'),
    'newspaper_id': fields.Integer(required=True, description='Newspaper ID'),
    'start_date': fields.Date(required=True, description='YYYY-MM-DD'),
    'end_date': fields.Date(required=True, description='YYYY-MM-DD, not before start_date'),
    'status': fields.String(description='Subscription status', enum=SubscriptionStatus.values(),
                            default=SubscriptionStatus.ACTIVE.value),
})

subscription_stats_model = subscription_ns.model('SubscriptionStats', {
    'total': fields.Integer(description='Number of subscriptions'),
    'active': fields.Integer(description='Active subscriptions'),
    'expired': fields.Integer(description='Expired subscriptions'),
    'cancelled': fields.Integer(description='Cancelled subscriptions'),
    'recent': fields.Integer(description='Subscriptions created in the last 30 days'),
})

subscription_response = envelope_model(
    subscription_ns, 'SubscriptionResponse', fields.Nested(subscription_model))
subscription_list_response = envelope_model(
    subscription_ns, 'SubscriptionListResponse', fields.List(fields.Nested(subscription_model)))
expiring_list_response = envelope_model(
    subscription_ns, 'ExpiringSubscriptionListResponse',
    fields.List(fields.Nested(expiring_subscription_model)))
subscription_stats_response = envelope_model(
    subscription_ns, 'SubscriptionStatsResponse', fields.Nested(subscription_stats_model))

NOT_FOUND = "Subscription not found"


def _empty_stats():
    return {'total': 0, 'active': 0, 'expired': 0, 'cancelled': 0, 'recent': 0}


def _parse_days(value):
    value = value.strip()
    if not is_ascii_digits(value):
        raise ValidationError(f"days must be a number between 1 and {MAX_EXPIRING_DAYS}")
    return int(value)


@subscription_ns.route('')
class SubscriptionList(Resource):
    """Resource for listing and creating subscriptions"""

    @subscription_ns.doc('list_subscriptions')
    @subscription_ns.response(200, 'Success', subscription_list_response)
    @database_required(empty=list)
    def get(self):
        """List all subscriptions, newest first"""
        subscriptions = subscription_service().list_subscriptions()
        return envelope(subscriptions, "Subscriptions retrieved successfully", model=subscription_model)

    @subscription_ns.doc('create_subscription')
    @subscription_ns.expect(subscription_input_model)
    @subscription_ns.response(201, 'Subscription created', subscription_response)
    @subscription_ns.response(400, 'Invalid fields, unknown subscriber or newspaper, '
                                   'or an active subscription already exists')
    @database_required()
    def post(self):
        """Subscribe a subscriber to a newspaper"""
        subscription = subscription_service().create_subscription(read_json())
        return envelope(subscription, "Subscription created successfully",
                        HTTPStatus.CREATED, model=subscription_model)


@subscription_ns.route('/stats')
class SubscriptionStats(Resource):
    """Resource for subscription statistics"""

    @subscription_ns.doc('subscription_stats')
    @subscription_ns.response(200, 'Success', subscription_stats_response)
    @database_required(empty=_empty_stats)
    def get(self):
        """Counts per status and subscriptions created in the last 30 days"""
        stats = subscription_service().get_stats()
        return envelope(stats, "Subscription statistics retrieved successfully")


@subscription_ns.route('/search/<keyword>')
@subscription_ns.param('keyword', 'Matched against subscriber name/email and newspaper name/publisher')
class SubscriptionSearch(Resource):
    """Resource for searching subscriptions"""

    @subscription_ns.doc('search_subscriptions')
    @subscription_ns.response(200, 'Success', subscription_list_response)
    @subscription_ns.response(400, 'Empty keyword')
    @database_required(empty=list)
    def get(self, keyword):
        """Case-insensitive substring search"""
        keyword = require_keyword(keyword)
        subscriptions = subscription_service().search_subscriptions(keyword)
        return envelope(subscriptions, f"Found {len(subscriptions)} subscription(s)",
                        model=subscription_model)


@subscription_ns.route('/subscriber/<subscriber_id>')
@subscription_ns.param('subscriber_id', 'The subscriber identifier')
class SubscriptionsBySubscriber(Resource):
    """Resource for a subscriber's subscriptions"""

    @subscription_ns.doc('subscriptions_by_subscriber')
    @subscription_ns.response(200, 'Success', subscription_list_response)
    @database_required(empty=list)
    def get(self, subscriber_id):
        """Subscriptions held by a subscriber, latest start first"""
        subscriber_id = parse_path_id(subscriber_id, "Subscriber ID")
        subscriptions = subscription_service().list_by_subscriber(subscriber_id)
        return envelope(subscriptions, f"Found {len(subscriptions)} subscription(s) for subscriber",
                        model=subscription_model)


@subscription_ns.route('/newspaper/<newspaper_id>')
@subscription_ns.param('newspaper_id', 'The newspaper identifier')
class SubscriptionsByNewspaper(Resource):
    """Resource for a newspaper's subscriptions"""

    @subscription_ns.doc('subscriptions_by_newspaper')
    @subscription_ns.response(200, 'Success', subscription_list_response)
    @database_required(empty=list)
    def get(self, newspaper_id):
        """Subscriptions to a newspaper, latest start first"""
        newspaper_id = parse_path_id(newspaper_id, "Newspaper ID")
        subscriptions = subscription_service().list_by_newspaper(newspaper_id)
        return envelope(subscriptions, f"Found {len(subscriptions)} subscription(s) for newspaper",
                        model=subscription_model)


@subscription_ns.route('/status/<status>')
@subscription_ns.param('status', 'One of: ' + ', '.join(SubscriptionStatus.values()))
class SubscriptionsByStatus(Resource):
    """Resource for filtering subscriptions by status"""

    @subscription_ns.doc('subscriptions_by_status')
    @subscription_ns.response(200, 'Success', subscription_list_response)
    @subscription_ns.response(400, 'Unknown status')
    @database_required(empty=list)
    def get(self, status):
        """Subscriptions with the given status, latest start first"""
        subscriptions = subscription_service().list_by_status(status)
        return envelope(subscriptions, f"Found {len(subscriptions)} {status} subscription(s)",
                        model=subscription_model)


@subscription_ns.route('/expiring-soon', '/expiring-soon/<days>')
@subscription_ns.param('days', f'Window in days, 1 to {MAX_EXPIRING_DAYS}, defaults to {DEFAULT_EXPIRING_DAYS}')
class ExpiringSubscriptions(Resource):
    """Resource for active subscriptions about to end"""

    @subscription_ns.doc('expiring_subscriptions')
    @subscription_ns.response(200, 'Success', expiring_list_response)
    @subscription_ns.response(400, 'Invalid days')
    @database_required(empty=list)
    def get(self, days=None):
        """Active subscriptions ending within the window, soonest first"""
        days = DEFAULT_EXPIRING_DAYS if days is None else _parse_days(days)
        subscriptions = subscription_service().list_expiring_soon(days)
        return envelope(subscriptions,
                        f"Found {len(subscriptions)} subscription(s) expiring in {days} day(s)",
                        model=expiring_subscription_model)


@subscription_ns.route('/<id>')
@subscription_ns.param('id', 'The subscription identifier')
class SubscriptionResource(Resource):
    """Resource for individual subscription operations"""

    @subscription_ns.doc('get_subscription')
    @subscription_ns.response(200, 'Success', subscription_response)
    @subscription_ns.response(404, NOT_FOUND)
    @database_required()
    def get(self, id):
        """Get a subscription"""
        subscription = subscription_service().get_subscription(parse_path_id(id))
        if subscription is None:
            raise NotFoundError(NOT_FOUND)
        return envelope(subscription, "Subscription retrieved successfully", model=subscription_model)

    @subscription_ns.doc('update_subscription')
    @subscription_ns.expect(subscription_input_model)
    @subscription_ns.response(200, 'Subscription updated', subscription_response)
    @subscription_ns.response(400, 'Invalid fields or an active subscription already exists')
    @subscription_ns.response(404, NOT_FOUND)
    @database_required()
    def put(self, id):
        """Partially update a subscription"""
        subscription_id = parse_path_id(id)
        subscription = subscription_service().update_subscription(subscription_id, read_json())
        if subscription is None:
            raise NotFoundError(NOT_FOUND)
        return envelope(subscription, "Subscription updated successfully", model=subscription_model)

    @subscription_ns.doc('delete_subscription')
    @subscription_ns.response(200, 'Subscription deleted')
    @subscription_ns.response(404, NOT_FOUND)
    @database_required()
    def delete(self, id):
        """Delete a subscription"""
        if not subscription_service().delete_subscription(parse_path_id(id)):
            raise NotFoundError(NOT_FOUND)
        return envelope(message="Subscription deleted successfully")
