"""
Routes for newspapers.
"""
from http import HTTPStatus

from flask_restx import Resource, fields

from newsdesk.api.common import (
    database_required,
    envelope,
    envelope_model,
    newspaper_service,
    parse_path_id,
    read_json,
    require_keyword,
)
from newsdesk.errors import NotFoundError
from newsdesk.models.newspaper import NewspaperFrequency

from . import newspaper_ns

# Define the newspaper model for API
newspaper_model = newspaper_ns.model('Newspaper', {
    'id': fields.Integer(description='Newspaper ID'),
    'name': fields.String(required=True, description='Newspaper name, unique'),
    'publisher': fields.String(required=True, description='Publisher'),
    'frequency': fields.String(required=True, description='Publication frequency',
                               enum=NewspaperFrequency.values()),
    'price': fields.Float(required=True, description='Subscription price'),
    'description': fields.String(description='Free text description'),
    'created_at': fields.DateTime(description='Creation date'),
    'updated_at': fields.DateTime(description='Last update date'),
})

# Input model for creating/updating newspapers
newspaper_input_model = newspaper_ns.model('NewspaperInput', {
    'name': fields.String(required=True, description='Newspaper name, unique'),
    'publisher': fields.String(required=True, description='Publisher'),
    'frequency': fields.String(required=True, description='Publication frequency',
                               enum=NewspaperFrequency.values()),
    'price': fields.Float(required=True, description='Subscription price, not negative'),
    'description': fields.String(description='Free text description'),
})

newspaper_stats_model = newspaper_ns.model('NewspaperStats', {
    'total': fields.Integer(description='Number of newspapers'),
    'avg_price': fields.Float(description='Average price'),
    'min_price': fields.Float(description='Lowest price'),
    'max_price': fields.Float(description='Highest price'),
})

newspaper_response = envelope_model(
    newspaper_ns, 'NewspaperResponse', fields.Nested(newspaper_model))
newspaper_list_response = envelope_model(
    newspaper_ns, 'NewspaperListResponse', fields.List(fields.Nested(newspaper_model)))
newspaper_stats_response = envelope_model(
    newspaper_ns, 'NewspaperStatsResponse', fields.Nested(newspaper_stats_model))

NOT_FOUND = "Newspaper not found"


def _empty_stats():
    return {'total': 0, 'avg_price': 0, 'min_price': 0, 'max_price': 0}


@newspaper_ns.route('')
class NewspaperList(Resource):
    """Resource for listing and creating newspapers"""

    @newspaper_ns.doc('list_newspapers')
    @newspaper_ns.response(200, 'Success', newspaper_list_response)
    @database_required(empty=list)
    def get(self):
        """List all newspapers, newest first"""
        newspapers = newspaper_service().list_newspapers()
        return envelope(newspapers, "Newspapers retrieved successfully", model=newspaper_model)

    @newspaper_ns.doc('create_newspaper')
    @newspaper_ns.expect(newspaper_input_model)
    @newspaper_ns.response(201, 'Newspaper created', newspaper_response)
    @newspaper_ns.response(400, 'Missing fields or name already taken')
    @database_required()
    def post(self):
        """Create a newspaper"""
        newspaper = newspaper_service().create_newspaper(read_json())
        return envelope(newspaper, "Newspaper created successfully",
                        HTTPStatus.CREATED, model=newspaper_model)


@newspaper_ns.route('/stats')
class NewspaperStats(Resource):
    """Resource for newspaper statistics"""

    @newspaper_ns.doc('newspaper_stats')
    @newspaper_ns.response(200, 'Success', newspaper_stats_response)
    @database_required(empty=_empty_stats)
    def get(self):
        """Newspaper count and price statistics"""
        stats = newspaper_service().get_stats()
        return envelope(stats, "Newspaper statistics retrieved successfully")


@newspaper_ns.route('/search/<keyword>')
@newspaper_ns.param('keyword', 'Matched against name, publisher and description')
class NewspaperSearch(Resource):
    """Resource for searching newspapers"""

    @newspaper_ns.doc('search_newspapers')
    @newspaper_ns.response(200, 'Success', newspaper_list_response)
    @newspaper_ns.response(400, 'Empty keyword')
    @database_required(empty=list)
    def get(self, keyword):
        """Case-insensitive substring search"""
        keyword = require_keyword(keyword)
        newspapers = newspaper_service().search_newspapers(keyword)
        return envelope(newspapers, f"Found {len(newspapers)} newspaper(s)", model=newspaper_model)


@newspaper_ns.route('/price-range/<min_price>/<max_price>')
@newspaper_ns.param('min_price', 'Lowest price, inclusive')
@newspaper_ns.param('max_price', 'Highest price, inclusive')
class NewspaperPriceRange(Resource):
    """Resource for filtering newspapers by price"""

    @newspaper_ns.doc('newspapers_by_price_range')
    @newspaper_ns.response(200, 'Success', newspaper_list_response)
    @newspaper_ns.response(400, 'Invalid price range')
    @database_required(empty=list)
    def get(self, min_price, max_price):
        """Newspapers priced within the range, cheapest first"""
        newspapers = newspaper_service().list_by_price_range(min_price, max_price)
        return envelope(newspapers, f"Found {len(newspapers)} newspaper(s) in price range",
                        model=newspaper_model)


@newspaper_ns.route('/publisher/<publisher>')
@newspaper_ns.param('publisher', 'Exact publisher name')
class NewspaperByPublisher(Resource):
    """Resource for filtering newspapers by publisher"""

    @newspaper_ns.doc('newspapers_by_publisher')
    @newspaper_ns.response(200, 'Success', newspaper_list_response)
    @database_required(empty=list)
    def get(self, publisher):
        """Newspapers from one publisher, ordered by name"""
        newspapers = newspaper_service().list_by_publisher(publisher)
        return envelope(newspapers, f"Found {len(newspapers)} newspaper(s) from publisher",
                        model=newspaper_model)


@newspaper_ns.route('/<id>')
@newspaper_ns.param('id', 'The newspaper identifier')
class NewspaperResource(Resource):
    """Resource for individual newspaper operations"""

    @newspaper_ns.doc('get_newspaper')
    @newspaper_ns.response(200, 'Success', newspaper_response)
    @newspaper_ns.response(404, NOT_FOUND)
    @database_required()
    def get(self, id):
        """Get a newspaper"""
        newspaper = newspaper_service().get_newspaper(parse_path_id(id))
        if newspaper is None:
            raise NotFoundError(NOT_FOUND)
        return envelope(newspaper, "Newspaper retrieved successfully", model=newspaper_model)

    @newspaper_ns.doc('update_newspaper')
    @newspaper_ns.expect(newspaper_input_model)
    @newspaper_ns.response(200, 'Newspaper updated', newspaper_response)
    @newspaper_ns.response(400, 'Invalid fields or name used by another newspaper')
    @newspaper_ns.response(404, NOT_FOUND)
    @database_required()
    def put(self, id):
        """Partially update a newspaper"""
        newspaper_id = parse_path_id(id)
        newspaper = newspaper_service().update_newspaper(newspaper_id, read_json())
        if newspaper is None:
            raise NotFoundError(NOT_FOUND)
        return envelope(newspaper, "Newspaper updated successfully", model=newspaper_model)

    @newspaper_ns.doc('delete_newspaper')
    @newspaper_ns.response(200, 'Newspaper deleted')
    @newspaper_ns.response(400, 'Newspaper still has subscriptions')
    @newspaper_ns.response(404, NOT_FOUND)
    @database_required()
    def delete(self, id):
        """Delete a newspaper without subscriptions"""
        if not newspaper_service().delete_newspaper(parse_path_id(id)):
            raise NotFoundError(NOT_FOUND)
        return envelope(message="Newspaper deleted successfully")
