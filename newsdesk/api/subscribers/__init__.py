"""
Subscribers namespace: readers who hold subscriptions.
"""
from flask_restx import Namespace

subscriber_ns = Namespace(
    'subscribers',
    description='Subscriber management operations'
)

from . import routes
