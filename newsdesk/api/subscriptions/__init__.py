"""
Subscriptions namespace: links between subscribers and newspapers.
"""
from flask_restx import Namespace

subscription_ns = Namespace(
    'subscriptions',
    description='Subscription management operations'
)

from . import routes
