"""
Helpers shared by the API namespaces.

Every response uses the same envelope::

    {"success": bool, "data": ..., "message": str, "error": str, "mode": str}

where ``error`` only appears on failures and ``mode`` only when the
service runs without a database.
"""
from functools import wraps
from http import HTTPStatus

from flask import current_app, request
from flask_restx import fields, marshal

from newsdesk import db
from newsdesk.errors import NotConnected, ValidationError
from newsdesk.services import (
    build_newspaper_service,
    build_subscriber_service,
    build_subscription_service,
)
from newsdesk.utils.validation import MAX_ID, is_ascii_digits

DEGRADED_MODE = "degraded"

# Sentinel: the endpoint has no meaningful empty answer without a database
_NO_FALLBACK = object()


def envelope(data=None, message="", status=HTTPStatus.OK, model=None):
    """
    Build a success response tuple.

    Args:
        data: Payload, marshalled with ``model`` when one is given
        message (str): Human readable message
        status (int): HTTP status code
        model: Flask-RESTX model used to marshal ``data``

    Returns:
        tuple: (body, status)
    """
    if model is not None and data is not None:
        data = marshal(data, model)
    body = {'success': True, 'message': message}
    if data is not None:
        body['data'] = data
    return body, status


def error_body(message, error=None):
    body = {'success': False, 'message': message}
    if error is not None:
        body['error'] = error
    return body


def envelope_model(ns, name, data_field):
    """Document an envelope whose ``data`` holds ``data_field``."""
    return ns.model(name, {
        'success': fields.Boolean(description='Whether the request succeeded'),
        'message': fields.String(description='Human readable message'),
        'data': data_field,
        'error': fields.String(description='Error detail on failure'),
        'mode': fields.String(description='Set to "degraded" when the database is unavailable'),
    })


def database_required(empty=_NO_FALLBACK):
    """
    Guard an endpoint against running without a database.

    When the database was unreachable at start-up, endpoints given an
    ``empty`` value answer successfully with it; all others raise
    NotConnected.
    """
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            if current_app.config.get('DATABASE_CONNECTED', True):
                return fn(*args, **kwargs)
            if empty is _NO_FALLBACK:
                raise NotConnected()
            data = empty() if callable(empty) else empty
            return {
                'success': True,
                'data': data,
                'message': "Database not connected, returning empty data",
                'mode': DEGRADED_MODE,
            }, HTTPStatus.OK
        return decorator
    return wrapper


def parse_path_id(value, label="ID"):
    """Parse a numeric path segment, rejecting anything else with a 400."""
    value = (value or "").strip()
    if not is_ascii_digits(value):
        raise ValidationError(f"{label} must be a number")
    parsed = int(value)
    if parsed > MAX_ID:
        raise ValidationError(f"{label} is out of range")
    return parsed


def require_keyword(value, message="Please enter a search keyword"):
    if value is None or not value.strip():
        raise ValidationError(message)
    return value.strip()


def read_json():
    """Return the request body as a dict, rejecting anything else."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def subscriber_service():
    return build_subscriber_service(db.session)


def newspaper_service():
    return build_newspaper_service(db.session)


def subscription_service():
    return build_subscription_service(db.session)
