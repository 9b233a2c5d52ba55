"""
Input validation helpers shared by the services.

Each helper either returns a cleaned value or raises ValidationError with a
message that can be shown to the user as is.
"""
import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from newsdesk.errors import ValidationError

# Largest values the id and price columns hold (INT, NUMERIC(10, 2))
MAX_ID = 2 ** 31 - 1
MAX_PRICE = Decimal("99999999.99")


def require_fields(data, fields, message=None):
    """
    Check that every field is present and not blank.

    Args:
        data (dict): Request payload
        fields (iterable): Required field names
        message (str, optional): Error message to raise

    Raises:
        ValidationError: If any field is missing or empty
    """
    missing = [name for name in fields if is_blank(data.get(name))]
    if missing:
        raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")


def is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def clean_text(value, field, max_length=None):
    """Strip a required text value, rejecting blanks and non-strings."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    value = value.strip()
    if max_length and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value


def clean_email(value):
    email = clean_text(value, "email", max_length=100)
    # Basic format check
    if '@' not in email:
        raise ValidationError("Invalid email format")
    return email


def parse_id(value, field="id"):
    """
    Parse a positive integer identifier given as int or numeric string.

    Raises:
        ValidationError: If the value is not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and is_ascii_digits(value.strip()):
        parsed = int(value.strip())
    else:
        raise ValidationError(f"{field} must be a number")
    if parsed < 1:
        raise ValidationError(f"{field} must be a positive number")
    if parsed > MAX_ID:
        raise ValidationError(f"{field} is out of range")
    return parsed


def is_ascii_digits(value):
    # str.isdigit also accepts characters such as superscripts that int() rejects
    return value.isascii() and value.isdigit()


def parse_date(value, field):
    """
    Parse an ISO calendar date.

    Args:
        value (str | date): Date value from the payload
        field (str): Field name used in the error message

    Returns:
        date: Parsed date
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field} format. Use YYYY-MM-DD")
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        # Full ISO timestamps keep their date part only
        return datetime.fromisoformat(value).date()
    except ValueError:
        raise ValidationError(f"Invalid {field} format. Use YYYY-MM-DD")


def parse_price(value, field="price", upper_bound=MAX_PRICE):
    """
    Parse a non-negative price into a Decimal with two places.

    Args:
        value: Price as number or numeric string
        field (str): Field name used in error messages
        upper_bound (Decimal, optional): Largest accepted value; None lets
            any finite value through, as needed for query bounds

    Raises:
        ValidationError: If the value is not a finite, non-negative number
            or exceeds ``upper_bound``
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"{field} must be a number")
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number")
    if not price.is_finite():
        raise ValidationError(f"{field} must be a number")
    if price < 0:
        raise ValidationError(f"{field} must not be negative")
    if upper_bound is not None and price > upper_bound:
        raise ValidationError(f"{field} must not exceed {upper_bound}")
    try:
        return price.quantize(Decimal("0.01"))
    except InvalidOperation:
        # Too many digits to round to cents; only unbounded values get here
        return price


def parse_choice(value, choices, field):
    """Check that value is one of the allowed choices."""
    if not isinstance(value, str) or value.strip() not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(choices)}")
    return value.strip()
