"""Small shared helpers."""
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal('0.01')


def utcnow():
    """Naive UTC timestamp, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_decimal(value, default=None):
    """Coerce form/JSON input to Decimal; returns ``default`` for blanks and junk."""
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return default
    text = str(value).strip()
    if not text:
        return default
    try:
        result = Decimal(text)
    except InvalidOperation:
        return default
    if not result.is_finite():
        return default
    return result


def money(value):
    """Round to cents for display. Internal arithmetic never calls this."""
    if value is None:
        return None
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def money_str(value):
    rounded = money(value)
    return None if rounded is None else str(rounded)


def isoformat(value):
    return value.isoformat() if value else None


def quantize(value, places):
    """Round half-up to ``places`` decimals, the scale a Numeric column keeps."""
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
