"""Shared utility functions used across components."""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

TWO_PLACES = Decimal("0.01")


def utcnow() -> datetime:
    """Return the current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return datetime as timezone-aware UTC. Returns None if input is None."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_points(value) -> Decimal:
    """Coerce a numeric value to a two-place Decimal (the stored score precision)."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        # str() first so floats keep their shortest repr instead of binary noise
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def enum_values(enum_cls) -> list[str]:
    """values_callable for SQLAlchemy Enum columns: store the lowercase values."""
    return [member.value for member in enum_cls]
