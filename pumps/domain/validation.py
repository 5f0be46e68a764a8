"""
Boundary parsing for registry inputs.

Every public registry operation runs its arguments through these helpers
before it touches the store, so a malformed request fails with InvalidInput
and never reaches a write.
"""

import re
from decimal import Decimal, InvalidOperation

from pumps.domain.entities import (
    PUMP_NUMBER_MAX,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
    FuelType,
    PumpPayload,
    PumpStatus,
)
from pumps.domain.exceptions import InvalidInput

_SEPARATORS = re.compile(r"[\s_\-]+")

MAX_QUANTITY = Decimal(10) ** (QUANTITY_MAX_DIGITS - QUANTITY_DECIMAL_PLACES)


def _enum_key(value):
    return _SEPARATORS.sub("", value).lower()


def _parse_enum(enum_cls, value, field):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"{field} is required.", field=field)

    key = _enum_key(value)
    for member in enum_cls:
        if key in (_enum_key(member.value), _enum_key(member.name)):
            return member

    allowed = ", ".join(member.value for member in enum_cls)
    raise InvalidInput(
        f"{field} must be one of: {allowed} (got {value!r}).", field=field
    )


def parse_pump_id(pump_id):
    if not isinstance(pump_id, str) or not pump_id.strip():
        raise InvalidInput("id must be a non-empty string.", field="id")
    return pump_id.strip()


def parse_fuel_type(value):
    return _parse_enum(FuelType, value, "fuel_type")


def parse_status(value):
    return _parse_enum(PumpStatus, value, "status")


def parse_quantity(value, field="quantity"):
    """
    Coerces ``value`` to a strictly positive Decimal.

    Accepts ints, floats, Decimals and numeric strings (form-encoded
    requests deliver everything as strings). Booleans are rejected even
    though Python treats them as ints.
    """
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidInput(f"{field} is required.", field=field)

    try:
        quantity = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidInput(f"{field} must be a number.", field=field)

    if not quantity.is_finite():
        raise InvalidInput(f"{field} must be a finite number.", field=field)
    if quantity <= 0:
        raise InvalidInput(f"{field} must be greater than zero.", field=field)
    if quantity >= MAX_QUANTITY:
        raise InvalidInput(f"{field} must be less than {MAX_QUANTITY}.", field=field)
    if quantity.as_tuple().exponent < -QUANTITY_DECIMAL_PLACES:
        raise InvalidInput(
            f"{field} allows at most {QUANTITY_DECIMAL_PLACES} decimal places.",
            field=field,
        )
    return quantity


def parse_pump_number(value):
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidInput("pump_number is required.", field="pump_number")

    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidInput("pump_number must be an integer.", field="pump_number")

    if number <= 0:
        raise InvalidInput(
            "pump_number must be a positive integer.", field="pump_number"
        )
    if number > PUMP_NUMBER_MAX:
        raise InvalidInput(
            f"pump_number must not exceed {PUMP_NUMBER_MAX}.", field="pump_number"
        )
    return number


def parse_payload(payload):
    """Validates a create/update payload; all three fields are required."""
    if payload is None or not hasattr(payload, "get"):
        raise InvalidInput("payload must be an object.")

    return PumpPayload(
        pump_number=parse_pump_number(payload.get("pump_number")),
        fuel_type=parse_fuel_type(payload.get("fuel_type")),
        fuel_quantity=parse_quantity(
            payload.get("fuel_quantity"), field="fuel_quantity"
        ),
    )
