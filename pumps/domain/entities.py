"""
Domain Entities — Fuel Pumps

A FuelPump is the unit of storage: it owns its dispensing history as an
embedded, append-only tuple of Transaction values. Transactions are never
addressed on their own.

Both entities are frozen. The registry never edits a stored pump in place;
it builds the next version with dataclasses.replace() once every check has
passed, and hands that version to the store as the last step.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

# Mirrors the DecimalField(max_digits=12, decimal_places=3) columns.
QUANTITY_DECIMAL_PLACES = 3
QUANTITY_MAX_DIGITS = 12

# Largest value every Django backend accepts in a PositiveIntegerField.
PUMP_NUMBER_MAX = 2147483647


class FuelType(enum.Enum):
    REGULAR = "Regular"
    PREMIUM = "Premium"
    DIESEL = "Diesel"


class PumpStatus(enum.Enum):
    ACTIVE = "Active"
    MAINTENANCE = "Maintenance"
    OUT_OF_SERVICE = "Out-of-Service"


@dataclass(frozen=True)
class Transaction:
    timestamp: datetime
    quantity_dispensed: Decimal
    user: str


@dataclass(frozen=True)
class FuelPump:
    id: str
    pump_number: int
    fuel_type: FuelType
    fuel_quantity: Decimal
    status: PumpStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    transactions: Tuple[Transaction, ...] = field(default_factory=tuple)

    @property
    def can_dispense(self):
        return self.status is PumpStatus.ACTIVE

    def __str__(self):
        return (
            f"Pump {self.pump_number} ({self.fuel_type.value}) - "
            f"{self.fuel_quantity} - {self.status.value}"
        )


@dataclass(frozen=True)
class PumpPayload:
    """Caller-supplied fields accepted by create and update."""

    pump_number: int
    fuel_type: FuelType
    fuel_quantity: Decimal
