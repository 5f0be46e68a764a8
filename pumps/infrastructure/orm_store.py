"""
Django ORM implementation of the PumpStore port.

Maps frozen FuelPump entities onto the Pump / PumpTransaction tables.

- lock(key) opens transaction.atomic() and takes a row lock with
  select_for_update(), so concurrent read-modify-write sequences on the same
  pump are serialized by the database.
- insert() upserts the pump row and appends only the transactions that are
  not stored yet; existing transaction rows are never rewritten.
- Any DatabaseError is reported as StorageError.
"""

import logging
from contextlib import contextmanager

from django.db import DatabaseError, transaction

from pumps.domain.entities import FuelPump, FuelType, PumpStatus, Transaction
from pumps.domain.exceptions import StorageError
from pumps.domain.ports import PumpStore
from pumps.models import Pump, PumpTransaction

logger = logging.getLogger(__name__)


def to_entity(row):
    return FuelPump(
        id=row.id,
        pump_number=row.pump_number,
        fuel_type=FuelType(row.fuel_type),
        fuel_quantity=row.fuel_quantity,
        status=PumpStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
        transactions=tuple(
            Transaction(
                timestamp=entry.timestamp,
                quantity_dispensed=entry.quantity_dispensed,
                user=entry.user,
            )
            for entry in row.transactions.all()
        ),
    )


class DjangoPumpStore(PumpStore):
    def get(self, key):
        try:
            row = Pump.objects.prefetch_related("transactions").filter(pk=key).first()
        except DatabaseError as exc:
            logger.exception("Failed to read pump: id=%s", key)
            raise StorageError(f"Could not read Fuel Pump {key}.") from exc
        return to_entity(row) if row is not None else None

    def insert(self, key, pump):
        try:
            with transaction.atomic():
                row, _ = Pump.objects.update_or_create(
                    id=key,
                    defaults={
                        "pump_number": pump.pump_number,
                        "fuel_type": pump.fuel_type.value,
                        "fuel_quantity": pump.fuel_quantity,
                        "status": pump.status.value,
                        "created_at": pump.created_at,
                        "updated_at": pump.updated_at,
                    },
                )
                stored = row.transactions.count()
                PumpTransaction.objects.bulk_create(
                    PumpTransaction(
                        pump=row,
                        timestamp=entry.timestamp,
                        quantity_dispensed=entry.quantity_dispensed,
                        user=entry.user,
                    )
                    for entry in pump.transactions[stored:]
                )
        except DatabaseError as exc:
            logger.exception("Failed to write pump: id=%s", key)
            raise StorageError(f"Could not store Fuel Pump {key}.") from exc

    def remove(self, key):
        try:
            Pump.objects.filter(pk=key).delete()
        except DatabaseError as exc:
            logger.exception("Failed to delete pump: id=%s", key)
            raise StorageError(f"Could not delete Fuel Pump {key}.") from exc

    def values(self):
        try:
            rows = list(Pump.objects.prefetch_related("transactions").order_by("id"))
        except DatabaseError as exc:
            logger.exception("Failed to list pumps")
            raise StorageError("Could not list Fuel Pumps.") from exc
        return [to_entity(row) for row in rows]

    @contextmanager
    def lock(self, key):
        # Domain errors raised inside the scope pass through untouched.
        try:
            with transaction.atomic():
                # Lock the pump row so no other writer reads a stale quantity
                list(Pump.objects.select_for_update().filter(pk=key).values_list("pk", flat=True))
                yield
        except DatabaseError as exc:
            logger.exception("Failed to lock pump: id=%s", key)
            raise StorageError(f"Could not lock Fuel Pump {key}.") from exc
