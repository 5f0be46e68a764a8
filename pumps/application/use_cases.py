"""
Application Use Cases — Fuel Pump Registry

FuelPumpRegistry exposes the eight operations of the service: create, get,
list_all, update, delete, dispense, list_transactions and set_status.

Core guarantees provided:

- Validation first: every argument is parsed before the store is touched,
  so a rejected request leaves no trace.
- Mutual exclusion: each read-modify-write runs inside store.lock(), so two
  concurrent dispenses cannot both pass the quantity check against a stale
  balance.
- Single write-back: the next version of a pump is built with
  dataclasses.replace() and persisted as the last step of the operation.
- Explicit domain signaling: business rule violations raise the exceptions
  in pumps.domain.exceptions; the transport layer maps them to responses.

Collaborators (store, clock, id generator, identity provider) are injected,
so the same registry runs over the Django ORM in production and over an
in-memory map in tests.
"""

import logging
from dataclasses import replace

from pumps.domain.entities import FuelPump, PumpStatus, Transaction
from pumps.domain.exceptions import (
    InsufficientQuantity,
    InvalidState,
    PumpNotFound,
    StorageError,
)
from pumps.domain.validation import (
    parse_payload,
    parse_pump_id,
    parse_quantity,
    parse_status,
)

logger = logging.getLogger(__name__)


class FuelPumpRegistry:
    def __init__(self, store, clock, ids, identity):
        self.store = store
        self.clock = clock
        self.ids = ids
        self.identity = identity

    def create(self, payload):
        """Registers a new Active pump with an empty transaction log."""
        fields = parse_payload(payload)
        pump_id = self.ids.new_id()

        with self.store.lock(pump_id):
            if self.store.get(pump_id) is not None:
                logger.error("Generated pump id collision: id=%s", pump_id)
                raise StorageError(f"Generated identifier {pump_id} is already in use.")

            pump = FuelPump(
                id=pump_id,
                pump_number=fields.pump_number,
                fuel_type=fields.fuel_type,
                fuel_quantity=fields.fuel_quantity,
                status=PumpStatus.ACTIVE,
                created_at=self.clock.now(),
                updated_at=None,
                transactions=(),
            )
            self.store.insert(pump.id, pump)

        logger.info(
            "Pump created: id=%s number=%s fuel_type=%s quantity=%s",
            pump.id, pump.pump_number, pump.fuel_type.value, pump.fuel_quantity,
        )
        return pump

    def get(self, pump_id):
        pump_id = parse_pump_id(pump_id)
        return self._require(pump_id)

    def list_all(self):
        return list(self.store.values())

    def update(self, pump_id, payload):
        """
        Replaces the caller-editable fields of a pump.

        id, created_at, status and transactions are carried over untouched.
        """
        pump_id = parse_pump_id(pump_id)
        fields = parse_payload(payload)

        with self.store.lock(pump_id):
            existing = self._require(pump_id)
            updated = replace(
                existing,
                pump_number=fields.pump_number,
                fuel_type=fields.fuel_type,
                fuel_quantity=fields.fuel_quantity,
                updated_at=self._touch(existing),
            )
            self.store.insert(pump_id, updated)

        logger.info("Pump updated: id=%s", pump_id)
        return updated

    def delete(self, pump_id):
        pump_id = parse_pump_id(pump_id)

        with self.store.lock(pump_id):
            existing = self._require(pump_id)
            self.store.remove(pump_id)

        logger.info("Pump deleted: id=%s", pump_id)
        return existing

    def dispense(self, pump_id, quantity):
        """
        Removes ``quantity`` from the pump and records a Transaction.

        Guards, in order: the pump exists, it is Active, and it holds at
        least ``quantity``. The transaction is attributed to the principal
        reported by the identity provider.
        """
        pump_id = parse_pump_id(pump_id)
        quantity = parse_quantity(quantity)

        with self.store.lock(pump_id):
            pump = self._require(pump_id)

            if not pump.can_dispense:
                logger.warning(
                    "Dispense rejected, pump not active: id=%s status=%s",
                    pump_id, pump.status.value,
                )
                raise InvalidState(pump_id, pump.status)

            if pump.fuel_quantity < quantity:
                logger.warning(
                    "Insufficient fuel: pump=%s requested=%s available=%s",
                    pump_id, quantity, pump.fuel_quantity,
                )
                raise InsufficientQuantity(pump_id, quantity, pump.fuel_quantity)

            now = self._touch(pump)
            entry = Transaction(
                timestamp=now,
                quantity_dispensed=quantity,
                user=self.identity.current_principal(),
            )
            dispensed = replace(
                pump,
                fuel_quantity=pump.fuel_quantity - quantity,
                transactions=pump.transactions + (entry,),
                updated_at=now,
            )
            self.store.insert(pump_id, dispensed)

        logger.info(
            "Fuel dispensed: pump=%s quantity=%s remaining=%s user=%s",
            pump_id, quantity, dispensed.fuel_quantity, entry.user,
        )
        return dispensed

    def list_transactions(self, pump_id):
        pump_id = parse_pump_id(pump_id)
        return list(self._require(pump_id).transactions)

    def set_status(self, pump_id, status):
        pump_id = parse_pump_id(pump_id)
        status = parse_status(status)

        with self.store.lock(pump_id):
            existing = self._require(pump_id)
            updated = replace(existing, status=status, updated_at=self._touch(existing))
            self.store.insert(pump_id, updated)

        logger.info(
            "Pump status changed: id=%s %s -> %s",
            pump_id, existing.status.value, status.value,
        )
        return updated

    def _require(self, pump_id):
        pump = self.store.get(pump_id)
        if pump is None:
            logger.warning("Pump not found: id=%s", pump_id)
            raise PumpNotFound(pump_id)
        return pump

    def _touch(self, pump):
        # updated_at never moves backwards, even if the clock does.
        now = self.clock.now()
        if pump.updated_at is not None and now < pump.updated_at:
            return pump.updated_at
        return now
