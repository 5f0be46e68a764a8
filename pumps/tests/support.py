from datetime import datetime, timedelta, timezone

from pumps.application.use_cases import FuelPumpRegistry
from pumps.domain.ports import Clock, IdentityProvider, IdGenerator
from pumps.infrastructure.memory_store import InMemoryPumpStore

START = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class SteppingClock(Clock):
    """Advances by ``step`` on every call, starting at ``start``."""

    def __init__(self, start=START, step=timedelta(seconds=1)):
        self.current = start
        self.step = step

    def now(self):
        value = self.current
        self.current = self.current + self.step
        return value


class SequentialIds(IdGenerator):
    def __init__(self, prefix="pump"):
        self.prefix = prefix
        self.issued = 0

    def new_id(self):
        self.issued += 1
        return f"{self.prefix}-{self.issued:04d}"


class StaticIdentity(IdentityProvider):
    def __init__(self, principal="attendant"):
        self.principal = principal

    def current_principal(self):
        return self.principal


def make_registry(store=None, clock=None, ids=None, identity=None):
    return FuelPumpRegistry(
        store=store if store is not None else InMemoryPumpStore(),
        clock=clock or SteppingClock(),
        ids=ids or SequentialIds(),
        identity=identity or StaticIdentity(),
    )


def diesel_payload(**overrides):
    payload = {"pump_number": 1, "fuel_type": "Diesel", "fuel_quantity": 100}
    payload.update(overrides)
    return payload
