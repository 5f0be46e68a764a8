import threading
from contextlib import contextmanager

from pumps.domain.ports import PumpStore


class InMemoryPumpStore(PumpStore):
    """
    Process-local store backed by a dict.

    Pumps are frozen dataclasses, so handing out the stored instances is
    safe. A single re-entrant lock serializes every mutation; this is the
    store used by the registry tests and by PUMPS_STORE_BACKEND=memory.
    """

    def __init__(self):
        self._pumps = {}
        self._mutex = threading.RLock()

    def get(self, key):
        with self._mutex:
            return self._pumps.get(key)

    def insert(self, key, pump):
        with self._mutex:
            self._pumps[key] = pump

    def remove(self, key):
        with self._mutex:
            self._pumps.pop(key, None)

    def values(self):
        with self._mutex:
            return [self._pumps[key] for key in sorted(self._pumps)]

    @contextmanager
    def lock(self, key):
        with self._mutex:
            yield

    def __len__(self):
        with self._mutex:
            return len(self._pumps)
