"""Collaborators the registry depends on but does not own."""

from abc import ABC, abstractmethod


class PumpStore(ABC):
    """Ordered key-value map from pump id to FuelPump.

    Stores are responsible for:
    - Persisting whole FuelPump values, transactions included
    - Providing a mutual-exclusion scope for read-modify-write sequences
    - Reporting backend failures as StorageError
    """

    @abstractmethod
    def get(self, key):
        """Return the pump stored under ``key``, or None."""

    @abstractmethod
    def insert(self, key, pump):
        """Store ``pump`` under ``key``, replacing any previous version."""

    @abstractmethod
    def remove(self, key):
        """Delete the pump stored under ``key``; a missing key is a no-op."""

    @abstractmethod
    def values(self):
        """Return every stored pump, ordered by key."""

    @abstractmethod
    def lock(self, key):
        """Context manager serializing mutations of ``key``.

        A get() issued inside the scope must observe the latest committed
        version, and no other lock holder may write ``key`` until it exits.
        """


class Clock(ABC):
    @abstractmethod
    def now(self):
        """Current time as a timezone-aware datetime."""


class IdGenerator(ABC):
    @abstractmethod
    def new_id(self):
        """A fresh, collision-free string identifier."""


class IdentityProvider(ABC):
    @abstractmethod
    def current_principal(self):
        """Identity of the caller, recorded on dispense transactions."""
