import logging
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from pumps.application.use_cases import FuelPumpRegistry
from pumps.infrastructure.memory_store import InMemoryPumpStore
from pumps.infrastructure.orm_store import DjangoPumpStore
from pumps.infrastructure.providers import (
    RequestIdentityProvider,
    SystemClock,
    Uuid4Generator,
)

logger = logging.getLogger(__name__)

STORE_BACKENDS = {
    "orm": DjangoPumpStore,
    "memory": InMemoryPumpStore,
}


@lru_cache(maxsize=None)
def _store_for(backend):
    try:
        store_cls = STORE_BACKENDS[backend]
    except KeyError:
        raise ImproperlyConfigured(
            f"PUMPS_STORE_BACKEND must be one of {sorted(STORE_BACKENDS)}, got {backend!r}."
        )
    logger.info("Using %s pump store", backend)
    return store_cls()


def get_store():
    """The configured store; one instance per backend for the whole process."""
    return _store_for(settings.PUMPS_STORE_BACKEND)


def build_registry(request):
    return FuelPumpRegistry(
        store=get_store(),
        clock=SystemClock(),
        ids=Uuid4Generator(),
        identity=RequestIdentityProvider(request),
    )
