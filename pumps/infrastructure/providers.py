"""Production collaborators: wall clock, uuid4 ids and the request principal."""

import uuid

from django.conf import settings
from django.utils import timezone

from pumps.domain.ports import Clock, IdentityProvider, IdGenerator


class SystemClock(Clock):
    def now(self):
        return timezone.now()


class Uuid4Generator(IdGenerator):
    def new_id(self):
        return str(uuid.uuid4())


class RequestIdentityProvider(IdentityProvider):
    """Resolves the principal from the authenticated DRF request user."""

    def __init__(self, request):
        self.request = request

    def current_principal(self):
        user = getattr(self.request, "user", None)
        if user is not None and user.is_authenticated:
            return user.get_username()
        return settings.PUMPS_ANONYMOUS_PRINCIPAL
