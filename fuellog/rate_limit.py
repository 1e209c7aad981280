"""Rate limiting des routes d'authentification / Rate limiting for auth routes.

Limite par IP via slowapi ; desactivable (tests, reseau interne) avec RATE_LIMIT_ENABLED.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from fuellog.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
