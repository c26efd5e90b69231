import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import httpx
from django.conf import settings
from supabase import AuthError, PostgrestAPIError, StorageException, create_client

logger = logging.getLogger(__name__)

# Everything the Supabase client may raise for a failed request
BACKEND_ERRORS = (PostgrestAPIError, StorageException, AuthError, httpx.HTTPError)


@dataclass(frozen=True)
class Ok:
    value: Any
    ok = True

    def unwrap_or(self, default):
        return self.value


@dataclass(frozen=True)
class Err:
    reason: str
    ok = False

    def unwrap_or(self, default):
        return default


def error_message(exc):
    """Raw backend message the editors show to the admin."""
    message = getattr(exc, 'message', None)
    return str(message or exc or 'Неизвестна грешка')


def get_client():
    """Fresh client per request so auth state never leaks between users."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)


def gather(*calls):
    """Run independent backend calls side by side and return their results in order."""
    if len(calls) < 2:
        return [call() for call in calls]
    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
        return [future.result() for future in futures]
