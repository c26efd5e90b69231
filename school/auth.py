"""Supabase password sessions for the admin area.

:class:`SupabaseSessionMiddleware` bootstraps one :class:`SessionContext` per
request from the tokens kept in the Django session and hangs it on
``request.auth_context``.  The context publishes auth events to subscribers:
the middleware listens to keep the stored tokens in sync and
:func:`school.decorators.admin_required` listens while an admin view runs.
"""

import logging

from django.utils.functional import SimpleLazyObject

from . import backend
from .backend import BACKEND_ERRORS

logger = logging.getLogger(__name__)

SIGNED_IN = 'SIGNED_IN'
SIGNED_OUT = 'SIGNED_OUT'
TOKEN_REFRESHED = 'TOKEN_REFRESHED'

ACCESS_TOKEN_KEY = 'sb_access_token'
REFRESH_TOKEN_KEY = 'sb_refresh_token'


class SessionContext:
    def __init__(self, client, access_token=None, refresh_token=None):
        self.client = client
        self.access_token = access_token
        self.refresh_token = refresh_token
        self._user = None
        self._restored = False
        self._is_admin = None
        self._listeners = []

    # -- observable -------------------------------------------------------

    def subscribe(self, listener):
        """``listener(event, context)``; returns a callable that detaches it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _publish(self, event):
        for listener in list(self._listeners):
            listener(event, self)

    # -- state ------------------------------------------------------------

    @property
    def has_tokens(self):
        return bool(self.access_token and self.refresh_token)

    @property
    def user(self):
        self._restore()
        return self._user

    @property
    def user_id(self):
        user = self.user
        return str(user.id) if user else None

    @property
    def email(self):
        user = self.user
        return getattr(user, 'email', None) if user else None

    @property
    def is_authenticated(self):
        return self.user is not None

    def _restore(self):
        if self._restored:
            return
        self._restored = True
        if not self.has_tokens:
            return
        try:
            res = self.client.auth.set_session(self.access_token, self.refresh_token)
        except BACKEND_ERRORS as e:
            logger.info(f"Stored session rejected: {e}")
            self._clear()
            self._publish(SIGNED_OUT)
            return
        old_token = self.access_token
        self._apply(res)
        if self._user is not None and self.access_token != old_token:
            self._publish(TOKEN_REFRESHED)

    def _apply(self, res):
        session = getattr(res, 'session', None)
        self._user = getattr(res, 'user', None) or getattr(session, 'user', None)
        if session is not None:
            self.access_token = session.access_token
            self.refresh_token = session.refresh_token

    def _clear(self):
        self._user = None
        self._is_admin = None
        self.access_token = None
        self.refresh_token = None

    # -- allow-list -------------------------------------------------------

    def is_admin(self):
        """Membership in the ``admins`` table; a failed lookup counts as "no"."""
        if self._is_admin is None:
            self._is_admin = self._lookup_admin()
        return self._is_admin

    def _lookup_admin(self):
        user_id = self.user_id
        if not user_id:
            return False
        try:
            res = (
                self.client.table('admins')
                .select('user_id')
                .eq('user_id', user_id)
                .limit(1)
                .execute()
            )
        except BACKEND_ERRORS as e:
            logger.error(f"Admin lookup failed for {user_id}: {e}")
            return False
        return bool(res.data)

    # -- actions ----------------------------------------------------------

    def sign_in(self, email, password):
        """Raises the backend's auth error on bad credentials."""
        res = self.client.auth.sign_in_with_password({'email': email, 'password': password})
        self._restored = True
        self._is_admin = None
        self._apply(res)
        logger.info(f"Signed in {email}")
        self._publish(SIGNED_IN)
        return self._user

    def sign_out(self):
        try:
            self.client.auth.sign_out()
        except BACKEND_ERRORS as e:
            logger.warning(f"Sign out request failed: {e}")
        self._restored = True
        self._clear()
        self._publish(SIGNED_OUT)


def store_tokens(session, event, context):
    if event == SIGNED_OUT:
        session.pop(ACCESS_TOKEN_KEY, None)
        session.pop(REFRESH_TOKEN_KEY, None)
    elif context.has_tokens:
        session[ACCESS_TOKEN_KEY] = context.access_token
        session[REFRESH_TOKEN_KEY] = context.refresh_token


class SupabaseSessionMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        client = SimpleLazyObject(backend.get_client)
        context = SessionContext(
            client,
            request.session.get(ACCESS_TOKEN_KEY),
            request.session.get(REFRESH_TOKEN_KEY),
        )
        unsubscribe = context.subscribe(
            lambda event, ctx: store_tokens(request.session, event, ctx)
        )
        request.supabase = client
        request.auth_context = context
        try:
            return self.get_response(request)
        finally:
            unsubscribe()
