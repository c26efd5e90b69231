from functools import wraps

from django.http import HttpResponseRedirect
from django.shortcuts import redirect

from .auth import SIGNED_OUT

CHECKING = 'checking'
AUTHORIZED = 'authorized'
REDIRECTING = 'redirecting'


class AdminGuard:
    """CHECKING -> AUTHORIZED | REDIRECTING for one admin view call.

    Not signed in goes to the login page, signed in but not on the allow-list
    goes home.  Neither case says why.
    """

    def __init__(self, context):
        self.context = context
        self.state = CHECKING
        self.redirect_to = None

    def check(self):
        if not self.context.is_authenticated:
            return self._redirect('login')
        if not self.context.is_admin():
            return self._redirect('home')
        self.state = AUTHORIZED
        return self.state

    def _redirect(self, url_name):
        self.state = REDIRECTING
        self.redirect_to = url_name
        return self.state

    def on_auth_event(self, event, context):
        if event == SIGNED_OUT and self.state == AUTHORIZED:
            self._redirect('login')


def admin_required(view_func):
    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        guard = AdminGuard(request.auth_context)
        if guard.check() == REDIRECTING:
            return redirect(guard.redirect_to)

        unsubscribe = request.auth_context.subscribe(guard.on_auth_event)
        try:
            response = view_func(request, *args, **kwargs)
        finally:
            unsubscribe()

        if guard.state == REDIRECTING and not isinstance(response, HttpResponseRedirect):
            return redirect(guard.redirect_to)
        return response
    return wrapped_view
