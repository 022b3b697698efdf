"""Access control decorators."""
from functools import wraps

from flask import session
from flask_login import current_user

from bullionquote import login_manager
from bullionquote.errors import AuthorizationError

CUSTOMER_SESSION_KEY = 'authenticated_quote_id'


def staff_required(f):
    """Only staff (Basic auth or a staff session) may call the wrapped view."""
    @wraps(f)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        return f(*args, **kwargs)
    return wrapped


def customer_required(f):
    """The session must have logged in to the quote named by ``short_id``."""
    @wraps(f)
    def wrapped(short_id, *args, **kwargs):
        if session.get(CUSTOMER_SESSION_KEY) != short_id:
            raise AuthorizationError('no customer session for this quote')
        return f(short_id, *args, **kwargs)
    return wrapped
