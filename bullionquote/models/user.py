"""Staff identity backed by static credentials."""
import hmac

from flask import current_app
from flask_login import UserMixin


class StaffUser(UserMixin):
    """The single staff account configured through ADMIN_USERNAME/ADMIN_PASSWORD.

    Credentials are not stored in the database; this object only exists so
    Flask-Login can tell staff requests apart from customer ones.
    """

    def __init__(self, username):
        self.id = username
        self.username = username

    @staticmethod
    def get(user_id):
        if user_id and _safe_equals(user_id, current_app.config['ADMIN_USERNAME']):
            return StaffUser(current_app.config['ADMIN_USERNAME'])
        return None

    @staticmethod
    def authenticate(username, password):
        cfg = current_app.config
        user_ok = _safe_equals(username or '', cfg['ADMIN_USERNAME'])
        password_ok = _safe_equals(password or '', cfg['ADMIN_PASSWORD'])
        if user_ok and password_ok:
            return StaffUser(cfg['ADMIN_USERNAME'])
        return None

    def __repr__(self):
        return f'<StaffUser {self.username}>'


def _safe_equals(a, b):
    return hmac.compare_digest(str(a).encode('utf-8'), str(b).encode('utf-8'))
