"""Use cases for administrator accounts."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .change_password import change_password
from .create_admin_user import create_admin_user
from .record_login import record_login, record_logout

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "change_password",
    "create_admin_user",
    "record_login",
    "record_logout",
]
