"""
Session context for the signed-in account.

Holds the backend bearer token and the account profile, nothing else. Views
receive a SessionContext instead of reading session storage directly, and
bookings are never remembered here: whether a traveler may review a package
is always the backend's decision.
"""
from typing import MutableMapping, Optional, Any

from flask import session as flask_session

from tourmarket.models import PayloadError, UserProfile, UserRole

TOKEN_KEY = 'token'
USER_KEY = 'user'


class SessionContext:
    """Read/write access to the current account's session state"""

    def __init__(self, store: MutableMapping[str, Any]):
        self._store = store

    @property
    def token(self) -> Optional[str]:
        return self._store.get(TOKEN_KEY)

    @property
    def user(self) -> Optional[UserProfile]:
        data = self._store.get(USER_KEY)
        if not data:
            return None
        try:
            return UserProfile.from_dict(data, role=UserRole(data.get('role', UserRole.USER.value)))
        except (PayloadError, ValueError):
            # unreadable profile: treat the session as signed out
            self.sign_out()
            return None

    @property
    def role(self) -> Optional[UserRole]:
        user = self.user
        return user.role if user else None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == UserRole.ADMIN

    @property
    def is_agency(self) -> bool:
        return self.is_authenticated and self.role == UserRole.AGENCY

    def sign_in(self, token: str, user: UserProfile) -> None:
        if not token:
            raise ValueError("A token is required to sign in")
        self._store[TOKEN_KEY] = token
        self._store[USER_KEY] = user.to_dict()

    def sign_out(self) -> None:
        self._store.pop(TOKEN_KEY, None)
        self._store.pop(USER_KEY, None)

    def to_dict(self) -> dict:
        user = self.user
        return {
            'isAuthenticated': self.is_authenticated,
            'role': user.role.value if user else None,
            'user': user.to_dict() if user else None
        }


def current_session() -> SessionContext:
    """Session context bound to the Flask session of the current request"""
    return SessionContext(flask_session)
