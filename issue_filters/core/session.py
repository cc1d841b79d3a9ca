"""
User session variants handed to the service by the calling layer.

A session is either anonymous or authenticated; only the authenticated
variant carries a login.
"""
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class AnonymousSession:
    """Session without a logged-in user."""

    @property
    def login(self) -> None:
        return None

    @property
    def user_id(self) -> None:
        return None

    @property
    def is_logged_in(self) -> bool:
        return False


@dataclass(frozen=True)
class AuthenticatedSession:
    """Session of a logged-in user."""
    login: str
    user_id: Optional[int] = None

    def __post_init__(self):
        if not self.login:
            raise ValueError("Authenticated session requires a non-empty login")

    @property
    def is_logged_in(self) -> bool:
        return True


UserSession = Union[AnonymousSession, AuthenticatedSession]

ANONYMOUS = AnonymousSession()


def session_for(login: Optional[str], user_id: Optional[int] = None) -> UserSession:
    """Build the session variant matching ``login`` (empty or missing means anonymous)."""
    if not login:
        return ANONYMOUS
    return AuthenticatedSession(login=login, user_id=user_id)
