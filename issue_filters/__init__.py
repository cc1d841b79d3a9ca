"""
Saved issue filters: ownership, sharing and favourites of user-defined issue queries.
"""
from .core.errors import (
    ApplicationError,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from .core.session import ANONYMOUS, AnonymousSession, AuthenticatedSession, UserSession, session_for
from .models import FavouriteLink, FilterUpdate, IssueFilter, IssueQuery, IssueQueryResult
from .services.filters import DefaultIssueFilterSerializer, IssueFilterService

__version__ = "1.0.0"

__all__ = [
    "ApplicationError",
    "BadRequestError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "ANONYMOUS",
    "AnonymousSession",
    "AuthenticatedSession",
    "UserSession",
    "session_for",
    "FavouriteLink",
    "FilterUpdate",
    "IssueFilter",
    "IssueQuery",
    "IssueQueryResult",
    "DefaultIssueFilterSerializer",
    "IssueFilterService",
]
