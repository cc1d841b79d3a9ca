from .issue_filter import IssueFilter, FilterUpdate, FavouriteLink
from .issue_query import IssueQuery, IssueQueryParams, IssueQueryResult, recognized_parameters
from .permissions import GlobalPermission, PermissionSet, UserRole

__all__ = [
    "IssueFilter",
    "FilterUpdate",
    "FavouriteLink",
    "IssueQuery",
    "IssueQueryParams",
    "IssueQueryResult",
    "recognized_parameters",
    "GlobalPermission",
    "PermissionSet",
    "UserRole",
]
