from .issue_filter_service import IssueFilterService
from .filter_permissions import (
    SharingTransition,
    can_change_owner,
    can_change_sharing,
    can_modify_filter,
    can_own_filter,
    can_read_filter,
)
from .serializer import DefaultIssueFilterSerializer

__all__ = [
    "IssueFilterService",
    "SharingTransition",
    "can_change_owner",
    "can_change_sharing",
    "can_modify_filter",
    "can_own_filter",
    "can_read_filter",
    "DefaultIssueFilterSerializer",
]
