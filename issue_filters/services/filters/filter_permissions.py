"""
Permission rules for saved issue filters.

Each rule is a plain predicate over filter snapshots, the acting login and
that login's ``PermissionSet``; the service decides which error to raise.
"""
from enum import Enum
from typing import Iterable, List, Optional

from ...models.issue_filter import FavouriteLink, IssueFilter
from ...models.permissions import PermissionSet


def can_read_filter(issue_filter: IssueFilter, login: str) -> bool:
    """Shared filters are readable by anyone logged in, private ones only by their owner."""
    return issue_filter.shared or issue_filter.is_owned_by(login)


def can_modify_filter(issue_filter: IssueFilter, login: str, permissions: PermissionSet) -> bool:
    """Owner always; administrators only on shared filters."""
    if issue_filter.is_owned_by(login):
        return True
    return issue_filter.shared and permissions.has_admin_permission


def can_change_sharing(existing: IssueFilter, resulting: IssueFilter, login: str) -> bool:
    # Administrators are not exempt: only the current owner flips the flag
    if existing.shared == resulting.shared:
        return True
    return existing.is_owned_by(login)


def can_change_owner(existing: IssueFilter, resulting: IssueFilter, permissions: PermissionSet) -> bool:
    if existing.user == resulting.user:
        return True
    return permissions.has_admin_permission


def can_own_filter(issue_filter: IssueFilter, owner_permissions: PermissionSet) -> bool:
    """The owner of a shared filter must hold the sharing permission."""
    return not issue_filter.shared or owner_permissions.has_sharing_permission


class SharingTransition(str, Enum):
    """Change of the shared flag between the stored and the resulting filter."""
    STAYS_PRIVATE = "stays_private"
    BECOMES_SHARED = "becomes_shared"
    STAYS_SHARED = "stays_shared"
    BECOMES_PRIVATE = "becomes_private"

    @classmethod
    def between(cls, existing: IssueFilter, resulting: IssueFilter) -> "SharingTransition":
        return _TRANSITIONS[(existing.shared, resulting.shared)]

    @property
    def removes_other_favourites(self) -> bool:
        return self is SharingTransition.BECOMES_PRIVATE

    def favourites_to_remove(self, links: Iterable[FavouriteLink], owner: Optional[str]) -> List[FavouriteLink]:
        """Links that no longer make sense once the transition is applied."""
        if not self.removes_other_favourites:
            return []
        return [link for link in links if link.user_login != owner]


_TRANSITIONS = {
    (False, False): SharingTransition.STAYS_PRIVATE,
    (False, True): SharingTransition.BECOMES_SHARED,
    (True, True): SharingTransition.STAYS_SHARED,
    (True, False): SharingTransition.BECOMES_PRIVATE,
}
