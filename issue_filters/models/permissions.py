from enum import Enum
from typing import FrozenSet, Iterable, Optional


class GlobalPermission(str, Enum):
    """Catalog of global permission tokens returned by the permission lookup."""
    SYSTEM_ADMIN = "admin"
    QUALITY_PROFILE_ADMIN = "profileadmin"
    QUALITY_GATE_ADMIN = "gateadmin"
    DASHBOARD_SHARING = "shareDashboard"
    SCAN_EXECUTION = "scan"
    DRY_RUN_EXECUTION = "dryRunScan"
    PROVISIONING = "provisioning"


class UserRole(str, Enum):
    """Plain role tokens that may appear next to global permissions."""
    USER = "user"
    ADMIN = "admin"
    CODEVIEWER = "codeviewer"


class PermissionSet:
    """
    Set of global permission tokens held by one login.

    Membership is the only check; the two tokens relevant to filters are
    exposed as named predicates. Which token means "sharing" and which means
    "admin" is configurable so deployments can map their own catalog.
    """

    def __init__(
        self,
        tokens: Optional[Iterable[str]] = None,
        *,
        sharing_token: str = GlobalPermission.DASHBOARD_SHARING.value,
        admin_token: str = GlobalPermission.SYSTEM_ADMIN.value,
    ) -> None:
        self._tokens: FrozenSet[str] = frozenset(str(t) for t in (tokens or []))
        self._sharing_token = sharing_token
        self._admin_token = admin_token

    @property
    def tokens(self) -> FrozenSet[str]:
        return self._tokens

    def has(self, permission: str) -> bool:
        value = permission.value if isinstance(permission, Enum) else permission
        return value in self._tokens

    @property
    def has_sharing_permission(self) -> bool:
        return self.has(self._sharing_token)

    @property
    def has_admin_permission(self) -> bool:
        return self.has(self._admin_token)

    def __contains__(self, permission) -> bool:
        return self.has(permission)

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"PermissionSet({sorted(self._tokens)!r})"
