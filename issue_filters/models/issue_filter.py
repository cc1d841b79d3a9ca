from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class IssueFilter(BaseModel):
    """Saved issue query. Snapshots are immutable; use ``model_copy(update=...)``."""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    user: Optional[str] = None
    shared: bool = False
    data: Optional[str] = None

    def is_owned_by(self, login: Optional[str]) -> bool:
        return login is not None and self.user == login


class FilterUpdate(BaseModel):
    """Requested changes to an existing filter. Fields left as None keep their current value."""
    model_config = ConfigDict(frozen=True)

    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    user: Optional[str] = None
    shared: Optional[bool] = None
    data: Optional[str] = None

    def apply_to(self, existing: IssueFilter) -> IssueFilter:
        changes: Dict[str, Any] = self.model_dump(exclude={"id"}, exclude_none=True)
        return existing.model_copy(update=changes)


class FavouriteLink(BaseModel):
    """Marks that ``user_login`` starred the filter ``issue_filter_id``."""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    user_login: str
    issue_filter_id: int
