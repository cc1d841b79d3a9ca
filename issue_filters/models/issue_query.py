from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field


class IssueQueryParams:
    """Parameter keys understood by the issue query model."""
    ISSUES = "issues"
    SEVERITIES = "severities"
    STATUSES = "statuses"
    RESOLUTIONS = "resolutions"
    RESOLVED = "resolved"
    COMPONENTS = "components"
    COMPONENT_ROOTS = "componentRoots"
    RULES = "rules"
    ACTION_PLANS = "actionPlans"
    REPORTERS = "reporters"
    ASSIGNEES = "assignees"
    ASSIGNED = "assigned"
    PLANNED = "planned"
    HIDE_RULES = "hideRules"
    CREATED_AT = "createdAt"
    CREATED_AFTER = "createdAfter"
    CREATED_BEFORE = "createdBefore"
    PAGE_SIZE = "pageSize"
    PAGE_INDEX = "pageIndex"
    SORT = "sort"
    ASC = "asc"

    ALL = (
        ISSUES, SEVERITIES, STATUSES, RESOLUTIONS, RESOLVED, COMPONENTS,
        COMPONENT_ROOTS, RULES, ACTION_PLANS, REPORTERS, ASSIGNEES, ASSIGNED,
        PLANNED, HIDE_RULES, CREATED_AT, CREATED_AFTER, CREATED_BEFORE,
        PAGE_SIZE, PAGE_INDEX, SORT, ASC,
    )


def recognized_parameters(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the keys the issue query model understands."""
    return {key: value for key, value in params.items() if key in IssueQueryParams.ALL}


class IssueQuery(BaseModel):
    """Query handed to the issue finder; its parameters already encode any scoping."""
    params: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "IssueQuery":
        return cls(params=recognized_parameters(params))


class IssueQueryResult(BaseModel):
    query: IssueQuery
    issues: List[Dict[str, Any]] = Field(default_factory=list)
    total: Optional[int] = None
