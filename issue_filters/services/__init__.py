"""
Top-level services package.

Structure:
- issue_filters.services.filters (saved filter service, permission rules, serializer)
"""

from .filters import IssueFilterService, DefaultIssueFilterSerializer

__all__ = [
    "IssueFilterService",
    "DefaultIssueFilterSerializer",
]
