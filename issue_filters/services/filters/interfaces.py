# Abstract collaborators consumed by the issue filter service
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from ...models.issue_filter import FavouriteLink, IssueFilter
from ...models.issue_query import IssueQuery, IssueQueryResult


class IssueFilterRepository(ABC):
    """Persistence of filter records"""

    @abstractmethod
    def select_by_id(self, filter_id: int) -> Optional[IssueFilter]:
        """Get filter by id, None when absent"""
        pass

    @abstractmethod
    def select_by_user(self, login: str) -> List[IssueFilter]:
        """Get filters owned by login"""
        pass

    @abstractmethod
    def select_shared_filters(self) -> List[IssueFilter]:
        """Get all shared filters"""
        pass

    @abstractmethod
    def select_favourite_filters_by_user(self, login: str) -> List[IssueFilter]:
        """Get filters favorited by login"""
        pass

    @abstractmethod
    def insert(self, issue_filter: IssueFilter) -> IssueFilter:
        """Insert filter and return it with its assigned id"""
        pass

    @abstractmethod
    def update(self, issue_filter: IssueFilter) -> None:
        """Replace the stored filter having the same id"""
        pass

    @abstractmethod
    def delete(self, filter_id: int) -> None:
        """Delete filter"""
        pass


class FavouriteRepository(ABC):
    """Persistence of favorite links"""

    @abstractmethod
    def select_by_filter_id(self, filter_id: int) -> List[FavouriteLink]:
        """Get all favorite links referencing a filter"""
        pass

    @abstractmethod
    def insert(self, link: FavouriteLink) -> FavouriteLink:
        """Insert link and return it with its assigned id"""
        pass

    @abstractmethod
    def delete(self, link_id: int) -> None:
        """Delete one link"""
        pass

    @abstractmethod
    def delete_by_filter_id(self, filter_id: int) -> None:
        """Delete every link referencing a filter"""
        pass


class AuthorizationRepository(ABC):
    """Lookup of global permissions"""

    @abstractmethod
    def select_global_permissions(self, login: str) -> List[str]:
        """Get global permission tokens held by login"""
        pass


class IssueFilterSerializer(ABC):
    """Conversion between a query parameter mapping and its stored string form"""

    @abstractmethod
    def serialize(self, params: Mapping[str, Any]) -> str:
        pass

    @abstractmethod
    def deserialize(self, data: Optional[str]) -> Dict[str, Any]:
        pass


class IssueFinder(ABC):
    """Issue search engine"""

    @abstractmethod
    def find(self, query: IssueQuery) -> IssueQueryResult:
        pass
