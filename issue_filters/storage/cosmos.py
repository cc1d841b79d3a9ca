"""
Cosmos DB implementations of the filter, favourite and permission repositories.

Documents use their string id as partition key. Integer ids are allocated
from one counter document per container, updated with an ETag condition.
"""
from typing import Any, Dict, List, Optional
import logging

from azure.core import MatchConditions
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from ..core.dependencies import CosmosService, get_error_handler
from ..core.errors import ConflictError, DatabaseError, DocumentNotFoundError, ErrorCode, ErrorHandler, QueryError
from ..models.issue_filter import FavouriteLink, IssueFilter
from ..services.filters.interfaces import (
    AuthorizationRepository,
    FavouriteRepository,
    IssueFilterRepository,
)

logger = logging.getLogger(__name__)

MAX_ID_ALLOCATION_ATTEMPTS = 5


class CosmosIdAllocator:
    """Hands out increasing integer ids for one sequence name."""

    def __init__(self, cosmos: CosmosService, sequence: str):
        self.cosmos = cosmos
        self.sequence = sequence

    def next_id(self) -> int:
        container = self.cosmos.get_container("counters")
        for _ in range(MAX_ID_ALLOCATION_ATTEMPTS):
            try:
                counter = container.read_item(item=self.sequence, partition_key=self.sequence)
            except CosmosResourceNotFoundError:
                try:
                    container.create_item(body={"id": self.sequence, "value": 1})
                    return 1
                except CosmosResourceExistsError:
                    continue

            next_value = int(counter.get("value", 0)) + 1
            try:
                container.replace_item(
                    item=self.sequence,
                    body={"id": self.sequence, "value": next_value},
                    etag=counter.get("_etag"),
                    match_condition=MatchConditions.IfNotModified,
                )
                return next_value
            except CosmosAccessConditionFailedError:
                logger.debug(f"Counter {self.sequence} changed concurrently, retrying")
                continue

        raise ConflictError(f"could not allocate an id for '{self.sequence}'", document_id=self.sequence)


class _CosmosRepository:
    container_name = ""

    def __init__(self, cosmos: CosmosService, error_handler: Optional[ErrorHandler] = None):
        self.cosmos = cosmos
        self.errors = error_handler or get_error_handler("issue_filters.storage")

    @property
    def container(self):
        return self.cosmos.get_container(self.container_name)

    def _query(self, query: str, parameters: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        try:
            return list(self.container.query_items(
                query=query,
                parameters=parameters,
                enable_cross_partition_query=True,
            ))
        except CosmosHttpResponseError as e:
            logger.error(
                "Cosmos query failed",
                exc_info=True,
                extra={"container": self.container_name, "status_code": e.status_code},
            )
            raise QueryError(
                query, self.container_name, reason=f"status {e.status_code}", details={"status_code": e.status_code}
            ) from e

    def _fail(self, action: str, exc: CosmosHttpResponseError, extra: Optional[Dict[str, Any]] = None):
        context = {"container": self.container_name, "status_code": exc.status_code}
        context.update(extra or {})
        self.errors.raise_internal(
            action,
            exc,
            error_code=ErrorCode.EXTERNAL_SERVICE_ERROR,
            error_class=DatabaseError,
            extra=context,
        )


class CosmosIssueFilterRepository(_CosmosRepository, IssueFilterRepository):
    container_name = "issue_filters"

    def __init__(self, cosmos: CosmosService, error_handler: Optional[ErrorHandler] = None):
        super().__init__(cosmos, error_handler)
        self.ids = CosmosIdAllocator(cosmos, self.container_name)

    @staticmethod
    def to_document(issue_filter: IssueFilter) -> Dict[str, Any]:
        return {
            "id": str(issue_filter.id),
            "type": "issue_filter",
            "filter_id": issue_filter.id,
            "name": issue_filter.name,
            "description": issue_filter.description,
            "user_login": issue_filter.user,
            "shared": issue_filter.shared,
            "data": issue_filter.data,
        }

    @staticmethod
    def from_document(doc: Dict[str, Any]) -> IssueFilter:
        return IssueFilter(
            id=doc["filter_id"],
            name=doc.get("name"),
            description=doc.get("description"),
            user=doc.get("user_login"),
            shared=bool(doc.get("shared", False)),
            data=doc.get("data"),
        )

    def select_by_id(self, filter_id: int) -> Optional[IssueFilter]:
        try:
            doc = self.container.read_item(item=str(filter_id), partition_key=str(filter_id))
        except CosmosResourceNotFoundError:
            return None
        except CosmosHttpResponseError as e:
            self._fail("read issue filter", e, {"filter_id": filter_id})
        return self.from_document(doc)

    def select_by_user(self, login: str) -> List[IssueFilter]:
        docs = self._query(
            "SELECT * FROM c WHERE c.type = 'issue_filter' AND c.user_login = @login",
            [{"name": "@login", "value": login}],
        )
        return [self.from_document(d) for d in docs]

    def select_shared_filters(self) -> List[IssueFilter]:
        docs = self._query(
            "SELECT * FROM c WHERE c.type = 'issue_filter' AND c.shared = true",
            [],
        )
        return [self.from_document(d) for d in docs]

    def select_favourite_filters_by_user(self, login: str) -> List[IssueFilter]:
        favourites = self.cosmos.get_container(CosmosFavouriteRepository.container_name)
        query = "SELECT VALUE c.issue_filter_id FROM c WHERE c.type = 'issue_filter_favourite' AND c.user_login = @login"
        try:
            filter_ids = list(favourites.query_items(
                query=query,
                parameters=[{"name": "@login", "value": login}],
                enable_cross_partition_query=True,
            ))
        except CosmosHttpResponseError as e:
            self._fail("query favourite filter ids", e, {"login": login})
        if not filter_ids:
            return []

        docs = self._query(
            "SELECT * FROM c WHERE c.type = 'issue_filter' AND ARRAY_CONTAINS(@ids, c.filter_id)",
            [{"name": "@ids", "value": filter_ids}],
        )
        return [self.from_document(d) for d in docs]

    def insert(self, issue_filter: IssueFilter) -> IssueFilter:
        saved = issue_filter.model_copy(update={"id": self.ids.next_id()})
        try:
            self.container.create_item(body=self.to_document(saved))
        except CosmosResourceExistsError as e:
            raise ConflictError("issue filter id already used", document_id=str(saved.id)) from e
        except CosmosHttpResponseError as e:
            self._fail("insert issue filter", e, {"filter_id": saved.id})
        return saved

    def update(self, issue_filter: IssueFilter) -> None:
        try:
            self.container.replace_item(item=str(issue_filter.id), body=self.to_document(issue_filter))
        except CosmosResourceNotFoundError as e:
            raise DocumentNotFoundError(str(issue_filter.id), self.container_name) from e
        except CosmosHttpResponseError as e:
            self._fail("update issue filter", e, {"filter_id": issue_filter.id})

    def delete(self, filter_id: int) -> None:
        try:
            self.container.delete_item(item=str(filter_id), partition_key=str(filter_id))
        except CosmosResourceNotFoundError as e:
            raise DocumentNotFoundError(str(filter_id), self.container_name) from e
        except CosmosHttpResponseError as e:
            self._fail("delete issue filter", e, {"filter_id": filter_id})


class CosmosFavouriteRepository(_CosmosRepository, FavouriteRepository):
    container_name = "issue_filter_favourites"

    def __init__(self, cosmos: CosmosService, error_handler: Optional[ErrorHandler] = None):
        super().__init__(cosmos, error_handler)
        self.ids = CosmosIdAllocator(cosmos, self.container_name)

    @staticmethod
    def to_document(link: FavouriteLink) -> Dict[str, Any]:
        return {
            "id": str(link.id),
            "type": "issue_filter_favourite",
            "link_id": link.id,
            "user_login": link.user_login,
            "issue_filter_id": link.issue_filter_id,
        }

    @staticmethod
    def from_document(doc: Dict[str, Any]) -> FavouriteLink:
        return FavouriteLink(
            id=doc["link_id"],
            user_login=doc["user_login"],
            issue_filter_id=doc["issue_filter_id"],
        )

    def select_by_filter_id(self, filter_id: int) -> List[FavouriteLink]:
        docs = self._query(
            "SELECT * FROM c WHERE c.type = 'issue_filter_favourite' AND c.issue_filter_id = @filter_id",
            [{"name": "@filter_id", "value": filter_id}],
        )
        return [self.from_document(d) for d in docs]

    def insert(self, link: FavouriteLink) -> FavouriteLink:
        saved = link.model_copy(update={"id": self.ids.next_id()})
        try:
            self.container.create_item(body=self.to_document(saved))
        except CosmosHttpResponseError as e:
            self._fail("insert favourite", e, {"filter_id": link.issue_filter_id, "login": link.user_login})
        return saved

    def delete(self, link_id: int) -> None:
        try:
            self.container.delete_item(item=str(link_id), partition_key=str(link_id))
        except CosmosResourceNotFoundError as e:
            raise DocumentNotFoundError(str(link_id), self.container_name) from e
        except CosmosHttpResponseError as e:
            self._fail("delete favourite", e, {"link_id": link_id})

    def delete_by_filter_id(self, filter_id: int) -> None:
        links = self.select_by_filter_id(filter_id)
        for link in links:
            try:
                self.container.delete_item(item=str(link.id), partition_key=str(link.id))
            except CosmosResourceNotFoundError:
                # Already gone
                continue
            except CosmosHttpResponseError as e:
                self._fail("delete favourites of filter", e, {"filter_id": filter_id, "link_id": link.id})
        logger.debug(f"Deleted {len(links)} favourites of issue filter {filter_id}")


class CosmosAuthorizationRepository(_CosmosRepository, AuthorizationRepository):
    container_name = "auth"

    def select_global_permissions(self, login: str) -> List[str]:
        rows = self._query(
            "SELECT VALUE c.global_permissions FROM c WHERE c.type = 'user' AND c.login = @login",
            [{"name": "@login", "value": login}],
        )
        permissions: List[str] = []
        for row in rows:
            permissions.extend(str(p) for p in (row or []))
        return permissions
