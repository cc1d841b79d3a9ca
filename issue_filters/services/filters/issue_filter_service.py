from typing import Any, Dict, List, Mapping, Optional
import logging

from ...core.errors import BadRequestError, ForbiddenError, NotFoundError, UnauthorizedError
from ...core.session import UserSession
from ...models.issue_filter import FavouriteLink, FilterUpdate, IssueFilter
from ...models.issue_query import IssueQuery, IssueQueryResult, recognized_parameters
from ...models.permissions import GlobalPermission, PermissionSet
from .filter_permissions import (
    SharingTransition,
    can_change_owner,
    can_change_sharing,
    can_modify_filter,
    can_own_filter,
    can_read_filter,
)
from .interfaces import (
    AuthorizationRepository,
    FavouriteRepository,
    IssueFilterRepository,
    IssueFilterSerializer,
    IssueFinder,
)

logger = logging.getLogger(__name__)

NOT_LOGGED_IN = "User is not logged in"
NOT_AUTHORIZED_TO_READ = "User is not authorized to read this filter"
NOT_AUTHORIZED_TO_MODIFY = "User is not authorized to modify this filter"
NOT_AUTHORIZED_TO_CHANGE_OWNER = "User is not authorized to change the owner of this filter"
ONLY_OWNER_CAN_CHANGE_SHARING = "Only owner of a filter can change sharing"
INSUFFICIENT_RIGHTS_TO_OWN = "User cannot own this filter because of insufficient rights"
NAME_ALREADY_EXISTS = "Name already exists"
OWNER_REQUIRED = "Owner login must not be blank"
SHARED_NAME_ALREADY_EXISTS = "Other users already share filters with the same name"


class IssueFilterService:
    """
    Saved issue filters: ownership, sharing, favourites and query execution.

    Every operation acting for a user resolves the session first and fails
    with ``UnauthorizedError`` before touching any repository. Permission
    checks always run before the first write.
    """

    def __init__(
        self,
        filter_repository: IssueFilterRepository,
        favourite_repository: FavouriteRepository,
        issue_finder: IssueFinder,
        authorization_repository: AuthorizationRepository,
        serializer: IssueFilterSerializer,
        *,
        sharing_permission: str = GlobalPermission.DASHBOARD_SHARING.value,
        admin_permission: str = GlobalPermission.SYSTEM_ADMIN.value,
    ):
        self.filters = filter_repository
        self.favourites = favourite_repository
        self.issue_finder = issue_finder
        self.authorization = authorization_repository
        self.serializer = serializer
        self._sharing_permission = sharing_permission
        self._admin_permission = admin_permission

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_id(self, filter_id: int) -> Optional[IssueFilter]:
        """Load a filter without any authorization check."""
        return self.filters.select_by_id(filter_id)

    def find(self, filter_id: int, session: UserSession) -> IssueFilter:
        login = self._logged_login(session)
        issue_filter = self._find_issue_filter(filter_id)
        self._verify_can_read(issue_filter, login)
        return issue_filter

    def find_by_user(self, session: UserSession) -> List[IssueFilter]:
        login = self._logged_login(session)
        return self.filters.select_by_user(login)

    def find_shared_filters_without_user_filters(self, session: UserSession) -> List[IssueFilter]:
        login = self._logged_login(session)
        return [f for f in self.filters.select_shared_filters() if not f.is_owned_by(login)]

    def find_favourite_filters(self, session: UserSession) -> List[IssueFilter]:
        login = self._logged_login(session)
        return self.filters.select_favourite_filters_by_user(login)

    def execute(self, query: IssueQuery) -> IssueQueryResult:
        return self.issue_finder.find(query)

    def can_share_filter(self, session: UserSession) -> bool:
        if not session.is_logged_in:
            return False
        return self._permissions(session.login).has_sharing_permission

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def save(self, issue_filter: IssueFilter, session: UserSession) -> IssueFilter:
        login = self._logged_login(session)
        to_save = issue_filter.model_copy(update={"id": None, "user": login})
        self._validate_filter(to_save)
        return self._insert_issue_filter(to_save, login)

    def update(self, filter_update: FilterUpdate, session: UserSession) -> IssueFilter:
        login = self._logged_login(session)
        existing = self._find_issue_filter(filter_update.id)
        resulting = filter_update.apply_to(existing)

        self._verify_can_modify(existing, login)
        if not can_change_sharing(existing, resulting, login):
            self._deny(ONLY_OWNER_CAN_CHANGE_SHARING, existing, login)
        if resulting.user != existing.user and not can_change_owner(existing, resulting, self._permissions(login)):
            self._deny(NOT_AUTHORIZED_TO_CHANGE_OWNER, existing, login)
        self._validate_filter(resulting)

        self._remove_favourites_for_transition(existing, resulting)
        self.filters.update(resulting)
        logger.info(f"Issue filter {resulting.id} updated by {login}")
        return resulting

    def update_filter_query(self, filter_id: int, filter_query: Mapping[str, Any], session: UserSession) -> IssueFilter:
        login = self._logged_login(session)
        existing = self._find_issue_filter(filter_id)
        self._verify_can_modify(existing, login)

        resulting = existing.model_copy(update={"data": self.serialize_filter_query(filter_query)})
        self.filters.update(resulting)
        logger.info(f"Query of issue filter {filter_id} updated by {login}")
        return resulting

    def delete(self, filter_id: int, session: UserSession) -> None:
        login = self._logged_login(session)
        issue_filter = self._find_issue_filter(filter_id)
        # Deleting someone else's private filter is reported as a read denial
        self._verify_can_read(issue_filter, login)
        self._verify_can_modify(issue_filter, login)

        self.favourites.delete_by_filter_id(filter_id)
        self.filters.delete(filter_id)
        logger.info(f"Issue filter {filter_id} deleted by {login}")

    def copy(self, filter_id_to_copy: int, issue_filter: IssueFilter, session: UserSession) -> IssueFilter:
        login = self._logged_login(session)
        source = self.find(filter_id_to_copy, session)

        description = issue_filter.description if issue_filter.description is not None else source.description
        to_save = IssueFilter(
            name=issue_filter.name,
            description=description,
            user=login,
            shared=False,
            data=source.data,
        )
        self._validate_filter(to_save)
        return self._insert_issue_filter(to_save, login)

    def toggle_favourite_issue_filter(self, filter_id: int, session: UserSession) -> bool:
        """Star or unstar a filter for the session's login; returns the new state."""
        login = self._logged_login(session)
        self._find_issue_filter(filter_id)

        existing_link = self._find_favourite(filter_id, login)
        if existing_link is None:
            self._add_favourite(filter_id, login)
            return True

        self.favourites.delete(existing_link.id)
        logger.info(f"Issue filter {filter_id} removed from favourites of {login}")
        return False

    # ------------------------------------------------------------------
    # Query serialization
    # ------------------------------------------------------------------

    def serialize_filter_query(self, filter_query: Mapping[str, Any]) -> str:
        """Serialize the recognized query parameters; unknown keys are dropped."""
        return self.serializer.serialize(recognized_parameters(filter_query))

    def deserialize_issue_filter_query(self, issue_filter: IssueFilter) -> Dict[str, Any]:
        return self.serializer.deserialize(issue_filter.data)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _logged_login(self, session: UserSession) -> str:
        if not session.is_logged_in:
            raise UnauthorizedError(NOT_LOGGED_IN)
        return session.login

    def _permissions(self, login: Optional[str]) -> PermissionSet:
        tokens = self.authorization.select_global_permissions(login) if login else []
        return PermissionSet(
            tokens,
            sharing_token=self._sharing_permission,
            admin_token=self._admin_permission,
        )

    def _find_issue_filter(self, filter_id: int) -> IssueFilter:
        issue_filter = self.filters.select_by_id(filter_id)
        if issue_filter is None:
            raise NotFoundError(f"Filter not found: {filter_id}", details={"filter_id": filter_id})
        return issue_filter

    def _verify_can_read(self, issue_filter: IssueFilter, login: str) -> None:
        if not can_read_filter(issue_filter, login):
            self._deny(NOT_AUTHORIZED_TO_READ, issue_filter, login)

    def _verify_can_modify(self, issue_filter: IssueFilter, login: str) -> None:
        if issue_filter.is_owned_by(login):
            return
        if not can_modify_filter(issue_filter, login, self._permissions(login)):
            self._deny(NOT_AUTHORIZED_TO_MODIFY, issue_filter, login)

    def _deny(self, message: str, issue_filter: IssueFilter, login: str) -> None:
        logger.info(f"Denied access to issue filter {issue_filter.id} for {login}: {message}")
        raise ForbiddenError(message, details={"filter_id": issue_filter.id, "login": login})

    def _validate_filter(self, issue_filter: IssueFilter) -> None:
        """Enforce name uniqueness and the owner's right to hold a shared filter."""
        if not issue_filter.user or not issue_filter.user.strip():
            raise BadRequestError(OWNER_REQUIRED, field="user")

        user_filter_same_name = self._find_filter_with_same_name(
            self.filters.select_by_user(issue_filter.user), issue_filter
        )
        if user_filter_same_name is not None:
            raise BadRequestError(NAME_ALREADY_EXISTS, field="name")

        if issue_filter.shared:
            shared_filter_same_name = self._find_filter_with_same_name(
                self.filters.select_shared_filters(), issue_filter
            )
            if shared_filter_same_name is not None:
                raise BadRequestError(SHARED_NAME_ALREADY_EXISTS, field="name")
            if not can_own_filter(issue_filter, self._permissions(issue_filter.user)):
                self._deny(INSUFFICIENT_RIGHTS_TO_OWN, issue_filter, issue_filter.user)

    @staticmethod
    def _find_filter_with_same_name(candidates: List[IssueFilter], issue_filter: IssueFilter) -> Optional[IssueFilter]:
        return next(
            (
                candidate for candidate in candidates
                if candidate.name == issue_filter.name
                and (issue_filter.id is None or candidate.id != issue_filter.id)
            ),
            None,
        )

    def _insert_issue_filter(self, issue_filter: IssueFilter, login: str) -> IssueFilter:
        saved = self.filters.insert(issue_filter)
        logger.info(f"Issue filter {saved.id} '{saved.name}' created by {login}")
        self._add_favourite(saved.id, login)
        return saved

    def _find_favourite(self, filter_id: int, login: str) -> Optional[FavouriteLink]:
        return next(
            (link for link in self.favourites.select_by_filter_id(filter_id) if link.user_login == login),
            None,
        )

    def _add_favourite(self, filter_id: int, login: str) -> None:
        self.favourites.insert(FavouriteLink(user_login=login, issue_filter_id=filter_id))
        logger.info(f"Issue filter {filter_id} added to favourites of {login}")

    def _remove_favourites_for_transition(self, existing: IssueFilter, resulting: IssueFilter) -> None:
        transition = SharingTransition.between(existing, resulting)
        if not transition.removes_other_favourites:
            return
        stale = transition.favourites_to_remove(self.favourites.select_by_filter_id(existing.id), resulting.user)
        for link in stale:
            self.favourites.delete(link.id)
        logger.info(f"Issue filter {existing.id} became private, removed {len(stale)} favourites of other users")
