"""
Dependency wiring for the issue filter service.
Builds Cosmos-backed collaborators from configuration.
"""
from typing import Dict, Optional
import logging

from azure.cosmos import CosmosClient, ContainerProxy
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential

from .config import AppConfig, get_config
from ..utils.logging_config import setup_application_logging
from .errors import (
    ContainerNotFoundError,
    DatabaseConnectionError,
    DatabaseError,
    DefaultErrorHandler,
    ErrorHandler,
)

logger = logging.getLogger(__name__)


def get_error_handler(component: str = "issue_filters") -> ErrorHandler:
    """Provide an error handler logging under ``<component>.errors``."""
    logger_name = f"{component}.errors"
    return DefaultErrorHandler(lambda: logging.getLogger(logger_name), base_context={"component": component})


# === Database Service ===
class CosmosService:
    """
    Lazily connected Cosmos DB client with cached container proxies.
    """

    def __init__(self, config: AppConfig):
        self.config = config
        self._client: Optional[CosmosClient] = None
        self._database = None
        self._containers: Dict[str, ContainerProxy] = {}

    def is_available(self) -> bool:
        """Cosmos is considered available once an endpoint is configured"""
        return bool(self.config.cosmos_endpoint)

    @property
    def client(self) -> CosmosClient:
        """Lazy-initialize Cosmos client"""
        if self._client is None:
            endpoint = self.config.cosmos_endpoint
            if not endpoint:
                raise DatabaseConnectionError(details={"reason": "AZURE_COSMOS_ENDPOINT is not configured"})

            if self.config.cosmos_key:
                logger.info("Using Cosmos key auth from configuration")
                self._client = CosmosClient(url=endpoint, credential=self.config.cosmos_key)
            else:
                # No key configured; managed identity / CLI based auth
                logger.info("No Cosmos key configured; using DefaultAzureCredential")
                try:
                    self._client = CosmosClient(url=endpoint, credential=DefaultAzureCredential())
                except CosmosHttpResponseError as ex:
                    logger.error(
                        "Failed to initialize Cosmos client with DefaultAzureCredential",
                        exc_info=True,
                        extra={"endpoint": endpoint, "status_code": ex.status_code},
                    )
                    raise DatabaseConnectionError(endpoint, details={"status_code": ex.status_code}) from ex
        return self._client

    @property
    def database(self):
        """Get database reference"""
        if self._database is None:
            db_name = self.config.cosmos_database
            try:
                self._database = self.client.get_database_client(db_name)
            except CosmosHttpResponseError as e:
                logger.error(
                    "Failed to get Cosmos database client",
                    exc_info=True,
                    extra={"database_name": db_name, "status_code": e.status_code},
                )
                raise DatabaseError(
                    f"Failed to get Cosmos database client for '{db_name}'",
                    details={"database": db_name, "status_code": e.status_code},
                ) from e
        return self._database

    def get_container(self, container_name: str) -> ContainerProxy:
        """Get container reference with caching"""
        if container_name not in self._containers:
            actual_name = self.config.cosmos_containers.get(container_name, container_name)
            try:
                self._containers[container_name] = self.database.get_container_client(actual_name)
            except CosmosResourceNotFoundError as e:
                logger.error(
                    "Cosmos container not found",
                    extra={"container_name": actual_name, "database": self.config.cosmos_database},
                )
                raise ContainerNotFoundError(actual_name, self.config.cosmos_database) from e
        return self._containers[container_name]


def build_issue_filter_service(
    issue_finder,
    config: Optional[AppConfig] = None,
    cosmos: Optional[CosmosService] = None,
    *,
    configure_logging: bool = False,
):
    """
    Assemble an ``IssueFilterService`` over the Cosmos repositories.

    The issue finder is supplied by the caller since issue search lives
    outside this package.
    """
    from ..services.filters import DefaultIssueFilterSerializer, IssueFilterService
    from ..storage.cosmos import (
        CosmosAuthorizationRepository,
        CosmosFavouriteRepository,
        CosmosIssueFilterRepository,
    )

    config = config or get_config()
    if configure_logging:
        setup_application_logging(config.log_level)
    cosmos = cosmos or CosmosService(config)
    error_handler = get_error_handler("issue_filters.storage")

    return IssueFilterService(
        CosmosIssueFilterRepository(cosmos, error_handler),
        CosmosFavouriteRepository(cosmos, error_handler),
        issue_finder,
        CosmosAuthorizationRepository(cosmos, error_handler),
        DefaultIssueFilterSerializer(),
        sharing_permission=config.sharing_permission,
        admin_permission=config.admin_permission,
    )
