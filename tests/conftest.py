"""
Shared pytest fixtures and configuration for the issue filter tests.

Collaborators are ``Mock(spec=...)`` objects with neutral defaults: no
filter found, no user filters, no shared filters, no favourites and no
global permissions. Tests override only what they need.
"""

import os
from typing import Dict, List
from unittest.mock import Mock

import pytest

# Set test environment variables before importing app modules
os.environ["AZURE_COSMOS_ENDPOINT"] = "https://test-cosmos.documents.azure.com:443/"
os.environ["AZURE_COSMOS_KEY"] = "test-cosmos-key"
os.environ["AZURE_COSMOS_DB"] = "test-database"

from issue_filters.core.config import AppConfig
from issue_filters.core.dependencies import CosmosService
from issue_filters.core.session import ANONYMOUS, AuthenticatedSession
from issue_filters.models.issue_filter import FavouriteLink, IssueFilter
from issue_filters.models.issue_query import IssueQueryResult
from issue_filters.services.filters.interfaces import (
    AuthorizationRepository,
    FavouriteRepository,
    IssueFilterRepository,
    IssueFilterSerializer,
    IssueFinder,
)
from issue_filters.services.filters.issue_filter_service import IssueFilterService


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config():
    """Provide test configuration."""
    return AppConfig(
        cosmos_endpoint="https://test-cosmos.documents.azure.com:443/",
        cosmos_key="test-cosmos-key",
        cosmos_database="test-database",
        cosmos_prefix="test_",
    )


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def john_session():
    """Logged-in session used by most tests."""
    return AuthenticatedSession(login="john", user_id=1)


@pytest.fixture
def anonymous_session():
    return ANONYMOUS


# ============================================================================
# Collaborator Fixtures
# ============================================================================

@pytest.fixture
def global_permissions() -> Dict[str, List[str]]:
    """Global permission tokens per login; mutate in tests to grant permissions."""
    return {}


@pytest.fixture
def filter_repository():
    repository = Mock(spec=IssueFilterRepository)
    repository.select_by_id.return_value = None
    repository.select_by_user.return_value = []
    repository.select_shared_filters.return_value = []
    repository.select_favourite_filters_by_user.return_value = []
    repository.insert.side_effect = lambda issue_filter: issue_filter.model_copy(update={"id": 100})
    return repository


@pytest.fixture
def favourite_repository():
    repository = Mock(spec=FavouriteRepository)
    repository.select_by_filter_id.return_value = []
    repository.insert.side_effect = lambda link: link.model_copy(update={"id": 200})
    return repository


@pytest.fixture
def authorization_repository(global_permissions):
    repository = Mock(spec=AuthorizationRepository)
    repository.select_global_permissions.side_effect = lambda login: list(global_permissions.get(login, []))
    return repository


@pytest.fixture
def serializer():
    return Mock(spec=IssueFilterSerializer)


@pytest.fixture
def issue_finder():
    finder = Mock(spec=IssueFinder)
    finder.find.side_effect = lambda query: IssueQueryResult(query=query)
    return finder


@pytest.fixture
def service(filter_repository, favourite_repository, issue_finder, authorization_repository, serializer):
    """IssueFilterService with mocked collaborators."""
    return IssueFilterService(
        filter_repository,
        favourite_repository,
        issue_finder,
        authorization_repository,
        serializer,
    )


# ============================================================================
# Data Factories
# ============================================================================

@pytest.fixture
def filter_factory():
    """Factory building IssueFilter snapshots."""
    def _create_filter(filter_id=1, name="My Issue", user="john", shared=False, description=None, data=None):
        return IssueFilter(
            id=filter_id,
            name=name,
            user=user,
            shared=shared,
            description=description,
            data=data,
        )
    return _create_filter


@pytest.fixture
def favourite_factory():
    def _create_favourite(link_id=10, user_login="john", issue_filter_id=1):
        return FavouriteLink(id=link_id, user_login=user_login, issue_filter_id=issue_filter_id)
    return _create_favourite


# ============================================================================
# Azure Cosmos DB Mocking Fixtures
# ============================================================================

@pytest.fixture
def mock_cosmos_container():
    """Mock Cosmos DB container with common operations"""
    container = Mock()

    container.query_items.return_value = []

    def create_item_side_effect(body):
        return {**body, "_rid": "test-rid", "_etag": "test-etag"}
    container.create_item.side_effect = create_item_side_effect

    def replace_item_side_effect(item, body, **kwargs):
        return {**body, "_rid": "test-rid", "_etag": "test-etag-2"}
    container.replace_item.side_effect = replace_item_side_effect

    container.delete_item.return_value = None

    return container


@pytest.fixture
def mock_counters_container():
    """Counter container starting every sequence at 41."""
    container = Mock()
    container.read_item.side_effect = lambda item, partition_key: {"id": item, "value": 41, "_etag": "etag-41"}
    container.replace_item.side_effect = lambda item, body, **kwargs: body
    return container


@pytest.fixture
def cosmos_service(test_config, mock_cosmos_container, mock_counters_container):
    """CosmosService whose containers are mocks; ``counters`` is a separate mock."""
    service = Mock(spec=CosmosService)
    service.config = test_config
    service.get_container.side_effect = lambda name: (
        mock_counters_container if name == "counters" else mock_cosmos_container
    )
    return service
