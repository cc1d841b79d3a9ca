"""
Errors raised by the Cosmos storage adapters in ``issue_filters.storage``.
"""
from typing import Optional, Dict, Any
from .domain import ApplicationError, ErrorCode


class DatabaseError(ApplicationError):
    """Cosmos failure with no more specific translation."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code, status_code, details)


class ConnectionError(DatabaseError):
    """No usable Cosmos client: missing endpoint or failed credential setup."""

    def __init__(self, endpoint: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        message = f"Cannot connect to Cosmos DB at {endpoint}" if endpoint else "Cannot connect to Cosmos DB"
        context: Dict[str, Any] = {"endpoint": endpoint} if endpoint else {}
        context.update(details or {})
        super().__init__(message, ErrorCode.SERVICE_UNAVAILABLE, 503, context)


class QueryError(DatabaseError):
    def __init__(
        self,
        query: Optional[str] = None,
        container: Optional[str] = None,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        context: Dict[str, Any] = {}
        if query:
            context["query"] = query if len(query) <= 200 else query[:200] + "..."
        if container:
            context["container"] = container
        context.update(details or {})
        message = f"Database query failed: {reason}" if reason else "Database query failed"
        super().__init__(message, ErrorCode.EXTERNAL_SERVICE_ERROR, 500, context)


class DocumentNotFoundError(DatabaseError):
    """Replace or delete targeted a filter or favourite document that is gone."""

    def __init__(
        self,
        document_id: str,
        container: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        message = f"Document '{document_id}' not found"
        if container:
            message += f" in container '{container}'"
        context: Dict[str, Any] = {"document_id": document_id, "container": container}
        context.update(details or {})
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, 404, context)


class ConflictError(DatabaseError):
    """Id already taken, or the id counter kept changing under us."""

    def __init__(self, reason: str, document_id: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        context: Dict[str, Any] = {"document_id": document_id} if document_id else {}
        context.update(details or {})
        super().__init__(f"Database conflict: {reason}", ErrorCode.RESOURCE_CONFLICT, 409, context)


class ContainerNotFoundError(DatabaseError):
    def __init__(
        self,
        container_name: str,
        database: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        message = f"Container '{container_name}' not found"
        if database:
            message += f" in database '{database}'"
        context: Dict[str, Any] = {"container_name": container_name, "database": database}
        context.update(details or {})
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, 404, context)


__all__ = [
    "DatabaseError",
    "ConnectionError",
    "QueryError",
    "DocumentNotFoundError",
    "ConflictError",
    "ContainerNotFoundError",
]
