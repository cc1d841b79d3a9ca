from .domain import (
    ApplicationError,
    BadRequestError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    ResourceNotFoundError,
    UnauthorizedError,
)
from .handler import ErrorHandler, DefaultErrorHandler

# Database exceptions
from .database import (
    DatabaseError,
    ConnectionError as DatabaseConnectionError,
    QueryError,
    DocumentNotFoundError,
    ConflictError,
    ContainerNotFoundError,
)

__all__ = [
    # Core errors
    "ApplicationError",
    "BadRequestError",
    "DefaultErrorHandler",
    "ErrorCode",
    "ErrorHandler",
    "ForbiddenError",
    "NotFoundError",
    "ResourceNotFoundError",
    "UnauthorizedError",
    # Database errors
    "DatabaseError",
    "DatabaseConnectionError",
    "QueryError",
    "DocumentNotFoundError",
    "ConflictError",
    "ContainerNotFoundError",
]
