import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, NoReturn, Optional, Type

from .domain import ApplicationError, ErrorCode


LoggerFactory = Callable[[], logging.Logger]


class ErrorHandler(ABC):
    """Abstraction for logging and surfacing unexpected storage failures."""

    @abstractmethod
    def raise_internal(
        self,
        action: str,
        exc: Exception,
        *,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        error_class: Type[ApplicationError] = ApplicationError,
        extra: Optional[Dict[str, Any]] = None,
    ) -> NoReturn:
        """Log an unexpected failure and raise an ``ApplicationError``.

        Args:
            action: Human readable description of the attempted action.
            exc: The original exception.
            message: Optional override for the surfaced message.
            error_code: High level error classification.
            status_code: Status code to surface.
            error_class: ``ApplicationError`` subclass to raise. It must accept
                ``(message, error_code, status_code, details)``.
            extra: Additional structured context to attach.
        """


class DefaultErrorHandler(ErrorHandler):
    """Production implementation that records structured logs before raising."""

    def __init__(
        self,
        logger_factory: Optional[LoggerFactory] = None,
        *,
        base_context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._logger_factory: LoggerFactory = logger_factory or (lambda: logging.getLogger("issue_filters.errors"))
        self._base_context = base_context or {}

    def raise_internal(
        self,
        action: str,
        exc: Exception,
        *,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        error_class: Type[ApplicationError] = ApplicationError,
        extra: Optional[Dict[str, Any]] = None,
    ) -> NoReturn:
        logger = self._logger_factory()

        context: Dict[str, Any] = {"action": action, "error_type": type(exc).__name__}
        context.update(self._base_context)
        if extra:
            context.update(extra)

        logger.exception("Failed to %s", action, exc_info=exc, extra={"context": context})

        raise error_class(
            message or f"Failed to {action}",
            error_code,
            status_code,
            context,
        ) from exc
