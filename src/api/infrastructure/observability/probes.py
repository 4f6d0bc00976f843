"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database connection observability.

    This probe captures domain-significant events related to the engines
    opened against the shared PostgreSQL server without exposing logging
    implementation details.
    """

    def engine_created(self, host: str, database: str) -> None:
        """Record that an engine was created for a database."""
        ...

    def engine_disposed(self, database: str) -> None:
        """Record that an engine's pool was disposed."""
        ...

    def database_created(self, database: str) -> None:
        """Record that a database was created on the server."""
        ...

    def database_already_exists(self, database: str) -> None:
        """Record that CREATE DATABASE found an existing database."""
        ...

    def databases_listed(self, count: int) -> None:
        """Record that the server's databases were enumerated."""
        ...

    def store_unavailable(self, database: str, operation: str, error: Exception) -> None:
        """Record that the server could not serve an operation."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def engine_created(self, host: str, database: str) -> None:
        """Record that an engine was created for a database."""
        self._logger.info(
            "database_engine_created",
            host=host,
            database=database,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self, database: str) -> None:
        """Record that an engine's pool was disposed."""
        self._logger.info(
            "database_engine_disposed",
            database=database,
            **self._get_context_kwargs(),
        )

    def database_created(self, database: str) -> None:
        """Record that a database was created on the server."""
        self._logger.info(
            "database_created",
            database=database,
            **self._get_context_kwargs(),
        )

    def database_already_exists(self, database: str) -> None:
        """Record that CREATE DATABASE found an existing database."""
        self._logger.info(
            "database_already_exists",
            database=database,
            **self._get_context_kwargs(),
        )

    def databases_listed(self, count: int) -> None:
        """Record that the server's databases were enumerated."""
        self._logger.debug(
            "databases_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def store_unavailable(self, database: str, operation: str, error: Exception) -> None:
        """Record that the server could not serve an operation."""
        self._logger.error(
            "database_store_unavailable",
            database=database,
            operation=operation,
            error=str(error),
            **self._get_context_kwargs(),
        )
