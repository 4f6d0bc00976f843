"""Protocol for model registry observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ModelRegistryProbe(Protocol):
    """Domain probe for entity model registration."""

    def models_registered(self, database_name: str, entities: list[str]) -> None:
        """Record that entities were newly registered on a database handle."""
        ...

    def registration_failed(self, database_name: str, entity: str) -> None:
        """Record that an entity had no schema in the catalog."""
        ...

    def with_context(self, context: ObservationContext) -> ModelRegistryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultModelRegistryProbe:
    """Default implementation of ModelRegistryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultModelRegistryProbe:
        """Create a new probe with observation context bound."""
        return DefaultModelRegistryProbe(logger=self._logger, context=context)

    def models_registered(self, database_name: str, entities: list[str]) -> None:
        self._logger.debug(
            "tenant_models_registered",
            database_name=database_name,
            count=len(entities),
            **self._get_context_kwargs(),
        )

    def registration_failed(self, database_name: str, entity: str) -> None:
        self._logger.critical(
            "tenant_model_registration_failed",
            database_name=database_name,
            entity=entity,
            **self._get_context_kwargs(),
        )
