"""Protocol for property provisioning observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProvisioningProbe(Protocol):
    """Domain probe for administrative property provisioning."""

    def database_prepared(self, database_name: str, created: bool) -> None:
        """Record that the property database exists and has storage."""
        ...

    def property_provisioned(self, code: str, database_name: str, property_id: str) -> None:
        """Record that a property record was created."""
        ...

    def duplicate_property(self, code: str, database_name: str) -> None:
        """Record that provisioning found the code already present."""
        ...

    def property_updated(self, code: str, database_name: str, fields: list[str]) -> None:
        """Record that a property record was updated."""
        ...

    def with_context(self, context: ObservationContext) -> ProvisioningProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProvisioningProbe:
    """Default implementation of ProvisioningProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProvisioningProbe:
        """Create a new probe with observation context bound."""
        return DefaultProvisioningProbe(logger=self._logger, context=context)

    def database_prepared(self, database_name: str, created: bool) -> None:
        self._logger.info(
            "property_database_prepared",
            database_name=database_name,
            created=created,
            **self._get_context_kwargs(),
        )

    def property_provisioned(self, code: str, database_name: str, property_id: str) -> None:
        self._logger.info(
            "property_provisioned",
            property_code=code,
            database_name=database_name,
            property_id=property_id,
            **self._get_context_kwargs(),
        )

    def duplicate_property(self, code: str, database_name: str) -> None:
        self._logger.warning(
            "duplicate_property_code",
            property_code=code,
            database_name=database_name,
            **self._get_context_kwargs(),
        )

    def property_updated(self, code: str, database_name: str, fields: list[str]) -> None:
        self._logger.info(
            "property_updated",
            property_code=code,
            database_name=database_name,
            fields=fields,
            **self._get_context_kwargs(),
        )
