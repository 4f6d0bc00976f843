"""Exceptions for the tenancy bounded context.

``TenantCodeRequiredError``, ``TenantNotFoundError``,
``PrimaryUnavailableError`` and ``UnknownEntityError`` are the errors callers
of tenant resolution can observe. ``DatabaseMissingError`` is raised by
stores and consumed by the resolver; it never reaches callers.
"""


class TenancyError(Exception):
    """Base class for tenancy errors."""

    retryable = False


class TenantCodeRequiredError(TenancyError):
    """Raised when the caller supplied an empty or blank property code.

    Always a caller bug; never retried.
    """

    pass


class TenantNotFoundError(TenancyError):
    """Raised when no candidate database holds a property with the code.

    Surfaced to callers as an authentication failure; not retried
    automatically.
    """

    def __init__(self, code: str, candidates_checked: int = 0):
        super().__init__(f"Property '{code}' was not found")
        self.code = code
        self.candidates_checked = candidates_checked


class PrimaryUnavailableError(TenancyError):
    """Raised when the store needed to enumerate or probe databases is unreachable.

    The only tenancy error eligible for caller-side retry with backoff.
    """

    retryable = True


class UnknownEntityError(TenancyError):
    """Raised when an entity has no schema in the catalog or no registered model.

    Indicates a deployment defect; not something to retry.
    """

    def __init__(self, entity: str):
        super().__init__(f"Entity '{entity}' is not registered in the schema catalog")
        self.entity = entity


class DatabaseMissingError(TenancyError):
    """Raised by a store when a database or its entity storage does not exist.

    A normal miss during discovery, distinct from an unreachable store.
    """

    def __init__(self, database_name: str):
        super().__init__(f"Database '{database_name}' does not exist")
        self.database_name = database_name


class PropertyAlreadyExistsError(TenancyError):
    """Raised when provisioning finds the property code already present."""

    def __init__(self, code: str, database_name: str):
        super().__init__(
            f"Property '{code}' already exists in database '{database_name}'"
        )
        self.code = code
        self.database_name = database_name


class NothingToUpdateError(TenancyError):
    """Raised when a property update carries no changes."""

    pass
