"""Domain probes for shared infrastructure.

``ConnectionProbe`` reports what happens to the engines opened against the
PostgreSQL server. Tenancy-level probes live in
``tenancy.application.observability``.
"""

from shared_kernel.observability_context import ObservationContext
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "ObservationContext",
]
