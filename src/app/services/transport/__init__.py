"""Transport optimization services."""

from .errors import ExportError, ServiceError, TransportError, ValidationError
from .models import GroupedResult, OptimizationRequest, Route, Stop

__all__ = [
    "TransportError",
    "ValidationError",
    "ServiceError",
    "ExportError",
    "OptimizationRequest",
    "Stop",
    "Route",
    "GroupedResult",
]
