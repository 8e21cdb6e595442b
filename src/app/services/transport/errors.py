"""Error taxonomy for the transport optimization workflow."""

from __future__ import annotations


class TransportError(Exception):
    """Base class for failures that end a submission or export."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TransportError):
    """Bad or missing input, detected before any network call."""


class ServiceError(TransportError):
    """Business error reported by the optimizer, or a transport failure."""


class ExportError(TransportError):
    """Export requested while there is nothing to export."""


MISSING_DATASET = "missing dataset"
INVALID_PARAMETER = "invalid parameter"
TRANSPORT_FAILURE = "transport failure"
NO_RESULTS = "no results"
