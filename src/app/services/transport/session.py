"""Session state machine coordinating submission, aggregation and export."""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from ...config import settings
from ...schemas.transport import SessionStateModel, TransportViewModel
from ..outputs.transport_formatter import build_view_model, grouped_result_to_csv
from .aggregator import group
from .client import OptimizationClient
from .errors import NO_RESULTS, TRANSPORT_FAILURE, ExportError, ServiceError, ValidationError
from .models import GroupedResult
from .request_builder import build

logger = logging.getLogger(__name__)

EXPORT_MEDIA_TYPE = "text/csv"


class Phase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class SessionState:
    phase: Phase
    result: GroupedResult | None = None
    message: str | None = None
    # "validation" or "service" when phase is FAILURE.
    error_kind: str | None = None

    @classmethod
    def idle(cls) -> "SessionState":
        return cls(Phase.IDLE)

    @classmethod
    def submitting(cls) -> "SessionState":
        return cls(Phase.SUBMITTING)

    @classmethod
    def success(cls, result: GroupedResult) -> "SessionState":
        return cls(Phase.SUCCESS, result=result)

    @classmethod
    def failure(cls, message: str, error_kind: str) -> "SessionState":
        return cls(Phase.FAILURE, message=message, error_kind=error_kind)


@dataclass(frozen=True, slots=True)
class ExportArtifact:
    filename: str
    media_type: str
    content: bytes = field(repr=False)


class TransportSession:
    """Owns the single session state for one optimization workspace.

    Each submission is tagged with an increasing request id. When submissions
    overlap, only the response for the most recently issued id may change the
    state; earlier responses are dropped.
    """

    def __init__(self, client_factory: Callable[[], OptimizationClient] | None = None) -> None:
        self._client_factory = client_factory or OptimizationClient
        self._state = SessionState.idle()
        self._request_ids = itertools.count(1)
        self._latest_request_id = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state.phase is Phase.SUBMITTING

    async def submit_optimization(
        self,
        dataset: bytes | None,
        cost_rate: Any,
        min_quantity: Any,
        filename: str | None = None,
    ) -> SessionState:
        request_id = next(self._request_ids)
        self._latest_request_id = request_id

        try:
            request = build(dataset, cost_rate, min_quantity, filename=filename)
        except ValidationError as exc:
            logger.info(f"Rejected submission #{request_id}: {exc.message}")
            self._state = SessionState.failure(exc.message, "validation")
            return self._state

        self._state = SessionState.submitting()
        try:
            outcome = await self._client_factory().submit(request)
        except asyncio.CancelledError:
            if request_id == self._latest_request_id:
                logger.warning(f"Submission #{request_id} was cancelled")
                self._state = SessionState.failure(TRANSPORT_FAILURE, "service")
            raise
        except Exception as exc:
            logger.exception(f"Submission #{request_id} failed: {exc}")
            outcome = ServiceError(TRANSPORT_FAILURE)

        if request_id != self._latest_request_id:
            logger.warning(
                f"Discarding response for submission #{request_id}; "
                f"submission #{self._latest_request_id} superseded it"
            )
            return self._state

        if isinstance(outcome, ServiceError):
            self._state = SessionState.failure(outcome.message, "service")
        else:
            grouped = group(outcome)
            logger.info(f"Submission #{request_id} grouped into {len(grouped)} origin stores")
            self._state = SessionState.success(grouped)
        return self._state

    def request_export(self) -> ExportArtifact:
        """Serialize the current results, leaving the session state untouched."""
        grouped = self._state.result if self._state.phase is Phase.SUCCESS else None
        if not grouped:
            raise ExportError(NO_RESULTS)
        content = grouped_result_to_csv(grouped)
        return ExportArtifact(
            filename=settings.export_filename,
            media_type=EXPORT_MEDIA_TYPE,
            content=content.encode("utf-8"),
        )

    def view_model(self) -> TransportViewModel:
        return build_view_model(self._state.result or {})

    def snapshot(self) -> SessionStateModel:
        return SessionStateModel(
            phase=self._state.phase.value,
            busy=self.is_busy,
            message=self._state.message,
            view=self.view_model(),
        )
