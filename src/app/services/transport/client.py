"""HTTP client for the remote transport optimization service."""

from __future__ import annotations

import logging
from typing import Any, List

import httpx
from pydantic import TypeAdapter, ValidationError as SchemaValidationError

from ...config import settings
from ...schemas.transport import RouteModel
from .errors import TRANSPORT_FAILURE, ServiceError
from .models import OptimizationRequest, Route

logger = logging.getLogger(__name__)

_ROUTE_LIST = TypeAdapter(List[RouteModel])


class OptimizationClient:
    """Submits optimization requests and normalizes the service's answer.

    ``submit`` never raises for remote problems: it returns either the route
    list or a :class:`ServiceError`. A business error reported by the service
    keeps its message; anything else (network, timeout, HTTP status, malformed
    body) is reported as ``"transport failure"``.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url or settings.optimizer_url
        self.timeout = timeout if timeout is not None else settings.optimizer_timeout_seconds
        self._http_client = http_client

    async def submit(self, request: OptimizationRequest) -> List[Route] | ServiceError:
        files = {"stock_file": (request.filename, request.dataset, "text/csv")}
        data = {
            "cost_rate": str(request.cost_rate),
            "min_quantity": str(request.min_quantity),
        }
        logger.info(
            f"Submitting {len(request.dataset)} byte dataset to {self.url} "
            f"(cost_rate={data['cost_rate']}, min_quantity={data['min_quantity']})"
        )
        try:
            if self._http_client is not None:
                response = await self._http_client.post(self.url, files=files, data=data)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout, connect=10.0)) as client:
                    response = await client.post(self.url, files=files, data=data)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(f"Optimizer responded with HTTP {exc.response.status_code}")
            return ServiceError(TRANSPORT_FAILURE)
        except httpx.TimeoutException as exc:
            logger.warning(f"Optimizer request timed out after {self.timeout}s: {exc}")
            return ServiceError(TRANSPORT_FAILURE)
        except httpx.HTTPError as exc:
            logger.warning(f"Failed to reach optimizer at {self.url}: {exc}")
            return ServiceError(TRANSPORT_FAILURE)
        except httpx.InvalidURL as exc:
            logger.warning(f"Optimizer URL {self.url!r} is invalid: {exc}")
            return ServiceError(TRANSPORT_FAILURE)
        except ValueError as exc:
            logger.warning(f"Optimizer returned a body that is not JSON: {exc}")
            return ServiceError(TRANSPORT_FAILURE)
        except Exception as exc:
            logger.exception(f"Unexpected error while calling optimizer at {self.url}: {exc}")
            return ServiceError(TRANSPORT_FAILURE)

        return _normalize_payload(payload)


def _normalize_payload(payload: Any) -> List[Route] | ServiceError:
    if isinstance(payload, dict):
        error = payload.get("error")
        if error:
            logger.info(f"Optimizer reported an error: {error}")
            return ServiceError(str(error))
        logger.warning(f"Optimizer returned an object without routes or error: keys={sorted(payload)}")
        return ServiceError(TRANSPORT_FAILURE)

    if not isinstance(payload, list):
        logger.warning(f"Optimizer returned unexpected JSON type {type(payload).__name__}")
        return ServiceError(TRANSPORT_FAILURE)

    try:
        models = _ROUTE_LIST.validate_python(payload)
    except SchemaValidationError as exc:
        logger.warning(f"Optimizer returned malformed routes: {exc.error_count()} validation errors")
        return ServiceError(TRANSPORT_FAILURE)

    routes = [model.to_domain() for model in models]
    logger.info(f"Optimizer returned {len(routes)} routes")
    return routes


async def check_health(base_url: str | None = None) -> bool:
    """Best-effort reachability probe of the optimizer service."""
    base = base_url or settings.optimizer_base_url
    if not base:
        return False
    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            response = await client.get(base)
        # Any answer below 500 means something is listening.
        return response.status_code < 500
    except (httpx.HTTPError, httpx.InvalidURL):
        return False
