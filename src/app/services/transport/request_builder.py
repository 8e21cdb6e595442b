"""Validation of user inputs into an optimization request."""

from __future__ import annotations

import math
from typing import Any

from .errors import INVALID_PARAMETER, MISSING_DATASET, ValidationError
from .models import OptimizationRequest

DEFAULT_DATASET_FILENAME = "stock.csv"


def build(
    dataset: bytes | None,
    cost_rate: Any,
    min_quantity: Any,
    filename: str | None = None,
) -> OptimizationRequest:
    """Validate raw inputs and assemble an :class:`OptimizationRequest`.

    Numeric parameters may be given as numbers or as the strings a form input
    produces. Raises :class:`ValidationError` when the dataset is missing or a
    parameter is out of range.
    """
    if not dataset:
        raise ValidationError(MISSING_DATASET)

    rate = _parse_cost_rate(cost_rate)
    quantity = _parse_min_quantity(min_quantity)
    return OptimizationRequest(
        dataset=bytes(dataset),
        cost_rate=rate,
        min_quantity=quantity,
        filename=filename or DEFAULT_DATASET_FILENAME,
    )


def _parse_cost_rate(value: Any) -> float:
    number = _to_float(value)
    if number is None or not math.isfinite(number) or number <= 0:
        raise ValidationError(INVALID_PARAMETER)
    return number


def _parse_min_quantity(value: Any) -> int:
    number = _to_float(value)
    if number is None or not math.isfinite(number) or number < 0 or not number.is_integer():
        raise ValidationError(INVALID_PARAMETER)
    return int(number)


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
