"""Transport optimization domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True, slots=True)
class OptimizationRequest:
    dataset: bytes
    cost_rate: float
    min_quantity: int
    filename: str = "stock.csv"


@dataclass(frozen=True, slots=True)
class Stop:
    from_store: str
    to_store: str
    item: str
    units: int
    distance: float
    cost: float
    time: float


@dataclass(frozen=True, slots=True)
class Route:
    stops: Tuple[Stop, ...] = field(default_factory=tuple)

    @property
    def origin(self) -> str | None:
        """Origin store of the route, taken from its first stop."""
        return self.stops[0].from_store if self.stops else None


# Origin store -> stops, in first-encounter order.
GroupedResult = Dict[str, List[Stop]]


def format_number(value: float) -> str:
    """Render whole floats without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
