"""Transport optimization wire and view schemas."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..services.transport.models import Route, Stop, format_number


class StopModel(BaseModel):
    from_store: str
    to_store: str
    item: str
    units: int = Field(..., ge=0)
    distance: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    time: float = Field(..., ge=0)

    @field_validator("from_store", "to_store", "item", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        # Store and item codes are sometimes sent as bare numbers.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return format_number(value)
        return value

    def to_domain(self) -> Stop:
        return Stop(
            from_store=self.from_store,
            to_store=self.to_store,
            item=self.item,
            units=self.units,
            distance=self.distance,
            cost=self.cost,
            time=self.time,
        )


class RouteModel(BaseModel):
    stops: List[StopModel] = Field(default_factory=list)

    def to_domain(self) -> Route:
        return Route(stops=tuple(stop.to_domain() for stop in self.stops))


class TableRowModel(BaseModel):
    to_store: str
    item: str
    units: int
    distance: float
    cost: float
    time: float
    cost_label: str


class TableSectionModel(BaseModel):
    from_store: str
    rows: List[TableRowModel]
    total_units: int
    total_distance: float
    total_cost: float
    total_time: float


class TransportViewModel(BaseModel):
    has_results: bool
    message: Optional[str] = None
    sections: List[TableSectionModel] = Field(default_factory=list)


class SessionStateModel(BaseModel):
    phase: Literal["idle", "submitting", "success", "failure"]
    busy: bool = False
    message: Optional[str] = Field(default=None, description="Failure cause when phase is 'failure'.")
    view: TransportViewModel
