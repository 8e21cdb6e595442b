"""Serializers for grouped transport optimization results."""

from __future__ import annotations

import csv
import io

from ...config import settings
from ...schemas.transport import TableRowModel, TableSectionModel, TransportViewModel
from ..transport.errors import NO_RESULTS, ExportError
from ..transport.models import GroupedResult, Stop, format_number

EXPORT_HEADERS = ["From Store", "To Store", "Item", "Units", "Distance (km)", "Cost", "Time (mins)"]
MARKER_PREFIX = "FROM "
NO_RESULTS_MESSAGE = "No results available for this selection."


def build_view_model(grouped: GroupedResult) -> TransportViewModel:
    if not grouped:
        return TransportViewModel(has_results=False, message=NO_RESULTS_MESSAGE)

    sections = []
    for from_store, stops in grouped.items():
        rows = [
            TableRowModel(
                to_store=stop.to_store,
                item=stop.item,
                units=stop.units,
                distance=stop.distance,
                cost=stop.cost,
                time=stop.time,
                cost_label=f"{settings.currency_symbol}{format_number(stop.cost)}",
            )
            for stop in stops
        ]
        sections.append(
            TableSectionModel(
                from_store=from_store,
                rows=rows,
                total_units=sum(stop.units for stop in stops),
                total_distance=sum(stop.distance for stop in stops),
                total_cost=sum(stop.cost for stop in stops),
                total_time=sum(stop.time for stop in stops),
            )
        )
    return TransportViewModel(has_results=True, sections=sections)


def grouped_result_to_csv(grouped: GroupedResult) -> str:
    """Render grouped stops as CSV with a marker row and a blank row per origin."""
    if not grouped:
        raise ExportError(NO_RESULTS)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for from_store, stops in grouped.items():
        writer.writerow([f"{MARKER_PREFIX}{from_store}"])
        for stop in stops:
            writer.writerow(
                [
                    from_store,
                    stop.to_store,
                    stop.item,
                    stop.units,
                    format_number(stop.distance),
                    format_number(stop.cost),
                    format_number(stop.time),
                ]
            )
        writer.writerow([])
    return buffer.getvalue()


def parse_grouped_csv(text: str) -> GroupedResult:
    """Read an export back into grouped stops, using only its data rows."""
    grouped: GroupedResult = {}
    reader = csv.reader(io.StringIO(text))
    for index, row in enumerate(reader):
        if index == 0 or not row:
            continue
        if len(row) == 1 and row[0].startswith(MARKER_PREFIX):
            continue
        if len(row) != len(EXPORT_HEADERS):
            raise ValueError(f"Unexpected export row {index + 1}: {row!r}")
        from_store, to_store, item, units, distance, cost, time = row
        grouped.setdefault(from_store, []).append(
            Stop(
                from_store=from_store,
                to_store=to_store,
                item=item,
                units=int(units),
                distance=float(distance),
                cost=float(cost),
                time=float(time),
            )
        )
    return grouped

