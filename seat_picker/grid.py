from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .errors import InconsistentStateError, SelectionLimitExceeded, UnknownSeatError
from .ids import SeatId
from .layout import OccupancySource, VenueLayout, no_occupancy


logger = logging.getLogger(__name__)

MIN_TICKETS = 1
MAX_TICKETS = 10

Selection = tuple[SeatId, ...]


class SeatStatus(str, Enum):
    available = "available"
    occupied = "occupied"  # venue-assigned, never changed by the patron
    selected = "selected"
    suggested = "suggested"


@dataclass(frozen=True)
class Seat:
    id: SeatId
    status: SeatStatus

    @property
    def row(self) -> str:
        return self.id.row

    @property
    def number(self) -> int:
        return self.id.number


@dataclass(frozen=True, eq=True)
class Grid:
    """
    All seats of one showing. A Grid is never changed in place: `statuses` is a
    read-only view, and every operation in this module returns a new Grid and
    leaves its input untouched. Grids compare by value but are not hashable.
    """

    layout: VenueLayout
    statuses: Mapping[SeatId, SeatStatus]

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "statuses", MappingProxyType(dict(self.statuses)))

    def __contains__(self, seat_id: object) -> bool:
        return seat_id in self.statuses

    def __len__(self) -> int:
        return len(self.statuses)

    def status(self, seat_id: SeatId) -> SeatStatus:
        try:
            return self.statuses[seat_id]
        except KeyError:
            raise UnknownSeatError(f"no such seat: {seat_id}") from None

    def seats(self) -> list[Seat]:
        return [Seat(sid, self.statuses[sid]) for sid in self.layout.seat_ids()]

    def row(self, label: str) -> list[Seat]:
        n = self.layout.seats_in_row(label)
        return [Seat(SeatId(label, i), self.statuses[SeatId(label, i)]) for i in range(1, n + 1)]

    def ids_with(self, status: SeatStatus) -> list[SeatId]:
        return [sid for sid in self.layout.seat_ids() if self.statuses[sid] is status]

    def with_statuses(self, changes: dict[SeatId, SeatStatus]) -> "Grid":
        if not changes:
            return self
        for sid in changes:
            if sid not in self.statuses:
                raise UnknownSeatError(f"no such seat: {sid}")
        merged = dict(self.statuses)
        merged.update(changes)
        return Grid(layout=self.layout, statuses=merged)


def initialize(layout: VenueLayout, occupancy: Optional[OccupancySource] = None) -> Grid:
    layout.validate()
    occupied = occupancy or no_occupancy
    statuses: dict[SeatId, SeatStatus] = {}
    for sid in layout.seat_ids():
        statuses[sid] = SeatStatus.occupied if occupied(sid) else SeatStatus.available
    logger.debug(
        "initialized grid: %d rows, %d seats, %d occupied",
        len(layout.rows),
        len(statuses),
        sum(1 for s in statuses.values() if s is SeatStatus.occupied),
    )
    return Grid(layout=layout, statuses=statuses)


def clamp_ticket_count(value: object) -> int:
    try:
        count = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        count = MIN_TICKETS
    return max(MIN_TICKETS, min(count, MAX_TICKETS))


def _click(grid: Grid, seat_id: SeatId, requested_count: int, selection: Selection) -> tuple[Grid, Selection]:
    status = grid.status(seat_id)
    if status is SeatStatus.selected:
        rest = tuple(s for s in selection if s != seat_id)
        return grid.with_statuses({seat_id: SeatStatus.available}), rest
    if status is SeatStatus.occupied:
        return grid, selection
    if len(selection) >= requested_count:
        raise SelectionLimitExceeded(f"cannot select more than {requested_count} seat(s)")
    return grid.with_statuses({seat_id: SeatStatus.selected}), selection + (seat_id,)


def apply_click(
    grid: Grid, seat_id: SeatId | str, requested_count: int, selection: Selection
) -> tuple[Grid, Selection]:
    """
    Seat-click transition. Unknown and occupied seats, and clicks past the
    requested count, leave both grid and selection unchanged.
    """
    try:
        sid = SeatId.coerce(seat_id)
        return _click(grid, sid, requested_count, selection)
    except UnknownSeatError as e:
        logger.debug("ignoring click: %s", e)
    except SelectionLimitExceeded as e:
        logger.warning("ignoring click on %s: %s", seat_id, e)
    return grid, selection


def clear_suggestions(grid: Grid) -> Grid:
    return grid.with_statuses({sid: SeatStatus.available for sid in grid.ids_with(SeatStatus.suggested)})


def apply_suggestions(grid: Grid, suggestion: Iterable[SeatId]) -> Grid:
    changes = {}
    for sid in suggestion:
        if grid.status(sid) is SeatStatus.available:
            changes[sid] = SeatStatus.suggested
    return grid.with_statuses(changes)


def set_ticket_count(grid: Grid, selection: Selection, new_count: object) -> tuple[Grid, Selection]:
    count = clamp_ticket_count(new_count)
    keep, drop = selection[:count], selection[count:]
    changes = {sid: SeatStatus.available for sid in grid.ids_with(SeatStatus.suggested)}
    for sid in drop:
        if grid.status(sid) is SeatStatus.selected:
            changes[sid] = SeatStatus.available
    if drop:
        logger.info("ticket count lowered to %d, released %s", count, ", ".join(map(str, drop)))
    return grid.with_statuses(changes), tuple(keep)


def use_suggested(grid: Grid, selection: Selection, suggestion: Iterable[SeatId]) -> tuple[Grid, Selection]:
    """Replace the current selection with the suggested seats."""
    picked = tuple(suggestion)
    if not picked:
        return grid, selection
    for sid in picked:
        if sid not in grid or grid.status(sid) is SeatStatus.occupied:
            logger.warning("stale suggestion %s, leaving selection unchanged", sid)
            return grid, selection
    changes = {sid: SeatStatus.available for sid in grid.ids_with(SeatStatus.selected)}
    for sid in picked:
        changes[sid] = SeatStatus.selected
    return grid.with_statuses(changes), picked


def check_consistency(grid: Grid, selection: Selection) -> None:
    selected = set(grid.ids_with(SeatStatus.selected))
    members = set(selection)
    if len(members) != len(selection):
        raise InconsistentStateError("selection contains duplicate seats")
    if selected != members:
        raise InconsistentStateError(
            f"selected seats {sorted(map(str, selected))} do not match selection {[str(s) for s in selection]}"
        )
