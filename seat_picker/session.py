from __future__ import annotations

import logging
import threading
from typing import Optional

from . import grid as g
from .grid import Grid, Selection
from .ids import SeatId
from .layout import THEATER_LAYOUT, OccupancySource, VenueLayout
from .suggest import Suggestion, suggest


logger = logging.getLogger(__name__)


class SeatSession:
    """
    One patron's seat picking for one showing.

    Holds the grid, the ordered selection, the current suggestion and the
    requested ticket count. Commands are applied one at a time under a single
    lock; each either replaces the whole state or leaves it as it was.
    """

    def __init__(
        self,
        layout: VenueLayout = THEATER_LAYOUT,
        occupancy: Optional[OccupancySource] = None,
        ticket_count: int = 1,
    ):
        self._lock = threading.Lock()
        self._grid = g.initialize(layout, occupancy)
        self._selection: Selection = ()
        self._suggestion: Suggestion = ()
        self._ticket_count = g.MIN_TICKETS
        self.set_ticket_count(ticket_count)

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def suggestion(self) -> Suggestion:
        return self._suggestion

    @property
    def ticket_count(self) -> int:
        return self._ticket_count

    @property
    def layout(self) -> VenueLayout:
        return self._grid.layout

    def _commit(self, grid: Grid, selection: Selection, suggestion: Suggestion, ticket_count: int) -> None:
        g.check_consistency(grid, selection)
        self._grid = grid
        self._selection = selection
        self._suggestion = suggestion
        self._ticket_count = ticket_count

    def click_seat(self, seat_id: SeatId | str) -> bool:
        """Toggle a seat. Returns True if anything changed."""
        with self._lock:
            grid, selection = g.apply_click(self._grid, seat_id, self._ticket_count, self._selection)
            if grid is self._grid:
                return False
            # A manual pick supersedes the standing suggestion.
            grid = g.clear_suggestions(grid)
            self._commit(grid, selection, (), self._ticket_count)
            return True

    def set_ticket_count(self, count: object) -> int:
        with self._lock:
            new_count = g.clamp_ticket_count(count)
            grid, selection = g.set_ticket_count(self._grid, self._selection, new_count)
            suggestion = suggest(grid, new_count)
            grid = g.apply_suggestions(grid, suggestion)
            self._commit(grid, selection, suggestion, new_count)
            logger.debug("ticket count %d, suggestion %s", new_count, [str(s) for s in suggestion])
            return new_count

    def use_suggested(self) -> bool:
        with self._lock:
            if not self._suggestion:
                return False
            grid, selection = g.use_suggested(self._grid, self._selection, self._suggestion)
            if grid is self._grid:
                return False
            self._commit(grid, selection, (), self._ticket_count)
            return True

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "ticket_count": self._ticket_count,
                "center_row": self._grid.layout.center_row,
                "rows": [
                    {
                        "label": r.label,
                        "seats": [
                            {"id": str(s.id), "number": s.number, "status": s.status.value}
                            for s in self._grid.row(r.label)
                        ],
                    }
                    for r in self._grid.layout.rows
                ],
                "selection": [str(s) for s in self._selection],
                "suggestion": [str(s) for s in self._suggestion],
            }
