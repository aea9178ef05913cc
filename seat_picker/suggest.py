from __future__ import annotations

import logging

from .grid import Grid, SeatStatus
from .ids import SeatId
from .layout import VenueLayout


logger = logging.getLogger(__name__)

Suggestion = tuple[SeatId, ...]

# Seats already marked as suggested are still free.
_FREE = (SeatStatus.available, SeatStatus.suggested)


def rows_by_proximity(layout: VenueLayout) -> list[str]:
    """Row labels ordered by distance from the center row; equidistant rows keep layout order."""
    labels = layout.labels
    center = labels.index(layout.center_row)
    # sorted() is stable, so the front row of an equidistant pair comes first.
    return sorted(labels, key=lambda label: abs(labels.index(label) - center))


def consecutive_runs(numbers: list[int]) -> list[list[int]]:
    runs: list[list[int]] = []
    for n in sorted(numbers):
        if runs and runs[-1][-1] == n - 1:
            runs[-1].append(n)
        else:
            runs.append([n])
    return runs


def _first_fitting_run(runs: list[list[int]], requested_count: int) -> list[int]:
    # Runs arrive left to right; the first one long enough wins.
    for run in runs:
        if len(run) >= requested_count:
            return run
    return []


def suggest(grid: Grid, requested_count: int) -> Suggestion:
    """
    Recommend `requested_count` adjacent available seats.

    Rows are tried from the center outwards. Within a row the leftmost run of
    consecutive available seats that is long enough is used, and its
    lowest-numbered seats are returned. The first row with any fitting run wins, even when a
    farther row holds a better one. Returns an empty tuple when nothing fits.
    """
    if requested_count <= 0:
        return ()

    for label in rows_by_proximity(grid.layout):
        available = [s.number for s in grid.row(label) if s.status in _FREE]
        run = _first_fitting_run(consecutive_runs(available), requested_count)
        if run:
            picked = tuple(SeatId(label, n) for n in run[:requested_count])
            logger.debug("suggesting %s for %d ticket(s)", ", ".join(map(str, picked)), requested_count)
            return picked

    logger.debug("no row has %d consecutive available seats", requested_count)
    return ()
