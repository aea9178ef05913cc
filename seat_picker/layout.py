from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .errors import InvalidLayoutError
from .ids import SeatId


OccupancySource = Callable[[SeatId], bool]


@dataclass(frozen=True)
class RowSpec:
    label: str
    seats: int


@dataclass(frozen=True)
class VenueLayout:
    """
    Static venue layout: ordered rows with a seat count each, and the row used as
    the distance-zero reference when suggesting seats.
    """

    rows: tuple[RowSpec, ...]
    center_row: str

    @property
    def labels(self) -> list[str]:
        return [r.label for r in self.rows]

    def row_index(self, label: str) -> int:
        for i, r in enumerate(self.rows):
            if r.label == label:
                return i
        raise InvalidLayoutError(f"unknown row: {label!r}")

    def seats_in_row(self, label: str) -> int:
        return self.rows[self.row_index(label)].seats

    def seat_ids(self) -> list[SeatId]:
        return [SeatId(r.label, n) for r in self.rows for n in range(1, r.seats + 1)]

    def validate(self) -> None:
        if not self.rows:
            raise InvalidLayoutError("layout must have at least one row")
        seen: set[str] = set()
        for r in self.rows:
            if not r.label:
                raise InvalidLayoutError("row label must be a non-empty string")
            if r.label in seen:
                raise InvalidLayoutError(f"duplicate row label: {r.label!r}")
            seen.add(r.label)
            if r.seats <= 0:
                raise InvalidLayoutError(f"row {r.label!r} must have a positive seat count, got {r.seats}")
        if self.center_row not in seen:
            raise InvalidLayoutError(f"center row {self.center_row!r} is not part of the layout")

    @classmethod
    def from_dict(cls, data: dict) -> "VenueLayout":
        try:
            rows = tuple(RowSpec(str(r["label"]), int(r["seats"])) for r in data["rows"])
            center_row = str(data["center_row"])
        except Exception as e:  # noqa: BLE001 - keep errors readable
            raise InvalidLayoutError(f"invalid layout data: {e}") from e
        return cls(rows=rows, center_row=center_row)


def theater_layout() -> VenueLayout:
    # Front and back rows are shorter.
    labels = "ABCDEFGH"
    rows = tuple(RowSpec(label, 10 if label in ("A", "H") else 12) for label in labels)
    return VenueLayout(rows=rows, center_row="D")


THEATER_LAYOUT = theater_layout()


def no_occupancy(seat_id: SeatId) -> bool:
    return False


def random_occupancy(rate: float = 0.3, seed: Optional[int] = None) -> OccupancySource:
    """
    Occupy roughly `rate` of the seats, drawing one number per seat in layout order.
    The same seed over the same layout always yields the same occupancy.
    """
    if not 0.0 <= rate <= 1.0:
        raise InvalidLayoutError(f"occupancy rate must be within [0, 1], got {rate}")
    rng = random.Random(seed)
    threshold = 1.0 - rate

    def _occupied(seat_id: SeatId) -> bool:
        return rng.random() > threshold

    return _occupied


def explicit_occupancy(seat_ids: Iterable[SeatId | str]) -> OccupancySource:
    occupied = {SeatId.coerce(s) for s in seat_ids}

    def _occupied(seat_id: SeatId) -> bool:
        return seat_id in occupied

    return _occupied
