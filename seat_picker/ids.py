from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import UnknownSeatError


_SEAT_RE = re.compile(r"^\s*([A-Za-z]+)\s*-?\s*(\d+)\s*$")


@dataclass(frozen=True, order=True)
class SeatId:
    row: str
    number: int

    def __str__(self) -> str:
        return f"{self.row}{self.number}"

    @classmethod
    def parse(cls, text: str) -> "SeatId":
        m = _SEAT_RE.match(text or "")
        if not m:
            raise UnknownSeatError(f"not a seat id: {text!r}")
        return cls(m.group(1).upper(), int(m.group(2)))

    @classmethod
    def coerce(cls, value: "SeatId | str") -> "SeatId":
        if isinstance(value, SeatId):
            return value
        return cls.parse(str(value))
