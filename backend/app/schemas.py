from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


MAX_ROWS = 52
MAX_SEATS_PER_ROW = 100
MAX_LABEL_LENGTH = 8


class RowIn(BaseModel):
    label: str = Field(min_length=1, max_length=MAX_LABEL_LENGTH)
    # Non-positive counts are rejected by the layout itself (400), not here (422).
    seats: int = Field(le=MAX_SEATS_PER_ROW)


class LayoutIn(BaseModel):
    rows: list[RowIn] = Field(min_length=1, max_length=MAX_ROWS)
    center_row: str = Field(min_length=1, max_length=MAX_LABEL_LENGTH)


class SessionCreate(BaseModel):
    layout: Optional[LayoutIn] = None
    seed: Optional[int] = None
    occupancy_rate: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    # Explicit occupied seats, e.g. ["A1", "D7"]. Overrides the random occupancy.
    occupied: Optional[list[str]] = Field(default=None, max_length=MAX_ROWS * MAX_SEATS_PER_ROW)
    ticket_count: Union[int, str] = 1


class SeatClick(BaseModel):
    seat: str

    @field_validator("seat")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()


class TicketCountUpdate(BaseModel):
    # Coerced and clamped to 1..10 by the session.
    count: Union[int, float, str]


class SeatOut(BaseModel):
    id: str
    number: int
    status: str


class RowOut(BaseModel):
    label: str
    seats: list[SeatOut]


class PriceSummary(BaseModel):
    seats: int
    tickets: int
    service: int
    total: int


class SessionOut(BaseModel):
    id: str
    ticket_count: int
    center_row: str
    rows: list[RowOut]
    selection: list[str]
    suggestion: list[str]
    price: PriceSummary
    changed: Optional[bool] = None
