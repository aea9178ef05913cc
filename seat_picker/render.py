from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .grid import Grid, SeatStatus
from .ids import SeatId


_GLYPHS = {
    SeatStatus.available: ".",
    SeatStatus.occupied: "x",
    SeatStatus.selected: "#",
    SeatStatus.suggested: "*",
}


@dataclass(frozen=True)
class Pricing:
    ticket_price: int = 5000
    service_fee: int = 750
    currency_symbol: str = "₡"

    @property
    def unit_total(self) -> int:
        return self.ticket_price + self.service_fee

    def total(self, selection: Sequence[SeatId]) -> int:
        return len(selection) * self.unit_total

    def summary(self, selection: Sequence[SeatId]) -> dict:
        n = len(selection)
        return {
            "seats": n,
            "tickets": n * self.ticket_price,
            "service": n * self.service_fee,
            "total": self.total(selection),
        }


DEFAULT_PRICING = Pricing()


def format_currency(amount: int, symbol: str = "₡") -> str:
    return f"{symbol}{amount:,}"


def _cell(status: SeatStatus, width: int) -> str:
    return _GLYPHS[status].center(width)


def render_ascii(grid: Grid, *, cell_width: int = 3) -> str:
    cell_width = max(2, int(cell_width))
    widest = max(r.seats for r in grid.layout.rows)
    label_width = max(len(r.label) for r in grid.layout.rows) + 2

    header = " " * label_width + "".join(str(n).center(cell_width) for n in range(1, widest + 1))
    lines = [header]
    for r in grid.layout.rows:
        cells = "".join(_cell(s.status, cell_width) for s in grid.row(r.label))
        marker = " <" if r.label == grid.layout.center_row else ""
        lines.append(r.label.ljust(label_width) + cells.ljust(widest * cell_width) + marker)
    lines.append("")
    lines.append("  ".join(f"{glyph} {status.value}" for status, glyph in _GLYPHS.items()))
    return "\n".join(lines)


def render_summary(selection: Sequence[SeatId], pricing: Pricing = DEFAULT_PRICING) -> str:
    s = pricing.summary(selection)
    seats = ", ".join(str(sid) for sid in selection) or "-"
    sym = pricing.currency_symbol
    return "\n".join(
        [
            f"Seats:   {seats}",
            f"Tickets: {s['seats']} x {format_currency(pricing.ticket_price, sym)} = {format_currency(s['tickets'], sym)}",
            f"Service: {s['seats']} x {format_currency(pricing.service_fee, sym)} = {format_currency(s['service'], sym)}",
            f"Total:   {format_currency(s['total'], sym)}",
        ]
    )
