from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from .errors import SeatPickerError
from .layout import THEATER_LAYOUT, VenueLayout, random_occupancy
from .render import DEFAULT_PRICING, render_ascii, render_summary
from .session import SeatSession


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--layout", help="Path to a layout JSON file (default: built-in theater)")
    p.add_argument("--seed", type=int, help="Seed for the random occupancy")
    p.add_argument("--occupancy-rate", type=float, default=0.3, help="Share of seats already taken (default: 0.3)")
    p.add_argument("--tickets", default="1", help="Requested number of tickets, 1-10 (default: 1)")


def _load_layout(path: Optional[str]) -> VenueLayout:
    if not path:
        return THEATER_LAYOUT
    p = Path(path)
    if not p.exists():
        raise SeatPickerError(f"layout file not found: {p}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except Exception as e:  # noqa: BLE001
        raise SeatPickerError(f"failed to read layout JSON: {e}") from e
    return VenueLayout.from_dict(data)


def _open_session(args: argparse.Namespace) -> SeatSession:
    layout = _load_layout(args.layout)
    occupancy = random_occupancy(args.occupancy_rate, seed=args.seed)
    return SeatSession(layout, occupancy, ticket_count=args.tickets)


def cmd_show(args: argparse.Namespace) -> int:
    session = _open_session(args)
    print(render_ascii(session.grid, cell_width=args.width))
    return 0


def cmd_suggest(args: argparse.Namespace) -> int:
    session = _open_session(args)
    if not session.suggestion:
        print(f"No {session.ticket_count} consecutive seats available")
        return 1
    print(" ".join(str(s) for s in session.suggestion))
    return 0


def cmd_book(args: argparse.Namespace) -> int:
    session = _open_session(args)
    for seat in args.click or []:
        if not session.click_seat(seat):
            print(f"Ignored click on {seat}")
    if args.use_suggested and not session.use_suggested():
        print("No suggestion to use")
    print(render_ascii(session.grid, cell_width=args.width))
    print()
    print(render_summary(session.selection, DEFAULT_PRICING))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seat_picker", description="Pick seats for a showing (single in-memory session).")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_show = sub.add_parser("show", help="Print the seat grid with the current suggestion")
    _add_common_args(p_show)
    p_show.add_argument("--width", type=int, default=3, help="Cell width for display")
    p_show.set_defaults(func=cmd_show)

    p_suggest = sub.add_parser("suggest", help="Print the suggested seats for the ticket count")
    _add_common_args(p_suggest)
    p_suggest.set_defaults(func=cmd_suggest)

    p_book = sub.add_parser("book", help="Replay seat clicks and print the selection and total")
    _add_common_args(p_book)
    p_book.add_argument("--click", action="append", metavar="SEAT", help="Seat to click, e.g. D7 (repeatable)")
    p_book.add_argument("--use-suggested", action="store_true", help="Take the suggested seats after the clicks")
    p_book.add_argument("--width", type=int, default=3, help="Cell width for display")
    p_book.set_defaults(func=cmd_book)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return int(args.func(args))
    except SeatPickerError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
