from __future__ import annotations

import logging
import sys

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from seat_picker.errors import SeatPickerError
from seat_picker.layout import THEATER_LAYOUT, RowSpec, VenueLayout, explicit_occupancy, random_occupancy
from seat_picker.render import DEFAULT_PRICING
from seat_picker.session import SeatSession

from .schemas import SeatClick, SessionCreate, SessionOut, TicketCountUpdate
from .store import SessionStore, default_occupancy_rate, default_seed, store


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("uvicorn").setLevel(logging.INFO)


logger = logging.getLogger(__name__)
configure_logging()


app = FastAPI(title="Seat Picker API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _store() -> SessionStore:
    return store


def _get_or_404(session_id: str, sessions: SessionStore) -> SeatSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="session not found")
    return session


def _out(session_id: str, session: SeatSession, changed: bool | None = None) -> dict:
    snap = session.snapshot()
    snap["id"] = session_id
    snap["price"] = DEFAULT_PRICING.summary(snap["selection"])
    snap["changed"] = changed
    return snap


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.post("/sessions", response_model=SessionOut)
def create_session(payload: SessionCreate, sessions: SessionStore = Depends(_store)) -> dict:
    layout = THEATER_LAYOUT
    if payload.layout is not None:
        layout = VenueLayout(
            rows=tuple(RowSpec(r.label, r.seats) for r in payload.layout.rows),
            center_row=payload.layout.center_row,
        )
    try:
        if payload.occupied is not None:
            occupancy = explicit_occupancy(payload.occupied)
        else:
            rate = payload.occupancy_rate if payload.occupancy_rate is not None else default_occupancy_rate()
            seed = payload.seed if payload.seed is not None else default_seed()
            occupancy = random_occupancy(rate, seed=seed)
        session = SeatSession(layout, occupancy, ticket_count=payload.ticket_count)
    except SeatPickerError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    session_id = sessions.add(session)
    logger.info("created session %s (%d seats)", session_id, len(session.grid))
    return _out(session_id, session)


@app.get("/sessions/{session_id}", response_model=SessionOut)
def get_session(session_id: str, sessions: SessionStore = Depends(_store)) -> dict:
    return _out(session_id, _get_or_404(session_id, sessions))


@app.post("/sessions/{session_id}/click", response_model=SessionOut)
def click_seat(session_id: str, payload: SeatClick, sessions: SessionStore = Depends(_store)) -> dict:
    session = _get_or_404(session_id, sessions)
    changed = session.click_seat(payload.seat)
    return _out(session_id, session, changed)


@app.put("/sessions/{session_id}/ticket-count", response_model=SessionOut)
def set_ticket_count(session_id: str, payload: TicketCountUpdate, sessions: SessionStore = Depends(_store)) -> dict:
    session = _get_or_404(session_id, sessions)
    session.set_ticket_count(payload.count)
    return _out(session_id, session, True)


@app.post("/sessions/{session_id}/use-suggested", response_model=SessionOut)
def use_suggested(session_id: str, sessions: SessionStore = Depends(_store)) -> dict:
    session = _get_or_404(session_id, sessions)
    changed = session.use_suggested()
    return _out(session_id, session, changed)


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str, sessions: SessionStore = Depends(_store)) -> dict:
    if not sessions.remove(session_id):
        raise HTTPException(status_code=404, detail="session not found")
    return {"deleted": True}
