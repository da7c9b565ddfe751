from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from analysis.aggregates import build_stats_report
from analysis.patterns import PatternTable, default_table
from analysis.sessions import derive_pairs, load_session
from models.stats import StatsReport
from store import EventStore, StoreError, get_store

router = APIRouter(tags=["stats"])

_table = default_table()


def get_pattern_table() -> PatternTable:
    return _table


# ---------- Response schemas ----------

class PairView(BaseModel):
    command: Optional[str] = None
    error: Optional[str] = None


class SessionView(BaseModel):
    uid: str
    events: list[str]
    pairs: list[PairView]


# ---------- Endpoints ----------

@router.get("/stats", response_model=StatsReport)
def get_stats(
    store: EventStore = Depends(get_store),
    table: PatternTable = Depends(get_pattern_table),
):
    """Error histogram, VariableHasNoValue ranking and editor adoption over all stored events."""
    try:
        return build_stats_report(store, table)
    except StoreError:
        raise HTTPException(status_code=503, detail="Event store unavailable")


@router.get("/sessions/{uid}", response_model=SessionView)
def get_session(uid: str, store: EventStore = Depends(get_store)):
    """
    One user's timeline, rendered the same way as the session report,
    plus the command/error pairs derived from it.
    """
    try:
        session = load_session(store, uid)
    except StoreError:
        raise HTTPException(status_code=503, detail="Event store unavailable")

    pairs = [
        PairView(
            command=p.command.command if p.command else None,
            error=p.error.description if p.error else None,
        )
        for p in derive_pairs(session)
    ]
    return SessionView(uid=uid, events=[e.render() for e in session.events], pairs=pairs)
