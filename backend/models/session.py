from typing import Optional
from pydantic import BaseModel, ConfigDict

from models.event import CommandEvent, ErrorEvent, Event


class Session(BaseModel):
    """One user's events, oldest first. Rebuilt from the store on every query."""

    model_config = ConfigDict(frozen=True)

    uid: str
    events: tuple[Event, ...] = ()


class CommandErrorPair(BaseModel):
    """A REPL command and the error it led to, if any."""

    model_config = ConfigDict(frozen=True)

    command: Optional[CommandEvent] = None   # None when an error had no preceding command
    error: Optional[ErrorEvent] = None
