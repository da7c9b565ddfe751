"""
Session reconstruction: one chronological timeline per user, and the
command -> error pairs derived from it.
"""

from models.event import (
    EDITOR_CONTENT_KIND,
    ERROR_KIND,
    REPL_COMMAND_KIND,
    parse_record,
)
from models.session import CommandErrorPair, Session
from store import EventStore


def build_session(uid: str, errors, commands, editor_saves) -> Session:
    """
    Merge a user's errors, commands and editor saves into one timeline.

    Every event passed in is kept, whatever its uid, so records stored
    with an empty or garbled uid still show up. The sort is stable, so
    events sharing a timestamp keep input order: errors, then commands,
    then editor saves.
    """
    merged = [*errors, *commands, *editor_saves]
    merged.sort(key=lambda e: e.timestamp)
    return Session(uid=uid, events=tuple(merged))


def derive_pairs(session: Session) -> list[CommandErrorPair]:
    """
    Pair each command with the error that followed it before the next command.

    A command superseded by another command is emitted with no error. An
    error with nothing pending is emitted with no command. The last command
    is dropped if no error follows it.
    """
    pairs: list[CommandErrorPair] = []
    pending = None

    for event in session.events:
        if event.kind == REPL_COMMAND_KIND:
            if pending is not None:
                pairs.append(CommandErrorPair(command=pending, error=None))
            pending = event
        elif event.kind == ERROR_KIND:
            pairs.append(CommandErrorPair(command=pending, error=event))
            pending = None
        # editor saves leave the pending command alone

    return pairs


def render_session(session: Session) -> str:
    return "".join(str(e) + "\n" for e in session.events)


def load_session(store: EventStore, uid: str) -> Session:
    """Fetch every record for `uid` from the store and build its session."""
    errors = [parse_record(ERROR_KIND, r) for r in store.query_by_kind_and_user(ERROR_KIND, uid)]
    commands = [
        parse_record(REPL_COMMAND_KIND, r)
        for r in store.query_by_kind_and_user(REPL_COMMAND_KIND, uid)
    ]
    saves = [
        parse_record(EDITOR_CONTENT_KIND, r)
        for r in store.query_by_kind_and_user(EDITOR_CONTENT_KIND, uid)
    ]
    return build_session(uid, errors, commands, saves)
