"""
Telemetry events reported by the game's scripting environment.

Each variant is also the storage record for its kind: a flat object with
uid, timestamp and one content field. The variants share no base class;
code that handles a mix of them uses the Event union and the `kind` tag.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

REPL_COMMAND_KIND = "REPLCommand"
EDITOR_CONTENT_KIND = "EditorContent"
ERROR_KIND = "Error"

KINDS = (REPL_COMMAND_KIND, EDITOR_CONTENT_KIND, ERROR_KIND)


class ErrorEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["Error"] = ERROR_KIND
    uid: str = ""
    timestamp: int = 0
    description: str = ""

    @property
    def payload(self) -> str:
        return self.description

    def render(self) -> str:
        return "Error: " + self.description

    def __str__(self) -> str:
        return self.render()


class CommandEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["REPLCommand"] = REPL_COMMAND_KIND
    uid: str = ""
    timestamp: int = 0
    command: str = ""

    @property
    def payload(self) -> str:
        return self.command

    def render(self) -> str:
        return "REPL : " + self.command

    def __str__(self) -> str:
        return self.render()


class EditorSaveEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["EditorContent"] = EDITOR_CONTENT_KIND
    uid: str = ""
    timestamp: int = 0
    content: str = ""

    @property
    def payload(self) -> str:
        return self.content

    def render(self) -> str:
        out = "Editor:\n"
        for line in self.content.split("\n"):
            out += "    " + line + "\n"
        return out

    def __str__(self) -> str:
        return self.render()


Event = Annotated[
    Union[ErrorEvent, CommandEvent, EditorSaveEvent],
    Field(discriminator="kind"),
]

RECORD_TYPES = {
    ERROR_KIND: ErrorEvent,
    REPL_COMMAND_KIND: CommandEvent,
    EDITOR_CONTENT_KIND: EditorSaveEvent,
}


def parse_record(kind: str, data: dict):
    """Validate a raw store record into the event variant for `kind`."""
    try:
        model = RECORD_TYPES[kind]
    except KeyError:
        raise ValueError(f"unknown event kind {kind!r}") from None
    return model.model_validate({**data, "kind": kind})


def to_record(event) -> dict:
    """Flat storage shape of an event (no kind tag)."""
    return event.model_dump(exclude={"kind"})
