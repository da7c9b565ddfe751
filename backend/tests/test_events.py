"""
Tests for the three event variants: rendering, payloads, record parsing.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from models.event import (
    CommandEvent,
    EditorSaveEvent,
    ErrorEvent,
    Event,
    parse_record,
    to_record,
)


class TestRendering:

    def test_error(self):
        assert ErrorEvent(uid="u", timestamp=1, description="boom").render() == "Error: boom"

    def test_command(self):
        assert str(CommandEvent(uid="u", timestamp=1, command="(fire 1)")) == "REPL : (fire 1)"

    def test_editor_indents_every_line(self):
        e = EditorSaveEvent(uid="u", timestamp=1, content="(define x 1)\n(fire x)")
        assert e.render() == "Editor:\n    (define x 1)\n    (fire x)\n"

    def test_editor_empty_content(self):
        assert EditorSaveEvent(uid="u", timestamp=1).render() == "Editor:\n    \n"


class TestPayload:

    def test_payload_per_variant(self):
        assert ErrorEvent(description="d").payload == "d"
        assert CommandEvent(command="c").payload == "c"
        assert EditorSaveEvent(content="x").payload == "x"

    def test_events_are_frozen(self):
        e = CommandEvent(uid="u", timestamp=1, command="c")
        with pytest.raises(ValidationError):
            e.command = "other"


class TestRecords:

    def test_parse_record_picks_variant(self):
        e = parse_record("REPLCommand", {"uid": "u1", "timestamp": 5, "command": "(go)"})
        assert isinstance(e, CommandEvent)
        assert e.timestamp == 5

    def test_parse_record_unknown_kind(self):
        with pytest.raises(ValueError):
            parse_record("Telemetry", {"uid": "u1"})

    def test_to_record_is_flat_wire_shape(self):
        e = ErrorEvent(uid="u1", timestamp=7, description="bad")
        assert to_record(e) == {"uid": "u1", "timestamp": 7, "description": "bad"}

    def test_union_dispatches_on_kind(self):
        adapter = TypeAdapter(list[Event])
        events = adapter.validate_python([
            {"kind": "Error", "uid": "u", "timestamp": 1, "description": "x"},
            {"kind": "EditorContent", "uid": "u", "timestamp": 2, "content": "y"},
        ])
        assert [type(e) for e in events] == [ErrorEvent, EditorSaveEvent]
