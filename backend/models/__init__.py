from models.event import CommandEvent, EditorSaveEvent, ErrorEvent, Event
from models.session import CommandErrorPair, Session
from models.stats import ClassifiedError, EditorAdoption, StatsReport, VariableCount

__all__ = [
    "CommandEvent", "EditorSaveEvent", "ErrorEvent", "Event",
    "CommandErrorPair", "Session",
    "ClassifiedError", "EditorAdoption", "StatsReport", "VariableCount",
]
