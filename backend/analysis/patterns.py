"""
Error taxonomy for the in-game interpreter's error messages.

The table is ordered: classify() returns the first pattern that matches
anywhere in the text, so a message that fits two patterns always gets the
earlier label. Messages matching nothing classify as None and are left
out of the histograms.
"""

import re
from typing import NamedTuple, Optional

from models.event import ErrorEvent
from models.stats import ClassifiedError


class ErrorPattern(NamedTuple):
    name: str
    regex: "re.Pattern[str]"


def _p(name: str, pattern: str) -> ErrorPattern:
    return ErrorPattern(name, re.compile(pattern))


# ---------- Default table (order matters) ----------

DEFAULT_PATTERNS: tuple[ErrorPattern, ...] = (
    _p("UnknownCallable", r"Unknown callable '(.*)'"),
    _p("VariableHasNoValue", r"Variable (\S+) has no value"),
    _p("InvalidNumberOfArgs", r"Invalid number of args"),
    _p("CallableMustBeSymbol", r"Callable name must be a symbol"),
    _p("NoSwitchWithID", r"No such switch with ID (\S+) exists"),
    _p("PropellantGenerator", r"Propellant cannot be powered with backup generator"),
    _p("LightGenerator", r"Light cannot be powered with backup generator"),
    _p("NoThrusterWithID", r"No thruster with ID (\S+) exists"),
    _p("ArgumentMustBeOfType", r"Argument (\S+) must be of type (\S+), got (\S+)"),
    _p("TooManyArguments", r"Too many arguments"),
    _p("ArgsMustBeNumbers", r"All arguments to (.) must be numbers"),
)

VARIABLE_HAS_NO_VALUE = "VariableHasNoValue"


class PatternTable:
    """Immutable, ordered set of named error patterns."""

    __slots__ = ("_patterns", "_by_name")

    def __init__(self, patterns=DEFAULT_PATTERNS):
        patterns = tuple(patterns)
        by_name = {}
        for pattern in patterns:
            if pattern.name in by_name:
                raise ValueError(f"duplicate pattern name {pattern.name!r}")
            by_name[pattern.name] = pattern
        self._patterns = patterns
        self._by_name = by_name

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self._patterns)

    def __iter__(self):
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def classify(self, text: str) -> Optional[str]:
        for pattern in self._patterns:
            if pattern.regex.search(text):
                return pattern.name
        return None

    def classify_error(self, error: ErrorEvent) -> ClassifiedError:
        return ClassifiedError(error=error, category=self.classify(error.description))

    def full_match(self, name: str, text: str) -> Optional[str]:
        """Whole substring matched by the named pattern, e.g. 'Variable x has no value'."""
        m = self._by_name[name].regex.search(text)
        return m.group(0) if m else None

    def extract(self, name: str, text: str) -> Optional[str]:
        """First capture group of the named pattern (the variable for VariableHasNoValue)."""
        m = self._by_name[name].regex.search(text)
        if m is None:
            return None
        if m.re.groups == 0:
            return m.group(0)
        return m.group(1)


def default_table() -> PatternTable:
    return PatternTable(DEFAULT_PATTERNS)
