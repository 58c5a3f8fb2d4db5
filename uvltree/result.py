"""
Results that carry diagnostics.

A ``Result`` either holds a value or is empty; in both cases it keeps the
list of problems collected while computing it.
"""

from enum import Enum


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Problem:
    """A diagnostic message."""

    def __init__(self, message, severity=Severity.ERROR):
        self.message = message
        self.severity = severity

    def __eq__(self, other):
        if not isinstance(other, Problem):
            return NotImplemented
        return self.message == other.message and self.severity == other.severity

    def __hash__(self):
        return hash((self.message, self.severity))

    def __repr__(self):
        return f"Problem({self.message!r}, {self.severity.name})"

    def __str__(self):
        return f"{self.severity.value}: {self.message}"


class Result:
    """An optional value together with the problems found while computing it."""

    def __init__(self, value=None, problems=None):
        self._value = value
        self.problems = list(problems) if problems else []

    @classmethod
    def of(cls, value, problems=None):
        if value is None:
            raise ValueError("Result.of requires a value, use Result.empty instead")
        return cls(value, problems)

    @classmethod
    def empty(cls, problems=None):
        return cls(None, problems)

    def is_present(self):
        return self._value is not None

    def is_empty(self):
        return self._value is None

    def has_problems(self):
        return bool(self.problems)

    def get(self):
        """Return the value, raising ValueError with the problems if there is none."""
        if self._value is None:
            details = "; ".join(str(problem) for problem in self.problems)
            raise ValueError(f"Result is empty: {details}" if details else "Result is empty")
        return self._value

    def or_else(self, default):
        return default if self._value is None else self._value

    def __bool__(self):
        return self.is_present()

    def __repr__(self):
        return f"Result({self._value!r}, problems={self.problems!r})"
