"""
Exceptions raised by layoutdsl.

Parse errors carry the position of the offending token and a description of
what was expected there, so that callers can point at the source text.
"""

from typing import Optional

from .model import Position


class LayoutError(Exception):
    """Base class for every layoutdsl error."""
    pass


class LayoutParseError(LayoutError):
    """Raised when source text cannot be turned into a Program."""

    def __init__(self, message: str, position: Position, expected: Optional[str] = None):
        self.message = message
        self.position = position
        self.expected = expected
        super().__init__(f"{message} at {position}")


class LayoutSyntaxError(LayoutParseError):
    """The token stream does not match the grammar."""
    pass


class MissingRequiredField(LayoutParseError):
    """A line lacks a mandatory value."""

    def __init__(self, field: str, position: Position):
        self.field = field
        super().__init__(f"Missing required field '{field}'", position, expected=field)


class LayoutExecutionError(LayoutError):
    """Raised when instructions cannot be applied to a job."""
    pass


class UnboundNameError(LayoutExecutionError):
    """An instruction names a value the namespace does not hold."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Name '{name}' is not bound in the namespace")
