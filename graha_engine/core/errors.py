"""
errors.py
=========
Exceptions raised by the Graha engine.

Everything the engine raises on bad input derives from ``GrahaError`` so the
API layer can map it to a single ``{"error": ...}`` envelope.
"""


class GrahaError(Exception):
    """Base class for engine errors."""

    status_code = 400


class InvalidTimestamp(GrahaError, ValueError):
    """Unparseable date/time input, or an instant ordering that makes no sense."""


class MissingRequiredField(GrahaError):
    """A required request field (e.g. birth date) was not supplied."""

    def __init__(self, field: str, hint: str = ""):
        self.field = field
        super().__init__(hint or f"Missing required field: {field}")


class IndexOutOfRange(GrahaError, IndexError):
    """A degree or table index fell outside its fixed range."""

    status_code = 500
