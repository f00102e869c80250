"""Boundary errors. The engine itself degrades to neutral defaults instead of raising."""


class GentleStudyError(Exception):
    """Base class for errors raised at the edges of the engine."""
    pass


class RecordError(GentleStudyError):
    """Raised when a stored record cannot be loaded into an engine type."""

    def __init__(self, kind: str, detail: str):
        self.kind = kind
        self.detail = detail
        super().__init__(f"Invalid {kind} record: {detail}")
