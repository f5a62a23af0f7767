# AgentSync Exceptions
# Root of the engine's error taxonomy

from typing import Any


class AgentSyncError(Exception):
    """
    Base class for every error raised by the sync engine.

    Subclasses keep their structured context as attributes so callers can
    build their own messages without re-deriving state.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(message)

    @property
    def kind(self) -> str:
        """Short machine-friendly error kind, e.g. ``source_missing``."""
        name = type(self).__name__.removesuffix("Error")
        chars: list[str] = []
        for i, ch in enumerate(name):
            if ch.isupper() and i > 0:
                chars.append("_")
            chars.append(ch.lower())
        return "".join(chars)
