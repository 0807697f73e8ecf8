"""Error types raised by a texen run."""

from __future__ import annotations

# Appended to every rewrapped generation failure.
ERR_MSG_FRAGMENT = (
    ". For more information consult the log, or run texen with the --verbose flag."
)


class TexenError(Exception):
    """Base class for failures reported by a texen run."""


class ConfigurationError(TexenError):
    """Raised when a required setting is missing or invalid."""


class GenerationError(TexenError):
    """Raised when rendering or writing the output fails."""

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f"{category}{ERR_MSG_FRAGMENT}")
