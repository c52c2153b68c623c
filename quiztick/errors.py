"""Error taxonomy for QuizTick.

None of these are fatal.  Each is raised at the call site that triggered
it and leaves the countdown exactly as it was.
"""


class QuizTickError(Exception):
    """Base class for every QuizTick error."""


class InvalidInput(QuizTickError, ValueError):
    """User-entered text could not be used (empty / non-numeric mark count)."""


class InvalidConfiguration(QuizTickError, ValueError):
    """A subject or custom timing cannot produce a positive per-mark duration."""


class ResourceUnavailable(QuizTickError):
    """An audio cue asset is missing or cannot be played."""
