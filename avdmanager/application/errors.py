"""Error types raised by use cases.

All of them subclass :class:`ValueError` so callers that only care about
"the request was rejected" can keep catching ``ValueError``.
"""


class NotFoundError(ValueError):
    """A requested or referenced entity does not exist."""


class ConflictError(ValueError):
    """The request collides with existing data (uniqueness, references)."""


class InvalidStatusTransitionError(ValueError):
    """A template status change is not allowed by the workflow."""


__all__ = ["ConflictError", "InvalidStatusTransitionError", "NotFoundError"]
