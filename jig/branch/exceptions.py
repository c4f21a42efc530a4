"""Branch naming exception classes."""


class UsageConflictError(ValueError):
    """Raised when mutually exclusive branch naming modifiers are combined."""

    pass
