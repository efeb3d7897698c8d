"""Exception types raised by the row actions library."""


class RowActionsError(Exception):
    """Base class for row actions errors."""


class ActionValidationError(RowActionsError):
    """Raised when an action or binding is misconfigured at registration time."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
