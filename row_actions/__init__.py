"""Custom row actions for admin listings."""

from .app import RowActions
from .config import ActionConfig, RowActionsSettings
from .exceptions import ActionValidationError, RowActionsError
from .host import CurrentUser, Host, LocalHost

__version__ = "1.0.0"

__all__ = [
    "RowActions",
    "RowActionsSettings",
    "ActionConfig",
    "Host",
    "LocalHost",
    "CurrentUser",
    "RowActionsError",
    "ActionValidationError",
]
