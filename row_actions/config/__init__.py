"""Configuration management with Pydantic models."""

from .settings import DEFAULT_CAPABILITY, ActionConfig, RowActionsSettings

__all__ = ["RowActionsSettings", "ActionConfig", "DEFAULT_CAPABILITY"]
