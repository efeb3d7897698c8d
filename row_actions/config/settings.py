"""Configuration models using Pydantic."""

import secrets
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


DEFAULT_CAPABILITY = "manage_options"


class ActionConfig(BaseModel):
    """Configuration for a single row action as supplied by the integrator."""

    label: str = Field(
        default="",
        description="Static link label"
    )
    label_callback: Optional[Callable[[int], str]] = Field(
        default=None,
        description="Computes the label from the object ID; wins over label"
    )
    url: str = Field(
        default="",
        description="Static URL; the object ID is appended as a query argument"
    )
    url_callback: Optional[Callable[[int], str]] = Field(
        default=None,
        description="Computes the URL from the object ID"
    )
    ajax: bool = Field(
        default=False,
        description="Run the callback asynchronously instead of linking to a URL"
    )
    callback: Optional[Callable[..., Any]] = Field(
        default=None,
        description="Async callback receiving (object_id, options)"
    )
    position: str = Field(
        default="",
        description="Empty to append, or 'after:<key>' / 'before:<key>'"
    )
    permission_callback: Optional[Callable[[int], bool]] = Field(
        default=None,
        description="Extra per-object permission check"
    )
    capability: Optional[str] = Field(
        default=DEFAULT_CAPABILITY,
        description="Capability required to see and run the action; None disables the check"
    )
    confirm: str = Field(
        default="",
        description="Confirmation prompt shown before an async action runs"
    )
    css_class: str = Field(
        default="",
        alias="class",
        description="Extra CSS class for the link"
    )
    link_target: str = Field(
        default="",
        alias="target",
        description="Link target attribute, e.g. _blank"
    )
    icon: str = Field(
        default="",
        description="Icon name rendered before the label"
    )

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        extra = "forbid"


class RowActionsSettings(BaseSettings):
    """Global row actions configuration settings."""

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log format (json, plain)"
    )

    # Registration defaults
    default_capability: str = Field(
        default=DEFAULT_CAPABILITY,
        min_length=1,
        description="Capability required by actions that do not set one"
    )

    # Rendering configuration
    trigger_class: str = Field(
        default="row-action-ajax",
        min_length=1,
        description="CSS class marking async action links"
    )
    icon_class_prefix: str = Field(
        default="dashicons dashicons-",
        description="CSS class prefix for action icons"
    )
    object_id_param: str = Field(
        default="id",
        min_length=1,
        description="Query argument carrying the object ID on static URLs"
    )

    # Security token configuration
    nonce_field: str = Field(
        default="_nonce",
        min_length=1,
        description="Request parameter carrying the security token"
    )
    nonce_secret: str = Field(
        default_factory=lambda: secrets.token_hex(32),
        min_length=16,
        description="Secret used by the local host to sign tokens"
    )
    nonce_lifetime: int = Field(
        default=86400,
        ge=60,
        le=604800,
        description="Security token lifetime in seconds"
    )

    # Async endpoint configuration
    ajax_path: str = Field(
        default="/admin-ajax",
        description="Path of the async action endpoint"
    )
    server_host: str = Field(
        default="127.0.0.1",
        description="Address the async action server binds to"
    )
    server_port: int = Field(
        default=8080,
        ge=1024,
        le=65535,
        description="Port for the async action server"
    )

    # Metrics configuration
    metrics_enabled: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics"
    )

    # Integration
    actions_module: Optional[str] = Field(
        default=None,
        description="Dotted module path whose configure(row_actions) registers actions"
    )

    # Client assets
    asset_handle: str = Field(
        default="row-actions-ajax",
        description="Handle of the client script enqueued for async actions"
    )
    asset_version: str = Field(
        default="1.0.0",
        description="Client script version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode; busts the client script cache on every load"
    )

    class Config:
        """Pydantic configuration."""
        env_prefix = "ROW_ACTIONS_"
        case_sensitive = False
        validate_assignment = True
