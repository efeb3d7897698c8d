"""Pytest configuration and fixtures for row actions tests."""

from types import SimpleNamespace

import pytest

from row_actions import CurrentUser, LocalHost, RowActions, RowActionsSettings
from row_actions.actions import ActionDispatcher, ActionRegistry, AsyncActionHandler

FIXED_TIME = 1_700_000_000.0


@pytest.fixture
def settings():
    """Provide test settings."""
    return RowActionsSettings(
        log_level="DEBUG",
        nonce_secret="test-secret-0123456789abcdef",
        nonce_lifetime=86400,
        metrics_enabled=True,
    )


@pytest.fixture
def admin_user():
    """Provide a user holding the administrative capability."""
    return CurrentUser(id=1, capabilities={"manage_options", "edit_posts"})


@pytest.fixture
def editor_user():
    """Provide a user without the administrative capability."""
    return CurrentUser(id=2, capabilities={"edit_posts"})


@pytest.fixture
def host(settings, admin_user):
    """Provide a local host with a fixed clock, running as the admin user."""
    return LocalHost(
        secret=settings.nonce_secret,
        nonce_lifetime=settings.nonce_lifetime,
        user=admin_user,
        clock=lambda: FIXED_TIME,
    )


@pytest.fixture
def registry():
    """Provide an isolated action registry."""
    return ActionRegistry()


@pytest.fixture
def dispatcher(registry, host, settings):
    """Provide a dispatcher over the isolated registry."""
    return ActionDispatcher(registry, host, settings)


@pytest.fixture
def handler(registry, dispatcher, settings):
    """Provide an async action handler over the isolated registry."""
    return AsyncActionHandler(registry, dispatcher, settings)


@pytest.fixture
def row_actions(host, settings):
    """Provide a row actions root bound to the local host."""
    return RowActions(host, settings)


@pytest.fixture
def host_actions():
    """Provide the default actions a host renders for a post row."""
    return {
        "edit": '<a href="/post.php?post=7&amp;action=edit">Edit</a>',
        "inline hide-if-no-js": '<button type="button">Quick&nbsp;Edit</button>',
        "trash": '<a href="/post.php?post=7&amp;action=trash">Trash</a>',
        "view": '<a href="/?p=7">View</a>',
    }


@pytest.fixture
def post_row():
    """Provide a host post row object."""
    return SimpleNamespace(id=7, title="Hello world", status="publish")
