"""Integration tests for the complete row action workflow."""

import re
import sys
import types

import pytest
from aiohttp import test_utils

from row_actions import LocalHost, RowActions
from row_actions.helpers import toggle_label, toggle_meta
from row_actions.main import create_server, load_actions
from row_actions.utils.server import AsyncActionServer


NONCE_PATTERN = re.compile(r'data-nonce="([^"]+)"')


def configure(row_actions):
    """Register a featured toggle the way an integrator module would."""
    host = row_actions.host

    def feature(object_id, options):
        featured = toggle_meta(host, "post", object_id, "_featured")
        return {
            "message": "Post featured" if featured else "Post unfeatured",
            "new_label": toggle_label(host, "post", object_id, "_featured", "Unfeature", "Feature"),
        }

    def explode(object_id, options):
        raise RuntimeError("Feature service unavailable")

    row_actions.register_post_row_actions(
        ["post", "page"],
        {
            "feature": {
                "label_callback": lambda object_id: toggle_label(
                    host, "post", object_id, "_featured", "Unfeature", "Feature"
                ),
                "ajax": True,
                "callback": feature,
                "position": "after:edit",
                "icon": "star-filled",
            },
            "explode": {"label": "Explode", "ajax": True, "callback": explode},
            "dup": {"label": "Duplicate", "url": "/admin.php?action=dup"},
        },
        keys_to_remove=["view"],
    )


@pytest.fixture
def actions_module(monkeypatch):
    """Provide an importable integrator module."""
    module = types.ModuleType("site_row_actions")
    module.configure = configure
    monkeypatch.setitem(sys.modules, "site_row_actions", module)
    return module


@pytest.fixture
def active_row_actions(host, settings, actions_module):
    """Provide activated row actions loaded from the integrator module."""
    row_actions = RowActions(host, settings)
    load_actions(row_actions, "site_row_actions")
    row_actions.activate()
    return row_actions


@pytest.fixture
async def client(host, settings, active_row_actions):
    """Provide an HTTP client for the async endpoint."""
    server = AsyncActionServer(host, ajax_path=settings.ajax_path)
    async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
        yield client


def rendered_nonce(host, key, row, subtype="post"):
    actions = host.apply_filters(f"{subtype}_row_actions", {}, row)
    return NONCE_PATTERN.search(actions[key]).group(1)


def request_form(key, object_id, nonce, subtype="post"):
    return {
        "action": f"row_action_post_{subtype}",
        "action_key": key,
        "object_id": str(object_id),
        "_nonce": nonce,
    }


class TestRendering:
    """Test listing output through the host filter."""

    def test_listing(self, host, active_row_actions, host_actions, post_row):
        actions = host.apply_filters("post_row_actions", host_actions, post_row)

        assert list(actions) == ["edit", "feature", "inline hide-if-no-js", "trash", "explode", "dup"]
        assert 'class="dashicons dashicons-star-filled"' in actions["feature"]
        assert actions["feature"].endswith("</span> Feature</a>")
        assert 'href="/admin.php?action=dup&amp;id=7"' in actions["dup"]

    def test_assets(self, host, active_row_actions):
        host.do_action("admin_enqueue_scripts", "edit.php")

        config = host.enqueued_scripts["row-actions-ajax"].config
        assert config["ajaxUrl"] == "http://localhost/admin/admin-ajax"
        assert config["nonceField"] == "_nonce"


class TestAsyncEndpoint:
    """Test the HTTP round trip of async actions."""

    @pytest.mark.asyncio
    async def test_round_trip(self, client, host, post_row):
        """Test a rendered token authorizes exactly its own action and object."""
        nonce = rendered_nonce(host, "feature", post_row)

        response = await client.post("/admin-ajax", data=request_form("feature", 7, nonce))

        assert response.status == 200
        assert await response.json() == {
            "success": True,
            "data": {"message": "Post featured", "new_label": "Unfeature"},
        }
        assert host.get_meta("post", 7, "_featured") is True

        # Label follows the stored flag on the next render
        actions = host.apply_filters("post_row_actions", {}, post_row)
        assert actions["feature"].endswith("Unfeature</a>")

    @pytest.mark.asyncio
    async def test_json_body(self, client, host, post_row):
        nonce = rendered_nonce(host, "feature", post_row)

        response = await client.post("/admin-ajax", json=request_form("feature", 7, nonce))

        assert response.status == 200
        assert (await response.json())["success"] is True

    @pytest.mark.asyncio
    async def test_json_non_finite_object_id(self, client, host):
        """Test NaN and Infinity literals in a JSON body get a JSON envelope."""
        for literal in ("NaN", "Infinity", "1e999"):
            body = (
                '{"action": "row_action_post_post", "action_key": "feature",'
                f' "object_id": {literal}, "_nonce": "x"}}'
            )

            response = await client.post(
                "/admin-ajax", data=body, headers={"Content-Type": "application/json"}
            )

            assert response.status == 403
            assert await response.json() == {
                "success": False,
                "data": {"message": "Invalid security token"},
            }

    @pytest.mark.asyncio
    async def test_replay_on_other_object(self, client, host, post_row):
        nonce = rendered_nonce(host, "feature", post_row)

        response = await client.post("/admin-ajax", data=request_form("feature", 8, nonce))

        assert response.status == 403
        assert await response.json() == {
            "success": False,
            "data": {"message": "Invalid security token"},
        }
        assert host.get_meta("post", 8, "_featured") is None

    @pytest.mark.asyncio
    async def test_replay_on_other_subtype(self, client, host, post_row):
        """Test a token rendered for posts does not work on pages."""
        nonce = rendered_nonce(host, "feature", post_row)

        response = await client.post(
            "/admin-ajax", data=request_form("feature", 7, nonce, subtype="page")
        )

        assert response.status == 403

    @pytest.mark.asyncio
    async def test_insufficient_permissions(self, client, host, post_row, editor_user):
        """Test users without the capability are refused even with a fresh token."""
        host.set_current_user(editor_user)
        nonce = host.create_nonce("row_action_post_post_feature_7")

        response = await client.post("/admin-ajax", data=request_form("feature", 7, nonce))

        assert response.status == 403
        assert (await response.json())["data"] == {"message": "Insufficient permissions"}

    @pytest.mark.asyncio
    async def test_callback_error(self, client, host, post_row):
        nonce = rendered_nonce(host, "explode", post_row)

        response = await client.post("/admin-ajax", data=request_form("explode", 7, nonce))

        assert response.status == 500
        assert (await response.json())["data"] == {"message": "Feature service unavailable"}

    @pytest.mark.asyncio
    async def test_invalid_action(self, client, host):
        response = await client.post("/admin-ajax", data=request_form("missing", 7, "x"))

        assert response.status == 400
        assert (await response.json())["data"] == {"message": "Invalid action"}

    @pytest.mark.asyncio
    async def test_unknown_hook(self, client):
        response = await client.post("/admin-ajax", data={"action": "row_action_user_user"})

        assert response.status == 400
        assert (await response.json())["data"] == {"message": "Unknown action"}

    @pytest.mark.asyncio
    async def test_metrics(self, client, host, post_row):
        nonce = rendered_nonce(host, "feature", post_row)
        await client.post("/admin-ajax", data=request_form("feature", 7, nonce))

        response = await client.get("/metrics")

        assert response.status == 200
        body = await response.text()
        assert "row_actions_async_requests_total" in body
        assert "row_actions_rendered_total" in body


class TestCreateServer:
    """Test building the server from settings."""

    def test_create_server(self, settings, actions_module):
        settings.actions_module = "site_row_actions"

        server = create_server(settings)

        assert server.host.has_ajax_handler("row_action_post_post")
        assert server.host.has_ajax_handler("row_action_post_page")
        assert server.port == settings.server_port

    def test_module_without_configure(self, settings, monkeypatch):
        monkeypatch.setitem(sys.modules, "empty_row_actions", types.ModuleType("empty_row_actions"))

        with pytest.raises(AttributeError, match="configure"):
            load_actions(RowActions(LocalHost(secret=settings.nonce_secret), settings), "empty_row_actions")
