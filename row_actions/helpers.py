"""Helpers for common row action callbacks."""

from typing import Any

from .actions.links import add_query_arg
from .host.base import Host

# Attachments share the post metadata namespace
_META_TYPES = {"attachment": "post"}


def _meta_type(object_type: str) -> str:
    return _META_TYPES.get(object_type, object_type)


def toggle_label(
    host: Host,
    object_type: str,
    object_id: int,
    meta_key: str,
    active_label: str,
    inactive_label: str,
) -> str:
    """Pick a label depending on whether a metadata flag is set.

    Args:
        host: Host providing the metadata store
        object_type: Object type (post, attachment, comment, user, term)
        object_id: Object ID
        meta_key: Metadata key holding the flag
        active_label: Label when the flag is set, e.g. "Unfeature"
        inactive_label: Label when the flag is unset, e.g. "Mark Featured"

    Returns:
        The matching label
    """
    is_active = host.get_meta(_meta_type(object_type), object_id, meta_key)
    return active_label if is_active else inactive_label


def toggle_meta(host: Host, object_type: str, object_id: int, meta_key: str) -> bool:
    """Flip a metadata flag and return its new value."""
    meta_type = _meta_type(object_type)
    new_status = not host.get_meta(meta_type, object_id, meta_key)
    host.update_meta(meta_type, object_id, meta_key, new_status)
    return new_status


def ajax_url(host: Host, action: str, object_id: int, **args: Any) -> str:
    """Admin async URL for a custom action, signed for that action and object.

    The token is created for ``"{action}_{object_id}"``.
    """
    query = {
        "action": action,
        "id": object_id,
        "nonce": host.create_nonce(f"{action}_{object_id}"),
        **args,
    }

    url = host.admin_url("admin-ajax")
    for name, value in query.items():
        url = add_query_arg(url, name, value)
    return url
