"""Positional insertion helpers for insertion-ordered mappings."""

from typing import Any, Mapping


def _remaining(mapping: Mapping[str, Any], new: Mapping[str, Any]) -> list[tuple[str, Any]]:
    # Keys being inserted move to the insertion point
    return [(key, value) for key, value in mapping.items() if key not in new]


def insert_after(
    mapping: Mapping[str, Any], key: str, new: Mapping[str, Any]
) -> dict[str, Any]:
    """Insert entries right after ``key``.

    Args:
        mapping: The original mapping
        key: Reference key to insert after
        new: Entries to insert

    Returns:
        A new dict. When ``key`` is missing the entries are appended.
    """
    items = _remaining(mapping, new)
    keys = [k for k, _ in items]
    position = keys.index(key) + 1 if key in keys else len(items)
    return dict(items[:position] + list(new.items()) + items[position:])


def insert_before(
    mapping: Mapping[str, Any], key: str, new: Mapping[str, Any]
) -> dict[str, Any]:
    """Insert entries right before ``key``.

    Args:
        mapping: The original mapping
        key: Reference key to insert before
        new: Entries to insert

    Returns:
        A new dict. When ``key`` is missing the entries are prepended.
    """
    items = _remaining(mapping, new)
    keys = [k for k, _ in items]
    position = keys.index(key) if key in keys else 0
    return dict(items[:position] + list(new.items()) + items[position:])
