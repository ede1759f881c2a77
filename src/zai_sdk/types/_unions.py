"""Discriminator functions for polymorphic payload fields.

Each function inspects the raw value (a dict while decoding JSON, or a model
instance when one is passed directly) and returns the tag of the variant to
validate against. Unknown ``type`` values are returned unchanged so that
pydantic reports them in its ``union_tag_invalid`` error.
"""

from __future__ import annotations

from typing import Any


def _field(value: Any, name: str) -> Any:
    if isinstance(value, dict):
        return value.get(name)
    return getattr(value, name, None)


def _type_tag(value: Any) -> str | None:
    kind = _field(value, "type")
    if kind is None:
        return None
    return kind if isinstance(kind, str) else str(kind)


def delta_block_tag(value: Any) -> str | None:
    """Assistant delta blocks: ``content`` or ``tools``."""
    return _type_tag(value)


def content_part_tag(value: Any) -> str | None:
    """Message content parts: ``text`` or ``image_url``."""
    return _type_tag(value)


SEARCH_TOOL_FIELDS = ("search_intent", "search_result", "search_recommend")


def search_tool_call_tag(value: Any) -> str | None:
    """Web search tool calls, keyed on ``type`` then on the populated field."""
    kind = _type_tag(value)
    if kind != "web_search":
        return kind
    for name in SEARCH_TOOL_FIELDS:
        if _field(value, name) is not None:
            return name
    return kind
