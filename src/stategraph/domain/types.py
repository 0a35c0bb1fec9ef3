"""Entity kinds and the JSON value type used for metadata bags.

The four node kinds mirror the runtime entities a state-management
application exposes to the debugger: stores, components, slices, hooks.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import JsonValue

__all__ = ["JsonValue", "Metadata", "NodeKind"]


class NodeKind(StrEnum):
    """Kinds of runtime entities represented as graph nodes."""

    STORE = "store"
    COMPONENT = "component"
    SLICE = "slice"
    HOOK = "hook"


# Metadata is an open mapping of JSON-serializable values.
Metadata = dict[str, JsonValue]
