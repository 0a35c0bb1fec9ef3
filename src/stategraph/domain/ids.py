"""Sequential id generation for graph nodes and edges.

Node ids are ``node_<n>`` and edge ids ``edge_<n>``, each drawn from its own
counter starting at 0.

INVARIANT: Ids are never reused within a live graph. Counters only move
forward, including across ``clear()`` and after importing a snapshot.
"""

from __future__ import annotations

import re

NODE_PREFIX = "node_"
EDGE_PREFIX = "edge_"


class IdSequence:
    """Monotonic id allocator for one prefix.

    Usage::

        seq = IdSequence("node_")
        seq.next()  # "node_0"
        seq.observe("node_41")
        seq.next()  # "node_42"
    """

    def __init__(self, prefix: str, start: int = 0) -> None:
        self._prefix = prefix
        self._next = start
        self._pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def upcoming(self) -> str:
        """The id the next call to :meth:`next` will return."""
        return f"{self._prefix}{self._next}"

    def next(self) -> str:
        """Claim the next id."""
        value = self.upcoming
        self._next += 1
        return value

    def observe(self, existing_id: str) -> None:
        """Advance the counter past *existing_id* if it uses this prefix.

        Ids that do not match ``{prefix}<digits>`` are ignored; they can
        never collide with generated ids.
        """
        match = self._pattern.match(existing_id)
        if match is None:
            return
        self._next = max(self._next, int(match.group(1)) + 1)
