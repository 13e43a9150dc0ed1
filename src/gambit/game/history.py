"""Branchable move history with a movable cursor (undo / redo)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.move import Move


class HistoryState(IntEnum):
    """Where the cursor sits relative to the newest recorded node."""

    LIVE = auto()  # cursor at the tail: new moves may be recorded
    REWOUND = auto()  # cursor before the tail: read-only until redone


@dataclass(frozen=True, slots=True)
class HistoryNode:
    """One recorded position and the label of the move that produced it."""

    fen: str
    label: str = ""
    move: Move | None = None


class MoveHistory:
    """Ordered snapshots plus an integer cursor.

    ``nodes[0]`` is the initial position. Recording while rewound discards
    the abandoned future before appending, so there is only ever one line.
    Undo and redo at a boundary return ``None`` and change nothing.
    """

    __slots__ = ("_nodes", "_cursor")

    def __init__(self) -> None:
        self._nodes: list[HistoryNode] = []
        self._cursor = -1

    # ── Mutation ─────────────────────────────────────────────────────────

    def reset(self, fen: str, label: str = "") -> None:
        """Forget everything and start again from *fen*."""
        self._nodes = [HistoryNode(fen, label)]
        self._cursor = 0

    def record(self, fen: str, label: str, move: Move | None = None) -> HistoryNode:
        """Append a new node after the cursor, dropping any redo branch.

        The first node recorded into an empty history becomes its start.
        """
        del self._nodes[self._cursor + 1 :]
        node = HistoryNode(fen, label, move)
        self._nodes.append(node)
        self._cursor = len(self._nodes) - 1
        return node

    def undo(self) -> str | None:
        """Step back one node; ``None`` at the first node."""
        if self._cursor <= 0:
            return None
        self._cursor -= 1
        return self._nodes[self._cursor].fen

    def redo(self) -> str | None:
        """Step forward one node; ``None`` at the tail."""
        if self._cursor >= len(self._nodes) - 1:
            return None
        self._cursor += 1
        return self._nodes[self._cursor].fen

    def seek(self, index: int) -> str | None:
        """Jump straight to node *index*; ``None`` if out of range."""
        if not (0 <= index < len(self._nodes)):
            return None
        self._cursor = index
        return self._nodes[index].fen

    # ── Queries ──────────────────────────────────────────────────────────

    def current(self) -> str:
        return self._current_node().fen

    def current_label(self) -> str:
        return self._current_node().label

    def current_move(self) -> Move | None:
        return self._current_node().move

    @property
    def state(self) -> HistoryState:
        if self._cursor == len(self._nodes) - 1:
            return HistoryState.LIVE
        return HistoryState.REWOUND

    @property
    def is_live(self) -> bool:
        return self.state == HistoryState.LIVE

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def nodes(self) -> tuple[HistoryNode, ...]:
        return tuple(self._nodes)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._nodes) - 1

    def labels(self) -> list[str]:
        """Move labels in order, skipping the initial node."""
        return [node.label for node in self._nodes[1:]]

    def __len__(self) -> int:
        return len(self._nodes)

    def _current_node(self) -> HistoryNode:
        if not self._nodes:
            raise LookupError("History is empty")
        return self._nodes[self._cursor]
