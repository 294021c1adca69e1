"""Bounded undo/redo history of cabinet snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_CONSTANTS
from .entities import CabinetState


@dataclass(frozen=True)
class HistoryInfo:
    """Summary of the history for enabling undo/redo controls."""

    can_undo: bool
    can_redo: bool
    length: int
    index: int


class HistoryManager:
    """Linear undo/redo stack of deep-cloned cabinet states.

    The cursor is -1 when the history is empty and otherwise points at the
    snapshot matching the current state. Pushing after an undo discards every
    snapshot beyond the cursor.
    """

    def __init__(self, max_size: int = DEFAULT_CONSTANTS.max_history) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._history: list[CabinetState] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._history)

    @property
    def index(self) -> int:
        return self._index

    def push(self, state: CabinetState) -> None:
        """Record a new state, dropping any redo branch."""
        del self._history[self._index + 1 :]
        self._history.append(state.clone())

        # When full, evict the oldest entry; the cursor stays on the new tip
        if len(self._history) > self.max_size:
            del self._history[0]
        else:
            self._index += 1

    def undo(self) -> CabinetState | None:
        """Step back and return the restored state, or None at the start."""
        if not self.can_undo():
            return None
        self._index -= 1
        return self._history[self._index].clone()

    def redo(self) -> CabinetState | None:
        """Step forward and return the restored state, or None at the tip."""
        if not self.can_redo():
            return None
        self._index += 1
        return self._history[self._index].clone()

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._history) - 1

    def current(self) -> CabinetState | None:
        """Clone of the state under the cursor."""
        if self._index < 0:
            return None
        return self._history[self._index].clone()

    def clear(self) -> None:
        self._history.clear()
        self._index = -1

    def info(self) -> HistoryInfo:
        return HistoryInfo(
            can_undo=self.can_undo(),
            can_redo=self.can_redo(),
            length=len(self._history),
            index=self._index,
        )
