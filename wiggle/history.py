"""
Linear undo/redo over Drawing snapshots.
"""

from typing import Callable, List, Optional

from .drawing import clear_drawing
from .types import Drawing

HistoryListener = Callable[[], None]


class HistoryManager:
    """
    Stack of committed Drawings plus a cursor.

    Every successful commit/undo/redo/clear bumps `revision` exactly once and
    fires the change listener. A refused undo/redo changes nothing.
    """

    def __init__(self, initial: Drawing, on_change: Optional[HistoryListener] = None):
        self._snapshots: List[Drawing] = [initial]
        self._cursor = 0
        self.revision = 0
        self._on_change = on_change

    @property
    def present(self) -> Drawing:
        return self._snapshots[self._cursor]

    def set_change_listener(self, listener: Optional[HistoryListener]):
        self._on_change = listener

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    @property
    def undo_depth(self) -> int:
        return self._cursor

    @property
    def redo_depth(self) -> int:
        return len(self._snapshots) - 1 - self._cursor

    def commit(self, drawing: Drawing):
        # drop the redo tail
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(drawing)
        self._cursor += 1
        self._changed()

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self._cursor -= 1
        self._changed()
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self._cursor += 1
        self._changed()
        return True

    def clear(self):
        self.commit(clear_drawing(self.present))

    def _changed(self):
        self.revision += 1
        if self._on_change is not None:
            self._on_change()
