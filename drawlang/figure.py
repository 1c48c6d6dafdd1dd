"""Figure history: the drawn commands of one session, with undo and redo."""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from drawlang.core.drawables import Drawable, Shape


@dataclass
class FigureEntry:
    """
    One successfully drawn command.

    Entries live in the arena of a FigureHistory and are addressed by their
    integer handle.
    """

    handle: int
    command: str
    drawables: List[Drawable] = field(default_factory=list)


class FigureHistory:
    """
    Arena of figure entries with an undo cursor.

    Entries below the cursor are visible. Undo moves the cursor back, redo
    moves it forward again, and appending after an undo discards the entries
    that could have been redone.
    """

    def __init__(self):
        self._entries: List[FigureEntry] = []
        self._cursor = 0

    def append(self, command: str, drawables: List[Drawable]) -> int:
        """
        Record a drawn command.

        Args:
            command: The command text as typed.
            drawables: The drawables the command produced.

        Returns:
            The handle of the new entry.
        """
        if self._cursor < len(self._entries):
            logger.debug(f"Discarding {len(self._entries) - self._cursor} redoable entries")
            del self._entries[self._cursor:]

        entry = FigureEntry(handle=len(self._entries), command=command, drawables=list(drawables))
        self._entries.append(entry)
        self._cursor = len(self._entries)
        return entry.handle

    def get(self, handle: int) -> FigureEntry:
        if not 0 <= handle < len(self._entries):
            raise KeyError(f"No figure entry with handle {handle}")
        return self._entries[handle]

    def undo(self) -> Optional[FigureEntry]:
        """Hide the most recent visible entry and return it, or None if there is none."""
        if self._cursor == 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Optional[FigureEntry]:
        """Show the most recently undone entry again and return it, or None if there is none."""
        if self._cursor == len(self._entries):
            return None
        entry = self._entries[self._cursor]
        self._cursor += 1
        return entry

    def entries(self) -> List[FigureEntry]:
        return self._entries[:self._cursor]

    def visible(self) -> List[Drawable]:
        return [d for entry in self.entries() for d in entry.drawables]

    def shapes(self) -> List[Shape]:
        return [shape for d in self.visible() for shape in d.draw()]

    def clear(self) -> None:
        self._entries = []
        self._cursor = 0

    def __len__(self) -> int:
        return self._cursor
