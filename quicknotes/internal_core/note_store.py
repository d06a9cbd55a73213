from __future__ import annotations

import logging
from typing import Iterable, Optional

from .contracts import Note
from .errors import NoteNotFoundError
from .ids import Clock, IdFactory, make_note_id, system_clock_ms

logger = logging.getLogger(__name__)

_MAX_ID_ATTEMPTS = 16


class InMemoryNoteStore:
    """Ordered note collection, newest first. Edits never reorder entries."""

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self._clock = clock or system_clock_ms
        self._id_factory = id_factory or make_note_id
        self._notes: list[Note] = []

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return self.index_of(note_id) is not None

    def now(self) -> int:
        return int(self._clock())

    def load(self, notes: Iterable[Note]) -> None:
        """Replace the collection with `notes`, keeping their order."""
        loaded: list[Note] = []
        seen: set[str] = set()
        for note in notes:
            if note.id in seen:
                raise ValueError(f"Duplicate note_id: {note.id}")
            seen.add(note.id)
            loaded.append(note)
        self._notes = loaded

    def _new_id(self, now: int) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            note_id = self._id_factory(now)
            if note_id not in self:
                return note_id
            logger.debug("note id collision on %s, regenerating", note_id)
        raise RuntimeError("Could not generate a unique note id.")

    def create(self, title: str, body: str) -> Note:
        now = self.now()
        note = Note(
            id=self._new_id(now),
            title=title,
            body=body,
            created_at=now,
            updated_at=now,
        )
        self._notes.insert(0, note)
        return note

    def update(self, note_id: str, title: str, body: str) -> Note:
        index = self.index_of(note_id)
        if index is None:
            raise NoteNotFoundError(note_id)
        current = self._notes[index]
        updated = current.model_copy(
            update={
                "title": title,
                "body": body,
                "updated_at": max(self.now(), current.updated_at),
            }
        )
        self._notes[index] = updated
        return updated

    def delete(self, note_id: str) -> bool:
        index = self.index_of(note_id)
        if index is None:
            return False
        del self._notes[index]
        return True

    def find_by_id(self, note_id: str) -> Optional[Note]:
        index = self.index_of(note_id)
        return None if index is None else self._notes[index]

    def index_of(self, note_id: object) -> Optional[int]:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    def list_notes(self) -> list[Note]:
        return list(self._notes)
