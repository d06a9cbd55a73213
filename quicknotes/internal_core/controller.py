from __future__ import annotations

"""
Single owner of the note collection and the editor pane.

Design intent:
- Every command runs to completion and moves collection and editor together.
- Failures raise before anything is mutated; callers retry from unchanged state.
- Only immutable snapshots leave the controller.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from . import editor
from .audit import AuditTrail, log_event
from .config import AppConfig
from .contracts import AuditEvent, EditorState, Note
from .errors import NoteNotFoundError, NoteValidationError, StaleSelectionError
from .ids import Clock, IdFactory
from .note_store import InMemoryNoteStore
from .validation import effective_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    note: Note
    editor: EditorState
    created: bool


@dataclass(frozen=True)
class DeleteResult:
    removed: bool
    editor: EditorState


class NoteController:
    def __init__(
        self,
        store: Optional[InMemoryNoteStore] = None,
        *,
        notes: Iterable[Note] = (),
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        audit_max_events: int = 500,
    ) -> None:
        self._store = store if store is not None else InMemoryNoteStore(clock=clock, id_factory=id_factory)
        seeded = list(notes)
        if seeded:
            self._store.load(seeded)
        self._audit = AuditTrail(max_events=audit_max_events)
        self._editor = editor.initial_state(self._store.list_notes())
        log_event(
            self._audit,
            "SESSION_STARTED",
            "session_started",
            detail=f"notes={len(self._store)} mode={self._editor.mode.kind}",
            note_id=self._editor.selected_id,
        )

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> "NoteController":
        store = InMemoryNoteStore(clock=clock, id_factory=id_factory)
        if config.QUICKNOTES_SEED_WELCOME:
            store.create(config.QUICKNOTES_WELCOME_TITLE, config.QUICKNOTES_WELCOME_BODY)
        return cls(store, audit_max_events=config.QUICKNOTES_AUDIT_MAX_EVENTS)

    # Queries

    def list_notes(self) -> list[Note]:
        return self._store.list_notes()

    def get_note(self, note_id: str) -> Optional[Note]:
        return self._store.find_by_id(note_id)

    def get_editor_state(self) -> EditorState:
        return self._editor

    def get_selected_note(self) -> Optional[Note]:
        selected_id = self._editor.selected_id
        if selected_id is None:
            return None
        return self._store.find_by_id(selected_id)

    def audit_events(self) -> list[AuditEvent]:
        return self._audit.events()

    # Commands

    def start_create(self) -> EditorState:
        self._editor = editor.start_create()
        return self._editor

    def select_note(self, note_id: str) -> EditorState:
        note = self._store.find_by_id(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        previous = self._editor.selected_id
        self._editor = editor.select_note(note)
        if previous != note.id:
            log_event(self._audit, "SELECTION_CHANGED", "selected", note_id=note.id)
        return self._editor

    def start_edit_selected(self) -> EditorState:
        self._editor = editor.start_edit_selected(self._editor, self.get_selected_note())
        return self._editor

    def reset_to_selected(self) -> EditorState:
        self._editor = editor.reset_to_selected(self._editor, self.get_selected_note())
        return self._editor

    def set_title_draft(self, text: str) -> EditorState:
        self._editor = editor.with_title_draft(self._editor, text)
        return self._editor

    def set_body_draft(self, text: str) -> EditorState:
        self._editor = editor.with_body_draft(self._editor, text)
        return self._editor

    def save(self) -> SaveResult:
        state = self._editor
        try:
            title, body = effective_fields(state.title_draft, state.body_draft)
        except NoteValidationError as exc:
            logger.warning("save rejected code=%s mode=%s", exc.code, state.mode.kind)
            log_event(self._audit, "SAVE_REJECTED", exc.code, note_id=state.selected_id)
            raise

        selected_id = state.selected_id
        if selected_id is None:
            note = self._store.create(title, body)
            self._editor = editor.after_save(note)
            logger.info("note created note_id=%s notes=%d", note.id, len(self._store))
            log_event(self._audit, "NOTE_CREATED", "created", detail=f"title_len={len(title)}", note_id=note.id)
            return SaveResult(note=note, editor=self._editor, created=True)

        if selected_id not in self._store:
            exc = StaleSelectionError(selected_id)
            logger.warning("save rejected code=%s note_id=%s", exc.code, selected_id)
            log_event(self._audit, "SAVE_REJECTED", exc.code, note_id=selected_id)
            raise exc

        note = self._store.update(selected_id, title, body)
        self._editor = editor.after_save(note)
        logger.info("note updated note_id=%s", note.id)
        log_event(self._audit, "NOTE_UPDATED", "updated", detail=f"title_len={len(title)}", note_id=note.id)
        return SaveResult(note=note, editor=self._editor, created=False)

    def delete_note(self, note_id: str) -> DeleteResult:
        removed = self._store.delete(note_id)
        if not removed:
            return DeleteResult(removed=False, editor=self._editor)

        was_selected = self._editor.selected_id == note_id
        self._editor = editor.after_delete(self._editor, note_id, self._store.list_notes())
        logger.info("note deleted note_id=%s was_selected=%s notes=%d", note_id, was_selected, len(self._store))
        log_event(
            self._audit,
            "NOTE_DELETED",
            "deleted",
            detail=f"was_selected={was_selected} next={self._editor.selected_id or 'create'}",
            note_id=note_id,
        )
        return DeleteResult(removed=True, editor=self._editor)
