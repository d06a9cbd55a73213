from __future__ import annotations

"""
Editor pane state machine.

Design intent:
- Transitions are pure: each takes the current state (plus whatever notes it
  needs) and returns a new frozen EditorState.
- Lookups stay in the controller; these functions never touch the collection.
"""

from typing import Optional, Sequence

from .contracts import CreateMode, EditMode, EditorState, Note


def start_create() -> EditorState:
    return EditorState(mode=CreateMode(), title_draft="", body_draft="")


def select_note(note: Note) -> EditorState:
    return EditorState(mode=EditMode(note_id=note.id), title_draft=note.title, body_draft=note.body)


def initial_state(notes: Sequence[Note]) -> EditorState:
    if notes:
        return select_note(notes[0])
    return start_create()


def start_edit_selected(state: EditorState, note: Optional[Note]) -> EditorState:
    """Re-sync drafts with the stored note; a no-op outside Edit mode."""
    if not state.is_edit or note is None or note.id != state.selected_id:
        return state
    return select_note(note)


def reset_to_selected(state: EditorState, note: Optional[Note]) -> EditorState:
    # A missing or stale selection falls back to a blank new note.
    if state.selected_id is None or note is None or note.id != state.selected_id:
        return start_create()
    return select_note(note)


def with_title_draft(state: EditorState, text: str) -> EditorState:
    return state.model_copy(update={"title_draft": text})


def with_body_draft(state: EditorState, text: str) -> EditorState:
    return state.model_copy(update={"body_draft": text})


def after_save(note: Note) -> EditorState:
    return select_note(note)


def after_delete(state: EditorState, deleted_id: str, remaining: Sequence[Note]) -> EditorState:
    """Re-derive the editor once `deleted_id` has left the collection.

    Only a deletion of the selected note moves the editor: it binds to the
    first remaining note in collection order, or drops to Create when none are
    left. Deleting any other note leaves drafts untouched.
    """
    if state.selected_id is None or state.selected_id != deleted_id:
        return state
    for note in remaining:
        if note.id != deleted_id:
            return select_note(note)
    return start_create()
