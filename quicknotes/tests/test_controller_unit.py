import pytest

from quicknotes.internal_core.config import load_config
from quicknotes.internal_core.contracts import EditMode, Note
from quicknotes.internal_core.controller import NoteController
from quicknotes.internal_core.errors import (
    NoteNotFoundError,
    NoteValidationError,
    StaleSelectionError,
)
from quicknotes.internal_core.note_store import InMemoryNoteStore


class _FakeClock:
    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


def _controller(*titles: str) -> NoteController:
    counter = {"n": 0}

    def ids(now_ms: int) -> str:
        counter["n"] += 1
        return f"id{counter['n']}"

    notes = [
        Note(id=title.lower(), title=title, body=f"{title} body", created_at=1, updated_at=1)
        for title in titles
    ]
    return NoteController(notes=notes, clock=_FakeClock(), id_factory=ids)


def test_initial_state_selects_first_seeded_note() -> None:
    controller = _controller("A", "B")
    state = controller.get_editor_state()
    assert state.mode == EditMode(note_id="a")
    assert controller.get_selected_note().title == "A"


def test_initial_state_without_notes_is_create() -> None:
    controller = _controller()
    assert controller.get_editor_state().is_create
    assert controller.get_selected_note() is None


def test_save_rejects_blank_drafts_and_preserves_them() -> None:
    controller = _controller()
    controller.set_title_draft("")
    controller.set_body_draft("   ")

    with pytest.raises(NoteValidationError) as excinfo:
        controller.save()

    assert str(excinfo.value) == "empty note"
    assert excinfo.value.code == "empty_note"
    assert controller.list_notes() == []
    assert controller.get_editor_state().body_draft == "   "
    assert controller.audit_events()[-1].type == "SAVE_REJECTED"


def test_save_in_create_mode_defaults_title_to_untitled() -> None:
    controller = _controller()
    controller.set_body_draft("hello")
    result = controller.save()
    assert result.created is True
    assert result.note.title == "Untitled"
    assert result.note.body == "hello"


def test_save_in_create_mode_hands_off_to_edit() -> None:
    controller = _controller("A")
    controller.start_create()
    controller.set_title_draft("  Groceries ")
    controller.set_body_draft(" milk\n")
    result = controller.save()

    state = controller.get_editor_state()
    assert state.mode == EditMode(note_id=result.note.id)
    assert (state.title_draft, state.body_draft) == ("Groceries", "milk")
    assert controller.list_notes()[0].id == result.note.id
    assert result.editor == state


def test_save_in_edit_mode_updates_selected_note_in_place() -> None:
    controller = _controller("A", "B", "C")
    controller.select_note("b")
    controller.set_title_draft("B2")
    result = controller.save()

    assert result.created is False
    assert [note.id for note in controller.list_notes()] == ["a", "b", "c"]
    assert controller.get_note("b").title == "B2"
    assert controller.get_note("a").title == "A"
    assert controller.get_note("c").title == "C"
    assert controller.get_editor_state().selected_id == "b"


def test_select_then_save_round_trip_only_advances_updated_at() -> None:
    controller = _controller("A", "B")
    before = controller.get_note("b")
    controller.select_note("b")
    result = controller.save()

    assert (result.note.title, result.note.body) == (before.title, before.body)
    assert result.note.created_at == before.created_at
    assert result.note.updated_at >= before.updated_at


def test_save_with_stale_selection_raises_and_keeps_drafts() -> None:
    store = InMemoryNoteStore(clock=_FakeClock())
    controller = NoteController(store)
    controller.set_title_draft("Draft")
    note = controller.save().note
    controller.set_body_draft("more text")
    store.delete(note.id)

    with pytest.raises(StaleSelectionError) as excinfo:
        controller.save()

    assert excinfo.value.note_id == note.id
    state = controller.get_editor_state()
    assert state.selected_id == note.id
    assert state.body_draft == "more text"
    assert controller.list_notes() == []


def test_select_unknown_note_raises_without_state_change() -> None:
    controller = _controller("A")
    controller.set_title_draft("wip")
    before = controller.get_editor_state()
    with pytest.raises(NoteNotFoundError):
        controller.select_note("missing")
    assert controller.get_editor_state() == before


def test_delete_selected_note_moves_selection_to_remaining_note() -> None:
    controller = _controller("A", "B", "C")
    controller.select_note("b")
    result = controller.delete_note("b")

    assert result.removed is True
    assert result.editor.selected_id in {"a", "c"}
    assert result.editor.selected_id != "b"
    assert result.editor.title_draft == controller.get_note(result.editor.selected_id).title


def test_delete_last_note_returns_to_create() -> None:
    controller = _controller("A")
    result = controller.delete_note("a")
    assert result.removed is True
    assert result.editor.is_create
    assert (result.editor.title_draft, result.editor.body_draft) == ("", "")


def test_delete_unselected_note_keeps_editor() -> None:
    controller = _controller("A", "B")
    controller.set_title_draft("wip")
    before = controller.get_editor_state()
    result = controller.delete_note("b")
    assert result.removed is True
    assert result.editor == before


def test_delete_missing_note_is_harmless() -> None:
    controller = _controller("A", "B")
    before = controller.list_notes()
    result = controller.delete_note("zzz")
    assert result.removed is False
    assert controller.list_notes() == before


def test_reset_and_edit_selected_restore_stored_fields() -> None:
    controller = _controller("A")
    controller.set_title_draft("changed")
    assert controller.start_edit_selected().title_draft == "A"
    controller.set_body_draft("changed")
    assert controller.reset_to_selected().body_draft == "A body"


def test_created_ids_are_unique_across_many_saves() -> None:
    controller = NoteController(clock=lambda: 5)
    ids = set()
    for index in range(50):
        controller.start_create()
        controller.set_title_draft(f"note {index}")
        ids.add(controller.save().note.id)
    assert len(ids) == 50


def test_from_config_seeds_welcome_note(monkeypatch) -> None:
    monkeypatch.setenv("QUICKNOTES_SEED_WELCOME", "true")
    monkeypatch.setenv("QUICKNOTES_WELCOME_TITLE", "Hi there")
    controller = NoteController.from_config(load_config())
    notes = controller.list_notes()
    assert len(notes) == 1
    assert notes[0].title == "Hi there"
    assert controller.get_editor_state().selected_id == notes[0].id


def test_from_config_without_seed_starts_in_create(monkeypatch) -> None:
    monkeypatch.setenv("QUICKNOTES_SEED_WELCOME", "0")
    controller = NoteController.from_config(load_config())
    assert controller.list_notes() == []
    assert controller.get_editor_state().is_create


def test_audit_events_never_contain_note_bodies() -> None:
    controller = _controller()
    controller.set_title_draft("Secret")
    controller.set_body_draft("very private body")
    controller.save()
    assert all("very private body" not in event.detail for event in controller.audit_events())
    assert controller.audit_events()[-1].type == "NOTE_CREATED"


def test_controller_keeps_an_empty_injected_store() -> None:
    store = InMemoryNoteStore(clock=lambda: 7)
    controller = NoteController(store)
    controller.set_title_draft("First")
    note = controller.save().note

    assert len(store) == 1
    assert store.find_by_id(note.id) == note
    assert note.created_at == 7


def test_from_config_without_seed_uses_injected_clock_and_ids(monkeypatch) -> None:
    monkeypatch.setenv("QUICKNOTES_SEED_WELCOME", "0")
    controller = NoteController.from_config(load_config(), clock=lambda: 42, id_factory=lambda now_ms: "fixed")
    controller.set_title_draft("Injected")
    note = controller.save().note

    assert note.id == "fixed"
    assert note.created_at == note.updated_at == 42
