from __future__ import annotations

"""
Local HTTP surface for the quicknotes editor.

Design intent:
- Keep API orchestration thin and typed.
- Delegate every state change to NoteController.
- Own the view-only concerns: theme, delete confirmation, display timestamps.
"""

import logging
from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, model_validator

from quicknotes.internal_core.config import AppConfig, load_config
from quicknotes.internal_core.contracts import AuditEvent, EditorState, Note
from quicknotes.internal_core.controller import NoteController
from quicknotes.internal_core.errors import (
    NoteNotFoundError,
    NoteValidationError,
    StaleSelectionError,
)

Theme = Literal["light", "dark"]


class NoteView(BaseModel):
    id: str
    title: str
    body: str
    created_at: int
    updated_at: int
    updated_at_iso: str


class EditorView(BaseModel):
    mode: Literal["create", "edit"]
    selected_id: Optional[str] = None
    title_draft: str = ""
    body_draft: str = ""
    heading: str


class EditorResponse(BaseModel):
    editor: EditorView
    selected_note: Optional[NoteView] = None


class NotesListResponse(BaseModel):
    notes: list[NoteView] = Field(default_factory=list)
    selected_id: Optional[str] = None


class DraftUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, max_length=1000)
    body: Optional[str] = Field(default=None, max_length=200_000)

    @model_validator(mode="after")
    def _validate_any_field(self) -> "DraftUpdateRequest":
        if self.title is None and self.body is None:
            raise ValueError("Provide at least one of: title, body.")
        return self


class SaveResponse(BaseModel):
    note: NoteView
    created: bool
    editor: EditorView


class DeleteResponse(BaseModel):
    note_id: str
    removed: bool
    editor: EditorView


class ThemeResponse(BaseModel):
    theme: Theme


class AuditResponse(BaseModel):
    events: list[AuditEvent] = Field(default_factory=list)


app = FastAPI(title="quicknotes service")
logger = logging.getLogger(__name__)


def _get_config() -> AppConfig:
    existing = getattr(app.state, "config", None)
    if isinstance(existing, AppConfig):
        return existing
    created = load_config()
    logging.getLogger("quicknotes").setLevel(created.QUICKNOTES_LOG_LEVEL)
    setattr(app.state, "config", created)
    return created


def _get_controller() -> NoteController:
    existing = getattr(app.state, "note_controller", None)
    if isinstance(existing, NoteController):
        return existing
    created = NoteController.from_config(_get_config())
    setattr(app.state, "note_controller", created)
    return created


def _get_theme() -> Theme:
    existing = getattr(app.state, "theme", None)
    if existing in ("light", "dark"):
        return existing
    theme = _get_config().QUICKNOTES_DEFAULT_THEME
    setattr(app.state, "theme", theme)
    return theme


_startup_config = load_config()
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_startup_config.QUICKNOTES_CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _ms_to_iso(value_ms: int) -> str:
    return datetime.fromtimestamp(value_ms / 1000.0, tz=timezone.utc).isoformat()


def _note_view(note: Note) -> NoteView:
    return NoteView(
        id=note.id,
        title=note.title,
        body=note.body,
        created_at=note.created_at,
        updated_at=note.updated_at,
        updated_at_iso=_ms_to_iso(note.updated_at),
    )


def _editor_view(state: EditorState) -> EditorView:
    return EditorView(
        mode=state.mode.kind,
        selected_id=state.selected_id,
        title_draft=state.title_draft,
        body_draft=state.body_draft,
        heading="New note" if state.is_create else "Edit note",
    )


def _editor_response(controller: NoteController) -> EditorResponse:
    selected = controller.get_selected_note()
    return EditorResponse(
        editor=_editor_view(controller.get_editor_state()),
        selected_note=_note_view(selected) if selected is not None else None,
    )


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/notes", response_model=NotesListResponse)
async def list_notes() -> NotesListResponse:
    controller = _get_controller()
    return NotesListResponse(
        notes=[_note_view(note) for note in controller.list_notes()],
        selected_id=controller.get_editor_state().selected_id,
    )


@app.get("/notes/{note_id}", response_model=NoteView)
async def get_note(note_id: str) -> NoteView:
    note = _get_controller().get_note(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail=f"Note not found: {note_id}")
    return _note_view(note)


@app.delete("/notes/{note_id}", response_model=DeleteResponse)
async def delete_note(note_id: str, confirm: bool = Query(default=False)) -> DeleteResponse:
    if not confirm:
        raise HTTPException(
            status_code=400,
            detail="Deletion requires confirmation: pass confirm=true.",
        )
    result = _get_controller().delete_note(note_id)
    return DeleteResponse(
        note_id=note_id,
        removed=result.removed,
        editor=_editor_view(result.editor),
    )


@app.get("/editor", response_model=EditorResponse)
async def get_editor() -> EditorResponse:
    return _editor_response(_get_controller())


@app.post("/editor/create", response_model=EditorResponse)
async def editor_start_create() -> EditorResponse:
    controller = _get_controller()
    controller.start_create()
    return _editor_response(controller)


@app.post("/editor/select/{note_id}", response_model=EditorResponse)
async def editor_select(note_id: str) -> EditorResponse:
    controller = _get_controller()
    try:
        controller.select_note(note_id)
    except NoteNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _editor_response(controller)


@app.post("/editor/edit-selected", response_model=EditorResponse)
async def editor_edit_selected() -> EditorResponse:
    controller = _get_controller()
    controller.start_edit_selected()
    return _editor_response(controller)


@app.post("/editor/reset", response_model=EditorResponse)
async def editor_reset() -> EditorResponse:
    controller = _get_controller()
    controller.reset_to_selected()
    return _editor_response(controller)


@app.put("/editor/draft", response_model=EditorResponse)
async def editor_update_draft(payload: DraftUpdateRequest) -> EditorResponse:
    controller = _get_controller()
    if payload.title is not None:
        controller.set_title_draft(payload.title)
    if payload.body is not None:
        controller.set_body_draft(payload.body)
    return _editor_response(controller)


@app.post("/editor/save", response_model=SaveResponse)
async def editor_save() -> SaveResponse:
    controller = _get_controller()
    try:
        result = controller.save()
    except NoteValidationError as exc:
        raise HTTPException(
            status_code=400,
            detail="Please enter a title or some content.",
        ) from exc
    except StaleSelectionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    return SaveResponse(
        note=_note_view(result.note),
        created=result.created,
        editor=_editor_view(result.editor),
    )


@app.get("/preferences/theme", response_model=ThemeResponse)
async def get_theme() -> ThemeResponse:
    return ThemeResponse(theme=_get_theme())


@app.post("/preferences/theme/toggle", response_model=ThemeResponse)
async def toggle_theme() -> ThemeResponse:
    theme: Theme = "dark" if _get_theme() == "light" else "light"
    setattr(app.state, "theme", theme)
    logger.debug("theme toggled to %s", theme)
    return ThemeResponse(theme=theme)


@app.get("/audit", response_model=AuditResponse)
async def audit_events() -> AuditResponse:
    return AuditResponse(events=_get_controller().audit_events())
