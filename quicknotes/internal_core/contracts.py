from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Note(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    title: str
    body: str = ""
    created_at: int = Field(ge=0)
    updated_at: int = Field(ge=0)


class CreateMode(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["create"] = "create"


class EditMode(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["edit"] = "edit"
    note_id: str = Field(min_length=1)


EditorMode = Annotated[Union[CreateMode, EditMode], Field(discriminator="kind")]


class EditorState(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: EditorMode = Field(default_factory=CreateMode)
    title_draft: str = ""
    body_draft: str = ""

    @property
    def is_create(self) -> bool:
        return isinstance(self.mode, CreateMode)

    @property
    def is_edit(self) -> bool:
        return isinstance(self.mode, EditMode)

    @property
    def selected_id(self) -> Optional[str]:
        if isinstance(self.mode, EditMode):
            return self.mode.note_id
        return None


AuditEventType = Literal[
    "SESSION_STARTED",
    "NOTE_CREATED",
    "NOTE_UPDATED",
    "NOTE_DELETED",
    "SELECTION_CHANGED",
    "SAVE_REJECTED",
]


class AuditEvent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ts_iso: str
    type: AuditEventType
    code: str
    note_id: Optional[str] = None
    detail: str = ""
