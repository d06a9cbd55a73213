from __future__ import annotations

from dataclasses import dataclass

from .errors import NoteValidationError

DEFAULT_TITLE = "Untitled"


@dataclass(frozen=True)
class DraftValidation:
    ok: bool
    title: str
    body: str
    message: str = ""


def validate_draft(title_draft: str, body_draft: str) -> DraftValidation:
    title = (title_draft or "").strip()
    body = (body_draft or "").strip()
    if not title and not body:
        return DraftValidation(ok=False, title=title, body=body, message="empty note")
    return DraftValidation(ok=True, title=title, body=body)


def effective_fields(title_draft: str, body_draft: str) -> tuple[str, str]:
    """Return the (title, body) a save would commit, or raise NoteValidationError."""
    validation = validate_draft(title_draft, body_draft)
    if not validation.ok:
        raise NoteValidationError(validation.message)
    return validation.title or DEFAULT_TITLE, validation.body
