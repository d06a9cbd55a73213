from __future__ import annotations

"""
Recoverable error kinds raised by the note controller.

Design intent:
- Every failure is raised before any mutation, so callers never see partial state.
- Each error carries a stable `code` the view layer can branch on.
"""

from typing import Optional


class NoteError(Exception):
    """Base class for note collection and editor failures."""

    code = "note_error"

    def __init__(self, message: str, *, note_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.note_id = note_id

    def __str__(self) -> str:
        return self.message


class NoteValidationError(NoteError, ValueError):
    """Raised when Save finds both drafts blank after trimming."""

    code = "empty_note"

    def __init__(self, message: str = "empty note") -> None:
        super().__init__(message)


class NoteNotFoundError(NoteError, KeyError):
    code = "not_found"

    def __init__(self, note_id: str) -> None:
        super().__init__(f"Unknown note_id: {note_id}", note_id=note_id)


class StaleSelectionError(NoteError):
    """Raised when Save runs in Edit mode but the bound note is gone."""

    code = "stale_selection"

    def __init__(self, note_id: str) -> None:
        super().__init__(f"Selected note no longer exists: {note_id}", note_id=note_id)
