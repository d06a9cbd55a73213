from .config import AppConfig, load_config
from .controller import DeleteResult, NoteController, SaveResult
from .note_store import InMemoryNoteStore

__all__ = [
    "AppConfig",
    "load_config",
    "DeleteResult",
    "NoteController",
    "SaveResult",
    "InMemoryNoteStore",
]
