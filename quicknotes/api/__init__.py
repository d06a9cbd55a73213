"""
API orchestration boundary for quicknotes.

Design intent:
- Expose thin, typed endpoints for the note list and editor pane.
- Map controller errors to predictable HTTP status codes.
"""
