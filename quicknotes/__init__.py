"""
quicknotes package.

Design intent:
- Keep the note collection and editor state machine in internal_core.
- Treat the HTTP layer in api as a thin view that only calls controller commands.
"""
