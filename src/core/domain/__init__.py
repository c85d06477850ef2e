"""Domain models and errors.

Why:
- Pure, strict data structures (Pydantic v2) and the exception hierarchy.
- The domain knows nothing about HTTP, subprocesses or the CLI.
"""
