"""Core Layer — pure domain logic: errors, tokens, credentials, ownership, toggles, feed.

Invariants:
    - No module in core/ imports from services/, stores/, api/, infrastructure/, or models/
    - No module in core/ reads settings or the environment

Design Decisions:
    - Functional core separated from imperative shell
"""
