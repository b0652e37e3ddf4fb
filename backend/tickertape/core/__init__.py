"""Core Layer — pure domain definitions, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Errors, identity types and store protocols live here

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
