"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic (clocks and IO are injected by the shell)

Design Decisions:
    - Functional core separated from imperative shell
"""
