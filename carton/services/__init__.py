"""Services Layer — storage-backed lifecycle mutators and payload resolution.

Invariants:
    - Services orchestrate IO around core pure functions
    - Collaborators are injected (store, notifier, request source)
"""
