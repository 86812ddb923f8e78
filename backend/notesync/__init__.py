"""NoteSync Application Package - per-user note synchronization service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
