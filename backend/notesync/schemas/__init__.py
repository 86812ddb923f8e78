"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary; the note store re-checks
      array-ness for non-HTTP callers
"""
