"""Infrastructure Layer - persistence engines and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every IO failure is mapped to StorageError before leaving this layer
"""
