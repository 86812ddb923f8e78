"""Services Layer - orchestrates IO around the pure core.

Invariants:
    - Services receive their repositories by injection, never by import
"""
