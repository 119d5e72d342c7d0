"""Infrastructure Layer — database session management and observability.

Invariants:
    - Infrastructure never imports domain logic beyond core/errors.py
    - All driver exceptions mapped to DatabaseError before leaving this layer
"""
