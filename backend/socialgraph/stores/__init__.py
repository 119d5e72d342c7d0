"""Stores — SQLAlchemy implementations of the core/repository_protocols.py contracts.

Invariants:
    - One class per table family, constructed per request with that request's AsyncSession
    - Stores commit their own writes; services never touch the session directly
"""
