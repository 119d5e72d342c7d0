"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
    - Authentication is a dependency chain (api/dependencies.py), not middleware

Design Decisions:
    - Thin routes delegate to services; services delegate to stores
"""
