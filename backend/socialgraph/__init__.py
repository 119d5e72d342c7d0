"""SocialGraph Application Package — users, publications, follow and like graphs.

Invariants:
    - Package root has no import side-effects; __version__ is the only value here
    - __version__ is the single source of the API version (FastAPI app, health body)

Design Decisions:
    - No star exports: modules are imported explicitly
"""

__version__ = "1.0.0"
