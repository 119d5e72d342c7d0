"""Services Layer — orchestrates core rules over the store protocols.

Invariants:
    - Services receive stores by constructor injection (Protocol-typed)
    - Every ownership decision goes through core.authorization.ensure_owner
"""
