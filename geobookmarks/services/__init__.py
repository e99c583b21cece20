"""Services Layer — bookmark store, name resolver, and persistence orchestration.

Invariants:
    - Only the bookmark store mutates bookmark state
    - Resolver and persistence talk to the outside world through core Protocols

Design Decisions:
    - One class per concern; wiring happens in main.py lifespan
"""
