"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON (the dictionary proxy relays upstream JSON verbatim)

Design Decisions:
    - Thin routes delegate to services/infrastructure (ADR: ExMA impureim sandwich)
"""
