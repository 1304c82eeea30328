"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routers are built per host at build() time (no module-level app)
    - Requests under /api answer JSON; all other requests answer HTML
"""
