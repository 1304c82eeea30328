"""Route Modules — one file per concern.

Invariants:
    - Each module exposes a build_*_router(host) factory returning an APIRouter
    - Routes never contain registration logic (delegate to WebfocusApp)
"""
