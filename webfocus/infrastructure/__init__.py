"""Infrastructure Layer — cross-cutting process concerns (logging setup).

Invariants:
    - Infrastructure never imports from core/ or api/
"""
