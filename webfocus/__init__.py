"""webfocus — plugin host that mounts independently authored components into one web app.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Explicit imports only: webfocus.app.WebfocusApp, webfocus.component.create_component
"""
