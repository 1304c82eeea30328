"""Component API — the /api mount: component routers, listing, and JSON 404.

Invariants:
    - Component routers are included under /api/<name> in registration order
    - GET /api and GET /api/ list registered component names
    - Any other /api path, any method, raises 404 after every component route
"""

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, status

if TYPE_CHECKING:
    from webfocus.app import WebfocusApp

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def build_api_router(host: "WebfocusApp") -> APIRouter:
    """Assemble the /api router for every component registered on host."""
    router = APIRouter(prefix="/api", tags=["components"])

    for name, component in host.components.items():
        router.include_router(component.router, prefix=f"/{name}")
        logger.debug(f"Mounted API router at /api/{name}", extra={"component": name})

    @router.get("")
    @router.get("/")
    async def list_components() -> list[str]:
        """Names of all registered components."""
        return host.get_all_component_names()

    @router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def api_not_found(path: str):
        raise HTTPException(
            status.HTTP_404_NOT_FOUND,
            detail=f"API Endpoint /{path} not found.",
        )

    return router
