"""Views — server-rendered host index and per-component view dispatch.

Invariants:
    - GET / renders layouts/index.html with the shared configuration
    - GET /<name> and GET /<name>/<subpath> render component views (index fallback)
    - Routes exist only for registered components; everything else falls through
"""

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from webfocus.component import Component
from webfocus.rendering import render_component_view

if TYPE_CHECKING:
    from webfocus.app import WebfocusApp

INDEX_LAYOUT = "layouts/index.html"


def build_views_router(host: "WebfocusApp") -> APIRouter:
    """Assemble the HTML routes for host and its registered components."""
    router = APIRouter(include_in_schema=False)

    @router.get("/", response_class=HTMLResponse)
    async def host_index(request: Request):
        return host.templates.TemplateResponse(
            request, INDEX_LAYOUT, host.view_context(request),
        )

    for name, component in host.components.items():
        _add_component_routes(router, host, name, component)

    return router


def _add_component_routes(
    router: APIRouter, host: "WebfocusApp", name: str, component: Component,
) -> None:
    def render(request: Request, subpath: str):
        component.logger.debug(f"Get handler ({subpath or '/'}) {request.url.path}")
        context = host.view_context(
            request, component=component, apibaseurl=f"/api/{name}/",
        )
        return render_component_view(
            host.templates, request, name, subpath, context,
            extension=host.settings.view_extension,
        )

    async def component_index(request: Request):
        return render(request, "")

    async def component_view(request: Request, subpath: str):
        return render(request, subpath)

    router.add_api_route(
        f"/{name}", component_index, methods=["GET"],
        response_class=HTMLResponse, name=f"{name}-index",
    )
    router.add_api_route(
        f"/{name}/{{subpath:path}}", component_view, methods=["GET"],
        response_class=HTMLResponse, name=f"{name}-view",
    )
