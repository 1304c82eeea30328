"""View Rendering — component view lookup with index fallback.

Invariants:
    - "<urlname>/<subpath><ext>" is tried first; a trailing "/" means "<subpath>/index"
    - A missing component view falls back to "<urlname>/index<ext>"
    - A missing index view, or any other template error, propagates to the error handlers
"""

import logging
import posixpath
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateNotFound
from starlette.responses import Response

from webfocus.component import INDEX_VIEW

logger = logging.getLogger(__name__)


def resolve_view_name(urlname: str, subpath: str | None, extension: str = ".html") -> str:
    """Template name for a component subpath, e.g. ("hello", "a/") -> "hello/a/index.html"."""
    view = posixpath.join("/", subpath or "")
    if view.endswith("/"):
        view += INDEX_VIEW
    return f"{urlname}{view}{extension}"


def render_component_view(
    templates: Jinja2Templates,
    request: Request,
    urlname: str,
    subpath: str | None,
    context: dict[str, Any],
    extension: str = ".html",
) -> Response:
    """Render the component view for subpath, falling back to the index view."""
    name = resolve_view_name(urlname, subpath, extension)
    index = f"{urlname}/{INDEX_VIEW}{extension}"
    try:
        templates.get_template(name)
    except TemplateNotFound as e:
        if name == index or e.name != name:
            logger.error(
                f"Error at {name}: {e}",
                extra={"component": urlname, "path": request.url.path},
            )
            raise
        logger.debug(
            f"Component specific view {name} does not exist, using {index}",
            extra={"component": urlname, "path": request.url.path},
        )
        name = index
    return templates.TemplateResponse(request, name, context)
