"""Webfocus Host — registers components into one FastAPI application and serves it.

Invariants:
    - Components are registered only before build()/start(); build() runs once
    - Mount names are unique, URL-safe, never reserved, never a top-level static entry
    - A component serves one host: it cannot be registered on a second host
    - The shared AppConfiguration is bound into every component and merged into every view
    - Route order: component APIs, /api listing, /api 404, host index, component views, static

Design Decisions:
    - Routers are wired at build() time, so routes a component adds after
      registration are still served
    - One Jinja2 environment: host views first, then one prefix namespace per component,
      so component views can extend "layouts/base.html"
"""

import logging
import os
from collections.abc import Mapping
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PrefixLoader

from webfocus.api.error_handlers import register_error_handlers
from webfocus.api.routes.components import ALL_METHODS, build_api_router
from webfocus.api.routes.views import build_views_router
from webfocus.component import Component
from webfocus.config import Settings, get_settings
from webfocus.core.configuration import AppConfiguration
from webfocus.core.errors import (
    AppAlreadyStartedError,
    ComponentAlreadyRegisteredError,
    ComponentNotFoundError,
    InvalidComponentNameError,
    ReservedComponentNameError,
    WebfocusAppError,
    WebfocusComponentError,
)
from webfocus.core.naming import to_urlname, validate_urlname
from webfocus.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


class WebfocusApp:
    """Plugin host: register components, then build() or start()."""

    def __init__(
        self,
        configuration: AppConfiguration | Mapping[str, Any] | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.configuration = self._load_configuration(configuration)
        self.components: dict[str, Component] = {}
        self.started = False
        self._static_names = _static_entries(self.settings.static_dir)

        self._component_loaders: dict[str, FileSystemLoader] = {}
        env = Environment(
            loader=ChoiceLoader([
                FileSystemLoader(self.settings.views_dir),
                PrefixLoader(self._component_loaders),
            ]),
            autoescape=True,
        )
        self.templates = Jinja2Templates(env=env)

        self.app = FastAPI(
            title=self.configuration.name,
            lifespan=self._lifespan,
            docs_url=None, redoc_url=None, openapi_url=None,
        )
        register_error_handlers(
            self.app, self.templates, self.view_context, debug=self.settings.debug,
        )
        logger.debug(f"Host \"{self.configuration.name}\" created")

    def _load_configuration(self, configuration) -> AppConfiguration:
        if configuration is None:
            return AppConfiguration(name=self.settings.name, port=self.settings.port)
        if isinstance(configuration, AppConfiguration):
            if configuration.components:
                raise WebfocusAppError(
                    "Configuration already lists components; use a fresh configuration",
                )
            return configuration.model_copy(deep=True)
        return AppConfiguration.from_mapping(configuration)

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(self.settings.log_level, self.settings.log_format)
        logger.info(
            f"{self.configuration.name} started with components: "
            f"{', '.join(self.configuration.components) or '(none)'}",
        )
        yield
        logger.info(f"{self.configuration.name} shutting down")

    # ─── Registration ───────────────────────────────────────────

    def register_component(
        self, component: Component, name: str | None = None,
    ) -> Component:
        """Register component under name (default: its urlname)."""
        if self.started:
            raise AppAlreadyStartedError(
                "Trying to register components after webfocus application started",
            )
        if not isinstance(component, Component):
            raise WebfocusAppError(
                f"Trying to register \"{name}\" that is not a webfocus Component",
            )
        if name is not None and not isinstance(name, str):
            raise InvalidComponentNameError(str(name))

        urlname = validate_urlname(
            to_urlname(name) if name is not None else component.urlname,
        )
        logger.debug(f"Registering component \"{urlname}\"", extra={"component": urlname})
        if urlname in self._static_names:
            raise ReservedComponentNameError(urlname)
        if urlname in self.components:
            raise ComponentAlreadyRegisteredError(urlname)

        extension = self.settings.view_extension
        if not component.has_index(extension):
            raise WebfocusComponentError(
                f"Component \"{urlname}\" has no index view "
                f"({component.view_path('index', extension)})",
            )

        view = component.configuration
        if view.bound and not view.is_bound_to(self.configuration):
            raise WebfocusComponentError(
                f"Component \"{urlname}\" is already bound to another host configuration",
            )

        component.set_configuration(self.configuration)
        self.components[urlname] = component
        self.configuration.components.append(urlname)
        self._component_loaders[urlname] = FileSystemLoader(component.dirname)
        logger.info(f"Component \"{urlname}\" registered", extra={"component": urlname})
        return component

    def get_component(self, name: str) -> Component:
        component = self.components.get(name)
        if component is None:
            raise ComponentNotFoundError(name)
        return component

    def get_all_component_names(self) -> list[str]:
        return list(self.components)

    # ─── Serving ────────────────────────────────────────────────

    def view_context(self, request: Request, **extra: Any) -> dict[str, Any]:
        """Context shared by every rendered view."""
        context = {
            "configuration": self.configuration,
            "components": dict(self.components),
        }
        context.update(extra)
        return context

    def build(self) -> FastAPI:
        """Freeze registration and wire every route. Callable once."""
        if self.started:
            raise AppAlreadyStartedError(
                "Method start can only be called once on the same instance",
            )
        self.started = True

        self.app.include_router(build_api_router(self))
        self.app.include_router(build_views_router(self))

        static_dir = self.settings.static_dir
        if os.path.isdir(static_dir):
            self.app.mount("/", StaticFiles(directory=static_dir), name="static")
        else:
            logger.warning(f"Static directory {static_dir} not found, not serving files")
            self.app.add_api_route(
                "/{path:path}", _unmatched, methods=ALL_METHODS,
                include_in_schema=False,
            )
        logger.debug(f"Host \"{self.configuration.name}\" built")
        return self.app

    def start(self, host: str | None = None, port: int | None = None) -> None:
        """Build and serve with uvicorn on the configured port."""
        app = self.build()
        uvicorn.run(
            app,
            host=host or self.settings.host,
            port=self.configuration.port if port is None else port,
            log_level=self.settings.log_level.lower(),
        )


def _static_entries(static_dir: str) -> frozenset[str]:
    """Top-level static entries; a component mounted on one would shadow it."""
    if not os.path.isdir(static_dir):
        return frozenset()
    return frozenset(os.listdir(static_dir))


async def _unmatched(request: Request, path: str):
    if request.method in ("GET", "HEAD"):
        raise HTTPException(status.HTTP_404_NOT_FOUND)
    raise HTTPException(status.HTTP_405_METHOD_NOT_ALLOWED)
