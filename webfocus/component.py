"""Component — a named bundle of an API router, a view directory, and metadata.

Invariants:
    - name is a str; urlname is derived from it and never changes
    - dirname is an existing directory holding the component's views
    - configuration is read-only and bound exactly once, by the host at registration

Design Decisions:
    - create_component() infers dirname from the caller's module, so a component
      module only names itself
"""

import inspect
import logging
import os
from collections.abc import Callable

from fastapi import APIRouter

from webfocus.core.configuration import AppConfiguration, ConfigurationView
from webfocus.core.errors import WebfocusComponentError
from webfocus.core.naming import to_urlname

DEFAULT_DESCRIPTION = "Generic Component Description"
INDEX_VIEW = "index"


class Component:
    """A pluggable unit registered into a WebfocusApp."""

    def __init__(
        self,
        name: str = "",
        description: str = DEFAULT_DESCRIPTION,
        dirname: str | os.PathLike | None = None,
    ):
        if not isinstance(name, str):
            raise WebfocusComponentError("Name argument provided is not a string")
        if dirname is None or not os.path.isdir(dirname):
            raise WebfocusComponentError(
                f"Dirname argument provided is not a valid directory ({dirname})",
            )
        self.name = name
        self.urlname = to_urlname(name)
        self.description = description
        self.dirname = os.path.abspath(dirname)
        self.router = APIRouter()
        self.logger = logging.getLogger(f"webfocus.component.{self.urlname}")
        self.configuration = ConfigurationView(self.urlname)

    def set_configuration(self, configuration: AppConfiguration) -> bool:
        if self.configuration.bind(configuration):
            self.logger.debug("Defining configuration")
            return True
        return False

    def on_configuration_ready(
        self, callback: Callable[[AppConfiguration], None],
    ) -> None:
        self.configuration.on_ready(callback)

    def view_path(self, view: str, extension: str = ".html") -> str:
        """Filesystem path of a view (without extension) inside dirname."""
        return os.path.join(self.dirname, *view.strip("/").split("/")) + extension

    def has_index(self, extension: str = ".html") -> bool:
        return os.path.isfile(self.view_path(INDEX_VIEW, extension))

    def __repr__(self) -> str:
        return f"Component({self.name!r}, urlname={self.urlname!r})"


def create_component(
    name: str, description: str = DEFAULT_DESCRIPTION,
) -> Component:
    """Create a Component rooted at the directory of the calling module."""
    caller = inspect.currentframe().f_back
    try:
        dirname = os.path.dirname(os.path.abspath(caller.f_code.co_filename))
    finally:
        del caller
    return Component(name, description, dirname)
