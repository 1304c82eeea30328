"""Shared Configuration — the single record merged into every view and handed to components.

Invariants:
    - AppConfiguration is frozen: attribute assignment raises after construction
    - components lists registered names in registration order; only the host appends to it
    - ConfigurationView binds once; later binds are ignored with a warning
    - Reading an unbound view or writing any view never raises (warns instead)

Design Decisions:
    - extra="allow": hosts carry arbitrary keys (title, theme, ...) next to name/port
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from webfocus.core.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class AppConfiguration(BaseModel):
    """Host configuration: display name, listening port, registered components."""
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    components: list[str] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AppConfiguration":
        """Validate a plain mapping, raising InvalidConfigurationError on failure."""
        if not isinstance(mapping, Mapping):
            raise InvalidConfigurationError(
                "Configuration must be a mapping with \"name\" and \"port\" keys",
            )
        if mapping.get("components"):
            raise InvalidConfigurationError(
                "\"components\" is managed by the host and cannot be preset",
            )
        data = {k: v for k, v in mapping.items() if k != "components"}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(loc) for loc in err["loc"]) for err in e.errors()
            )
            raise InvalidConfigurationError(
                f"Invalid configuration ({fields})",
            ) from e


class ConfigurationView:
    """Read-only, bind-once proxy over an AppConfiguration."""

    __slots__ = ("_owner", "_configuration", "_callbacks")

    def __init__(self, owner: str = "component"):
        object.__setattr__(self, "_owner", owner)
        object.__setattr__(self, "_configuration", None)
        object.__setattr__(self, "_callbacks", [])

    @property
    def bound(self) -> bool:
        return self._configuration is not None

    def is_bound_to(self, configuration: AppConfiguration) -> bool:
        return self._configuration is configuration

    def bind(self, configuration: AppConfiguration) -> bool:
        """Bind the configuration. Returns False when already bound."""
        if self._configuration is not None:
            logger.warning(
                "Ignoring setting configuration more than once",
                extra={"component": self._owner},
            )
            return False
        object.__setattr__(self, "_configuration", configuration)
        for callback in self._callbacks:
            callback(configuration)
        self._callbacks.clear()
        return True

    def on_ready(self, callback: Callable[[AppConfiguration], None]) -> None:
        """Run callback once the configuration is bound (immediately if it is)."""
        if self._configuration is not None:
            callback(self._configuration)
        else:
            self._callbacks.append(callback)

    def __getattr__(self, item: str) -> Any:
        if item.startswith("__"):
            raise AttributeError(item)
        configuration = self._configuration
        if configuration is None:
            logger.warning(
                "Trying to read configuration before initialization",
                extra={"component": self._owner},
            )
            return None
        return getattr(configuration, item, None)

    def __setattr__(self, key: str, value: Any) -> None:
        logger.warning(
            "Trying to set read-only configuration",
            extra={"component": self._owner},
        )

    def __repr__(self) -> str:
        return f"ConfigurationView({self._owner!r}, bound={self.bound})"
