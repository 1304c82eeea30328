"""Error Hierarchy — typed, categorized exceptions for every webfocus failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Registration errors are raised before the server listens; they never reach a client
    - to_response() produces the REST envelope used by the API error handlers

Design Decisions:
    - Single hierarchy with WebfocusError base: one global handler catches all
    - Two branches, WebfocusAppError (host lifecycle) and WebfocusComponentError
      (component construction), so callers can catch either side
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    LIFECYCLE = "lifecycle"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class WebfocusError(Exception):
    """Base exception for all webfocus errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
            }
        }


# ─── Host Errors ────────────────────────────────────────────────

class WebfocusAppError(WebfocusError):
    """Host application misuse (registration, lifecycle, configuration)."""
    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        http_status: int = 500,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.ERROR, http_status,
        )


class InvalidConfigurationError(WebfocusAppError):
    """Configuration object is missing required keys or has invalid values."""
    def __init__(self, message: str):
        super().__init__(
            message, "INVALID_CONFIGURATION", ErrorCategory.CONFIGURATION,
        )


class AppAlreadyStartedError(WebfocusAppError):
    """Operation only allowed before the host starts."""
    def __init__(self, message: str):
        super().__init__(message, "APP_ALREADY_STARTED", ErrorCategory.LIFECYCLE)


class ComponentAlreadyRegisteredError(WebfocusAppError):
    """A component with the same URL-safe name is already registered."""
    def __init__(self, name: str):
        super().__init__(
            f'Component "{name}" already registered',
            "COMPONENT_ALREADY_REGISTERED", ErrorCategory.CONFLICT, 409,
        )
        self.name = name


class ReservedComponentNameError(WebfocusAppError):
    """Component name collides with a prefix owned by the host."""
    def __init__(self, name: str):
        super().__init__(
            f'Component name "{name}" is reserved',
            "RESERVED_COMPONENT_NAME", ErrorCategory.VALIDATION, 400,
        )
        self.name = name


class InvalidComponentNameError(WebfocusAppError):
    """Component name cannot be used as a URL prefix."""
    def __init__(self, name: str):
        super().__init__(
            f'Component name "{name}" cannot be used as a URL prefix',
            "INVALID_COMPONENT_NAME", ErrorCategory.VALIDATION, 400,
        )
        self.name = name


class ComponentNotFoundError(WebfocusAppError):
    """Requested component is not registered."""
    def __init__(self, name: str):
        super().__init__(
            f'Component "{name}" not registered',
            "COMPONENT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.name = name


# ─── Component Errors ───────────────────────────────────────────

class WebfocusComponentError(WebfocusError):
    """Component could not be constructed or is missing required files."""
    def __init__(self, message: str):
        super().__init__(
            message, "COMPONENT_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, 500,
        )
