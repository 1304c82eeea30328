"""Component Naming — display name to URL-safe name, and mount-name validation.

Invariants:
    - to_urlname() lowercases and replaces every whitespace run with one hyphen
    - A mountable name is never empty, never reserved, and has no "/", braces, "?", "#", "%"
"""

import re

from webfocus.core.errors import InvalidComponentNameError, ReservedComponentNameError

_WHITESPACE = re.compile(r"\s+")
_UNMOUNTABLE = re.compile(r"[/{}?#%]")

# "api" is the JSON mount, "layouts" the host template namespace;
# top-level static entries are reserved per host by WebfocusApp
RESERVED_NAMES = frozenset({"api", "layouts"})


def to_urlname(name: str) -> str:
    return _WHITESPACE.sub("-", name).lower()


def validate_urlname(urlname: str) -> str:
    """Return urlname unchanged, or raise if it cannot be mounted."""
    if not urlname or _UNMOUNTABLE.search(urlname):
        raise InvalidComponentNameError(urlname)
    if urlname in RESERVED_NAMES:
        raise ReservedComponentNameError(urlname)
    return urlname
