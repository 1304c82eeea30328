"""Component Naming — display names become URL prefixes; unusable prefixes are rejected."""

import pytest

from webfocus.core.errors import InvalidComponentNameError, ReservedComponentNameError
from webfocus.core.naming import RESERVED_NAMES, to_urlname, validate_urlname


def test_urlname_lowercases_and_hyphenates():
    assert to_urlname("Hello World") == "hello-world"


def test_urlname_collapses_whitespace_runs():
    assert to_urlname("My \t  Tool\nBox") == "my-tool-box"


def test_urlname_keeps_outer_whitespace_as_hyphens():
    assert to_urlname(" Padded ") == "-padded-"


def test_urlname_of_plain_name_is_unchanged():
    assert to_urlname("status") == "status"


@pytest.mark.parametrize("name", sorted(RESERVED_NAMES))
def test_reserved_names_rejected(name):
    with pytest.raises(ReservedComponentNameError):
        validate_urlname(name)


@pytest.mark.parametrize("name", ["", "a/b", "{x}", "what?", "50%"])
def test_unmountable_names_rejected(name):
    with pytest.raises(InvalidComponentNameError):
        validate_urlname(name)


def test_valid_name_returned():
    assert validate_urlname("hello-world") == "hello-world"
