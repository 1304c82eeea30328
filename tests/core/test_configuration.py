"""Shared Configuration — validation, immutability, and the bind-once view.

Invariants:
    - name and port are required; components cannot be preset
    - AppConfiguration rejects attribute assignment
    - ConfigurationView warns on early reads and on writes, and binds once
"""

import logging

import pytest
from pydantic import ValidationError

from webfocus.core.configuration import AppConfiguration, ConfigurationView
from webfocus.core.errors import InvalidConfigurationError


def test_from_mapping_keeps_extra_keys():
    conf = AppConfiguration.from_mapping({"name": "Host", "port": 8000, "theme": "dark"})
    assert conf.name == "Host"
    assert conf.port == 8000
    assert conf.theme == "dark"
    assert conf.components == []


@pytest.mark.parametrize("mapping", [
    {"port": 8000},
    {"name": "Host"},
    {"name": "", "port": 8000},
    {"name": "Host", "port": "not-a-port"},
    {"name": "Host", "port": 70000},
    {"name": "Host", "port": 0},
])
def test_from_mapping_rejects_invalid(mapping):
    with pytest.raises(InvalidConfigurationError):
        AppConfiguration.from_mapping(mapping)


def test_from_mapping_rejects_non_mapping():
    with pytest.raises(InvalidConfigurationError):
        AppConfiguration.from_mapping(["name", "port"])


def test_from_mapping_rejects_preset_components():
    with pytest.raises(InvalidConfigurationError):
        AppConfiguration.from_mapping({"name": "H", "port": 1, "components": ["x"]})


def test_configuration_is_frozen():
    conf = AppConfiguration(name="Host", port=8000)
    with pytest.raises(ValidationError):
        conf.name = "Other"


def test_view_read_before_bind_warns(caplog):
    view = ConfigurationView("hello")
    with caplog.at_level(logging.WARNING):
        assert view.name is None
    assert "before initialization" in caplog.text


def test_view_reads_bound_configuration():
    view = ConfigurationView("hello")
    view.bind(AppConfiguration(name="Host", port=8000, title="T"))
    assert view.bound
    assert view.name == "Host"
    assert view.title == "T"
    assert view.unknown_key is None


def test_view_write_is_ignored(caplog):
    view = ConfigurationView("hello")
    view.bind(AppConfiguration(name="Host", port=8000))
    with caplog.at_level(logging.WARNING):
        view.name = "Changed"
    assert view.name == "Host"
    assert "read-only" in caplog.text


def test_view_binds_once(caplog):
    view = ConfigurationView("hello")
    first = AppConfiguration(name="First", port=1)
    second = AppConfiguration(name="Second", port=2)
    assert view.bind(first) is True
    with caplog.at_level(logging.WARNING):
        assert view.bind(second) is False
    assert view.name == "First"
    assert "more than once" in caplog.text


def test_ready_callbacks_run_once_on_bind():
    view = ConfigurationView("hello")
    seen = []
    view.on_ready(lambda conf: seen.append(conf.name))
    view.bind(AppConfiguration(name="Host", port=1))
    view.bind(AppConfiguration(name="Other", port=2))
    assert seen == ["Host"]


def test_ready_callback_after_bind_runs_immediately():
    view = ConfigurationView("hello")
    view.bind(AppConfiguration(name="Host", port=1))
    seen = []
    view.on_ready(lambda conf: seen.append(conf.port))
    assert seen == [1]


def test_is_bound_to_checks_identity():
    view = ConfigurationView("hello")
    conf = AppConfiguration(name="Host", port=1)
    assert not view.is_bound_to(conf)
    view.bind(conf)
    assert view.is_bound_to(conf)
    assert not view.is_bound_to(conf.model_copy(deep=True))
