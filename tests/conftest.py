"""Root conftest — shared host, component and HTTP client fixtures.

Invariants:
    - Every test gets a fresh WebfocusApp and a fresh Component
    - Settings never read a .env file
    - The client does not re-raise app exceptions, so 500 responses can be asserted
"""

from pathlib import Path

import pytest
from fastapi import HTTPException
from httpx import ASGITransport, AsyncClient

from webfocus.app import WebfocusApp
from webfocus.component import Component
from webfocus.config import Settings

COMPONENTS_DIR = Path(__file__).parent / "fixtures" / "components"


def make_settings(**overrides) -> Settings:
    values = {"name": "Settings Host", "port": 8123}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_hello_component(name: str = "Hello World") -> Component:
    component = Component(name, "Says hello", COMPONENTS_DIR / "hello")

    @component.router.get("/")
    async def greet():
        return {"message": f"Hello from {component.configuration.name}"}

    @component.router.get("/items/{item_id}")
    async def get_item(item_id: int):
        if item_id != 1:
            raise HTTPException(404, detail=f"Item {item_id} not found")
        return {"id": item_id}

    @component.router.post("/echo")
    async def echo(payload: dict):
        return payload

    @component.router.get("/boom")
    async def boom():
        raise RuntimeError("component exploded")

    return component


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def host(settings):
    return WebfocusApp(
        {"name": "Test Host", "port": 8123, "title": "Testing"},
        settings=settings,
    )


@pytest.fixture
def hello_component():
    return make_hello_component()


def _client_for(host: WebfocusApp):
    app = host.build()
    return AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    )


@pytest.fixture
async def client(host, hello_component):
    """Client for a built host with the hello component registered."""
    host.register_component(hello_component)
    async with _client_for(host) as c:
        yield c


@pytest.fixture
async def debug_client(hello_component):
    """Same as client, with debug error output enabled."""
    host = WebfocusApp(
        {"name": "Debug Host", "port": 8124}, settings=make_settings(debug=True),
    )
    host.register_component(hello_component)
    async with _client_for(host) as c:
        yield c
