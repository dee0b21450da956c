"""Test configuration and fixtures."""

import os

import httpx
import pytest
import pytest_asyncio
from dishka.integrations.fastapi import FastapiProvider

from ozza.interface.api.app import create_app
from tests.di import build_test_container


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: needs Postgres; set OZZA_RUN_INTEGRATION=1 to run"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless explicitly enabled."""
    if os.environ.get("OZZA_RUN_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="set OZZA_RUN_INTEGRATION=1 to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest_asyncio.fixture
async def container():
    """Mocked container shared by the app under test and the test's seeding code."""
    test_container = build_test_container(None, FastapiProvider())
    yield test_container
    await test_container.close()


@pytest_asyncio.fixture
async def client(container):
    """Async HTTP client bound to an app built over ``container``."""
    app_instance = create_app(container)
    transport = httpx.ASGITransport(app=app_instance)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
