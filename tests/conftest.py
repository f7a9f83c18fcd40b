"""Shared fixtures for tests."""

import json
from pathlib import Path

import pytest

from omniapi_mcp_server.client import ApiClient
from omniapi_mcp_server.registry import ApiRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"

BASE_URL = "https://api.example.test"


@pytest.fixture
def openapi_doc() -> dict:
    """Load the OpenAPI 3 document fixture."""
    with open(FIXTURES_DIR / "openapi_doc.json") as f:
        return json.load(f)


@pytest.fixture
def swagger_doc() -> dict:
    """Load the Swagger 2 document fixture."""
    with open(FIXTURES_DIR / "swagger_doc.json") as f:
        return json.load(f)


@pytest.fixture
def registry() -> ApiRegistry:
    reg = ApiRegistry()
    reg.add("pets", BASE_URL, {"Authorization": "Bearer tok-123"})
    return reg


@pytest.fixture
async def client():
    async with ApiClient() as c:
        yield c
