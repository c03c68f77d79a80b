"""Shared fixtures for the test suite."""

from __future__ import annotations

import random
from collections.abc import AsyncIterator, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from truckparts.agent.graph import create_graph, get_conversation_graph
from truckparts.agent.nodes import ConversationNodes
from truckparts.core.catalog import CatalogClient, get_catalog_client
from truckparts.core.dialogue import DialogueBackendClient, get_dialogue_client
from truckparts.main import app

DIALOGUE_URL = "http://dialogue.test"
CATALOG_URL = "http://catalog.test"


@pytest.fixture
async def dialogue_client() -> AsyncIterator[DialogueBackendClient]:
    """Dialogue client with a real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield DialogueBackendClient(base_url=DIALOGUE_URL, api_key="secret", client=http_client)


@pytest.fixture
async def catalog_client() -> AsyncIterator[CatalogClient]:
    """Catalog client with a real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield CatalogClient(base_url=CATALOG_URL, api_key="catalog-key", client=http_client)


@pytest.fixture
def seeded_nodes() -> ConversationNodes:
    """Graph nodes with a fixed random source."""
    return ConversationNodes(rng=random.Random(7))


@pytest.fixture
def api_client(seeded_nodes: ConversationNodes) -> Iterator[TestClient]:
    """TestClient with upstream clients pointed at the respx hosts."""
    app.dependency_overrides[get_dialogue_client] = lambda: DialogueBackendClient(
        base_url=DIALOGUE_URL
    )
    app.dependency_overrides[get_catalog_client] = lambda: CatalogClient(
        base_url=CATALOG_URL, api_key="catalog-key"
    )
    app.dependency_overrides[get_conversation_graph] = lambda: create_graph(nodes=seeded_nodes)

    yield TestClient(app)

    app.dependency_overrides.clear()


def sample_part(part_number: str = "BRK-1001", **overrides) -> dict:
    part = {
        "partNumber": part_number,
        "description": "Front brake caliper",
        "price": 129.5,
        "availability": "In stock",
        "category": "brake",
        "manufacturer": "Bendix",
    }
    part.update(overrides)
    return part
