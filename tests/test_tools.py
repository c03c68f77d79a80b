"""Tests for the catalog tools used by the conversation graph."""

from __future__ import annotations

import httpx
import pytest
from respx import MockRouter

from truckparts.agent.tools import CatalogTools, format_price
from truckparts.core.catalog import CatalogClient

from .conftest import CATALOG_URL, sample_part


def test_format_price():
    assert format_price(129.5) == "$129.50"
    assert format_price(0) == "$0.00"
    assert format_price(None) == "Contact for price"


@pytest.mark.asyncio
async def test_search_truck_parts_formats_parts(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(f"{CATALOG_URL}/search/parts").mock(
        return_value=httpx.Response(
            200,
            json={
                "parts": [sample_part(), sample_part("BRK-2", price=None, availability=None, manufacturer=None)],
                "totalResults": 12,
            },
        )
    )

    result = await CatalogTools(catalog_client).search_truck_parts(make="ford", part_type="brake")

    assert route.calls.last.request.url.params["limit"] == "5"
    assert result["success"] is True
    assert result["message"] == "Found 2 parts"
    assert result["total_results"] == 12
    assert result["parts"] == [
        {
            "part_number": "BRK-1001",
            "description": "Front brake caliper",
            "price": "$129.50",
            "availability": "In stock",
            "manufacturer": "Bendix",
        },
        {
            "part_number": "BRK-2",
            "description": "Front brake caliper",
            "price": "Contact for price",
            "availability": "Check availability",
            "manufacturer": "Various",
        },
    ]


@pytest.mark.asyncio
async def test_search_truck_parts_no_results(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{CATALOG_URL}/search/parts").mock(
        return_value=httpx.Response(200, json={"parts": [], "totalResults": 0})
    )

    result = await CatalogTools(catalog_client).search_truck_parts(keyword="widget")

    assert result == {
        "success": False,
        "message": "No parts found. Try different search criteria.",
        "parts": [],
    }


@pytest.mark.asyncio
async def test_search_truck_parts_reports_failure(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{CATALOG_URL}/search/parts").mock(return_value=httpx.Response(500))

    result = await CatalogTools(catalog_client).search_truck_parts(keyword="brake")

    assert result["success"] is False
    assert result["message"] == "Error searching for parts. Please try again."
    assert result["parts"] == []


@pytest.mark.asyncio
async def test_get_part_details_formats_part(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{CATALOG_URL}/parts/BRK-1001").mock(
        return_value=httpx.Response(200, json=sample_part(specifications={"position": "front"}))
    )

    result = await CatalogTools(catalog_client).get_part_details("BRK-1001")

    assert result == {
        "success": True,
        "part": {
            "part_number": "BRK-1001",
            "description": "Front brake caliper",
            "price": "$129.50",
            "availability": "In stock",
            "manufacturer": "Bendix",
            "category": "brake",
            "specifications": {"position": "front"},
        },
    }


@pytest.mark.asyncio
async def test_get_part_details_fills_missing_fields(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{CATALOG_URL}/parts/X-1").mock(
        return_value=httpx.Response(
            200, json={"partNumber": "X-1", "description": "Mud flap"}
        )
    )

    part = (await CatalogTools(catalog_client).get_part_details("X-1"))["part"]

    assert part["price"] == "Contact for price"
    assert part["availability"] == "Check availability"
    assert part["manufacturer"] == "Unknown"
    assert part["category"] == "Unknown"
    assert part["specifications"] == {}


@pytest.mark.asyncio
async def test_get_part_details_not_found(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{CATALOG_URL}/parts/NOPE").mock(return_value=httpx.Response(404))

    result = await CatalogTools(catalog_client).get_part_details("NOPE")

    assert result == {"success": False, "message": "Part number NOPE not found"}


@pytest.mark.asyncio
async def test_get_part_details_reports_failure(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{CATALOG_URL}/parts/BRK-1001").mock(return_value=httpx.Response(401))

    result = await CatalogTools(catalog_client).get_part_details("BRK-1001")

    assert result == {
        "success": False,
        "message": "Error getting part details. Please try again.",
    }


@pytest.mark.asyncio
async def test_check_compatibility(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    vehicles = {"vehicles": [{"make": "peterbilt", "model": "579", "years": [2016, 2017]}]}
    respx_mock.get(f"{CATALOG_URL}/parts/BRK-1001/compatibility").mock(
        return_value=httpx.Response(200, json=vehicles)
    )

    result = await CatalogTools(catalog_client).check_compatibility("BRK-1001")

    assert result == {"success": True, "part_number": "BRK-1001", "compatibility": vehicles}


@pytest.mark.asyncio
async def test_check_compatibility_reports_failure(
    catalog_client: CatalogClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{CATALOG_URL}/parts/BRK-1001/compatibility").mock(
        side_effect=httpx.ConnectError("refused")
    )

    result = await CatalogTools(catalog_client).check_compatibility("BRK-1001")

    assert result == {
        "success": False,
        "message": "Error checking compatibility. Please try again.",
    }
