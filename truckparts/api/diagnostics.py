"""
Catalog Diagnostics Endpoints

Thin wrappers around the catalog client for checking the integration
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from truckparts.core.catalog import CatalogClient, get_catalog_client

logger = logging.getLogger(__name__)

router = APIRouter()


class TestSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[str] = None
    part_type: Optional[str] = Field(default=None, alias="partType")

    @field_validator("make", "model", "year", "part_type", mode="before")
    @classmethod
    def numbers_as_text(cls, value):
        # years often arrive as JSON numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class TestPartDetailsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    part_number: str = Field(alias="partNumber")

    @field_validator("part_number", mode="before")
    @classmethod
    def number_as_text(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/test-connection")
async def test_connection(catalog: CatalogClient = Depends(get_catalog_client)):
    """Run a one-result search to prove the catalog is reachable"""

    logger.info(f"[Diagnostics] Testing catalog connection: {catalog.base_url} (key configured: {bool(catalog.api_key)})")

    try:
        result = await catalog.search_parts(keyword="brake", limit=1)
    except Exception as e:
        logger.error(f"[Diagnostics] Connection test failed: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Failed to connect to Intella Parts API",
                "api_url": catalog.base_url,
                "has_api_key": bool(catalog.api_key),
                "error": str(e) or "Unknown error",
                "timestamp": _now(),
            },
        )

    return {
        "success": True,
        "message": "Successfully connected to Intella Parts API",
        "api_url": catalog.base_url,
        "has_api_key": bool(catalog.api_key),
        "sample_result": result.model_dump(by_alias=True, exclude_none=True),
        "timestamp": _now(),
    }


def _failure(message: str, error: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": message,
            "error": str(error) or "Unknown error",
        },
    )


@router.post("/test-search")
async def test_search(
    request: Request,
    catalog: CatalogClient = Depends(get_catalog_client)
):
    """Search with vehicle params, capped at five results"""

    try:
        body = TestSearchRequest.model_validate(await request.json())

        search_params = body.model_dump(by_alias=True)
        logger.info(f"[Diagnostics] Testing search with params: {search_params}")

        result = await catalog.search_parts(
            make=body.make,
            model=body.model,
            year=body.year,
            part_type=body.part_type,
            limit=5
        )
    except Exception as e:
        logger.error(f"[Diagnostics] Search test failed: {e}")
        return _failure("Search test failed", e)

    return {
        "success": True,
        "message": f"Found {len(result.parts)} parts",
        "data": {
            "search_params": search_params,
            "results": result.model_dump(by_alias=True, exclude_none=True),
        },
    }


@router.post("/test-part-details")
async def test_part_details(
    request: Request,
    catalog: CatalogClient = Depends(get_catalog_client)
):
    """Look up one part by number"""

    try:
        body = TestPartDetailsRequest.model_validate(await request.json())
        part_number = body.part_number

        logger.info(f"[Diagnostics] Testing part details for: {part_number}")

        part = await catalog.get_part_details(part_number)
    except Exception as e:
        logger.error(f"[Diagnostics] Part details test failed: {e}")
        return _failure("Part details test failed", e)

    if part is None:
        return {
            "success": False,
            "message": f"Part number {part_number} not found",
        }

    return {
        "success": True,
        "message": f"Found details for part {part_number}",
        "data": {
            "partNumber": part_number,
            "details": part.model_dump(by_alias=True, exclude_none=True),
        },
    }
