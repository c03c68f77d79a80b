"""
Parts Catalog Client - Intella Parts API

Thin HTTP wrapper: parts search and part-detail lookup
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from truckparts.config import get_settings
from truckparts.core.errors import CatalogAPIError, handle_api_error

logger = logging.getLogger(__name__)


# Static endpoint tables, selected with CATALOG_ENDPOINTS
ENDPOINT_PRESETS: Dict[str, Dict[str, str]] = {
    "default": {
        "search": "/search/parts",
        "part_details": "/parts/{part_number}",
        "compatibility": "/parts/{part_number}/compatibility",
    },
    "v1": {
        "search": "/api/v1/parts/search",
        "part_details": "/api/v1/parts/{part_number}",
        "compatibility": "/api/v1/parts/{part_number}/compatibility",
    },
    "restful": {
        "search": "/parts",
        "part_details": "/parts/{part_number}",
        "compatibility": "/parts/{part_number}/vehicles",
    },
}

AUTH_METHODS = ("bearer", "api-key", "basic", "none")


class Part(BaseModel):
    """A catalog part"""

    model_config = ConfigDict(populate_by_name=True)

    part_number: str = Field(alias="partNumber")
    description: str
    price: Optional[float] = None
    availability: Optional[str] = None
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    specifications: Optional[Dict[str, str]] = None


class SearchResponse(BaseModel):
    """One page of search results"""

    model_config = ConfigDict(populate_by_name=True)

    parts: List[Part]
    total_results: int = Field(alias="totalResults")
    page: Optional[int] = None
    has_more: Optional[bool] = Field(default=None, alias="hasMore")


class CatalogClient:
    """
    Intella Parts API client

    Every request is a GET. Failures come back as CatalogAPIError with the
    status mapped to a human-readable message.
    """

    def __init__(
        self,
        base_url: str = "https://api.intellaparts.com",
        api_key: Optional[str] = None,
        auth_method: str = "bearer",
        endpoints: str = "default",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        if auth_method not in AUTH_METHODS:
            raise ValueError(f"Unknown catalog auth method: {auth_method}")
        if endpoints not in ENDPOINT_PRESETS:
            raise ValueError(f"Unknown catalog endpoint preset: {endpoints}")

        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.auth_method = auth_method
        self.endpoints = ENDPOINT_PRESETS[endpoints]
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}

        if not self.api_key or self.auth_method == "none":
            return headers

        if self.auth_method == "bearer":
            headers["Authorization"] = f"Bearer {self.api_key}"
        elif self.auth_method == "api-key":
            headers["X-API-Key"] = self.api_key
        elif self.auth_method == "basic":
            headers["Authorization"] = f"Basic {self.api_key}"

        return headers

    async def _request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {
            key: str(value)
            for key, value in (params or {}).items()
            if value is not None
        }
        url = f"{self.base_url}{endpoint}"

        logger.debug(f"[Catalog] GET {url} params={query}")

        try:
            response = await self.client.get(url, params=query, headers=self._headers())
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            error = handle_api_error(e)
            logger.warning(f"[Catalog] Request to {endpoint} failed: {error.message}")
            raise error from e

    async def search_parts(
        self,
        make: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[str] = None,
        part_type: Optional[str] = None,
        part_number: Optional[str] = None,
        keyword: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> SearchResponse:
        """Search the catalog; part_type is sent as `category`, keyword as `q`"""
        data = await self._request(self.endpoints["search"], {
            "make": make,
            "model": model,
            "year": year,
            "category": part_type,
            "part_number": part_number,
            "q": keyword,
            "page": page or 1,
            "limit": limit or 20,
        })

        try:
            return SearchResponse.model_validate(data)
        except ValidationError as e:
            raise CatalogAPIError(f"Unexpected search response: {e}", None, e) from e

    async def get_part_details(self, part_number: str) -> Optional[Part]:
        """Get one part, or None when the catalog doesn't know it"""
        endpoint = self.endpoints["part_details"].format(part_number=part_number)

        try:
            data = await self._request(endpoint)
        except CatalogAPIError as e:
            if e.status_code == 404:
                logger.info(f"[Catalog] Part {part_number} not found")
                return None
            raise

        try:
            return Part.model_validate(data)
        except ValidationError as e:
            raise CatalogAPIError(f"Unexpected part response: {e}", None, e) from e

    async def get_compatibility(self, part_number: str) -> Any:
        """Vehicles a part fits, as returned by the catalog"""
        endpoint = self.endpoints["compatibility"].format(part_number=part_number)
        return await self._request(endpoint)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()


# Global client instance
_catalog_client: Optional[CatalogClient] = None


def get_catalog_client() -> CatalogClient:
    """Get or create the catalog client"""
    global _catalog_client

    if _catalog_client is None:
        settings = get_settings()
        _catalog_client = CatalogClient(
            base_url=settings.CATALOG_API_URL,
            api_key=settings.CATALOG_API_KEY,
            auth_method=settings.CATALOG_AUTH_METHOD,
            endpoints=settings.CATALOG_ENDPOINTS,
            timeout=settings.CATALOG_TIMEOUT
        )

    return _catalog_client


async def close_catalog_client():
    """Close catalog client on shutdown"""
    global _catalog_client
    if _catalog_client:
        await _catalog_client.close()
        _catalog_client = None
