"""
Agent Tools - Catalog lookups

These are the agent's "hands": catalog calls shaped into plain dicts
the conversation can present.
"""

import logging
from typing import Any, Dict, Optional

from truckparts.core.catalog import CatalogClient
from truckparts.core.errors import CatalogAPIError

logger = logging.getLogger(__name__)


def format_price(price: Optional[float]) -> str:
    return f"${price:.2f}" if price is not None else "Contact for price"


class CatalogTools:
    """
    Tools for searching and looking up parts in the catalog

    Errors are reported in the result (success=False) rather than raised,
    so a failed lookup reads as "no parts" to the conversation.
    """

    def __init__(self, catalog: CatalogClient):
        self.catalog = catalog

    async def search_truck_parts(
        self,
        make: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[str] = None,
        part_type: Optional[str] = None,
        keyword: Optional[str] = None,
        limit: int = 5
    ) -> Dict[str, Any]:
        """Search for truck parts using vehicle information and part type"""
        try:
            results = await self.catalog.search_parts(
                make=make,
                model=model,
                year=year,
                part_type=part_type,
                keyword=keyword,
                limit=limit
            )
        except CatalogAPIError as e:
            logger.warning(f"[Tools] Catalog search failed: {e.message}")
            return {
                "success": False,
                "message": "Error searching for parts. Please try again.",
                "parts": [],
            }

        if not results.parts:
            return {
                "success": False,
                "message": "No parts found. Try different search criteria.",
                "parts": [],
            }

        return {
            "success": True,
            "message": f"Found {len(results.parts)} parts",
            "parts": [
                {
                    "part_number": part.part_number,
                    "description": part.description,
                    "price": format_price(part.price),
                    "availability": part.availability or "Check availability",
                    "manufacturer": part.manufacturer or "Various",
                }
                for part in results.parts
            ],
            "total_results": results.total_results,
        }

    async def get_part_details(self, part_number: str) -> Dict[str, Any]:
        """Get detailed information about a specific part"""
        try:
            part = await self.catalog.get_part_details(part_number)
        except CatalogAPIError as e:
            logger.warning(f"[Tools] Part lookup failed for {part_number}: {e.message}")
            return {
                "success": False,
                "message": "Error getting part details. Please try again.",
            }

        if part is None:
            return {
                "success": False,
                "message": f"Part number {part_number} not found",
            }

        return {
            "success": True,
            "part": {
                "part_number": part.part_number,
                "description": part.description,
                "price": format_price(part.price),
                "availability": part.availability or "Check availability",
                "manufacturer": part.manufacturer or "Unknown",
                "category": part.category or "Unknown",
                "specifications": part.specifications or {},
            },
        }

    async def check_compatibility(self, part_number: str) -> Dict[str, Any]:
        """Vehicles a part is listed as fitting"""
        try:
            vehicles = await self.catalog.get_compatibility(part_number)
        except CatalogAPIError as e:
            logger.warning(f"[Tools] Compatibility lookup failed for {part_number}: {e.message}")
            return {
                "success": False,
                "message": "Error checking compatibility. Please try again.",
            }

        return {
            "success": True,
            "part_number": part_number,
            "compatibility": vehicles,
        }
