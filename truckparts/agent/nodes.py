

import logging
import random
from typing import Any, Dict, List, Optional

from truckparts.agent.extraction import extract_truck_info
from truckparts.agent.state import ConversationState, PartResult, TruckInfo, missing_slots
from truckparts.agent.tools import CatalogTools

logger = logging.getLogger(__name__)

PRODUCT_URL = "https://www.intellaparts.com/product"

SLOT_LABELS = {
    "make": "make (e.g. Ford, Freightliner)",
    "model": "model (e.g. F-150, Cascadia)",
    "year": "year",
    "part_type": "part you need (e.g. brake, filter, alternator)",
}


class ConversationNodes:
    """
    Node functions for the conversation graph

    Each node:
    - Takes ConversationState as input
    - Returns only the keys it changes (messages are appended)
    """

    def __init__(self, tools: Optional[CatalogTools] = None, rng: Optional[random.Random] = None):
        self.tools = tools
        self.rng = rng or random.Random()

    async def determine_step(self, state: ConversationState) -> Dict[str, Any]:
        """Node 1: Decide whether we can search or still need truck info"""

        messages = state["messages"]

        if not messages or messages[-1].get("role") != "user":
            return {"current_step": state["current_step"]}

        missing = missing_slots(state["truck_info"])

        if missing:
            logger.debug(f"[Graph] Missing slots: {missing}")
            return {"current_step": "gathering_info"}

        return {"current_step": "searching"}

    async def gather_truck_info(self, state: ConversationState) -> Dict[str, Any]:
        """Node 2: Extract slots from everything the user has said"""

        user_text = " ".join(
            m.get("content", "") for m in state["messages"] if m.get("role") == "user"
        )
        extracted = extract_truck_info(user_text)

        # Only overwrite with values we actually found
        truck_info: TruckInfo = dict(state["truck_info"])
        for slot, value in extracted.items():
            if value:
                truck_info[slot] = value

        logger.info(f"[Graph] Truck info: {truck_info}")

        missing = missing_slots(truck_info)
        if not missing:
            return {"truck_info": truck_info, "current_step": "searching"}

        return {
            "truck_info": truck_info,
            "current_step": "gathering_info",
            "messages": [{"role": "assistant", "content": self._ask_for(missing)}],
        }

    def _ask_for(self, missing: List[str]) -> str:
        labels = [SLOT_LABELS[slot] for slot in missing]
        if len(labels) == 1:
            needed = labels[0]
        else:
            needed = ", ".join(labels[:-1]) + f" and {labels[-1]}"
        return f"To find the right part, could you tell me your truck's {needed}?"

    async def search_parts(self, state: ConversationState) -> Dict[str, Any]:
        """Node 3: Look up parts for the collected truck info"""

        info = state["truck_info"]

        if self.tools is not None:
            results = await self._search_catalog(info)
        else:
            results = self._mock_results(info)

        logger.info(f"[Graph] Search produced {len(results)} results")

        return {"search_results": results, "current_step": "providing_results"}

    async def _search_catalog(self, info: TruckInfo) -> List[PartResult]:
        found = await self.tools.search_truck_parts(
            make=info.get("make"),
            model=info.get("model"),
            year=info.get("year"),
            part_type=info.get("part_type"),
        )
        return [
            {
                "part_number": part["part_number"],
                "description": part["description"],
                "price": part["price"],
                "url": None,
            }
            for part in found["parts"]
        ]

    def _mock_results(self, info: TruckInfo) -> List[PartResult]:
        """Two synthetic records; there is no real lookup behind these"""
        make = info.get("make") or ""
        model = info.get("model") or ""
        year = info.get("year") or ""
        part_type = info.get("part_type") or ""
        prefix = f"IP-{make[:3].upper()}-{year[2:]}"

        return [
            {
                "part_number": f"{prefix}-{self.rng.randrange(10000)}",
                "description": f"{part_type} for {year} {make} {model}",
                "price": f"${self.rng.randrange(500) + 50}.99",
                "url": f"{PRODUCT_URL}/{make}-{model}-{part_type}".lower(),
            },
            {
                "part_number": f"{prefix}-{self.rng.randrange(10000)}",
                "description": f"Premium {part_type} for {year} {make} {model}",
                "price": f"${self.rng.randrange(700) + 100}.99",
                "url": f"{PRODUCT_URL}/premium-{make}-{model}-{part_type}".lower(),
            },
        ]

    async def format_results(self, state: ConversationState) -> Dict[str, Any]:
        """Node 4: Present results, then reset for the next turn"""

        results = state.get("search_results") or []
        info = state["truck_info"]
        vehicle = f"{info.get('year')} {info.get('make')} {info.get('model')}"

        if not results:
            return {
                "current_step": "gathering_info",
                "messages": [{
                    "role": "assistant",
                    "content": (
                        f"I couldn't find any {info.get('part_type')} for your {vehicle}. "
                        "Could you provide more details or try a different part?"
                    ),
                }],
            }

        results_text = "\n\n".join(self._format_result(r) for r in results)

        content = (
            f"I found the following {info.get('part_type')} options for your {vehicle}:\n\n"
            f"{results_text}\n\n"
            "Would you like more information about any of these parts?"
        )

        return {
            "current_step": "initial",
            "messages": [{"role": "assistant", "content": content}],
        }

    def _format_result(self, result: PartResult) -> str:
        lines = [
            f"Part Number: {result['part_number']}",
            f"Description: {result['description']}",
            f"Price: {result.get('price') or 'Contact for price'}",
        ]
        if result.get("url"):
            lines.append(f"More info: {result['url']}")
        return "\n".join(lines)
