

import logging
from typing import Dict, List, Optional

from langgraph.graph import StateGraph, END

from truckparts.agent.nodes import ConversationNodes
from truckparts.agent.state import ConversationState, TruckInfo
from truckparts.agent.tools import CatalogTools
from truckparts.config import get_settings
from truckparts.core.catalog import get_catalog_client

logger = logging.getLogger(__name__)


def route_after_determine(state: ConversationState) -> str:
    """
    Decision: Gather more info, search, or stop?

    Returns: "gather", "search" or "end"
    """
    step = state.get("current_step")

    if step == "gathering_info":
        return "gather"
    elif step == "searching":
        return "search"
    else:
        return "end"


def route_after_gather(state: ConversationState) -> str:
    """Decision: Did the user give us everything we need?"""
    if state.get("current_step") == "searching":
        return "search"
    return "end"


def build_workflow(nodes: ConversationNodes) -> StateGraph:
    """
    Wire the conversation graph

    Flow:
    1. Determine step (always)
    2. Gather truck info (if any slot is missing)
    3. Search parts (once all four slots are known)
    4. Format results
    """
    workflow = StateGraph(ConversationState)

    workflow.add_node("determine_step", nodes.determine_step)
    workflow.add_node("gather", nodes.gather_truck_info)
    workflow.add_node("search", nodes.search_parts)
    workflow.add_node("format_results", nodes.format_results)

    workflow.set_entry_point("determine_step")

    workflow.add_conditional_edges(
        "determine_step",
        route_after_determine,
        {
            "gather": "gather",
            "search": "search",
            "end": END
        }
    )

    workflow.add_conditional_edges(
        "gather",
        route_after_gather,
        {
            "search": "search",
            "end": END
        }
    )

    workflow.add_edge("search", "format_results")
    workflow.add_edge("format_results", END)

    return workflow


class ConversationGraph:
    """Compiled conversation graph with a per-call entry point"""

    def __init__(self, nodes: ConversationNodes):
        self.nodes = nodes
        self.graph = build_workflow(nodes).compile()

    async def process_messages(
        self,
        messages: List[Dict],
        truck_info: Optional[TruckInfo] = None
    ) -> ConversationState:
        """
        Run one pass over the message history

        State starts fresh every call; truck_info carries slot values the
        caller already knows.
        """
        state: ConversationState = {
            "messages": list(messages),
            "current_step": "initial",
            "truck_info": {k: v for k, v in (truck_info or {}).items() if v},
            "search_results": [],
        }

        final_state = await self.graph.ainvoke(state)

        logger.info(
            f"[Graph] Finished at step={final_state['current_step']} "
            f"with {len(final_state['messages'])} messages"
        )

        return final_state


def create_graph(catalog_tools: Optional[CatalogTools] = None, nodes: Optional[ConversationNodes] = None) -> ConversationGraph:
    """Create the conversation graph; without catalog tools, search returns mock data"""
    return ConversationGraph(nodes or ConversationNodes(tools=catalog_tools))


# Global graph instance
_conversation_graph: Optional[ConversationGraph] = None


def get_conversation_graph() -> ConversationGraph:
    """Get or create the conversation graph"""
    global _conversation_graph
    if _conversation_graph is None:
        tools = None
        if get_settings().LOCAL_GRAPH_USE_CATALOG:
            tools = CatalogTools(get_catalog_client())
        _conversation_graph = create_graph(catalog_tools=tools)
    return _conversation_graph
