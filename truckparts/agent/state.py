

from typing import TypedDict, List, Dict, Optional, Annotated, Literal
import operator


ConversationStep = Literal["initial", "gathering_info", "searching", "providing_results"]

SLOTS = ("make", "model", "year", "part_type")


class TruckInfo(TypedDict, total=False):
    """The four slots collected before a search"""
    make: Optional[str]
    model: Optional[str]
    year: Optional[str]
    part_type: Optional[str]


class PartResult(TypedDict, total=False):
    part_number: str
    description: str
    price: Optional[str]
    url: Optional[str]


class ConversationState(TypedDict):
    """
    State that flows through the conversation graph

    Rebuilt from the message history on every call; nothing is persisted.
    """

    messages: Annotated[List[Dict], operator.add]  # Chat history, nodes append
    current_step: ConversationStep
    truck_info: TruckInfo
    search_results: List[PartResult]


def missing_slots(truck_info: TruckInfo) -> List[str]:
    """Slots that still have no value, in collection order"""
    return [slot for slot in SLOTS if not truck_info.get(slot)]
