"""
Slot extraction

Fixed-vocabulary regular expressions; first match wins.
"""

import re

from truckparts.agent.state import TruckInfo


MAKE_PATTERN = re.compile(
    r"(ford|chevrolet|chevy|gmc|dodge|ram|toyota|nissan|freightliner|peterbilt|kenworth|volvo|mack)",
    re.IGNORECASE
)

MODEL_PATTERN = re.compile(
    r"(f-?150|f-?250|f-?350|silverado|sierra|ram ?1500|ram ?2500|tundra|titan|cascadia|579|t680|vnl|anthem)",
    re.IGNORECASE
)

YEAR_PATTERN = re.compile(r"(20\d{2}|19\d{2})")

PART_PATTERN = re.compile(
    r"(brake|caliper|rotor|pad|filter|engine|transmission|clutch|axle|wheel|tire|suspension"
    r"|steering|radiator|pump|sensor|light|mirror|door|window|seat|belt|pulley|alternator"
    r"|starter|battery)",
    re.IGNORECASE
)


def _first(pattern: re.Pattern, text: str, lower: bool = True):
    match = pattern.search(text)
    if not match:
        return None
    return match.group(0).lower() if lower else match.group(0)


def extract_truck_info(text: str) -> TruckInfo:
    """
    Pull make/model/year/part type out of free text

    Unmatched slots come back as None.
    """
    return {
        "make": _first(MAKE_PATTERN, text),
        "model": _first(MODEL_PATTERN, text),
        "year": _first(YEAR_PATTERN, text, lower=False),
        "part_type": _first(PART_PATTERN, text),
    }
