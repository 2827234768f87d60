from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

# Marker written to reports in place of a missing link
NOT_FOUND = "未找到"

# Only share links on this host are kept from the dataset
ACCEPTED_LINK_HOST = "pan.quark.cn"

REQUIRED_RANKING_FIELDS = ["ranking", "playletName"]


class MatchKind(str, Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True)
class RawRecord:
    """One accepted dataset row: a composite label and its share link."""

    label: str
    link: str


@dataclass(frozen=True)
class RankingItem:
    """One entry of the hot ranking. ``rank`` is passed through unchanged."""

    rank: int
    title: str


@dataclass(frozen=True)
class MatchResult:
    rank: int
    title: str
    link: Optional[str]
    kind: MatchKind = MatchKind.NONE

    @property
    def found(self) -> bool:
        return self.link is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ranking": self.rank,
            "playletName": self.title,
            "quarkUrl": self.link if self.link is not None else NOT_FOUND,
        }


def validate_ranking_item(data: Any) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    The rank value itself is not checked beyond being present.
    """
    if not isinstance(data, dict):
        return [f"Ranking entry must be an object, got {type(data).__name__}"]

    errors: List[str] = []
    for f in REQUIRED_RANKING_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")

    if "playletName" in data and not isinstance(data["playletName"], str):
        errors.append("Field 'playletName' must be a string")

    return errors
