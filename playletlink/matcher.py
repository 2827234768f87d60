"""
Ranking title to dataset link matching.

Records are scanned once, in dataset order. Each record gets an exact check
and then a substring check before the scan moves on, so the first record that
passes either check wins. A later exact hit never overrides an earlier fuzzy
one.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .normalize import extract_playlet_names, is_accepted_link
from .schema import MatchKind, MatchResult, RankingItem, RawRecord


def _is_fuzzy_match(name: str, title: str) -> bool:
    return name in title or title in name


def match_title(title: str, records: Iterable[RawRecord]) -> Tuple[Optional[str], MatchKind]:
    """
    Find the link for a ranking title and report which check hit.

    Args:
        title: Title to look for
        records: Dataset records in file order

    Returns:
        Tuple of (link, kind); link is None and kind is MatchKind.NONE
        when no record matches
    """
    for record in records:
        if not is_accepted_link(record.link):
            continue
        names = extract_playlet_names(record.label)

        if any(name == title for name in names):
            return record.link, MatchKind.EXACT

        if any(_is_fuzzy_match(name, title) for name in names):
            return record.link, MatchKind.FUZZY

    return None, MatchKind.NONE


def find_link(title: str, records: Iterable[RawRecord]) -> Optional[str]:
    """Return the first matching record's link, or None when nothing matches."""
    link, _ = match_title(title, records)
    return link


def match_rankings(items: Iterable[RankingItem], records: Sequence[RawRecord]) -> List[MatchResult]:
    """Match every ranking item, keeping ranking order."""
    results: List[MatchResult] = []
    for item in items:
        link, kind = match_title(item.title, records)
        results.append(MatchResult(rank=item.rank, title=item.title, link=link, kind=kind))
    return results
