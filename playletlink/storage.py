import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .errors import ReportFormatError
from .schema import NOT_FOUND, MatchKind, MatchResult


def save_report(path: Path, results: Iterable[MatchResult]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump([r.to_dict() for r in results], f, indent=2, ensure_ascii=False)


def load_report(path: Path) -> List[Dict[str, Any]]:
    """
    Read a saved report back.

    Raises:
        ReportFormatError: If the file cannot be read, is not UTF-8 JSON,
            or is not an array of objects
    """
    path = Path(path)
    if not path.exists():
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
    except UnicodeDecodeError as e:
        raise ReportFormatError(f"Report is not valid utf-8: {path} ({e.reason} at byte {e.start})")
    except OSError as e:
        raise ReportFormatError(f"Failed to read report {path}: {e}")
    if not content:
        return []
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ReportFormatError(f"Report is not valid JSON: {path} ({e})")
    if not isinstance(data, list):
        raise ReportFormatError(f"Report must be a JSON array: {path}")
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ReportFormatError(f"Report entry {i} must be an object, got {type(entry).__name__}: {path}")
    return data


def is_found(entry: Dict[str, Any]) -> bool:
    """True when a saved report entry carries a link."""
    url = entry.get("quarkUrl")
    return bool(url) and url != NOT_FOUND


def summarize(results: Iterable[MatchResult]) -> Dict[str, Any]:
    """Count found / missing results and compute the match rate in percent."""
    results = list(results)
    total = len(results)
    exact = sum(1 for r in results if r.kind == MatchKind.EXACT)
    fuzzy = sum(1 for r in results if r.kind == MatchKind.FUZZY)
    found = sum(1 for r in results if r.found)
    return {
        "total": total,
        "found": found,
        "not_found": total - found,
        "exact": exact,
        "fuzzy": fuzzy,
        "match_rate": round(found / total * 100, 1) if total else 0.0,
    }
