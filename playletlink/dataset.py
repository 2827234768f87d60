"""
CSV dataset loading.

Column 0 holds the composite playlet label, column 1 the share link. Extra
columns are ignored and short rows are tolerated; only rows with a label and
an accepted share link become records.
"""

import csv
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .errors import DatasetFormatError, DatasetNotFoundError
from .logger import get_logger
from .normalize import is_accepted_link
from .schema import RawRecord

logger = get_logger()


def parse_rows(rows: Iterable[Sequence[str]]) -> Tuple[List[RawRecord], int]:
    """
    Keep the rows that carry a label and an accepted link.

    Returns:
        Tuple of (records, discarded_count); blank rows are not counted
    """
    records: List[RawRecord] = []
    discarded = 0
    for row in rows:
        if not row or all(not cell.strip() for cell in row):
            continue
        if len(row) < 2:
            discarded += 1
            continue
        label, link = row[0], row[1].strip()
        if not label or not link or not is_accepted_link(link):
            discarded += 1
            continue
        records.append(RawRecord(label=label, link=link))
    return records, discarded


def read_dataset(path: Path, encoding: str = "utf-8-sig") -> List[RawRecord]:
    """
    Read the CSV dataset into memory.

    Args:
        path: CSV file path
        encoding: File encoding; the default also strips a UTF-8 BOM

    Returns:
        Accepted records in file order

    Raises:
        DatasetNotFoundError: If the file does not exist
        DatasetFormatError: If the file cannot be decoded or parsed as CSV
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetNotFoundError(f"Dataset file not found: {path}")

    logger.info("Reading dataset", path=str(path))
    try:
        with path.open("r", encoding=encoding, newline="") as f:
            records, discarded = parse_rows(csv.reader(f, delimiter=","))
    except UnicodeDecodeError as e:
        raise DatasetFormatError(f"Dataset is not valid {encoding}: {path} ({e.reason} at byte {e.start})")
    except csv.Error as e:
        raise DatasetFormatError(f"Dataset is not valid CSV: {path} ({e})")
    except OSError as e:
        raise DatasetFormatError(f"Failed to read dataset {path}: {e}")

    logger.record_dataset(len(records), discarded)
    logger.info(f"Dataset loaded: {len(records)} records", discarded=discarded)
    return records
