# utils/history_reader.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# History file reader for EDN and CSV operation logs

import csv
import io
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from model.operation import HistoryFormatError, Kind, Operation, Phase
from parser import parse_edn
from utils.logger import get_logger

CSV_REQUIRED_HEADERS = {"process", "type", "f", "value", "event_id", "time"}

SUPPORTED_SUFFIXES = {".edn": "edn", ".csv": "csv"}


def detect_format(filepath: str) -> str:
    """Infer the history format from the file suffix.

    Raises:
        HistoryFormatError: If the suffix is not supported
    """
    suffix = Path(filepath).suffix.lower()
    try:
        return SUPPORTED_SUFFIXES[suffix]
    except KeyError:
        raise HistoryFormatError(
            f"Unsupported history format '{suffix}' (expected one of {sorted(SUPPORTED_SUFFIXES)})"
        )


def read_history(filepath: str, fmt: Optional[str] = None) -> List[Operation]:
    """Read a complete history file.

    EDN files hold one operation map per form (Jepsen's history.edn), or a
    single vector of such maps. CSV files carry the columns

        process,type,f,value,event_id,time

    with read results pipe-separated in the value column:

        process,type,f,value,event_id,time
        nemesis,info,start,,,100
        0,ok,add,42,n1-7,120
        1,ok,read,1|2|42,,180

    Args:
        filepath: Path to the history file
        fmt: "edn" or "csv"; inferred from the suffix when omitted

    Returns:
        Operations in file order

    Raises:
        HistoryFormatError: If the file cannot be read or an entry is invalid
        HistoryParseError: If an EDN file is not well-formed
    """
    logger = get_logger()
    path = Path(filepath)
    fmt = fmt or detect_format(filepath)

    if not path.exists():
        raise HistoryFormatError(f"History file not found: {filepath}")

    logger.debug(f"Reading {fmt} history file: {filepath}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise HistoryFormatError(f"Cannot open history file {filepath}: {e}")

    return load_history(text, fmt)


def load_history(text: str, fmt: str) -> List[Operation]:
    """Decode history text of the given format into operations."""
    if fmt == "edn":
        return list(_iter_edn_operations(text))
    if fmt == "csv":
        return list(_iter_csv_operations(text))
    raise HistoryFormatError(f"Unknown history format: {fmt!r}")


def validate_history_file(filepath: str) -> int:
    """Validate history file format and structure.

    Performs complete validation by decoding every entry in the file.

    Returns:
        Number of operations in the file

    Raises:
        HistoryFormatError: If validation fails
    """
    logger = get_logger()
    logger.debug(f"Validating history file: {filepath}")

    ops = read_history(filepath)
    logger.validation_result(True, f"History validation successful: {len(ops)} operations")
    return len(ops)


def _iter_edn_operations(text: str) -> Iterator[Operation]:
    forms = parse_edn(text)
    if len(forms) == 1 and isinstance(forms[0], list):
        forms = forms[0]

    for index, entry in enumerate(forms):
        if not isinstance(entry, Mapping):
            raise HistoryFormatError(f"History entry {index} is not a map: {entry!r}")
        yield Operation.from_mapping(entry, index=index)


def _iter_csv_operations(text: str) -> Iterator[Operation]:
    reader = csv.DictReader(io.StringIO(text))

    fields = set(reader.fieldnames or [])
    missing = CSV_REQUIRED_HEADERS - fields
    if reader.fieldnames and missing:
        raise HistoryFormatError(f"Missing required headers: {sorted(missing)}")

    for index, row in enumerate(reader):
        try:
            entry = _parse_csv_row(row)
        except ValueError as e:
            raise HistoryFormatError(f"Error parsing row {index + 2}: {e}")
        yield Operation.from_mapping(entry, index=index)


def _parse_csv_row(row: Dict[str, str]) -> Dict[str, Any]:
    """Parse a single CSV row into a history entry mapping.

    Raises:
        ValueError: If the time or index column is not numeric
    """
    phase = (row.get("type") or "").strip()
    f = (row.get("f") or "").strip()
    raw_value = (row.get("value") or "").strip()

    if f == Kind.READ and phase == Phase.OK:
        value: Any = _parse_elements(raw_value)
    else:
        value = _parse_scalar(raw_value) if raw_value else None

    entry: Dict[str, Any] = {
        "process": _parse_scalar((row.get("process") or "").strip()),
        "type": phase,
        "f": f,
        "value": value,
        "event_id": (row.get("event_id") or "").strip() or None,
        "time": _parse_number((row.get("time") or "").strip()),
    }
    if (row.get("index") or "").strip():
        entry["index"] = int(row["index"])
    return entry


def _parse_elements(elements_str: str) -> Tuple[Any, ...]:
    """Parse a pipe-separated read result, keeping duplicates and order.

    Args:
        elements_str: String like '1|2|2|x'

    Returns:
        Tuple of parsed elements
    """
    if not elements_str:
        return ()
    return tuple(_parse_scalar(e.strip()) for e in elements_str.split("|") if e.strip())


def _parse_scalar(token: str) -> Any:
    """Integers stay integers; everything else is kept as text."""
    if not token:
        return None
    try:
        return int(token)
    except ValueError:
        return token


def _parse_number(token: str) -> Any:
    if not token:
        raise ValueError("Empty time field")
    try:
        return int(token)
    except ValueError:
        return float(token)
