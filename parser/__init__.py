# parser/__init__.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# EDN parsing for recorded test histories

"""EDN parsing for Jepsen/Maelstrom-style histories.

Core Functions:
    parse_edn: Converts EDN text into the list of its top-level forms
    parse_edn_form: Parses text holding exactly one EDN form

Example:
    >>> from parser import parse_edn
    >>> parse_edn('{:type :invoke, :f :read, :process 0, :time 12}')
    [{'type': 'invoke', 'f': 'read', 'process': 0, 'time': 12}]
"""

from typing import Any, List

from .exceptions import HistoryParseError
from .grammar import _EDNParser
from utils.logger import get_logger


def parse_edn(source: str) -> List[Any]:
    """Parse EDN text into its top-level forms.

    Uses a fresh parser instance for each invocation so parsing stays
    stateless.

    Args:
        source: EDN document

    Returns:
        Top-level forms in document order

    Raises:
        HistoryParseError: Text is not well-formed EDN
    """
    logger = get_logger()
    parser = _EDNParser()

    try:
        forms = parser.parse(source)
    except HistoryParseError:
        logger.debug("HistoryParseError encountered during EDN parsing")
        raise
    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise HistoryParseError(str(exc)) from exc

    logger.debug(f"Parsed {len(forms)} top-level EDN forms")
    return forms


def parse_edn_form(source: str) -> Any:
    """Parse text that must contain exactly one EDN form.

    Raises:
        HistoryParseError: Zero or several forms, or malformed text
    """
    forms = parse_edn(source)
    if len(forms) != 1:
        raise HistoryParseError(f"Expected exactly one EDN form, found {len(forms)}")
    return forms[0]


__all__ = ["parse_edn", "parse_edn_form", "HistoryParseError"]
