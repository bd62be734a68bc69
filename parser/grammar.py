# parser/grammar.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# LALR(1) grammar and parser for EDN histories using SLY

"""EDN grammar implementation using SLY parser generator.

Builds plain Python values from the token stream:

- maps      -> dict (keys frozen so vectors may serve as keys)
- vectors   -> list
- lists     -> list
- sets      -> frozenset
- keywords  -> str without the leading colon
- symbols   -> str
- nil/true/false -> None/True/False
- tagged literals (#tag form) -> the tagged form itself
- #_ form   -> discarded
"""

from typing import Any, Dict, List

from sly import Parser
from model.operation import freeze
from utils.logger import get_logger
from .lexer import EDNLexer
from .exceptions import HistoryParseError


def _build_map(forms: List[Any]) -> Dict[Any, Any]:
    if len(forms) % 2:
        raise HistoryParseError(f"Map literal has an odd number of forms ({len(forms)})")
    return {freeze(forms[i]): forms[i + 1] for i in range(0, len(forms), 2)}


class _EDNParser(Parser):
    """SLY-based LALR(1) parser for a sequence of EDN forms.

    Attributes:
        tokens: Token types from EDNLexer
    """

    tokens = EDNLexer.tokens

    @_("forms")
    def start(self, p) -> List[Any]:
        """Start rule: a document is a (possibly empty) sequence of forms."""
        return p.forms

    @_("forms form")
    def forms(self, p) -> List[Any]:
        p.forms.append(p.form)
        return p.forms

    @_("forms DISCARD form")
    def forms(self, p) -> List[Any]:
        return p.forms

    @_("")
    def forms(self, p) -> List[Any]:
        return []

    # Collections
    @_("LBRACE forms RBRACE")
    def form(self, p):
        return _build_map(p.forms)

    @_("LBRACKET forms RBRACKET", "LPAREN forms RPAREN")
    def form(self, p):
        return list(p.forms)

    @_("SET_OPEN forms RBRACE")
    def form(self, p):
        return frozenset(freeze(item) for item in p.forms)

    @_("TAG form")
    def form(self, p):
        """Tagged literal: the tag is dropped, the tagged value is kept."""
        return p.form

    # Scalars
    @_("STRING", "INTEGER", "FLOAT", "KEYWORD", "SYMBOL")
    def form(self, p):
        return p[0]

    @_("NIL")
    def form(self, p):
        return None

    @_("TRUE")
    def form(self, p):
        return True

    @_("FALSE")
    def form(self, p):
        return False

    def parse(self, text: str) -> List[Any]:
        """Parse EDN text into the list of its top-level forms.

        Args:
            text: EDN document

        Returns:
            Top-level forms in document order (empty for blank input)

        Raises:
            HistoryParseError: If the text contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing {len(text)} characters of EDN")

        try:
            result = super().parse(EDNLexer().tokenize(text))
        except HistoryParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise HistoryParseError(f"Parse failed: {e}") from e

        if result is None:
            raise HistoryParseError("Failed to parse history (syntax error).")
        return result

    def error(self, token):
        """Handle syntax errors during parsing.

        Raises:
            HistoryParseError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near {token.value!r} "
                f"(type: {token.type}) at line {token.lineno}, position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of history"

        raise HistoryParseError(error_msg)
