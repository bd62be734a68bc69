# parser/lexer.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Lexical analyzer for EDN history files using SLY

"""Lexical analyzer for EDN-encoded test histories.

Jepsen-style histories are written one operation map per line, e.g.

    {:type :ok, :f :add, :value 42, :event_id "n1-3", :process 0, :time 8213}

This lexer covers the EDN subset such files use.

Supported Tokens:
- Delimiters: { } [ ] ( ) #{
- Tagged literal prefixes (#jepsen.history.Op) and the #_ discard marker
- Keywords, strings, integers (optional N suffix), floats (optional M suffix)
- Symbols, with nil/true/false as reserved words
- Whitespace, commas and ;-comments: ignored during tokenization
"""

import re

from sly import Lexer
from utils.logger import get_logger
from .exceptions import HistoryParseError

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}
_ESCAPE_RE = re.compile(r"\\(.)")


def _unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


class EDNLexer(Lexer):
    """SLY-based lexer for EDN history tokenization.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization (commas are whitespace in EDN)
    """

    tokens = {
        "SET_OPEN",
        "DISCARD",
        "TAG",
        "LBRACE",
        "RBRACE",
        "LBRACKET",
        "RBRACKET",
        "LPAREN",
        "RPAREN",
        "STRING",
        "FLOAT",
        "INTEGER",
        "KEYWORD",
        "SYMBOL",
        "NIL",
        "TRUE",
        "FALSE",
    }

    ignore = " \t\r,"
    ignore_comment = r";[^\n]*"

    # Dispatch forms must be tried before TAG
    SET_OPEN = r"\#\{"
    DISCARD = r"\#_"
    TAG = r"\#[A-Za-z][A-Za-z0-9_.\-/:]*"

    LBRACE = r"\{"
    RBRACE = r"\}"
    LBRACKET = r"\["
    RBRACKET = r"\]"
    LPAREN = r"\("
    RPAREN = r"\)"

    @_(r'"(?:[^"\\]|\\.)*"')
    def STRING(self, t):
        self.lineno += t.value.count("\n")
        t.value = _unescape(t.value[1:-1])
        return t

    @_(r"[-+]?\d+(?:\.\d+(?:[eE][-+]?\d+)?|[eE][-+]?\d+)M?")
    def FLOAT(self, t):
        t.value = float(t.value.rstrip("M"))
        return t

    @_(r"[-+]?\d+N?")
    def INTEGER(self, t):
        t.value = int(t.value.rstrip("N"))
        return t

    @_(r":[^\s,\[\]{}()\"#;:][^\s,\[\]{}()\";]*")
    def KEYWORD(self, t):
        t.value = t.value[1:]
        return t

    SYMBOL = r"[A-Za-z*!_?$%&=<>/.+\-'][^\s,\[\]{}()\";]*"
    SYMBOL["nil"] = "NIL"
    SYMBOL["true"] = "TRUE"
    SYMBOL["false"] = "FALSE"

    @_(r"\n+")
    def ignore_newline(self, t):
        self.lineno += len(t.value)

    def error(self, t):
        """Handle illegal characters during tokenization.

        Raises:
            HistoryParseError: Always raised with character and line information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        logger.debug(f"Illegal character '{illegal_char}' at line {self.lineno}, index {self.index}")

        self.index += 1

        raise HistoryParseError(
            f"Illegal character '{illegal_char}' at line {self.lineno}, position {t.index}"
        )
