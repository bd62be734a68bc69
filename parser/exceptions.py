# parser/exceptions.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Custom exceptions for history parsing

"""Domain-specific exceptions for EDN history processing.

Raised by the lexer and grammar when a history file is not well-formed EDN.
Content-level problems (a well-formed entry that lacks a required field)
are reported separately by the history reader.
"""


class HistoryParseError(RuntimeError):
    """Exception raised when history parsing fails due to syntax errors.

    Indicates that the input text does not conform to the EDN subset
    accepted by the parser: unbalanced delimiters, maps with an odd number
    of forms, or characters no token matches.
    """

    pass
