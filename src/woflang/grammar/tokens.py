"""Token classification for Woflang.

The tokenizer produces plain strings; classification happens afterwards,
on whole tokens, in the order the dispatch loop applies it.  Literal
grammar::

    integer  ::= [+-]? [0-9]+
    float    ::= [+-]? digits-and-one-dot      (exactly one ".", >= 1 digit)
    string   ::= '"' any* '"'
    comment  ::= '#' any*

Anything else is a WORD: either a registered operator or, failing
that, a symbol.
"""
from __future__ import annotations

import re
from enum import Enum, auto
from typing import Final

COMMENT_MARKER: Final[str] = "#"
QUOTE: Final[str] = '"'

# C-locale isspace(); str.isspace() would also accept Unicode spaces.
WHITESPACE: Final[frozenset[str]] = frozenset(" \t\n\r\v\f")

_INTEGER: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_FLOAT: Final[re.Pattern[str]] = re.compile(r"[+-]?(?=[^.]*\.[^.]*\Z)(?=.*[0-9])[0-9.]+")


class TokenKind(Enum):
    """Dispatch category of a token."""

    COMMENT = auto()
    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    WORD = auto()


def is_comment(token: str) -> bool:
    """Return True if ``token`` starts a comment."""
    return token.startswith(COMMENT_MARKER)


def is_string_literal(token: str) -> bool:
    """Return True if ``token`` is wrapped in a matching pair of double quotes."""
    return len(token) >= 2 and token[0] == QUOTE and token[-1] == QUOTE


def is_integer_literal(token: str) -> bool:
    """Return True for an optional sign followed by one or more ASCII digits."""
    return _INTEGER.fullmatch(token) is not None


def is_float_literal(token: str) -> bool:
    """Return True for an optional sign, exactly one ``.`` and at least one digit."""
    return _FLOAT.fullmatch(token) is not None


def string_contents(token: str) -> str:
    """Return the text between the quotes of a string literal token."""
    return token[1:-1]


def classify(token: str) -> TokenKind:
    """Return the ``TokenKind`` of ``token`` in dispatch priority order."""
    if is_comment(token):
        return TokenKind.COMMENT
    if is_string_literal(token):
        return TokenKind.STRING
    if is_integer_literal(token):
        return TokenKind.INTEGER
    if is_float_literal(token):
        return TokenKind.FLOAT
    return TokenKind.WORD
