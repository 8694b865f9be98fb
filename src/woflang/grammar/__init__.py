"""Woflang grammar module.

Exports token kinds and the literal classification predicates.
"""
from __future__ import annotations

from woflang.grammar.tokens import (
    COMMENT_MARKER,
    QUOTE,
    WHITESPACE,
    TokenKind,
    classify,
    is_comment,
    is_float_literal,
    is_integer_literal,
    is_string_literal,
    string_contents,
)

__all__ = [
    "COMMENT_MARKER",
    "QUOTE",
    "WHITESPACE",
    "TokenKind",
    "classify",
    "is_comment",
    "is_float_literal",
    "is_integer_literal",
    "is_string_literal",
    "string_contents",
]
