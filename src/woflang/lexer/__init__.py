"""Woflang lexer module.

Exports the ``Tokenizer`` class and the ``tokenize`` convenience function.
"""
from __future__ import annotations

from woflang.lexer.lexer import Tokenizer, tokenize

__all__ = ["Tokenizer", "tokenize"]
