"""Woflang tokenizer: splits one line of source into token strings.

The tokenizer is a single-pass character scanner.  It knows about only
two things: whitespace, which separates tokens, and the double quote,
which toggles a quoted mode in which whitespace is kept inside the
current token.

Rules, applied left to right:

- ``"`` is appended to the current token and toggles quoted mode; when
  it closes a quoted run the accumulated token (both quotes included)
  is emitted immediately.
- Outside quoted mode a whitespace character flushes the current token
  if it is non-empty, and is itself discarded.
- Any other character is appended to the current token.
- At end of line a non-empty trailing token is emitted, unless it was
  left open by an unterminated quote, in which case it is dropped.

Token *classification* (numbers, strings, comments) lives in
``woflang.grammar.tokens``.
"""
from __future__ import annotations

from woflang.grammar.tokens import QUOTE, WHITESPACE


class Tokenizer:
    """Single-line, quote-aware whitespace tokenizer.

    Parameters
    ----------
    line:
        The source text to split.  Newlines are treated as ordinary
        whitespace.
    """

    __slots__ = ("_line", "_current", "_in_quotes", "_tokens")

    def __init__(self, line: str) -> None:
        self._line: str = line
        self._current: list[str] = []
        self._in_quotes: bool = False
        self._tokens: list[str] = []

    def tokenize(self) -> list[str]:
        """Scan the whole line and return the ordered token list."""
        for ch in self._line:
            if ch == QUOTE:
                self._current.append(ch)
                if self._in_quotes:
                    self._flush()
                self._in_quotes = not self._in_quotes
            elif ch in WHITESPACE and not self._in_quotes:
                self._flush()
            else:
                self._current.append(ch)

        if not self._in_quotes:
            self._flush()
        return self._tokens

    def _flush(self) -> None:
        """Emit the current token if it is non-empty."""
        if self._current:
            self._tokens.append("".join(self._current))
            self._current.clear()


def tokenize(line: str) -> list[str]:
    """Convenience wrapper: return ``Tokenizer(line).tokenize()``."""
    return Tokenizer(line).tokenize()
