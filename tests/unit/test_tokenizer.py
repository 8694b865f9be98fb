"""Unit tests for woflang.lexer — the quote-aware whitespace tokenizer."""
from __future__ import annotations

import pytest

from woflang.lexer import Tokenizer, tokenize


class TestWhitespaceSplitting:
    def test_simple_words(self) -> None:
        assert tokenize("5 3 +") == ["5", "3", "+"]

    def test_empty_line_gives_no_tokens(self) -> None:
        assert tokenize("") == []

    def test_whitespace_only_gives_no_tokens(self) -> None:
        assert tokenize(" \t \n ") == []

    def test_runs_of_whitespace_collapse(self) -> None:
        assert tokenize("  1\t\t2   3  ") == ["1", "2", "3"]

    @pytest.mark.parametrize("separator", [" ", "\t", "\n", "\r", "\v", "\f"])
    def test_every_ascii_space_separates(self, separator: str) -> None:
        assert tokenize(f"a{separator}b") == ["a", "b"]

    def test_non_ascii_symbols_are_kept_whole(self) -> None:
        assert tokenize("π ∑ |0⟩ →") == ["π", "∑", "|0⟩", "→"]

    def test_non_breaking_space_is_not_a_separator(self) -> None:
        assert tokenize("a\u00a0b") == ["a\u00a0b"]


class TestQuotes:
    def test_quoted_string_keeps_spaces(self) -> None:
        assert tokenize('"hello world" print') == ['"hello world"', "print"]

    def test_quotes_are_retained_in_token(self) -> None:
        assert tokenize('"x"') == ['"x"']

    def test_empty_string_literal(self) -> None:
        assert tokenize('"" drop') == ['""', "drop"]

    def test_closing_quote_flushes_token(self) -> None:
        assert tokenize('"a"b') == ['"a"', "b"]

    def test_opening_quote_joins_preceding_text(self) -> None:
        assert tokenize('ab"c d"') == ['ab"c d"']

    def test_adjacent_strings_split_at_quote(self) -> None:
        assert tokenize('"a""b"') == ['"a"', '"b"']

    def test_unterminated_quote_drops_partial_token(self) -> None:
        assert tokenize('1 2 "never closed') == ["1", "2"]

    def test_hash_inside_quotes_is_literal(self) -> None:
        assert tokenize('"# not a comment"') == ['"# not a comment"']


class TestTokenizerClass:
    def test_tokenizer_matches_function(self) -> None:
        line = '1 "two three" 4.0'
        assert Tokenizer(line).tokenize() == tokenize(line)

    def test_comment_marker_is_an_ordinary_token(self) -> None:
        assert tokenize("1 # note") == ["1", "#", "note"]
