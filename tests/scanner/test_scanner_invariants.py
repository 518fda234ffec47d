"""Property-based tests for scanner invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from ubbparse import ParseConfig, parse_config_context
from ubbparse.scanner import Scanner
from ubbparse.tokens import TokenType

# Characters that drive every scanner branch
markup_text = st.text(alphabet="[]/=,$*\n abIBcodemath1é", max_size=300)


class TestBasicInvariants:
    """Test basic invariants that should always hold."""

    @given(st.text(max_size=1000))
    @settings(max_examples=200)
    def test_always_ends_with_eof(self, source: str) -> None:
        """Every tokenization must end with exactly one EOF token."""
        tokens = list(Scanner(source).tokenize())

        assert tokens[-1].type == TokenType.EOF, "Last token must be EOF"
        eof_count = sum(1 for t in tokens if t.type == TokenType.EOF)
        assert eof_count == 1, "Must have exactly one EOF token"

    @given(markup_text)
    @settings(max_examples=300)
    def test_token_text_reassembles_source(self, source: str) -> None:
        """Concatenated token spellings reproduce the input exactly."""
        tokens = list(Scanner(source).tokenize())
        assert "".join(t.text for t in tokens) == source

    @given(markup_text)
    @settings(max_examples=200)
    def test_offsets_are_contiguous(self, source: str) -> None:
        """Each token starts where the previous one ended."""
        tokens = list(Scanner(source).tokenize())
        expected_start = 0
        for token in tokens:
            assert token.position == expected_start
            expected_start = token.location.end_offset
        assert expected_start == len(source)

    @given(markup_text)
    @settings(max_examples=100)
    def test_positions_are_one_based(self, source: str) -> None:
        for token in Scanner(source).tokenize():
            loc = token.location
            assert loc.lineno >= 1
            assert loc.col_offset >= 1

    @given(markup_text)
    @settings(max_examples=100)
    def test_deterministic(self, source: str) -> None:
        first = [(t.type, t.value) for t in Scanner(source).tokenize()]
        second = [(t.type, t.value) for t in Scanner(source).tokenize()]
        assert first == second

    @given(markup_text)
    @settings(max_examples=100)
    def test_no_empty_text_tokens(self, source: str) -> None:
        for token in Scanner(source).tokenize():
            if token.type in (TokenType.TEXT, TokenType.TAG_NAME, TokenType.ATTR_VALUE):
                assert token.value


class TestConfigurationInvariants:
    """Invariants that hold for every configuration."""

    @given(markup_text, st.booleans())
    @settings(max_examples=100)
    def test_lossless_with_math_toggled(self, source: str, math_enabled: bool) -> None:
        with parse_config_context(ParseConfig(math_enabled=math_enabled)):
            tokens = list(Scanner(source).tokenize())
        assert "".join(t.text for t in tokens) == source

    @given(markup_text)
    @settings(max_examples=100)
    def test_no_dollar_tokens_when_math_disabled(self, source: str) -> None:
        with parse_config_context(ParseConfig(math_enabled=False)):
            types = {t.type for t in Scanner(source).tokenize()}
        assert TokenType.DOLLAR not in types
        assert TokenType.DOUBLE_DOLLAR not in types
