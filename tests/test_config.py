"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior and from_dict coercion.
"""

from threading import Thread

import pytest

from ubbparse import (
    ParseConfig,
    Scanner,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from ubbparse.tokens import TokenType


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.math_enabled is True
        assert config.verbatim_tags == frozenset({"code", "math"})
        assert config.emoji_prefixes == ("ac", "em", "cc98")

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.math_enabled = False  # type: ignore[misc]

    def test_equality(self) -> None:
        assert ParseConfig() == ParseConfig()
        assert ParseConfig(math_enabled=False) != ParseConfig()


class TestFromDict:
    def test_coerces_sequences(self) -> None:
        config = ParseConfig.from_dict(
            {"verbatim_tags": ["CODE", "Pre"], "emoji_prefixes": ["TB", "ac"]}
        )
        assert config.verbatim_tags == frozenset({"code", "pre"})
        assert config.emoji_prefixes == ("tb", "ac")

    def test_unknown_keys_ignored(self) -> None:
        config = ParseConfig.from_dict({"math_enabled": False, "unknown_key": 1})
        assert config == ParseConfig(math_enabled=False)

    def test_empty_dict_is_default(self) -> None:
        assert ParseConfig.from_dict({}) == ParseConfig()


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def test_set_and_reset(self) -> None:
        custom = ParseConfig(math_enabled=False)
        set_parse_config(custom)
        try:
            assert get_parse_config() is custom
        finally:
            reset_parse_config()
        assert get_parse_config() == ParseConfig()

    def test_context_manager_restores(self) -> None:
        outer = get_parse_config()
        with parse_config_context(ParseConfig(math_enabled=False)):
            assert get_parse_config().math_enabled is False
        assert get_parse_config() is outer

    def test_context_manager_restores_on_error(self) -> None:
        outer = get_parse_config()
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(math_enabled=False)):
                raise RuntimeError("boom")
        assert get_parse_config() is outer

    def test_nested_contexts(self) -> None:
        with parse_config_context(ParseConfig(math_enabled=False)):
            with parse_config_context(ParseConfig(emoji_prefixes=("tb",))):
                assert get_parse_config().math_enabled is True
                assert get_parse_config().emoji_prefixes == ("tb",)
            assert get_parse_config().math_enabled is False

    def test_scanner_reads_config_at_construction(self) -> None:
        with parse_config_context(ParseConfig(math_enabled=False)):
            scanner = Scanner("$x$")
        types = [t.type for t in scanner.tokenize()]
        assert types == [TokenType.TEXT, TokenType.EOF]


class TestThreadIsolation:
    def test_threads_do_not_see_each_others_config(self) -> None:
        results: dict[str, bool] = {}

        def with_math_off() -> None:
            set_parse_config(ParseConfig(math_enabled=False))
            results["off"] = get_parse_config().math_enabled

        def with_default() -> None:
            results["default"] = get_parse_config().math_enabled

        t1 = Thread(target=with_math_off)
        t1.start()
        t1.join()
        t2 = Thread(target=with_default)
        t2.start()
        t2.join()

        assert results == {"off": False, "default": True}
        assert get_parse_config().math_enabled is True

    def test_parse_in_threads_with_different_configs(self) -> None:
        kinds: dict[str, str] = {}

        def run(label: str, config: ParseConfig) -> None:
            doc = parse("$x$", config=config)
            kinds[label] = doc.children[0].kind.name

        threads = [
            Thread(target=run, args=("on", ParseConfig())),
            Thread(target=run, args=("off", ParseConfig(math_enabled=False))),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert kinds == {"on": "LATEX", "off": "TEXT"}
