"""ContextVar-based parse configuration for ubbparse.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per parse (or per UbbParser instance) and read by the
scanner and parser created inside that context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and concurrent parses never see each other's config.

Usage:
    # Through the API
    doc = parse("[code]x[/code]", config=ParseConfig(math_enabled=False))

    # Direct scanner/parser usage (advanced)
    with parse_config_context(ParseConfig(verbatim_tags=frozenset({"code"}))):
        tokens = list(Scanner(source).tokenize())
        doc = Parser(tokens).parse()

"""

from collections.abc import Iterable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator

DEFAULT_VERBATIM_TAGS: frozenset[str] = frozenset({"code", "math"})
DEFAULT_EMOJI_PREFIXES: tuple[str, ...] = ("ac", "em", "cc98")


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        math_enabled: Recognize ``$inline$`` and ``$$block$$`` LaTeX. When
            disabled every ``$`` is literal text.
        verbatim_tags: Lower-case tag names whose body is kept as raw text
            up to the matching closer (no nested tags, no LaTeX).
        emoji_prefixes: Lower-case tag-name prefixes classified as emoji
            codes (``[ac01]``, ``[em12]``, ``[cc98003]``).

    """

    math_enabled: bool = True
    verbatim_tags: frozenset[str] = DEFAULT_VERBATIM_TAGS
    emoji_prefixes: tuple[str, ...] = DEFAULT_EMOJI_PREFIXES

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Useful when settings come from JSON or TOML, where sets and tuples
        arrive as lists. Unknown keys are silently ignored and tag names and
        prefixes are lower-cased.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "verbatim_tags": ["CODE"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.verbatim_tags
            frozenset({'code'})

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "verbatim_tags" in filtered:
            filtered["verbatim_tags"] = frozenset(_lowered(filtered["verbatim_tags"]))
        if "emoji_prefixes" in filtered:
            filtered["emoji_prefixes"] = tuple(_lowered(filtered["emoji_prefixes"]))
        return cls(**filtered)


def _lowered(names: Iterable[str]) -> list[str]:
    return [name.lower() for name in names]


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "ubb_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration (reuses the module-level default)."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(math_enabled=False)):
        ...     doc = parse("costs $5 or $6")
        >>> # Automatically reset to previous config

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_EMOJI_PREFIXES",
    "DEFAULT_VERBATIM_TAGS",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
