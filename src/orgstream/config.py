"""ContextVar-based parse configuration for orgstream.

Settings that change how Org text is read live in a ContextVar (PEP 567),
so each thread and each asyncio task sees its own value.
An ``EventStream`` captures the active config when it is created, so a
stream keeps its settings even if the context changes while it is consumed.

Usage:
    from orgstream.config import ParseConfig, parse_config_context
    from orgstream import parse_events

    with parse_config_context(ParseConfig(todo_keywords=("TODO", "NEXT"))):
        events = list(parse_events("* NEXT call mom"))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

DEFAULT_LINK_SCHEMES: frozenset[str] = frozenset(
    {
        "doi",
        "file",
        "ftp",
        "http",
        "https",
        "irc",
        "mailto",
        "news",
        "shell",
        "elisp",
        "id",
    }
)


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Instances are frozen, so one config can be shared by many streams.

    Attributes:
        todo_keywords: Headline keywords of the "open task" kind
        done_keywords: Headline keywords of the "finished task" kind
        emphasis_depth: Maximum nesting depth of emphasis spans
        sub_superscripts: Recognize ``a_b`` and ``a^{b}``
        entities: Recognize ``\\alpha``-style entities
        link_schemes: Schemes recognized for plain and angle links

    """

    todo_keywords: tuple[str, ...] = ("TODO",)
    done_keywords: tuple[str, ...] = ("DONE",)
    emphasis_depth: int = 3
    sub_superscripts: bool = True
    entities: bool = True
    link_schemes: frozenset[str] = DEFAULT_LINK_SCHEMES

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored. List values are converted to the tuple or
        frozenset the field expects.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "todo_keywords": ["TODO", "WAIT"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.todo_keywords
            ('TODO', 'WAIT')

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        for key in ("todo_keywords", "done_keywords"):
            if key in filtered:
                filtered[key] = tuple(filtered[key])
        if "link_schemes" in filtered:
            filtered["link_schemes"] = frozenset(filtered["link_schemes"])
        return cls(**filtered)


# Shared default, handed out whenever no config was set
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "orgstream_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Restores the shared module-level default instance.
    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Use a config for the duration of a with block.

    Args:
        config: ParseConfig to use within the context.

    Yields:
        None

    Example:
        >>> with parse_config_context(ParseConfig(entities=False)):
        ...     events = list(parse_events("\\\\alpha"))
        >>> # The previous config is active again here

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_LINK_SCHEMES",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
