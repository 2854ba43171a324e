"""ContextVar-based parse configuration for Spoonmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per parse call and read by every nested parser in the
context, so quotes and notes inherit it without copying.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from spoonmark.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(max_depth=16)):
        ast = Parser(source).parse()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Note: source_file is excluded; it is per-call state and stays on the
    Parser instance.

    Attributes:
        max_depth: Deepest allowed nesting of quotes, notes, lists and inline
            spans. Exceeding it raises RecursionLimitExceeded.
        tab_width: Column width of a tab when measuring list indentation.

    """

    max_depth: int = 64
    tab_width: int = 4

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be at least 1, got {self.max_depth}"
            raise ValueError(msg)
        if self.tab_width < 1:
            msg = f"tab_width must be at least 1, got {self.tab_width}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({"max_depth": 8, "theme": "dark"})
            >>> config.max_depth
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the module-level default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(max_depth=4)):
        ...     get_parse_config().max_depth
        4

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
