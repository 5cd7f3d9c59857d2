"""ContextVar-based parse configuration for Ganchos.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Explicit arguments to ``render()`` win; anything left unset falls back to the
config active in the current context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Direct use
    from ganchos.config import ParseConfig, parse_config_context
    from ganchos.flags import Extension

    with parse_config_context(ParseConfig(extensions=Extension.TABLES)):
        html = markdown(source)

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from ganchos.errors import ConfigError
from ganchos.flags import Extension

DEFAULT_MAX_NESTING = 16


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        extensions: Enabled syntax extensions
        max_nesting: Depth limit shared by block and inline recursion

    """

    extensions: Extension = Extension.NONE
    max_nesting: int = DEFAULT_MAX_NESTING

    def __post_init__(self) -> None:
        if self.max_nesting < 1:
            raise ConfigError(f"max_nesting must be positive, got {self.max_nesting}")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> ParseConfig:
        """Create ParseConfig from dictionary.

        Useful when config comes from external sources (YAML files, etc.).
        ``extensions`` may be an int, an ``Extension`` or a list of names.
        Unknown keys are silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "extensions": ["tables", "strikethrough"],
            ...     "unknown_key": "ignored",
            ... })
            >>> bool(config.extensions & Extension.TABLES)
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}

        extensions = filtered.get("extensions")
        if isinstance(extensions, (list, tuple, set, frozenset)):
            filtered["extensions"] = Extension.from_names(extensions)
        elif isinstance(extensions, int):
            filtered["extensions"] = Extension(extensions)
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

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

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
        >>> with parse_config_context(ParseConfig(extensions=Extension.TABLES)):
        ...     get_parse_config().extensions
        <Extension.TABLES: 2>

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_MAX_NESTING",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
