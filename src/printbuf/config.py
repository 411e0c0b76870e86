"""ContextVar-based buffer configuration for printbuf.

Provides context-local defaults using Python's ContextVars (PEP 567).
Every new Printbuf snapshots the active config at construction time; an
explicit ``config=`` argument overrides it for that buffer alone.

Usage:
    # Process-wide defaults
    from printbuf.config import set_printbuf_config, PrintbufConfig

    set_printbuf_config(PrintbufConfig(human_readable_units=True))

    # Or scoped, e.g. around a diagnostic dump
    with printbuf_config_context(PrintbufConfig(si_units=Units.DECIMAL)):
        buf = Printbuf()
        buf.units_u64(1500)  # "1.5 kB"

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

from printbuf.units import Units

# Tabstops held per buffer unless configured otherwise
INLINE_TABSTOPS = 4

# Smallest allocation an owning buffer will make when it first grows
MIN_ALLOC = 64


@dataclass(frozen=True, slots=True)
class PrintbufConfig:
    """Immutable buffer configuration.

    Attributes:
        si_units: Scaling base for human-readable numbers
        human_readable_units: units_u64()/units_s64() scale instead of printing raw
        max_tabstops: Upper bound on registered tabstops per buffer
        min_alloc: Floor for the first allocation of an owning buffer
        strict_tabstops: Raise TabstopError instead of returning False on rejection

    """

    si_units: Units = Units.BINARY
    human_readable_units: bool = False
    max_tabstops: int = INLINE_TABSTOPS
    min_alloc: int = MIN_ALLOC
    strict_tabstops: bool = False

    def __post_init__(self) -> None:
        if self.max_tabstops < 0:
            raise ValueError("max_tabstops must be non-negative")
        if self.min_alloc < 1:
            raise ValueError("min_alloc must be at least 1")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "PrintbufConfig":
        """Create PrintbufConfig from dictionary.

        Only includes keys that are valid PrintbufConfig fields; unknown keys
        are silently ignored. ``si_units`` may be given as a Units member, its
        name ("binary"/"decimal", any case) or its base (1024/1000).

        Example:
            >>> config = PrintbufConfig.from_dict({
            ...     "human_readable_units": True,
            ...     "si_units": "decimal",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.si_units
            <Units.DECIMAL: 1000>

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        units = filtered.get("si_units")
        if isinstance(units, str):
            filtered["si_units"] = Units[units.upper()]
        elif isinstance(units, int):
            filtered["si_units"] = Units(units)
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PrintbufConfig = PrintbufConfig()

_printbuf_config: ContextVar[PrintbufConfig] = ContextVar(
    "printbuf_config",
    default=_DEFAULT_CONFIG,
)


def get_printbuf_config() -> PrintbufConfig:
    """Get the configuration active in this context."""
    return _printbuf_config.get()


def set_printbuf_config(config: PrintbufConfig) -> None:
    """Set the configuration for the current context.

    Only affects buffers constructed afterwards; existing buffers keep the
    config they snapshotted.
    """
    _printbuf_config.set(config)


def reset_printbuf_config() -> None:
    """Reset to the default configuration."""
    _printbuf_config.set(_DEFAULT_CONFIG)


@contextmanager
def printbuf_config_context(config: PrintbufConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Example:
        >>> with printbuf_config_context(PrintbufConfig(human_readable_units=True)):
        ...     buf = Printbuf()
        >>> buf.human_readable_units
        True

    Restores the previous config even if an exception is raised.

    """
    previous = _printbuf_config.get()
    _printbuf_config.set(config)
    try:
        yield
    finally:
        _printbuf_config.set(previous)


__all__ = [
    "INLINE_TABSTOPS",
    "MIN_ALLOC",
    "PrintbufConfig",
    "get_printbuf_config",
    "set_printbuf_config",
    "reset_printbuf_config",
    "printbuf_config_context",
]
