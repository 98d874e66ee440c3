"""ContextVar-based reader configuration for tagreader.

Provides context-local defaults using Python's ContextVars (PEP 567). A
TagReader snapshots the active configuration when it is created, so changing
the configuration later never affects readers that already exist.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed.

Usage:
    from tagreader.config import ReaderConfig, reader_config_context

    with reader_config_context(ReaderConfig(force_lower_case=False)):
        reader = TagReader("<DIV>")   # reads names in source casing

    # Or pass a config explicitly
    reader = TagReader(data, config=ReaderConfig(locale="ru"))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from tagreader.dates import DEFAULT_DATE_FORMATS, DateFormat

# Elements whose content is scanned as text up to the matching closer
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# HTML elements that never take a closing tag. Not applied unless a config
# lists them in void_elements.
HTML_VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    """Immutable reader configuration.

    Attributes:
        force_lower_case: Initial case-fold mode of new readers
        mask_line_breaks: Mask CR/LF as character references on text export
        raw_text_elements: Elements whose content is one raw text node
        void_elements: Element names never treated as group openers
        date_formats: Ordered formats tried by read_date
        locale: Month-name table used by named-month date formats

    """

    force_lower_case: bool = True
    mask_line_breaks: bool = True
    raw_text_elements: frozenset[str] = RAW_TEXT_ELEMENTS
    void_elements: frozenset[str] = frozenset()
    date_formats: tuple[DateFormat, ...] = DEFAULT_DATE_FORMATS
    locale: str = "en"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ReaderConfig":
        """Create ReaderConfig from dictionary.

        Unknown keys are silently ignored. Iterables given for the element
        sets are converted to lower-cased frozensets.

        Example:
            >>> config = ReaderConfig.from_dict({
            ...     "force_lower_case": False,
            ...     "void_elements": ["br", "img"],
            ...     "unknown_key": "ignored",
            ... })
            >>> sorted(config.void_elements)
            ['br', 'img']

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        for key in ("raw_text_elements", "void_elements"):
            if key in filtered:
                filtered[key] = frozenset(name.lower() for name in filtered[key])
        if "date_formats" in filtered:
            filtered["date_formats"] = tuple(filtered["date_formats"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ReaderConfig = ReaderConfig()

_reader_config: ContextVar[ReaderConfig] = ContextVar(
    "reader_config",
    default=_DEFAULT_CONFIG,
)


def get_reader_config() -> ReaderConfig:
    """Get the active reader configuration for this context."""
    return _reader_config.get()


def set_reader_config(config: ReaderConfig) -> None:
    """Set the reader configuration for the current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _reader_config.set(config)


def reset_reader_config() -> None:
    """Reset to the default configuration."""
    _reader_config.set(_DEFAULT_CONFIG)


@contextmanager
def reader_config_context(config: ReaderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with reader_config_context(ReaderConfig(mask_line_breaks=False)):
        ...     get_reader_config().mask_line_breaks
        False

    """
    previous = _reader_config.get()
    _reader_config.set(config)
    try:
        yield
    finally:
        _reader_config.set(previous)


__all__ = [
    "HTML_VOID_ELEMENTS",
    "RAW_TEXT_ELEMENTS",
    "ReaderConfig",
    "get_reader_config",
    "set_reader_config",
    "reset_reader_config",
    "reader_config_context",
]
