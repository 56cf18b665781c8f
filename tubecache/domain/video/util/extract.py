"""Null-safe extraction from loosely structured upstream documents.

A field is described by an ordered list of alternative paths. Paths are
dotted strings whose integer segments index into lists, e.g.
``"secondary_info.owner.author.thumbnails.0.url"``. Each path is followed
until it hits a missing key, a ``None``, an out-of-range index or a value of
the wrong shape; the first path whose coerced value is not ``None`` wins.

    title = first_of("basic_info.title", "primary_info.title.text", coerce=as_text)
    title(raw)  # -> str | None
"""

import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

PathStep = str | int
Path = tuple[PathStep, ...]

_ASCII_DIGITS = re.compile(r"[0-9]+")
_NUMERIC_RUN = re.compile(r"[0-9][0-9,]*")
_THOUSANDS = re.compile(r"[,\s_]")


def parse_path(dotted: str) -> Path:
    """Split ``"a.0.b"`` into ``("a", 0, "b")``."""
    return tuple(int(part) if part.isdigit() else part for part in dotted.split("."))


def dig(data: Any, path: Path) -> Any:
    """Follow ``path`` through nested mappings and sequences, or return None."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, Sequence) or isinstance(current, (str, bytes)):
                return None
            if not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


# =============================================================================
# Coercions (return None for values of the wrong shape)
# =============================================================================


def as_any(value: Any) -> Any:
    return value


def as_scalar(value: Any) -> str | int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        return value
    return None


def as_text(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def parse_digits(text: str) -> int | None:
    """Parse a run of ASCII digits, or None if ``text`` is anything else.

    Strings too long for ``int()`` are treated as absent.
    """
    if _ASCII_DIGITS.fullmatch(text) is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def as_count(value: Any) -> int | None:
    """Accept ints, finite floats and fully numeric strings such as ``"1,234"``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        return parse_digits(_THOUSANDS.sub("", value))
    return None


def as_scraped_count(value: Any) -> int | None:
    """Take the first numeric run of a display string (``"1,234 views"`` -> 1234)."""
    if isinstance(value, str):
        match = _NUMERIC_RUN.search(value)
        if match is None:
            return None
        return parse_digits(match.group().replace(",", ""))
    return as_count(value)



def as_list(value: Any) -> list[Any] | None:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return list(value)
    return None


# =============================================================================
# Alternatives
# =============================================================================


@dataclass(frozen=True)
class Alternatives(Generic[T]):
    """Ordered fallback paths for one field."""

    paths: tuple[Path, ...]
    coerce: Callable[[Any], T | None]

    def __call__(self, data: Any) -> T | None:
        for path in self.paths:
            value = self.coerce(dig(data, path))
            if value is not None:
                return value
        return None

    def or_default(self, data: Any, default: T) -> T:
        value = self(data)
        return default if value is None else value


def first_of(*paths: str, coerce: Callable[[Any], T | None] = as_any) -> Alternatives[T]:
    """Build an extractor that tries ``paths`` in order."""
    if not paths:
        raise ValueError("first_of() needs at least one path")
    return Alternatives(paths=tuple(parse_path(p) for p in paths), coerce=coerce)
