"""Locale-specific display of view, like and subscriber counts.

Counts at or above the locale's unit size are shown as the integer quotient
followed by a unit marker (Korean groups by ten-thousand, "만"); smaller counts
are shown literally. Each field kind carries its own suffix convention.

Extraction code depends only on the CountFormatter protocol, so another locale
can be plugged in without touching the normalizer.
"""

import math
import re
from dataclasses import dataclass
from typing import Protocol

from tubecache.domain.video.model.record import NOT_AVAILABLE
from tubecache.domain.video.util.extract import parse_digits

_NON_DIGITS = re.compile(r"[^0-9]")


class CountFormatter(Protocol):
    """Formatting strategy keyed by field kind."""

    def views(self, count: int | None) -> str: ...

    def likes(self, count: int | None) -> str: ...

    def subscribers(self, count: int | str | None) -> str: ...


@dataclass(frozen=True)
class UnitCountFormatter:
    """CountFormatter that groups large counts by a single unit.

    Attributes:
        unit_size: Threshold and divisor for the unit (10000 for "만").
        unit_marker: Marker appended to the quotient.
        views_suffix: Appended to every formatted view count.
        likes_suffix: Appended to every formatted like count.
        subscribers_template: ``str.format`` template receiving the magnitude.
    """

    unit_size: int
    unit_marker: str
    views_suffix: str = ""
    likes_suffix: str = ""
    subscribers_template: str = "{}"

    def magnitude(self, count: int) -> str:
        if count >= self.unit_size:
            return f"{count // self.unit_size}{self.unit_marker}"
        return str(count)

    def views(self, count: int | None) -> str:
        if count is None:
            return NOT_AVAILABLE
        return f"{self.magnitude(count)}{self.views_suffix}"

    def likes(self, count: int | None) -> str:
        if count is None:
            return NOT_AVAILABLE
        return f"{self.magnitude(count)}{self.likes_suffix}"

    def subscribers(self, count: int | str | None) -> str:
        # A missing count renders as zero subscribers, never "N/A".
        return self.subscribers_template.format(self.magnitude(parse_subscriber_count(count)))


def parse_subscriber_count(value: int | str | None) -> int:
    """Reduce a subscriber count to an int by keeping only its digits.

    ``"1,234,000 subscribers"`` becomes ``1234000``; ``None`` and digit-free
    strings become ``0``.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0) if math.isfinite(value) else 0
    count = parse_digits(_NON_DIGITS.sub("", str(value)))
    return 0 if count is None else count


KOREAN = UnitCountFormatter(
    unit_size=10_000,
    unit_marker="만",
    views_suffix=" 회",
    subscribers_template="구독자 {}명",
)

ENGLISH = UnitCountFormatter(
    unit_size=1_000,
    unit_marker="K",
    views_suffix=" views",
    subscribers_template="{} subscribers",
)

DEFAULT_FORMATTER: CountFormatter = KOREAN

LOCALES: dict[str, CountFormatter] = {
    "ko": KOREAN,
    "en": ENGLISH,
}


def format_views(count: int | None) -> str:
    return DEFAULT_FORMATTER.views(count)


def format_likes(count: int | None) -> str:
    return DEFAULT_FORMATTER.likes(count)


def format_subscribers(count: int | str | None) -> str:
    return DEFAULT_FORMATTER.subscribers(count)
