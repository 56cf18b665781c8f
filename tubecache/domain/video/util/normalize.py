"""Normalize raw provider payloads into NormalizedRecord.

The provider's document is treated as an untyped tree in which any node may
be missing, null or of an unexpected shape. Every output field is extracted
independently through ordered path alternatives, so one broken branch never
affects another, and every field falls back to a documented default.
"""

from collections.abc import Mapping
from typing import Any

from tubecache.domain.shared.error import MalformedPayloadError
from tubecache.domain.video.model.record import (
    NOT_AVAILABLE,
    Author,
    Description,
    NormalizedRecord,
    RelatedItem,
)
from tubecache.domain.video.util.extract import (
    as_count,
    as_list,
    as_scalar,
    as_scraped_count,
    as_text,
    first_of,
)
from tubecache.domain.video.util.formatting import DEFAULT_FORMATTER, CountFormatter

LINE_BREAK = "<br>"

# =============================================================================
# Video fields
# =============================================================================

VIDEO_ID = first_of("basic_info.id", "video_details.video_id", coerce=as_text)
TITLE = first_of(
    "basic_info.title",
    "primary_info.title.text",
    "video_details.title",
    coerce=as_text,
)
RELATIVE_DATE = first_of(
    "primary_info.relative_date.text",
    "primary_info.published.text",
    coerce=as_text,
)
VIEW_COUNT = first_of(
    "basic_info.view_count",
    "primary_info.view_count.original_view_count",
    "video_details.view_count",
    coerce=as_count,
)
LIKE_COUNT = first_of("basic_info.like_count", "primary_info.like_count", coerce=as_count)
DESCRIPTION = first_of(
    "basic_info.short_description",
    "secondary_info.description.text",
    coerce=as_text,
)

# =============================================================================
# Author fields
# =============================================================================

AUTHOR_ID = first_of(
    "basic_info.channel.id",
    "basic_info.channel_id",
    "secondary_info.owner.author.id",
    coerce=as_text,
)
AUTHOR_NAME = first_of(
    "basic_info.channel.name",
    "basic_info.author",
    "secondary_info.owner.author.name",
    coerce=as_text,
)
SUBSCRIBER_COUNT = first_of(
    "secondary_info.owner.subscriber_count.text",
    "basic_info.channel.subscriber_count",
    coerce=as_scalar,
)
AUTHOR_THUMBNAIL = first_of(
    "secondary_info.owner.author.thumbnails.0.url",
    "basic_info.channel.thumbnails.0.url",
    coerce=as_text,
)

# =============================================================================
# Related video fields (relative to one candidate)
# =============================================================================

RELATED_VIDEOS = first_of("contents.related_videos", coerce=as_list)

RELATED_BADGE = first_of("badges.0.label", "badges.0.text", coerce=as_text)
RELATED_TITLE = first_of("title.text", "title", coerce=as_text)
RELATED_CHANNEL = first_of("author.name", "channel", coerce=as_text)
RELATED_VIEWS = first_of(
    "short_view_count.text",
    "view_count.text",
    "view_count",
    coerce=as_scraped_count,
)
RELATED_UPLOADED = first_of("published.text", "published", coerce=as_text)
RELATED_VIDEO_ID = first_of("id", "video_id", coerce=as_text)
RELATED_PLAYLIST_ID = first_of("playlist_id", coerce=as_text)
RELATED_THUMBNAIL = first_of("thumbnails.0.url", coerce=as_text)


def format_description(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\n", LINE_BREAK)


def normalize_related(candidate: Any, formatter: CountFormatter = DEFAULT_FORMATTER) -> RelatedItem:
    views = RELATED_VIEWS(candidate)
    return RelatedItem(
        badge=RELATED_BADGE.or_default(candidate, NOT_AVAILABLE),
        title=RELATED_TITLE.or_default(candidate, NOT_AVAILABLE),
        channel=RELATED_CHANNEL.or_default(candidate, NOT_AVAILABLE),
        views=formatter.views(views),
        uploaded=RELATED_UPLOADED.or_default(candidate, NOT_AVAILABLE),
        video_id=RELATED_VIDEO_ID.or_default(candidate, NOT_AVAILABLE),
        playlist_id=RELATED_PLAYLIST_ID.or_default(candidate, NOT_AVAILABLE),
        thumbnail=RELATED_THUMBNAIL.or_default(candidate, ""),
    )


def normalize(raw: Any, formatter: CountFormatter = DEFAULT_FORMATTER) -> NormalizedRecord:
    """Convert a raw provider payload into a schema-complete NormalizedRecord.

    Args:
        raw: Provider payload. Any mapping is accepted, however sparse.
        formatter: Count formatting strategy for views, likes and subscribers.

    Returns:
        NormalizedRecord with every field populated (defaults for missing data).

    Raises:
        MalformedPayloadError: If ``raw`` is not a mapping at all.
    """
    if not isinstance(raw, Mapping):
        raise MalformedPayloadError(
            f"Expected a JSON object from the provider, got {type(raw).__name__}"
        )

    text = DESCRIPTION.or_default(raw, "")

    # At most one related video is exposed.
    candidates = RELATED_VIDEOS.or_default(raw, [])
    related = tuple(normalize_related(c, formatter) for c in candidates[:1])

    return NormalizedRecord(
        id=VIDEO_ID(raw),
        title=TITLE(raw),
        views=formatter.views(VIEW_COUNT(raw)),
        relative_date=RELATIVE_DATE(raw),
        likes=formatter.likes(LIKE_COUNT(raw)),
        author=Author(
            id=AUTHOR_ID(raw),
            name=AUTHOR_NAME(raw),
            subscribers=formatter.subscribers(SUBSCRIBER_COUNT(raw)),
            thumbnail=AUTHOR_THUMBNAIL.or_default(raw, ""),
        ),
        description=Description(text=text, formatted=format_description(text)),
        related=related,
    )
