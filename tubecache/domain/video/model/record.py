"""Normalized video record: the gateway's stable output contract.

Every field is always present with a type-correct value. Missing upstream
data degrades to a documented default, so cached values are schema-complete.
"""

from pydantic import Field

from tubecache.domain.shared.model.value import WireObject

NOT_AVAILABLE = "N/A"


class Author(WireObject):
    id: str | None = None
    name: str | None = None
    subscribers: str
    thumbnail: str = ""


class Description(WireObject):
    text: str = ""
    formatted: str = ""


class RelatedItem(WireObject):
    badge: str = NOT_AVAILABLE
    title: str = NOT_AVAILABLE
    channel: str = NOT_AVAILABLE
    views: str = NOT_AVAILABLE
    uploaded: str = NOT_AVAILABLE
    video_id: str = NOT_AVAILABLE
    playlist_id: str = NOT_AVAILABLE
    thumbnail: str = ""


class NormalizedRecord(WireObject):
    id: str | None = None
    title: str | None = None
    views: str = NOT_AVAILABLE
    relative_date: str | None = None
    likes: str = NOT_AVAILABLE
    author: Author
    description: Description = Description()
    related: tuple[RelatedItem, ...] = Field(default=(), max_length=1)
