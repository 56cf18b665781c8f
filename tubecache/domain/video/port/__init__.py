"""Video domain ports."""

from .record_cache import RecordCache
from .video_info_fetcher import VideoInfoFetcher

__all__ = [
    "RecordCache",
    "VideoInfoFetcher",
]
