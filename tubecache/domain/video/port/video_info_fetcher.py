"""Port for fetching raw video metadata from the upstream provider."""

from abc import abstractmethod
from typing import Any, Protocol

from tubecache.domain.shared.port import Port


class VideoInfoFetcher(Port, Protocol):
    """Fetches the provider's raw, loosely structured document for one video.

    Implementations raise UpstreamError when the provider rejects or cannot
    resolve the identifier. They do not retry.
    """

    @abstractmethod
    async def fetch_raw_info(self, video_id: str) -> Any: ...
