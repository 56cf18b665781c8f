"""HTTP adapter for the VideoInfoFetcher port."""

from typing import Any
from urllib.parse import quote

import httpx

from tubecache.domain.shared.error import MalformedPayloadError, UpstreamError
from tubecache.domain.video.port.video_info_fetcher import VideoInfoFetcher


class HttpVideoInfoFetcher(VideoInfoFetcher):
    """Fetches a video's raw metadata document as JSON from the provider.

    The document is requested from ``{base_url}/{video_id}``; the identifier is
    passed through verbatim (percent-encoded) and validated only by the
    provider itself.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    def url_for(self, video_id: str) -> str:
        return f"{self._base_url}/{quote(video_id, safe='')}"

    async def fetch_raw_info(self, video_id: str) -> Any:
        try:
            response = await self._client.get(self.url_for(video_id))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Provider returned {e.response.status_code} for video {video_id}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(f"Provider request failed for video {video_id}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayloadError(
                f"Provider returned invalid JSON for video {video_id}"
            ) from e
