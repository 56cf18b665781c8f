"""Unit tests for HttpVideoInfoFetcher adapter."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tubecache.domain.shared.error import MalformedPayloadError, UpstreamError
from tubecache.infrastructure.http.video_info_fetcher import HttpVideoInfoFetcher

BASE_URL = "https://provider.example/videos/"


def ok_response(payload) -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


class TestHttpVideoInfoFetcher:
    @pytest.mark.asyncio
    async def test_fetches_and_parses_json(self, sample_raw):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get.return_value = ok_response(sample_raw)

        fetcher = HttpVideoInfoFetcher(client=client, base_url=BASE_URL)
        result = await fetcher.fetch_raw_info("dQw4w9WgXcQ")

        assert result == sample_raw
        client.get.assert_called_once_with("https://provider.example/videos/dQw4w9WgXcQ")

    def test_url_percent_encodes_identifier(self):
        fetcher = HttpVideoInfoFetcher(client=AsyncMock(spec=httpx.AsyncClient), base_url=BASE_URL)

        assert fetcher.url_for("a/b c") == "https://provider.example/videos/a%2Fb%20c"

    @pytest.mark.asyncio
    async def test_http_error_carries_status_code(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        response = MagicMock(spec=httpx.Response)
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Not Found",
            request=MagicMock(),
            response=MagicMock(status_code=404),
        )
        client.get.return_value = response

        fetcher = HttpVideoInfoFetcher(client=client, base_url=BASE_URL)
        with pytest.raises(UpstreamError) as exc_info:
            await fetcher.fetch_raw_info("missing")

        assert exc_info.value.status_code == 404
        assert "missing" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_transport_error_has_no_status_code(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get.side_effect = httpx.ConnectError("connection refused")

        fetcher = HttpVideoInfoFetcher(client=client, base_url=BASE_URL)
        with pytest.raises(UpstreamError) as exc_info:
            await fetcher.fetch_raw_info("v1")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed_payload(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        response = ok_response(None)
        response.json.side_effect = ValueError("Invalid JSON")
        client.get.return_value = response

        fetcher = HttpVideoInfoFetcher(client=client, base_url=BASE_URL)
        with pytest.raises(MalformedPayloadError):
            await fetcher.fetch_raw_info("v1")

    @pytest.mark.asyncio
    async def test_non_object_json_is_returned_as_is(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get.return_value = ok_response([1, 2, 3])

        fetcher = HttpVideoInfoFetcher(client=client, base_url=BASE_URL)

        assert await fetcher.fetch_raw_info("v1") == [1, 2, 3]
