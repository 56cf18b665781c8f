"""Tests for raw payload normalization."""

from typing import Any

import pytest

from tubecache.domain.shared.error import MalformedPayloadError
from tubecache.domain.video.model.fallback import FALLBACK_RECORD
from tubecache.domain.video.model.record import NormalizedRecord
from tubecache.domain.video.util.formatting import ENGLISH
from tubecache.domain.video.util.normalize import format_description, normalize

RECORD_KEYS = {
    "id",
    "title",
    "views",
    "relativeDate",
    "likes",
    "author",
    "description",
    "related",
}
AUTHOR_KEYS = {"id", "name", "subscribers", "thumbnail"}
DESCRIPTION_KEYS = {"text", "formatted"}
RELATED_KEYS = {
    "badge",
    "title",
    "channel",
    "views",
    "uploaded",
    "videoId",
    "playlistId",
    "thumbnail",
}


def assert_complete_shape(record: NormalizedRecord) -> dict[str, Any]:
    """Assert the wire form has every key with a type-correct value."""
    data = record.model_dump(mode="json", by_alias=True)
    assert set(data) == RECORD_KEYS
    assert set(data["author"]) == AUTHOR_KEYS
    assert set(data["description"]) == DESCRIPTION_KEYS
    assert isinstance(data["views"], str)
    assert isinstance(data["likes"], str)
    assert isinstance(data["author"]["subscribers"], str)
    assert isinstance(data["author"]["thumbnail"], str)
    assert isinstance(data["description"]["text"], str)
    assert isinstance(data["description"]["formatted"], str)
    assert len(data["related"]) <= 1
    for item in data["related"]:
        assert set(item) == RELATED_KEYS
        assert all(isinstance(v, str) for v in item.values())
    return data


class TestNormalizeCompletePayload:
    def test_extracts_every_field(self, sample_raw: dict):
        record = normalize(sample_raw)

        assert record.id == "dQw4w9WgXcQ"
        assert record.title == "Never Gonna Give You Up"
        assert record.views == "150000만 회"
        assert record.likes == "1700만"
        assert record.relative_date == "15년 전"
        assert record.author.id == "UCuAXFkgsw1L7xaCfnd5JJOw"
        assert record.author.name == "Rick Astley"
        assert record.author.subscribers == "구독자 423만명"
        assert record.author.thumbnail == "https://yt3.example/rick-88.jpg"
        assert record.description.text == "The official video\nRemastered in 4K"
        assert record.description.formatted == "The official video<br>Remastered in 4K"

    def test_wire_form_uses_camel_case(self, sample_raw: dict):
        data = assert_complete_shape(normalize(sample_raw))
        assert data["relativeDate"] == "15년 전"
        assert data["related"][0]["videoId"] == "yPYZpwSpKmA"

    def test_takes_only_first_related_video(self, sample_raw: dict):
        record = normalize(sample_raw)

        assert len(record.related) == 1
        related = record.related[0]
        assert related.video_id == "yPYZpwSpKmA"
        assert related.title == "Together Forever"
        assert related.channel == "Rick Astley"
        assert related.views == "9876만 회"
        assert related.uploaded == "14년 전"
        assert related.badge == "4K"
        assert related.playlist_id == "RDyPYZpwSpKmA"
        assert related.thumbnail == "https://i.example/yPYZpwSpKmA.jpg"

    def test_formatter_is_pluggable(self, sample_raw: dict):
        record = normalize(sample_raw, formatter=ENGLISH)
        assert record.views == "1500000K views"
        assert record.author.subscribers == "4230K subscribers"


class TestNormalizeSparsePayload:
    def test_empty_mapping_yields_defaults(self):
        record = normalize({})

        data = assert_complete_shape(record)
        assert data["id"] is None
        assert data["title"] is None
        assert data["views"] == "N/A"
        assert data["likes"] == "N/A"
        assert data["relativeDate"] is None
        assert data["author"] == {
            "id": None,
            "name": None,
            "subscribers": "구독자 0명",
            "thumbnail": "",
        }
        assert data["description"] == {"text": "", "formatted": ""}
        assert data["related"] == []

    def test_empty_mapping_matches_fallback_record(self):
        assert normalize({}) == FALLBACK_RECORD

    def test_missing_related_videos_gives_empty_sequence(self, sample_raw: dict):
        del sample_raw["contents"]["related_videos"]
        assert normalize(sample_raw).related == ()

    def test_related_candidate_fields_fall_back_independently(self):
        record = normalize({"contents": {"related_videos": [{"id": "abc"}]}})

        related = record.related[0]
        assert related.video_id == "abc"
        assert related.title == "N/A"
        assert related.channel == "N/A"
        assert related.views == "N/A"
        assert related.uploaded == "N/A"
        assert related.badge == "N/A"
        assert related.playlist_id == "N/A"
        assert related.thumbnail == ""

    def test_alternate_paths_are_used(self):
        raw = {
            "primary_info": {
                "title": {"text": "Alt title"},
                "published": {"text": "Jan 1, 2020"},
                "view_count": {"original_view_count": "12,000"},
            },
            "secondary_info": {
                "description": {"text": "line1\nline2"},
                "owner": {"author": {"id": "UC1", "name": "Someone"}},
            },
            "basic_info": {"channel": {"subscriber_count": 5000}},
        }
        record = normalize(raw)

        assert record.title == "Alt title"
        assert record.relative_date == "Jan 1, 2020"
        assert record.views == "1만 회"
        assert record.description.formatted == "line1<br>line2"
        assert record.author.id == "UC1"
        assert record.author.name == "Someone"
        assert record.author.subscribers == "구독자 5000명"

    @pytest.mark.parametrize(
        "raw",
        [
            {"basic_info": None},
            {"basic_info": "oops", "primary_info": [], "secondary_info": 3},
            {"basic_info": {"view_count": "lots", "like_count": {"n": 1}}},
            {"secondary_info": {"owner": {"author": {"thumbnails": []}}}},
            {"contents": {"related_videos": "not-a-list"}},
            {"contents": {"related_videos": [None, {"id": "x"}]}},
            {"contents": {"related_videos": [["nested"]]}},
            {"contents": None},
            {"basic_info": {"view_count": float("inf"), "like_count": float("-inf")}},
            {"basic_info": {"view_count": float("nan")}},
            {"basic_info": {"view_count": "1" * 5000, "like_count": "9" * 5000}},
            {"secondary_info": {"owner": {"subscriber_count": {"text": "7" * 5000}}}},
            {"basic_info": {"view_count": "\u00b2", "like_count": "\u0661\u0662"}},
            {"basic_info": {"channel": {"subscriber_count": float("inf")}}},
            {"basic_info": {"view_count": True, "like_count": False, "title": True}},
            {"basic_info": {"channel": ["not", "a", "mapping"], "title": {"text": 1}}},
            {"secondary_info": {"owner": {"subscriber_count": {"text": ["x"]}}}},
            {"contents": {"related_videos": [{"short_view_count": {"text": "1" * 5000}}]}},
            {"contents": {"related_videos": [{"view_count": float("nan"), "badges": "x"}]}},
        ],
    )
    def test_never_raises_for_any_mapping(self, raw: dict):
        assert_complete_shape(normalize(raw))

    def test_unusable_counts_degrade_to_defaults(self):
        record = normalize(
            {
                "basic_info": {"view_count": float("inf"), "like_count": "1" * 5000},
                "secondary_info": {"owner": {"subscriber_count": {"text": "\u0661\u0662"}}},
            }
        )

        assert record.views == "N/A"
        assert record.likes == "N/A"
        assert record.author.subscribers == "구독자 0명"

    def test_related_none_candidate_uses_defaults(self):
        record = normalize({"contents": {"related_videos": [None, {"id": "x"}]}})
        assert record.related[0].video_id == "N/A"


class TestNormalizeMalformed:
    @pytest.mark.parametrize("raw", [None, "text", 42, ["list"]])
    def test_non_mapping_raises(self, raw):
        with pytest.raises(MalformedPayloadError):
            normalize(raw)


class TestFormatDescription:
    def test_replaces_all_line_endings(self):
        assert format_description("a\nb\r\nc") == "a<br>b<br>c"
