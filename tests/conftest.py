"""Global test fixtures."""

import os
from typing import Any

import logfire
import pytest

# Keep developer config files and env overrides out of unit tests.
# This must happen at module load time, before any test imports Config.
for _name in [n for n in os.environ if n.startswith("TUBECACHE_")]:
    del os.environ[_name]
os.environ.pop("PORT", None)

# Spans are created in-process only; nothing is exported from tests
logfire.configure(send_to_logfire=False, console=False)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_raw() -> dict[str, Any]:
    """A complete provider payload for one video."""
    return {
        "basic_info": {
            "id": "dQw4w9WgXcQ",
            "title": "Never Gonna Give You Up",
            "short_description": "The official video\nRemastered in 4K",
            "view_count": 1_500_000_000,
            "like_count": 17_000_000,
            "channel": {
                "id": "UCuAXFkgsw1L7xaCfnd5JJOw",
                "name": "Rick Astley",
            },
        },
        "primary_info": {
            "relative_date": {"text": "15년 전"},
        },
        "secondary_info": {
            "owner": {
                "subscriber_count": {"text": "4,230,000 subscribers"},
                "author": {
                    "id": "UCuAXFkgsw1L7xaCfnd5JJOw",
                    "name": "Rick Astley",
                    "thumbnails": [
                        {"url": "https://yt3.example/rick-88.jpg", "width": 88},
                        {"url": "https://yt3.example/rick-176.jpg", "width": 176},
                    ],
                },
            },
        },
        "contents": {
            "related_videos": [
                {
                    "id": "yPYZpwSpKmA",
                    "title": {"text": "Together Forever"},
                    "author": {"name": "Rick Astley"},
                    "short_view_count": {"text": "98,765,432 views"},
                    "published": {"text": "14년 전"},
                    "badges": [{"label": "4K"}],
                    "playlist_id": "RDyPYZpwSpKmA",
                    "thumbnails": [{"url": "https://i.example/yPYZpwSpKmA.jpg"}],
                },
                {"id": "second", "title": {"text": "Second"}},
                {"id": "third", "title": {"text": "Third"}},
            ],
        },
    }
