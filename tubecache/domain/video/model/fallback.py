from tubecache.domain.video.model.record import Author, NormalizedRecord
from tubecache.domain.video.util.formatting import DEFAULT_FORMATTER, CountFormatter


def build_fallback_record(formatter: CountFormatter = DEFAULT_FORMATTER) -> NormalizedRecord:
    """Build the "no data" record for a formatter's locale."""
    return NormalizedRecord(author=Author(subscribers=formatter.subscribers(None)))


FALLBACK_RECORD = build_fallback_record()
"""Process-wide fallback record. Returned under the fallback policy, never cached."""
