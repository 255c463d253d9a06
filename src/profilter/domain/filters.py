"""Track filters applied during aggregation.

Filters are a closed set of tagged variants evaluated by a single function.
A track is kept only if every active filter accepts it.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from profilter.domain.dtos import Track


class FilterKind(str, Enum):
    """Supported filter variants."""

    ALBUM_NAME = "album_name"
    ARTIST_NAME = "artist_name"


@dataclass(frozen=True)
class Filter:
    """A filter variant plus the string it compares against."""

    kind: FilterKind
    value: str

    @classmethod
    def album_name(cls, value: str) -> "Filter":
        return cls(FilterKind.ALBUM_NAME, value)

    @classmethod
    def artist_name(cls, value: str) -> "Filter":
        return cls(FilterKind.ARTIST_NAME, value)


def _album_name_matches(track: Track, value: str) -> bool:
    return track.album.name == value


# Hey future me - this is ALL artists, not ANY. A collab "A feat. B" never passes
# a filter for "A". It is what the tool has always done, so it stays until someone
# decides "at least one artist" was the intent.
def _artist_name_matches(track: Track, value: str) -> bool:
    return all(artist.name == value for artist in track.artists)


_PREDICATES = {
    FilterKind.ALBUM_NAME: _album_name_matches,
    FilterKind.ARTIST_NAME: _artist_name_matches,
}


def evaluate(track_filter: Filter, track: Track) -> bool:
    """Evaluate one filter against a track (exact, case-sensitive match)."""
    return _PREDICATES[track_filter.kind](track, track_filter.value)


def passes_all(filters: Iterable[Filter], track: Track) -> bool:
    """True if every filter accepts the track; stops at the first rejection.

    No filters means every track passes.
    """
    return all(evaluate(track_filter, track) for track_filter in filters)
