"""
Record types for Spotify catalog payloads and the aggregation result.

Hey future me - the API hands us loosely-typed JSON. Everything that crosses
into the aggregation pass is converted into one of these records first, so a
missing field blows up HERE (as MalformedResponseError) instead of as a
KeyError deep inside the counting loop.

Flow: API JSON → from_api() → record → FrequencyTable → Profile
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from profilter.domain.exceptions import MalformedResponseError


def _require_object(data: Any, kind: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Expected {kind} object, got {type(data).__name__}"
        )
    return data


def _require_str(data: dict[str, Any], key: str, kind: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedResponseError(f"{kind} is missing string field '{key}'")
    return value


@dataclass(frozen=True)
class CatalogEntity:
    """Anything that can be counted in a FrequencyTable."""

    id: str
    name: str


@dataclass(frozen=True)
class Artist(CatalogEntity):
    """Artist credited on a track (simplified artist object)."""

    @classmethod
    def from_api(cls, data: Any) -> "Artist":
        obj = _require_object(data, "artist")
        return cls(id=_require_str(obj, "id", "artist"), name=_require_str(obj, "name", "artist"))


@dataclass(frozen=True)
class Album(CatalogEntity):
    """Album a track belongs to (simplified album object)."""

    @classmethod
    def from_api(cls, data: Any) -> "Album":
        obj = _require_object(data, "album")
        return cls(id=_require_str(obj, "id", "album"), name=_require_str(obj, "name", "album"))


@dataclass(frozen=True)
class Track(CatalogEntity):
    """Full track object as embedded in a playlist-track wrapper."""

    album: Album
    artists: tuple[Artist, ...] = ()

    @classmethod
    def from_api(cls, data: Any) -> "Track":
        obj = _require_object(data, "track")
        artists = obj.get("artists", [])
        if not isinstance(artists, list):
            raise MalformedResponseError("track field 'artists' is not a list")
        return cls(
            id=_require_str(obj, "id", "track"),
            name=_require_str(obj, "name", "track"),
            album=Album.from_api(obj.get("album")),
            artists=tuple(Artist.from_api(a) for a in artists),
        )


@dataclass(frozen=True)
class PlaylistTrack:
    """Playlist-track wrapper. ``track`` is None for entries we cannot count."""

    track: Track | None

    # Listen up: Spotify returns {"track": null} for tracks that were removed or are
    # unavailable, and local files come back with "id": null. Neither is an error,
    # both just mean "nothing to count here".
    @classmethod
    def from_api(cls, data: Any) -> "PlaylistTrack":
        obj = _require_object(data, "playlist track")
        inner = obj.get("track")
        if not inner:
            return cls(track=None)
        inner = _require_object(inner, "track")
        if inner.get("id") is None:
            return cls(track=None)
        return cls(track=Track.from_api(inner))


@dataclass(frozen=True)
class Playlist:
    """Simplified playlist object from the user's playlist listing."""

    id: str
    name: str
    tracks_href: str

    @classmethod
    def from_api(cls, data: Any) -> "Playlist":
        obj = _require_object(data, "playlist")
        tracks = _require_object(obj.get("tracks"), "playlist tracks reference")
        return cls(
            id=_require_str(obj, "id", "playlist"),
            name=obj.get("name") or "",
            tracks_href=_require_str(tracks, "href", "playlist tracks reference"),
        )


@dataclass(frozen=True)
class Page:
    """
    Paging envelope.

    ``items`` is None when the field is absent from the response, which is
    different from an empty page.
    """

    items: list[Any] | None
    next: str | None = None
    total: int | None = None

    @classmethod
    def from_api(cls, data: Any) -> "Page":
        obj = _require_object(data, "paging")
        items = obj.get("items")
        if items is not None and not isinstance(items, list):
            raise MalformedResponseError("paging field 'items' is not a list")
        next_url = obj.get("next") or None
        total = obj.get("total")
        return cls(
            items=items,
            next=next_url if isinstance(next_url, str) else None,
            total=total if isinstance(total, int) else None,
        )


E = TypeVar("E", bound=CatalogEntity)


@dataclass
class OccurrenceEntry(Generic[E]):
    """An entity plus how many kept playlist entries contributed to it."""

    entity: E
    occurrences: int = 1

    @property
    def name(self) -> str:
        return self.entity.name


class FrequencyTable(Generic[E]):
    """Deduplicating map from entity id to OccurrenceEntry.

    Entries are only ever inserted or incremented, never removed.
    """

    def __init__(self) -> None:
        self._entries: dict[str, OccurrenceEntry[E]] = {}

    def upsert(self, entity: E) -> OccurrenceEntry[E]:
        """Insert the entity with one occurrence, or count one more."""
        entry = self._entries.get(entity.id)
        if entry is None:
            entry = OccurrenceEntry(entity=entity)
            self._entries[entity.id] = entry
        else:
            entry.occurrences += 1
        return entry

    def occurrences(self, entity_id: str) -> int:
        """Occurrence count for an id, 0 if it was never seen."""
        entry = self._entries.get(entity_id)
        return entry.occurrences if entry else 0

    def ranked(self, descending: bool = False) -> list[OccurrenceEntry[E]]:
        """Entries sorted by occurrences (ascending unless told otherwise)."""
        return sorted(
            self._entries.values(),
            key=lambda entry: entry.occurrences,
            reverse=descending,
        )

    def __getitem__(self, entity_id: str) -> OccurrenceEntry[E]:
        return self._entries[entity_id]

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[OccurrenceEntry[E]]:
        return iter(self._entries.values())

    def as_counts(self) -> dict[str, int]:
        """Plain ``{id: occurrences}`` view for tests and debugging."""
        return {key: entry.occurrences for key, entry in self._entries.items()}


class Mode(str, Enum):
    """Which view of a Profile the caller wants."""

    ARTISTS = "artists"
    ALBUMS = "albums"
    TRACKS = "tracks"
    RAW = "raw"


@dataclass(frozen=True)
class Profile:
    """Aggregation result: raw user resource plus three frequency tables."""

    user: dict[str, Any]
    tracks: FrequencyTable[Track] = field(default_factory=FrequencyTable)
    artists: FrequencyTable[Artist] = field(default_factory=FrequencyTable)
    albums: FrequencyTable[Album] = field(default_factory=FrequencyTable)

    def table(self, mode: Mode) -> FrequencyTable[Any]:
        """Return the frequency table a ranking mode refers to."""
        if mode is Mode.RAW:
            raise ValueError("Raw mode has no frequency table")
        tables: dict[Mode, FrequencyTable[Any]] = {
            Mode.TRACKS: self.tracks,
            Mode.ARTISTS: self.artists,
            Mode.ALBUMS: self.albums,
        }
        return tables[mode]


__all__ = [
    "Album",
    "Artist",
    "CatalogEntity",
    "FrequencyTable",
    "Mode",
    "OccurrenceEntry",
    "Page",
    "Playlist",
    "PlaylistTrack",
    "Profile",
    "Track",
]
