"""Spotify-shaped payload builders and an in-memory catalog client for the tests."""

from typing import Any

from profilter.domain.exceptions import RequestError
from profilter.domain.ports import ICatalogClient

API = "https://api.test/v1/"


def artist_json(artist_id: str, name: str) -> dict[str, Any]:
    return {"id": artist_id, "name": name, "type": "artist"}


def album_json(album_id: str, name: str) -> dict[str, Any]:
    return {"id": album_id, "name": name, "album_type": "album"}


def track_json(
    track_id: str,
    name: str,
    album: dict[str, Any],
    artists: list[dict[str, Any]],
) -> dict[str, Any]:
    return {
        "id": track_id,
        "name": name,
        "album": album,
        "artists": artists,
        "popularity": 50,
    }


def entry(track: dict[str, Any] | None) -> dict[str, Any]:
    """Playlist-track wrapper as returned by /playlists/{id}/tracks."""
    return {"added_at": "2024-01-01T00:00:00Z", "is_local": False, "track": track}


def playlist_json(playlist_id: str, name: str = "") -> dict[str, Any]:
    return {
        "id": playlist_id,
        "name": name or playlist_id,
        "tracks": {"href": f"{API}playlists/{playlist_id}/tracks", "total": 0},
    }


class FakeCatalogClient(ICatalogClient):
    """In-memory catalog: single resources and whole collections keyed by URL."""

    def __init__(
        self,
        resources: dict[str, Any] | None = None,
        collections: dict[str, list[Any]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.resources = resources or {}
        self.collections = collections or {}
        self.failing = failing or set()
        self.requested: list[str] = []
        self.paginated: list[str] = []

    def user_url(self, username: str) -> str:
        return f"{API}users/{username}"

    def user_playlists_url(self, username: str) -> str:
        return f"{API}users/{username}/playlists"

    async def request(self, url: str) -> Any:
        self.requested.append(url)
        if url in self.failing:
            raise RequestError(f"Spotify API returned 500 for {url}", url=url, status_code=500)
        return self.resources[url]

    async def paginate(self, url: str) -> list[Any]:
        self.paginated.append(url)
        if url in self.failing:
            raise RequestError(f"Request to {url} failed: boom", url=url)
        return list(self.collections.get(url, []))
