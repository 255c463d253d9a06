"""Aggregation Service - turns a user's public playlists into frequency tables.

Hey future me - this is the whole point of the tool:
1. user profile + playlist listing, fetched at the same time (asyncio.TaskGroup)
2. every playlist's tracks, one playlist after another
3. filters, then one upsert for the track, its album and EACH credited artist

Any RequestError kills the run. There is no "here's what we got so far" -
a half-counted ranking would silently lie about the user's taste.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from profilter.domain.dtos import (
    Album,
    Artist,
    FrequencyTable,
    Playlist,
    PlaylistTrack,
    Profile,
    Track,
)
from profilter.domain.exceptions import AggregationError, RequestError
from profilter.domain.filters import Filter, passes_all
from profilter.domain.ports import ICatalogClient

logger = logging.getLogger(__name__)


class AggregationService:
    """Builds a Profile from a user's public playlists."""

    def __init__(self, client: ICatalogClient) -> None:
        """Initialize aggregation service.

        Args:
            client: Catalog client used for every request
        """
        self._client = client

    async def aggregate(
        self, username: str, filters: Sequence[Filter] = ()
    ) -> Profile:
        """Count tracks, artists and albums across all of a user's playlists.

        Args:
            username: Spotify user id
            filters: Filters a track must ALL pass to be counted

        Returns:
            Profile with the raw user resource and the three tables

        Raises:
            AggregationError: If any request fails (chained to the RequestError)
        """
        try:
            user, raw_playlists = await self._fetch_user_and_playlists(username)

            tracks: FrequencyTable[Track] = FrequencyTable()
            artists: FrequencyTable[Artist] = FrequencyTable()
            albums: FrequencyTable[Album] = FrequencyTable()
            skipped = 0

            playlists = [Playlist.from_api(p) for p in raw_playlists if p]
            logger.info(f"Found {len(playlists)} playlists for {username}")

            for playlist in playlists:
                raw_entries = await self._client.paginate(playlist.tracks_href)
                logger.debug(
                    f"Playlist '{playlist.name}' ({playlist.id}): {len(raw_entries)} entries"
                )
                for raw_entry in raw_entries:
                    track = PlaylistTrack.from_api(raw_entry).track
                    if track is None:
                        skipped += 1
                        continue
                    if not passes_all(filters, track):
                        continue

                    tracks.upsert(track)
                    albums.upsert(track.album)
                    for artist in track.artists:
                        artists.upsert(artist)

        except RequestError as e:
            raise AggregationError(username, e.message) from e

        if skipped:
            logger.debug(f"Skipped {skipped} unavailable or local playlist entries")
        logger.info(
            f"Aggregated {username}: {len(tracks)} tracks, "
            f"{len(artists)} artists, {len(albums)} albums"
        )

        return Profile(
            user=self._ensure_object(user, username),
            tracks=tracks,
            artists=artists,
            albums=albums,
        )

    async def _fetch_user_and_playlists(self, username: str) -> tuple[Any, list[Any]]:
        """Fetch the profile and the playlist listing at the same time.

        The first failure cancels the other fetch (TaskGroup) and is re-raised
        on its own, so callers never see an ExceptionGroup.
        """
        try:
            async with asyncio.TaskGroup() as tg:
                user = tg.create_task(self._client.request(self._client.user_url(username)))
                playlists = tg.create_task(
                    self._client.paginate(self._client.user_playlists_url(username))
                )
        except ExceptionGroup as group:
            raise group.exceptions[0]
        return user.result(), playlists.result()

    async def fetch_raw_profile(self, username: str) -> dict[str, Any]:
        """Return the user's profile resource exactly as the API sent it.

        Raw mode: no playlists are fetched and no table is built.

        Raises:
            AggregationError: If the request fails
        """
        try:
            user = await self._client.request(self._client.user_url(username))
        except RequestError as e:
            raise AggregationError(username, e.message) from e
        return self._ensure_object(user, username)

    @staticmethod
    def _ensure_object(user: Any, username: str) -> dict[str, Any]:
        if not isinstance(user, dict):
            raise AggregationError(username, "user profile is not a JSON object")
        return user
