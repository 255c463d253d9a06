"""External integration client implementations."""

from profilter.infrastructure.integrations.spotify_client import SpotifyClient

__all__ = ["SpotifyClient"]
