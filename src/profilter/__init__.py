"""Profilter - top tracks, artists and albums from a Spotify user's public playlists."""

__version__ = "0.1.0"
