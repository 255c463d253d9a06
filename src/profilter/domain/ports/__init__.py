"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod
from typing import Any


# Hey future me, ICatalogClient is the PORT the aggregation service talks to. The
# httpx implementation lives in infrastructure; tests hand the service an in-memory
# fake instead. Both methods return raw JSON - turning it into records is the
# service's job, not the client's.
class ICatalogClient(ABC):
    """Read-only access to the music catalog API."""

    @abstractmethod
    def user_url(self, username: str) -> str:
        """URL of a user's public profile resource."""
        pass

    @abstractmethod
    def user_playlists_url(self, username: str) -> str:
        """URL of the first page of a user's public playlists."""
        pass

    @abstractmethod
    async def request(self, url: str) -> Any:
        """GET a single resource and return its parsed JSON body.

        Raises:
            RequestError: On transport failure, error status or invalid JSON
        """
        pass

    @abstractmethod
    async def paginate(self, url: str) -> list[Any]:
        """Follow 'next' links from ``url`` and return all items in page order.

        Raises:
            RequestError: If any page request fails
        """
        pass


__all__ = ["ICatalogClient"]
