"""Text sources for tabular assets, local or remote."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import httpx


class TextSource(Protocol):
    """Interface for reading the full text of a file or URL."""

    def read_text(self, location: str) -> str:
        """Return the decoded text at a location."""


def is_remote(location: str) -> bool:
    """Return whether a location is an HTTP(S) URL."""
    return location.startswith(("http://", "https://"))


@dataclass
class HttpxTextSource(TextSource):
    """HTTPX-backed text source that falls back to the local filesystem."""

    http_client: httpx.Client
    timeout: float = 30

    @classmethod
    def create(cls, timeout: float = 30) -> "HttpxTextSource":
        """Create a text source with a managed httpx session."""
        return cls(http_client=httpx.Client(follow_redirects=True), timeout=timeout)

    def read_text(self, location: str) -> str:
        """Fetch a URL, or read a local file as UTF-8."""
        if not is_remote(location):
            return Path(location).read_text(encoding="utf-8")
        response = self.http_client.get(location, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.http_client.close()
