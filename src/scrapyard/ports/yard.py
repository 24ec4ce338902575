"""Yard port interface."""

from datetime import timedelta
from pathlib import Path
from typing import Protocol

from ..core.models import CacheEntry


class YardPort(Protocol):
    """Port for the storage backend holding scraps."""

    def init(self) -> None:
        """Check the yard exists, creating it if needed."""
        ...

    def locator(self, resolved_key: str, suffix: str) -> str:
        """Join the yard root with a resolved key and suffix."""
        ...

    def search(self, patterns: list[str]) -> CacheEntry | None:
        """Return the newest entry of the first pattern with any match."""
        ...

    def fetch(self, entry: CacheEntry) -> Path:
        """Make an entry available as a local file."""
        ...

    def stage(self) -> Path:
        """Get a writable local staging directory."""
        ...

    def staging_path(self, locator: str) -> Path:
        """Get the local path an archive for locator should be written to."""
        ...

    def commit(self, archive: Path, locator: str) -> CacheEntry:
        """Publish a local archive at locator, replacing any existing entry."""
        ...

    def delete(self, locators: list[str]) -> int:
        """Remove the entries that exist, return how many were removed."""
        ...

    def evict(self, max_age: timedelta) -> list[str]:
        """Remove entries older than max_age, return their locators."""
        ...

    def close(self) -> None:
        """Release the staging area."""
        ...
