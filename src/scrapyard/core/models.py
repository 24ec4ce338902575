"""Core domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class Operation(Enum):
    """Commands understood by the yard, with the minimum keys/paths each needs."""

    SEARCH = ("search", 1, 0)
    STORE = ("store", 1, 1)
    JUNK = ("junk", 1, 0)
    CRUSH = ("crush", 0, 0)

    def __init__(self, command: str, min_keys: int, min_paths: int):
        self.command = command
        self.min_keys = min_keys
        self.min_paths = min_paths


@dataclass(frozen=True)
class CacheEntry:
    """One stored scrap as seen by a yard listing."""

    locator: str
    modified: datetime
    size: int


@dataclass(frozen=True)
class ObjectInfo:
    """Object-store listing row."""

    key: str
    size: int
    last_modified: datetime


@dataclass
class RestoreSummary:
    """Result of unpacking a scrap."""

    source: Path
    sizes: dict[str, int] = field(default_factory=dict)

    @property
    def total_size(self) -> int:
        return sum(self.sizes.values())


@dataclass
class SearchResult:
    """Search hit and what it restored."""

    entry: CacheEntry
    restore: RestoreSummary


@dataclass
class StoreSummary:
    """Result of a store operation."""

    key: str
    entry: CacheEntry
    paths: list[str]


@dataclass
class CrushSummary:
    """Result of an eviction pass."""

    max_age_days: int
    removed: list[str] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return len(self.removed)
