"""Core domain logic for Scrapyard."""

from .config import ScrapyardConfig
from .errors import ArchiveCorruptError, BackendUnavailableError, InvalidYardError, ScrapyardError
from .models import CacheEntry, CrushSummary, ObjectInfo, Operation, SearchResult, StoreSummary

__all__ = [
    "ArchiveCorruptError",
    "BackendUnavailableError",
    "CacheEntry",
    "CrushSummary",
    "InvalidYardError",
    "ObjectInfo",
    "Operation",
    "ScrapyardConfig",
    "ScrapyardError",
    "SearchResult",
    "StoreSummary",
]
