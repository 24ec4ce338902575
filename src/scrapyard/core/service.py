"""Core ScrapyardService orchestration."""

from datetime import datetime, timedelta
from typing import assert_never

from ..ports import ArchivePort, ClockPort, LoggerPort, YardPort
from .keys import KeyResolver
from .models import CrushSummary, Operation, SearchResult, StoreSummary

SEARCH_SUFFIX = "*"
EXIT_OK = 0
EXIT_MISS = 1


class ScrapyardService:
    """Core service for search, store, junk and crush."""

    def __init__(
        self,
        yard: YardPort,
        archive: ArchivePort,
        resolver: KeyResolver,
        clock: ClockPort,
        logger: LoggerPort,
        retention_days: int = 20,
        extension: str = ".tgz",
    ):
        self.yard = yard
        self.archive = archive
        self.resolver = resolver
        self.clock = clock
        self.logger = logger
        self.retention_days = retention_days
        self.extension = extension
        self._ready = False

    def run(self, operation: Operation, keys: list[str], paths: list[str]) -> int:
        """Execute one operation and return the process exit code."""
        try:
            match operation:
                case Operation.SEARCH:
                    return EXIT_MISS if self.search(keys, paths) is None else EXIT_OK
                case Operation.STORE:
                    self.store(keys, paths)
                    return EXIT_OK
                case Operation.JUNK:
                    self.junk(keys)
                    return EXIT_OK
                case Operation.CRUSH:
                    self.crush()
                    return EXIT_OK
                case _:
                    assert_never(operation)
        finally:
            self.yard.close()

    def search(self, keys: list[str], paths: list[str]) -> SearchResult | None:
        """Restore the newest scrap of the first key with any match."""
        self._init()
        start_time = self.clock.now()
        self.logger.info(f"Searching for {keys}")

        patterns = self.resolver.locators(self.yard, keys, SEARCH_SUFFIX)
        entry = self.yard.search(patterns)
        if entry is None:
            self.logger.info("Unable to find key(s): " + ", ".join(patterns))
            self._log_operation("search", keys, start_time, hit=False)
            return None

        local = self.yard.fetch(entry)
        restore = self.archive.restore(local, paths)

        self._log_operation(
            "search",
            keys,
            start_time,
            sizes={"scrap": entry.size, "restored": restore.total_size},
            hit=True,
        )
        return SearchResult(entry=entry, restore=restore)

    def store(self, keys: list[str], paths: list[str]) -> StoreSummary:
        """Pack paths under the first key, replacing any existing scrap."""
        self._init()
        start_time = self.clock.now()
        self.logger.info(f"Storing {keys[0]}")

        locator = self.resolver.locators(self.yard, keys[:1], self.extension)[0]
        archive_path = self.yard.staging_path(locator)
        self.archive.save(paths, archive_path)
        entry = self.yard.commit(archive_path, locator)

        self._log_operation("store", keys[:1], start_time, sizes={"scrap": entry.size})
        return StoreSummary(key=keys[0], entry=entry, paths=list(paths))

    def junk(self, keys: list[str]) -> int:
        """Delete the scraps stored under keys, ignoring those that are absent."""
        self._init()
        start_time = self.clock.now()
        self.logger.info(f"Junking {keys}")

        locators = self.resolver.locators(self.yard, keys, self.extension)
        removed = self.yard.delete(locators)

        self._log_operation("junk", keys, start_time, sizes={"removed": removed})
        return removed

    def crush(self) -> CrushSummary:
        """Evict scraps older than the retention window."""
        self._init()
        start_time = self.clock.now()

        removed = self.yard.evict(timedelta(days=self.retention_days))

        self._log_operation("crush", [], start_time, sizes={"removed": len(removed)})
        return CrushSummary(max_age_days=self.retention_days, removed=removed)

    def _init(self) -> None:
        if not self._ready:
            self.yard.init()
            self._ready = True

    def _log_operation(
        self,
        op: str,
        keys: list[str],
        start_time: datetime,
        sizes: dict[str, int] | None = None,
        hit: bool | None = None,
    ) -> None:
        duration = (self.clock.now() - start_time).total_seconds()
        self.logger.log_operation(
            op=op,
            key=",".join(keys),
            yard=self.yard.locator("", ""),
            sizes=sizes,
            durations={"total": duration},
            hit=hit,
        )
