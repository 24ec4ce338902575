"""S3 bucket yard adapter."""

import shutil
import tempfile
from datetime import timedelta
from pathlib import Path, PurePosixPath

from ..core.config import S3_SCHEME
from ..core.errors import InvalidYardError
from ..core.keys import to_path
from ..core.models import CacheEntry, ObjectInfo
from ..ports import ClockPort, LoggerPort, ObjectTransportPort


def parse_s3_url(url: str) -> tuple[str, str]:
    """Split ``s3://bucket/some/prefix`` into bucket and key prefix.

    A non-empty prefix always ends with ``/``.
    """
    if not url.startswith(S3_SCHEME):
        raise InvalidYardError(f"Invalid S3 URL: {url}")
    bucket, _, prefix = url[len(S3_SCHEME) :].partition("/")
    if not bucket:
        raise InvalidYardError(f"Invalid S3 URL: {url}")
    prefix = prefix.strip("/")
    return bucket, f"{prefix}/" if prefix else ""


class S3Yard:
    """Yard stored as objects under an S3 bucket prefix.

    Scraps are fetched into and staged from a local temporary directory that is
    created on first use and removed by :meth:`close`.
    """

    def __init__(
        self,
        url: str,
        transport: ObjectTransportPort,
        logger: LoggerPort,
        clock: ClockPort,
    ):
        self.bucket, self.prefix = parse_s3_url(url)
        self.transport = transport
        self.logger = logger
        self.clock = clock
        self._staging: Path | None = None

    @property
    def url(self) -> str:
        return f"{S3_SCHEME}{self.bucket}/{self.prefix}"

    def init(self) -> None:
        self.logger.info(f"Scrapyard: {self.url}")

    def locator(self, resolved_key: str, suffix: str) -> str:
        return to_path(self.url, resolved_key, suffix)

    def search(self, patterns: list[str]) -> CacheEntry | None:
        objects = self.transport.list_objects(self.bucket, self.prefix)

        for pattern in patterns:
            name_prefix = self._key(pattern).replace("*", "")
            candidates = [obj for obj in objects if obj.key.startswith(name_prefix)]
            self.logger.debug(f"Scanning {pattern} -> {[obj.key for obj in candidates]}")
            if candidates:
                return self._entry(max(candidates, key=lambda obj: obj.last_modified))
        return None

    def fetch(self, entry: CacheEntry) -> Path:
        key = self._key(entry.locator)
        local = self.stage() / PurePosixPath(key).name
        self.logger.info(f"Fetching {entry.locator}", dest=str(local))
        self.transport.download(self.bucket, key, local)
        return local

    def stage(self) -> Path:
        if self._staging is None:
            self._staging = Path(tempfile.mkdtemp(prefix="scrapyard-"))
        return self._staging

    def staging_path(self, locator: str) -> Path:
        return self.stage() / PurePosixPath(self._key(locator)).name

    def commit(self, archive: Path, locator: str) -> CacheEntry:
        key = self._key(locator)
        self.logger.info(f"Uploading {archive} to {locator}")
        self.transport.upload(archive, self.bucket, key)
        stat = archive.stat()
        return CacheEntry(locator=locator, modified=self.clock.now(), size=stat.st_size)

    def delete(self, locators: list[str]) -> int:
        existing = {obj.key for obj in self.transport.list_objects(self.bucket, self.prefix)}
        removed = 0
        for locator in locators:
            key = self._key(locator)
            if key not in existing:
                self.logger.debug(f"Nothing to junk at {locator}")
                continue
            self.transport.delete(self.bucket, key)
            self.logger.info(f"Junked {locator}")
            removed += 1
        return removed

    def evict(self, max_age: timedelta) -> list[str]:
        self.logger.info("Crushing the yard to scrap!")
        cutoff = self.clock.now() - max_age
        removed = []

        for obj in self.transport.list_objects(self.bucket, self.prefix):
            locator = f"{S3_SCHEME}{self.bucket}/{obj.key}"
            if obj.last_modified < cutoff:
                self.logger.info(f"Crushing: {locator}")
                self.transport.delete(self.bucket, obj.key)
                removed.append(locator)
            else:
                self.logger.debug(f"Keeping: {locator} at {obj.last_modified.isoformat()}")
        return removed

    def close(self) -> None:
        if self._staging is not None:
            shutil.rmtree(self._staging, ignore_errors=True)
            self._staging = None

    def _key(self, locator: str) -> str:
        """Object key for a locator inside this yard."""
        if locator.startswith(S3_SCHEME):
            _, _, key = locator[len(S3_SCHEME) :].partition("/")
            return key
        return f"{self.prefix}{locator}"

    def _entry(self, obj: ObjectInfo) -> CacheEntry:
        return CacheEntry(
            locator=f"{S3_SCHEME}{self.bucket}/{obj.key}",
            modified=obj.last_modified,
            size=obj.size,
        )
