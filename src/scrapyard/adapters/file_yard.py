"""Local directory yard adapter."""

import glob
import os
import shutil
from datetime import UTC, datetime, timedelta
from pathlib import Path

from ..core.errors import BackendUnavailableError
from ..core.keys import to_path
from ..core.models import CacheEntry
from ..ports import ClockPort, LoggerPort


def _glob_pattern(locator: str) -> str:
    """Escape a locator for glob, keeping only a trailing ``*`` as a wildcard."""
    if locator.endswith("*"):
        return glob.escape(locator[:-1]) + "*"
    return glob.escape(locator)


class FileYard:
    """Yard stored as plain files in a local directory.

    Archives are written straight into the yard directory by the archive codec,
    so committing is a no-op once the codec has moved its temp file into place.
    """

    def __init__(self, path: Path, logger: LoggerPort, clock: ClockPort):
        self.path = Path(path).expanduser().absolute()
        self.logger = logger
        self.clock = clock

    def init(self) -> None:
        if self.path.exists():
            self.logger.info(f"Scrapyard: {self.path}")
            return

        self.logger.info(f"Scrapyard: {self.path} (creating)")
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BackendUnavailableError(f"Cannot create yard {self.path}: {e}") from e

    def locator(self, resolved_key: str, suffix: str) -> str:
        return to_path(str(self.path), resolved_key, suffix)

    def search(self, patterns: list[str]) -> CacheEntry | None:
        for pattern in patterns:
            matches = [Path(p) for p in glob.glob(_glob_pattern(pattern)) if os.path.isfile(p)]
            self.logger.debug(f"Scanning {pattern} -> {[str(m) for m in matches]}")
            if matches:
                # return on first match
                return self._entry(max(matches, key=lambda p: p.stat().st_mtime))
        return None

    def fetch(self, entry: CacheEntry) -> Path:
        return Path(entry.locator)

    def stage(self) -> Path:
        return self.path

    def staging_path(self, locator: str) -> Path:
        path = Path(locator)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def commit(self, archive: Path, locator: str) -> CacheEntry:
        destination = Path(locator)
        if archive.absolute() != destination.absolute():
            try:
                os.replace(archive, destination)
            except OSError as e:
                raise BackendUnavailableError(f"Cannot move {archive} to {destination}: {e}") from e
        return self._entry(destination)

    def delete(self, locators: list[str]) -> int:
        removed = 0
        for locator in locators:
            path = Path(locator)
            if not path.is_file():
                self.logger.debug(f"Nothing to junk at {path}")
                continue
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise BackendUnavailableError(f"Cannot delete {path}: {e}") from e
            self.logger.info(f"Junked {path}")
            removed += 1
        return removed

    def evict(self, max_age: timedelta) -> list[str]:
        self.logger.info("Crushing the yard to scrap!")
        cutoff = self.clock.now() - max_age
        removed = []

        for tarball in sorted(self.path.iterdir()):
            try:
                # lstat so dangling links are judged by their own age
                modified = datetime.fromtimestamp(tarball.lstat().st_mtime, UTC)
            except FileNotFoundError:
                self.logger.debug(f"Vanished: {tarball}")
                continue
            if modified < cutoff:
                self.logger.info(f"Crushing: {tarball}")
                try:
                    if tarball.is_dir() and not tarball.is_symlink():
                        shutil.rmtree(tarball)
                    else:
                        tarball.unlink()
                except FileNotFoundError:
                    self.logger.debug(f"Vanished: {tarball}")
                    continue
                except OSError as e:
                    raise BackendUnavailableError(f"Cannot crush {tarball}: {e}") from e
                removed.append(str(tarball))
            else:
                self.logger.debug(f"Keeping: {tarball} at {modified.isoformat()}")
        return removed

    def close(self) -> None:
        pass

    def _entry(self, path: Path) -> CacheEntry:
        stat = path.stat()
        return CacheEntry(
            locator=str(path),
            modified=datetime.fromtimestamp(stat.st_mtime, UTC),
            size=stat.st_size,
        )
