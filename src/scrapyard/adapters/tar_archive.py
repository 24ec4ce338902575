"""gzip tar archive adapter."""

import os
import tarfile
import tempfile
from pathlib import Path

from ..core.errors import ArchiveCorruptError
from ..core.models import RestoreSummary
from ..ports import ClockPort, LoggerPort


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def disk_usage(path: Path) -> int:
    """Total size in bytes of a file or directory tree."""
    if path.is_symlink() or path.is_file():
        return path.lstat().st_size
    if not path.is_dir():
        return 0
    total = 0
    for root, _, files in os.walk(path):
        for name in files:
            total += (Path(root) / name).lstat().st_size
    return total


class TarArchiveAdapter:
    """Packs paths relative to a working directory into ``.tgz`` scraps.

    Member names are the paths as given with any leading ``/`` removed, the
    way ``tar`` itself stores them, so a restore recreates them relative to
    the working directory.
    """

    def __init__(self, logger: LoggerPort, clock: ClockPort, workdir: Path | None = None):
        self.logger = logger
        self.clock = clock
        self.workdir = workdir

    @property
    def cwd(self) -> Path:
        return self.workdir if self.workdir is not None else Path.cwd()

    def save(self, paths: list[str], destination: Path) -> int:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=".scrap-", suffix=".tmp", dir=destination.parent
        )
        os.close(fd)
        tmp_path = Path(tmp_name)

        try:
            # mkstemp creates 0600, tar output follows the umask
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            with tarfile.open(tmp_path, "w:gz") as tar:
                for name in paths:
                    source = self.cwd / name
                    if not source.exists() and not source.is_symlink():
                        self.logger.warning(f"Skipping missing path {name}")
                        continue
                    tar.add(source, arcname=self._arcname(name))
            os.replace(tmp_path, destination)
        except (OSError, tarfile.TarError) as e:
            tmp_path.unlink(missing_ok=True)
            raise ArchiveCorruptError(f"Failed to pack {destination}: {e}") from e

        # Recency comparisons must reflect store time
        now = self.clock.now().timestamp()
        os.utime(destination, (now, now))

        size = destination.stat().st_size
        self.logger.info(f"Created: {destination}", size=size)
        return size

    def restore(self, source: Path, paths: list[str]) -> RestoreSummary:
        self.logger.info(f"Found scrap in {source}")
        try:
            with tarfile.open(source, "r:gz") as tar:
                tar.extractall(self.cwd, filter="tar")
        except (OSError, tarfile.TarError) as e:
            raise ArchiveCorruptError(f"Unable to restore {source}: {e}") from e

        summary = RestoreSummary(source=source)
        for name in paths:
            summary.sizes[name] = disk_usage(self.cwd / name)
            self.logger.info(f"Restored: {name}", size=summary.sizes[name])
        return summary

    @staticmethod
    def _arcname(name: str) -> str:
        return os.path.normpath(name).lstrip("/")
