"""Archive port interface."""

from pathlib import Path
from typing import Protocol

from ..core.models import RestoreSummary


class ArchivePort(Protocol):
    """Port for packing and unpacking scraps."""

    def save(self, paths: list[str], destination: Path) -> int:
        """Pack paths into destination atomically, return archive size."""
        ...

    def restore(self, source: Path, paths: list[str]) -> RestoreSummary:
        """Unpack source into the working directory."""
        ...
