"""Object-store transport port interface."""

from pathlib import Path
from typing import Protocol

from ..core.models import ObjectInfo


class ObjectTransportPort(Protocol):
    """Port for the blocking object-store calls used by the S3 yard."""

    def list_objects(self, bucket: str, prefix: str) -> list[ObjectInfo]:
        """List every object under prefix."""
        ...

    def download(self, bucket: str, key: str, dest: Path) -> None:
        """Copy an object to a local file."""
        ...

    def upload(self, src: Path, bucket: str, key: str) -> None:
        """Copy a local file to an object."""
        ...

    def delete(self, bucket: str, key: str) -> None:
        """Remove an object."""
        ...
