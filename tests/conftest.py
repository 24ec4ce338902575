"""Shared fixtures for scrapyard tests."""

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from scrapyard.adapters import FileYard, S3Yard, Sha1Adapter, TarArchiveAdapter
from scrapyard.core.keys import KeyResolver
from scrapyard.core.models import ObjectInfo
from scrapyard.core.service import ScrapyardService


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime | None = None):
        self.current = now or datetime.now(UTC)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


class RecordingLogger:
    """LoggerPort that keeps every message."""

    def __init__(self):
        self.records: list[tuple[str, str, dict[str, Any]]] = []
        self.operations: list[dict[str, Any]] = []

    def debug(self, message: str, **kwargs: Any) -> None:
        self.records.append(("debug", message, kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.records.append(("info", message, kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.records.append(("warning", message, kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self.records.append(("error", message, kwargs))

    def log_operation(self, **kwargs: Any) -> None:
        self.operations.append(kwargs)

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


class InMemoryTransport:
    """ObjectTransportPort keeping objects in a dict."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.objects: dict[tuple[str, str], tuple[bytes, datetime]] = {}
        self.calls: list[tuple[str, ...]] = []

    def put(self, bucket: str, key: str, data: bytes, modified: datetime | None = None) -> None:
        self.objects[(bucket, key)] = (data, modified or self.clock.now())

    def list_objects(self, bucket: str, prefix: str) -> list[ObjectInfo]:
        self.calls.append(("list", bucket, prefix))
        return [
            ObjectInfo(key=key, size=len(data), last_modified=modified)
            for (b, key), (data, modified) in sorted(self.objects.items())
            if b == bucket and key.startswith(prefix)
        ]

    def download(self, bucket: str, key: str, dest: Path) -> None:
        self.calls.append(("download", bucket, key))
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(self.objects[(bucket, key)][0])

    def upload(self, src: Path, bucket: str, key: str) -> None:
        self.calls.append(("upload", bucket, key))
        self.put(bucket, key, src.read_bytes())

    def delete(self, bucket: str, key: str) -> None:
        self.calls.append(("delete", bucket, key))
        self.objects.pop((bucket, key), None)


@pytest.fixture
def clock():
    """Clock pinned to the current time."""
    return FakeClock()


@pytest.fixture
def logger():
    """Logger recording messages in memory."""
    return RecordingLogger()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Working directory the archive codec packs from and restores into."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def yard_dir(tmp_path):
    """Local yard location (not yet created)."""
    return tmp_path / "yard"


@pytest.fixture
def file_yard(yard_dir, logger, clock):
    """Initialized local directory yard."""
    yard = FileYard(yard_dir, logger, clock)
    yard.init()
    return yard


@pytest.fixture
def transport(clock):
    """In-memory object store."""
    return InMemoryTransport(clock)


@pytest.fixture
def s3_yard(transport, logger, clock):
    """S3 yard backed by the in-memory object store."""
    yard = S3Yard("s3://builds/cache", transport, logger, clock)
    yield yard
    yard.close()


@pytest.fixture
def resolver(logger):
    return KeyResolver(Sha1Adapter(), logger)


@pytest.fixture
def make_service(resolver, logger, clock):
    """Build a service around a given yard."""

    def _make(yard, workdir: Path | None = None) -> ScrapyardService:
        return ScrapyardService(
            yard=yard,
            archive=TarArchiveAdapter(logger, clock, workdir=workdir),
            resolver=resolver,
            clock=clock,
            logger=logger,
        )

    return _make


@pytest.fixture
def dist(workdir):
    """A small build output tree inside the working directory."""
    root = workdir / "dist"
    (root / "lib").mkdir(parents=True)
    (root / "app.bin").write_bytes(b"\x00\x01binary")
    (root / "lib" / "util.txt").write_text("util\n")
    return root

