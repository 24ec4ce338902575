"""Port interfaces for Scrapyard."""

from .archive import ArchivePort
from .clock import ClockPort
from .hash import HashPort
from .logger import LoggerPort
from .transport import ObjectTransportPort
from .yard import YardPort

__all__ = [
    "ArchivePort",
    "ClockPort",
    "HashPort",
    "LoggerPort",
    "ObjectTransportPort",
    "YardPort",
]
