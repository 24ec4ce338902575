"""Adapters implementing Scrapyard ports."""

from .aws_cli import AwsCliTransport
from .clock_utc import UtcClockAdapter
from .file_yard import FileYard
from .hash_sha1 import Sha1Adapter
from .logger_std import StdLoggerAdapter
from .s3_yard import S3Yard
from .storage_s3 import Boto3Transport
from .tar_archive import TarArchiveAdapter

__all__ = [
    "AwsCliTransport",
    "Boto3Transport",
    "FileYard",
    "S3Yard",
    "Sha1Adapter",
    "StdLoggerAdapter",
    "TarArchiveAdapter",
    "UtcClockAdapter",
]
