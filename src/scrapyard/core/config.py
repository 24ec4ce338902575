"""Centralized configuration for Scrapyard."""

import os
from dataclasses import dataclass, field

from .errors import ScrapyardError

DEFAULT_YARD = "/tmp/scrapyard"
S3_SCHEME = "s3://"


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ScrapyardError(f"{name} must be an integer, got {value!r}") from e


@dataclass(slots=True)
class ScrapyardConfig:
    """All Scrapyard configuration in one place.

    Environment variables (all optional):
        SCRAPYARD_YARD:           Directory or s3:// URL holding the cache. Default "/tmp/scrapyard".
        SCRAPYARD_LOG_LEVEL:      Logging level. Default "WARNING".
        SCRAPYARD_RETENTION_DAYS: Age in days after which crush removes entries. Default 20.
        SCRAPYARD_EXTENSION:      Archive file extension. Default ".tgz".
        SCRAPYARD_S3_TRANSPORT:   "boto3" (default) or "cli" (shells out to the aws CLI).
        SCRAPYARD_AWS_CLI:        aws executable used by the "cli" transport. Default "aws".
        SCRAPYARD_ENDPOINT_URL:   Custom S3 endpoint (MinIO, R2, ...).
    """

    yard: str = DEFAULT_YARD
    log_level: str = "WARNING"
    retention_days: int = 20
    extension: str = ".tgz"
    s3_transport: str = "boto3"
    aws_cli: str = "aws"

    # Connection params (typically passed by CLI, not env vars)
    endpoint_url: str | None = field(default=None, repr=False)
    region: str | None = None
    profile: str | None = None

    @property
    def is_remote(self) -> bool:
        """True when the yard lives in an S3 bucket."""
        return self.yard.startswith(S3_SCHEME)

    @classmethod
    def from_env(
        cls,
        *,
        yard: str | None = None,
        log_level: str | None = None,
    ) -> "ScrapyardConfig":
        """Build config from environment variables + explicit overrides."""
        return cls(
            yard=yard or os.environ.get("SCRAPYARD_YARD", DEFAULT_YARD),
            log_level=log_level or os.environ.get("SCRAPYARD_LOG_LEVEL", "WARNING"),
            retention_days=_int_env("SCRAPYARD_RETENTION_DAYS", 20),
            extension=os.environ.get("SCRAPYARD_EXTENSION", ".tgz"),
            s3_transport=os.environ.get("SCRAPYARD_S3_TRANSPORT", "boto3"),
            aws_cli=os.environ.get("SCRAPYARD_AWS_CLI", "aws"),
            endpoint_url=os.environ.get("SCRAPYARD_ENDPOINT_URL"),
            region=os.environ.get("AWS_REGION"),
            profile=os.environ.get("AWS_PROFILE"),
        )
