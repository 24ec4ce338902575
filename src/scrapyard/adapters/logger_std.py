"""Standard library logging adapter."""

import logging
import sys
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StdLoggerAdapter:
    """Standard logging implementation of LoggerPort.

    Keyword fields are rendered after the message as ``key=value`` pairs.
    """

    def __init__(self, name: str = "scrapyard", level: str = "WARNING"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def log_operation(
        self,
        op: str,
        key: str,
        yard: str,
        sizes: dict[str, int] | None = None,
        durations: dict[str, float] | None = None,
        hit: bool | None = None,
    ) -> None:
        fields: dict[str, Any] = {"op": op, "key": key, "yard": yard}
        for name, size in (sizes or {}).items():
            fields[f"size_{name}"] = size
        for name, duration in (durations or {}).items():
            fields[f"duration_{name}"] = f"{duration:.3f}s"
        if hit is not None:
            fields["hit"] = hit
        self._log(logging.INFO, "Operation complete", fields)

    def _log(self, level: int, message: str, fields: dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if fields:
            rendered = " ".join(f"{k}={v}" for k, v in fields.items())
            message = f"{message} {rendered}"
        self.logger.log(level, message)
