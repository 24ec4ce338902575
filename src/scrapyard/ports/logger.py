"""Logger port interface."""

from typing import Any, Protocol


class LoggerPort(Protocol):
    """Port for logging operations."""

    def debug(self, message: str, **kwargs: Any) -> None: ...

    def info(self, message: str, **kwargs: Any) -> None: ...

    def warning(self, message: str, **kwargs: Any) -> None: ...

    def error(self, message: str, **kwargs: Any) -> None: ...

    def log_operation(
        self,
        op: str,
        key: str,
        yard: str,
        sizes: dict[str, int] | None = None,
        durations: dict[str, float] | None = None,
        hit: bool | None = None,
    ) -> None:
        """Log a structured operation summary."""
        ...
