"""aws CLI object-store transport.

Shells out to ``aws s3`` for hosts that carry the CLI and its credentials
but not a configured boto3 environment.
"""

import re
import shlex
import subprocess
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from ..core.errors import BackendUnavailableError
from ..core.models import ObjectInfo
from ..ports import LoggerPort

AWS_LS = re.compile(r"^(?P<time>\d+-\d+-\d+ \d+:\d+:\d+)\s+(?P<size>\d+)\s+(?P<name>.*)$")
AWS_LS_TIME = "%Y-%m-%d %H:%M:%S"

Runner = Callable[..., subprocess.CompletedProcess[Any]]


def parse_listing(output: str, logger: LoggerPort) -> list[ObjectInfo]:
    """Parse ``aws s3 ls --recursive`` output.

    Timestamps are printed in the local timezone and returned timezone-aware.
    """
    objects = []
    for line in output.splitlines():
        if not line.strip():
            continue
        match = AWS_LS.match(line.strip())
        if match is None:
            logger.warning(f"Unable to parse {line}")
            continue
        objects.append(
            ObjectInfo(
                key=match["name"],
                size=int(match["size"]),
                last_modified=datetime.strptime(match["time"], AWS_LS_TIME).astimezone(),
            )
        )
    return objects


class AwsCliTransport:
    """aws CLI implementation of ObjectTransportPort."""

    def __init__(
        self,
        logger: LoggerPort,
        command: str = "aws",
        endpoint_url: str | None = None,
        profile: str | None = None,
        runner: Runner = subprocess.run,
    ):
        self.logger = logger
        self.command = shlex.split(command) + ["s3"]
        if endpoint_url:
            self.command += ["--endpoint-url", endpoint_url]
        if profile:
            self.command += ["--profile", profile]
        self.runner = runner

    def list_objects(self, bucket: str, prefix: str) -> list[ObjectInfo]:
        result = self._run("ls", "--recursive", f"s3://{bucket}/{prefix}")
        return [obj for obj in parse_listing(result.stdout, self.logger) if obj.key.startswith(prefix)]

    def download(self, bucket: str, key: str, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        self._run("cp", f"s3://{bucket}/{key}", str(dest))

    def upload(self, src: Path, bucket: str, key: str) -> None:
        self._run("cp", str(src), f"s3://{bucket}/{key}")

    def delete(self, bucket: str, key: str) -> None:
        self._run("rm", f"s3://{bucket}/{key}")

    def _run(self, *args: str) -> subprocess.CompletedProcess[Any]:
        cmd = [*self.command, *args]
        self.logger.debug(f"Running {shlex.join(cmd)}")
        try:
            result = self.runner(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise BackendUnavailableError(f"Cannot run {cmd[0]}: {e}") from e

        # ls exits 1 when nothing matches the prefix
        if args[0] == "ls" and result.returncode == 1 and not result.stderr:
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")
        if result.returncode != 0:
            raise BackendUnavailableError(
                f"{shlex.join(cmd)} failed with exit code {result.returncode}: "
                f"{(result.stderr or '').strip()}"
            )
        return result
