"""CLI main entry point."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from ...adapters import (
    AwsCliTransport,
    Boto3Transport,
    FileYard,
    S3Yard,
    Sha1Adapter,
    StdLoggerAdapter,
    TarArchiveAdapter,
    UtcClockAdapter,
)
from ...core import Operation, ScrapyardConfig, ScrapyardError
from ...core.keys import KeyResolver
from ...core.service import ScrapyardService
from ...ports import ClockPort, LoggerPort, ObjectTransportPort, YardPort


def create_transport(config: ScrapyardConfig, logger: LoggerPort) -> ObjectTransportPort:
    """Create the object-store transport named by the config."""
    if config.s3_transport == "cli":
        return AwsCliTransport(
            logger,
            command=config.aws_cli,
            endpoint_url=config.endpoint_url,
            profile=config.profile,
        )
    if config.s3_transport == "boto3":
        return Boto3Transport(
            endpoint_url=config.endpoint_url,
            region=config.region,
            profile=config.profile,
        )
    raise ScrapyardError(f"Unknown S3 transport: {config.s3_transport}")


def create_yard(
    config: ScrapyardConfig,
    logger: LoggerPort,
    clock: ClockPort,
    transport: ObjectTransportPort | None = None,
) -> YardPort:
    """Create the yard backend for the configured location."""
    if config.is_remote:
        if transport is None:
            transport = create_transport(config, logger)
        return S3Yard(config.yard, transport, logger, clock)
    return FileYard(Path(config.yard), logger, clock)


def create_service(config: ScrapyardConfig) -> ScrapyardService:
    """Create service with wired adapters."""
    logger = StdLoggerAdapter(level=config.log_level)
    clock = UtcClockAdapter()
    hasher = Sha1Adapter()

    return ScrapyardService(
        yard=create_yard(config, logger, clock),
        archive=TarArchiveAdapter(logger, clock),
        resolver=KeyResolver(hasher, logger),
        clock=clock,
        logger=logger,
        retention_days=config.retention_days,
        extension=config.extension,
    )


def _split_keys(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> list[str]:
    return [key for item in value for key in item.split(",") if key]


def yard_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command."""
    func = click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")(func)
    func = click.option(
        "-y",
        "--yard",
        help="The directory or s3:// URL the scrapyard is stored in.",
    )(func)
    return func


def key_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "-k",
        "--keys",
        multiple=True,
        callback=_split_keys,
        metavar="KEY1,KEY2",
        help="Keys for search or storing in order of preference.",
    )(func)


def path_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.argument("extra_paths", nargs=-1, type=click.Path())(func)
    func = click.option(
        "-p", "--paths", multiple=True, type=click.Path(), help="Paths to store or restore."
    )(func)
    return func


def _execute(
    operation: Operation,
    yard: str | None,
    verbose: bool,
    keys: list[str] | None = None,
    paths: list[str] | None = None,
) -> None:
    keys = keys or []
    paths = paths or []

    if len(keys) < operation.min_keys:
        raise click.UsageError(
            f"Command {operation.command} requires at least one key argument"
        )
    if len(paths) < operation.min_paths:
        raise click.UsageError(f"{operation.command} requires paths")

    try:
        config = ScrapyardConfig.from_env(yard=yard, log_level="DEBUG" if verbose else None)
        service = create_service(config)
        code = service.run(operation, keys, paths)
    except ScrapyardError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)

    sys.exit(code)


@click.group()
def cli() -> None:
    """Scrapyard - a content-addressed build artifact cache."""


@cli.command()
@key_option
@path_options
@yard_options
def search(
    keys: list[str],
    paths: tuple[str, ...],
    extra_paths: tuple[str, ...],
    yard: str | None,
    verbose: bool,
) -> None:
    """Restore the newest scrap matching the first key that has one.

    Exits 1 when no key matches.
    """
    _execute(Operation.SEARCH, yard, verbose, keys, [*paths, *extra_paths])


@cli.command()
@key_option
@path_options
@yard_options
def store(
    keys: list[str],
    paths: tuple[str, ...],
    extra_paths: tuple[str, ...],
    yard: str | None,
    verbose: bool,
) -> None:
    """Pack paths into a scrap under the first key."""
    _execute(Operation.STORE, yard, verbose, keys, [*paths, *extra_paths])


@cli.command()
@key_option
@yard_options
def junk(keys: list[str], yard: str | None, verbose: bool) -> None:
    """Delete the scraps stored under the given keys."""
    _execute(Operation.JUNK, yard, verbose, keys)


@cli.command()
@yard_options
def crush(yard: str | None, verbose: bool) -> None:
    """Remove scraps older than the retention window."""
    _execute(Operation.CRUSH, yard, verbose)


def main() -> None:
    """Main entry point."""
    cli()
