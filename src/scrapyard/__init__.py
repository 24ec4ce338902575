"""Scrapyard - content-addressed build artifact cache."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("scrapyard")
except PackageNotFoundError:
    # Package is not installed, so version is not available
    __version__ = "0.0.0+unknown"
