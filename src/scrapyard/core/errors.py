"""Core domain errors."""


class ScrapyardError(Exception):
    """Base error for Scrapyard."""

    exit_code = 2


class BackendUnavailableError(ScrapyardError):
    """Yard cannot be created, listed, read or written."""

    exit_code = 2


class InvalidYardError(ScrapyardError):
    """Yard location cannot be parsed."""

    exit_code = 2


class ArchiveCorruptError(ScrapyardError):
    """Archive could not be packed or extracted."""

    exit_code = 255
