"""Key template parsing and checksum substitution.

A key template is a plain string that may embed checksum placeholders of the
form ``#{path}``. Each placeholder is replaced by the SHA-1 of the referenced
file, so a key like ``build-#{./Gemfile.lock}`` changes whenever the lock file
does. A placeholder pointing at a missing file resolves to the empty string.
"""

from dataclasses import dataclass
from pathlib import Path

from ..ports import HashPort, LoggerPort, YardPort

PLACEHOLDER_OPEN = "#{"
PLACEHOLDER_CLOSE = "}"


@dataclass(frozen=True)
class LiteralSpan:
    text: str


@dataclass(frozen=True)
class ChecksumSpan:
    path: str


Span = LiteralSpan | ChecksumSpan


def parse_template(template: str) -> tuple[Span, ...]:
    """Split a template into literal and checksum spans.

    ``#{}`` and an unterminated ``#{`` are kept as literal text.
    """
    spans: list[Span] = []
    literal: list[str] = []
    pos = 0

    while True:
        start = template.find(PLACEHOLDER_OPEN, pos)
        if start == -1:
            literal.append(template[pos:])
            break
        end = template.find(PLACEHOLDER_CLOSE, start + len(PLACEHOLDER_OPEN))
        if end == -1:
            literal.append(template[pos:])
            break

        inner = template[start + len(PLACEHOLDER_OPEN) : end]
        if not inner:
            literal.append(template[pos : start + len(PLACEHOLDER_OPEN)])
            pos = start + len(PLACEHOLDER_OPEN)
            continue

        literal.append(template[pos:start])
        if any(literal):
            spans.append(LiteralSpan("".join(literal)))
        literal = []
        spans.append(ChecksumSpan(inner.strip()))
        pos = end + len(PLACEHOLDER_CLOSE)

    if any(literal):
        spans.append(LiteralSpan("".join(literal)))
    return tuple(spans)


def to_path(root: str, resolved_key: str, suffix: str) -> str:
    """Join a yard root, a resolved key and a lookup suffix."""
    if not root:
        return f"{resolved_key}{suffix}"
    separator = "" if root.endswith("/") else "/"
    return f"{root}{separator}{resolved_key}{suffix}"


class KeyResolver:
    """Turns key templates into resolved keys and yard locators."""

    def __init__(self, hasher: HashPort, logger: LoggerPort):
        self.hasher = hasher
        self.logger = logger

    def resolve(self, template: str) -> str:
        return "".join(self._evaluate(span) for span in parse_template(template))

    def locators(self, yard: YardPort, templates: list[str], suffix: str) -> list[str]:
        """Resolve every template and address it inside the yard."""
        return [yard.locator(self.resolve(template), suffix) for template in templates]

    def _evaluate(self, span: Span) -> str:
        if isinstance(span, LiteralSpan):
            return span.text

        path = Path(span.path)
        self.logger.debug(f"Calculating checksum for {path}")
        if not path.is_file():
            self.logger.debug(f"File {path} does not exist, ignoring checksum")
            return ""
        try:
            return self.hasher.sha1(path)
        except OSError as e:
            self.logger.debug(f"Unable to read {path}, ignoring checksum: {e}")
            return ""
