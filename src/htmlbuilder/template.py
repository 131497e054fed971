"""Template scanning, indentation and dry-run validation."""

from dataclasses import dataclass, field

from returns.result import Failure, Result, Success

from core import get_logger, ValidationError, ValidationResult
from .grammar import MARKER, ElementDescriptor, GrammarError, LineParser, level_of, strip_markers

logger = get_logger(__name__)


@dataclass(frozen=True)
class TemplateLine:
    """One non-blank template line."""

    index: int
    level: int
    text: str


@dataclass(frozen=True)
class LineRecord:
    """A template line with its parsed descriptor."""

    line: TemplateLine
    descriptor: ElementDescriptor

    @property
    def level(self) -> int:
        return self.line.level


@dataclass
class Block:
    """A main (level 0) line and the lines up to the next main line."""

    main: TemplateLine
    descendants: list[TemplateLine] = field(default_factory=list)


def extract_lines(template: str) -> list[str]:
    """Trimmed, non-blank lines of a template."""
    return [line.strip() for line in template.splitlines() if line.strip()]


def scan_template(template: str) -> list[TemplateLine]:
    """Index every non-blank line and compute its level."""
    return [
        TemplateLine(index=i, level=level_of(line), text=strip_markers(line))
        for i, line in enumerate(extract_lines(template))
    ]


def split_blocks(lines: list[TemplateLine]) -> list[Block]:
    """
    Group lines into main blocks.

    Lines before the first main line have no element to attach to and are
    dropped with a warning.
    """
    blocks: list[Block] = []
    orphans = 0
    for line in lines:
        if line.level == 0:
            blocks.append(Block(main=line))
        elif blocks:
            blocks[-1].descendants.append(line)
        else:
            orphans += 1

    if orphans:
        logger.warning("orphan_lines_ignored", count=orphans)
    return blocks


def indent_template(template: str, depth: int = 1) -> str:
    """
    Indent a template in order to embed it in another one.

    Args:
        template: Template fragment
        depth: Number of markers added to every line

    Returns:
        The re-indented template, one line per non-blank input line

    Raises:
        ValidationError: If depth is negative
    """
    if depth < 0:
        raise ValidationError(f"indentation depth must be >= 0, got {depth}")
    prefix = MARKER * depth
    return "\n".join(prefix + line for line in extract_lines(template)).strip()


def validate_template(
    template: str, parser: LineParser | None = None
) -> Result[list[LineRecord], ValidationResult]:
    """
    Parse every line of a template without rendering it (Result pattern).

    Args:
        template: Full template
        parser: Parser to use (default delimiter when omitted)

    Returns:
        Success with the parsed records, or Failure naming the bad line
    """
    parser = parser or LineParser()
    records = []
    for line in scan_template(template):
        try:
            records.append(LineRecord(line, parser.parse(line.text)))
        except GrammarError as e:
            return Failure(ValidationResult(str(e), field=f"line {line.index}", value=e.line))
    return Success(records)
