"""Line Grammar - one template line to one element descriptor.

Line format (every group after the tag is optional)::

    <markers><tag><.class>*<#id>?<(content)>?<[attr;attr...]>?<@event;event...>*

The scanner runs named stages strictly left to right, so a failure is always
reported against the stage that could not continue.
"""

import html
import re
from dataclasses import dataclass

from core import get_logger, require_symbol

logger = get_logger(__name__)


MARKER = ">"
DEFAULT_ATTRIBUTE_DELIMITER = ";"
EVENT_SEPARATOR = ";"

_TAG = re.compile(r"\w+")
_CLASS = re.compile(r"\.([\w-]*)")
_ID = re.compile(r"#([\w-]*)")
_EVENTS = re.compile(r"@([\w;-]*)")


class GrammarError(ValueError):
    """A template line has no parseable tag."""

    def __init__(self, line: str, reason: str = "no tag name") -> None:
        super().__init__(f'unable to parse a line ({reason}): "{line}"')
        self.line = line
        self.reason = reason


@dataclass(frozen=True)
class ElementDescriptor:
    """Parsed shape of one template line."""

    tag: str
    classes: tuple[str, ...] = ()
    id: str | None = None
    content: str | None = None
    attributes: tuple[tuple[str, str], ...] = ()
    events: tuple[str, ...] = ()


def level_of(line: str) -> int:
    """Count leading depth markers of a (trimmed) line."""
    line = line.strip()
    return len(line) - len(line.lstrip(MARKER))


def strip_markers(line: str) -> str:
    """Remove leading depth markers and surrounding whitespace."""
    return line.strip().lstrip(MARKER).strip()


def _closing(text: str, start: int, closer: str, followers: str) -> int:
    """
    Find the closing character of a group opened at `start`.

    The group ends at the last `closer` that is followed by end of line or by
    one of `followers`, so the closer may itself appear inside the group.

    Returns:
        Index of the closer, or -1 when the group is unterminated
    """
    index = text.rfind(closer, start + 1)
    while index != -1:
        after = index + 1
        if after == len(text) or text[after] in followers:
            return index
        index = text.rfind(closer, start + 1, index)
    return -1


def _accept(kind: str, token: str) -> bool:
    """Reject tokens that start with a digit (logged, never fatal)."""
    if token[0].isdigit():
        logger.warning("invalid_token", kind=kind, token=token)
        return False
    return True


class LineParser:
    """Staged scanner for the template line grammar."""

    def __init__(self, delimiter: str = DEFAULT_ATTRIBUTE_DELIMITER) -> None:
        self.delimiter = require_symbol(delimiter, "delimiter")

    def change_delimiter(self, symbol: str) -> None:
        """Use another attribute separator for subsequent parses."""
        self.delimiter = require_symbol(symbol, "delimiter")

    def parse(self, line: str) -> ElementDescriptor:
        """
        Parse one template line.

        Leading depth markers are ignored; use level_of() for the level.

        Args:
            line: Raw template line

        Returns:
            ElementDescriptor with every field found on the line

        Raises:
            GrammarError: If the line does not start with a tag name
        """
        text = strip_markers(line)

        match = _TAG.match(text)
        if not match:
            raise GrammarError(line)
        tag = match.group(0)
        pos = match.end()

        classes, pos = self._scan_classes(text, pos)
        element_id, pos = self._scan_id(text, pos)
        content, pos = self._scan_content(text, pos)
        attributes, pos = self._scan_attributes(text, pos)
        events, pos = self._scan_events(text, pos)

        if text[pos:].strip():
            logger.warning("unparsed_suffix", line=line, suffix=text[pos:])

        return ElementDescriptor(
            tag=tag,
            classes=classes,
            id=element_id,
            content=content,
            attributes=attributes,
            events=events,
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _scan_classes(self, text: str, pos: int) -> tuple[tuple[str, ...], int]:
        classes = []
        while pos < len(text) and text[pos] == ".":
            match = _CLASS.match(text, pos)
            pos = match.end()
            token = match.group(1)
            if token and _accept("class", token):
                classes.append(token)
        return tuple(classes), pos

    def _scan_id(self, text: str, pos: int) -> tuple[str | None, int]:
        if pos < len(text) and text[pos] == "#":
            match = _ID.match(text, pos)
            return match.group(1) or None, match.end()
        return None, pos

    def _scan_content(self, text: str, pos: int) -> tuple[str | None, int]:
        if pos >= len(text) or text[pos] != "(":
            return None, pos
        end = _closing(text, pos, ")", "[@")
        if end == -1:
            return None, pos
        raw = text[pos + 1 : end]
        return (html.unescape(raw) if raw else None), end + 1

    def _scan_attributes(self, text: str, pos: int) -> tuple[tuple[tuple[str, str], ...], int]:
        if pos >= len(text) or text[pos] != "[":
            return (), pos
        end = _closing(text, pos, "]", "@")
        if end == -1:
            return (), pos

        attributes = []
        for entry in text[pos + 1 : end].split(self.delimiter):
            entry = entry.strip()
            if not entry:
                continue
            name, _, value = entry.partition("=")
            name = name.strip()
            if not name or not _accept("attribute", name):
                continue
            attributes.append((name, value.strip()))
        return tuple(attributes), end + 1

    def _scan_events(self, text: str, pos: int) -> tuple[tuple[str, ...], int]:
        events = []
        while pos < len(text) and text[pos] == "@":
            match = _EVENTS.match(text, pos)
            pos = match.end()
            for name in match.group(1).split(EVENT_SEPARATOR):
                if name and _accept("event", name):
                    events.append(name)
        return tuple(events), pos


def parse_line(line: str, delimiter: str = DEFAULT_ATTRIBUTE_DELIMITER) -> ElementDescriptor:
    """
    Convenience function to parse a single line

    Args:
        line: Template line
        delimiter: Attribute separator

    Returns:
        ElementDescriptor
    """
    return LineParser(delimiter).parse(line)
