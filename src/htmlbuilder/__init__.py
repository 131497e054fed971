"""
HTML Builder
Indentation-based templates to element trees.
"""

from .builder import HTMLBuilder
from .dom import ClassList, Document, Element, Event, EventTarget, TextNode
from .events import BindingValidationError, EventBinding, EventRegistry
from .grammar import (
    DEFAULT_ATTRIBUTE_DELIMITER,
    MARKER,
    ElementDescriptor,
    GrammarError,
    LineParser,
    level_of,
    parse_line,
)
from .template import (
    Block,
    LineRecord,
    TemplateLine,
    extract_lines,
    indent_template,
    scan_template,
    split_blocks,
    validate_template,
)
from .tree import attach_children, group_children, resolve_parents

__all__ = [
    "HTMLBuilder",
    # DOM
    "ClassList",
    "Document",
    "Element",
    "Event",
    "EventTarget",
    "TextNode",
    # Events
    "BindingValidationError",
    "EventBinding",
    "EventRegistry",
    # Grammar
    "DEFAULT_ATTRIBUTE_DELIMITER",
    "MARKER",
    "ElementDescriptor",
    "GrammarError",
    "LineParser",
    "level_of",
    "parse_line",
    # Templates
    "Block",
    "LineRecord",
    "TemplateLine",
    "extract_lines",
    "indent_template",
    "scan_template",
    "split_blocks",
    "validate_template",
    # Tree
    "attach_children",
    "group_children",
    "resolve_parents",
]
