"""HTMLBuilder - renders templates into a parent element."""

from typing import Any

from core import get_logger, get_settings, LogContext, new_render_id
from .dom import Document, Element, TextNode
from .events import EventBinding, EventRegistry
from .grammar import ElementDescriptor, LineParser
from .template import TemplateLine, indent_template, scan_template, split_blocks
from .tree import attach_children

logger = get_logger(__name__)


class HTMLBuilder:
    """
    Generates element trees from indentation-based templates.

    Example:
        >>> builder = HTMLBuilder()
        >>> builder.render("ul\\n>li(A)\\n>>li(B)\\n>li(C)")
        >>> builder.parent.children[0].to_html()
        '<ul><li>A<li>B</li></li><li>C</li></ul>'
    """

    def __init__(self, parent: Element | None = None, delimiter: str | None = None) -> None:
        """
        Args:
            parent: Container receiving rendered elements (a new document body by default)
            delimiter: Attribute separator (settings.attribute_delimiter by default)
        """
        self.parent = parent if parent is not None else Document().body
        self.parser = LineParser(delimiter if delimiter is not None else get_settings().attribute_delimiter)
        self._events = EventRegistry()

    @property
    def events(self) -> EventRegistry:
        """Registry used by render() when none is passed explicitly."""
        return self._events

    def set_parent(self, parent: Element) -> None:
        """Change the container of subsequent renders."""
        self.parent = parent

    def bind_event(self, binding: EventBinding | dict[str, Any] | None = None, **fields: Any) -> EventBinding:
        """Register an event usable as `@name` by the next render."""
        return self._events.bind(binding, **fields)

    def clear_events(self) -> None:
        self._events.clear()

    def change_attribute_delimiter(self, symbol: str) -> None:
        """
        Change the symbol separating attributes inside brackets.

        Example:
            change_attribute_delimiter("/") => [attr1=a / attr2=b]
        """
        self.parser.change_delimiter(symbol)
        logger.debug("delimiter_changed", delimiter=symbol)

    def indent_template(self, template: str, depth: int = 1) -> str:
        return indent_template(template, depth)

    def create_element(self, descriptor: ElementDescriptor, registry: EventRegistry | None = None) -> Element:
        """
        Instantiate one element from its descriptor.

        Args:
            descriptor: Parsed line
            registry: Where `@name` references are resolved (builder registry by default)

        Returns:
            New, detached element
        """
        registry = registry if registry is not None else self._events
        element = Element(descriptor.tag)
        element.class_list.add(*descriptor.classes)
        for name, value in descriptor.attributes:
            element.set_attribute(name, value)
        if descriptor.id:
            element.id = descriptor.id
        if descriptor.content:
            element.append_child(TextNode(descriptor.content))

        for name in descriptor.events:
            binding = registry.find(name)
            if binding is None:
                logger.debug("unresolved_event", name=name, tag=descriptor.tag)
                continue
            element.add_event_listener(binding.type, binding.callback, binding.options)
        return element

    def render(self, template: str, events: EventRegistry | None = None) -> None:
        """
        Build the template and append one tree per main line to the parent.

        The registry used to resolve `@name` references (`events`, or the
        builder's own) is cleared once the render is over, even on error.

        Args:
            template: Template text
            events: Render-scoped registry

        Raises:
            GrammarError: If a line has no tag; trees of earlier main lines stay appended
        """
        if not template.strip():
            return

        registry = events if events is not None else self._events
        try:
            with LogContext(render_id=new_render_id()):
                blocks = split_blocks(scan_template(template))
                for block in blocks:
                    main = self._materialize(block.main, registry)
                    pairs = [(self._materialize(line, registry), line.level) for line in block.descendants]
                    attach_children(main, pairs)
                    self.parent.append_child(main)
                logger.debug("rendered", roots=len(blocks), bindings=len(registry))
        finally:
            registry.clear()

    def _materialize(self, line: TemplateLine, registry: EventRegistry) -> Element:
        return self.create_element(self.parser.parse(line.text), registry)
