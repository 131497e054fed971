"""Headless element tree used as the render target.

A minimal stand-in for a browser DOM: elements, text nodes, listeners with
bubbling dispatch, simple selector queries and HTML serialisation.
"""

import html
import inspect
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from core import safe_json_dumps

Listener = Callable[..., Any]

# tag? (.class | #id)*
_SELECTOR = re.compile(r"^(?P<tag>[\w-]+)?(?P<rest>(?:[.#][\w-]+)*)$")
_SELECTOR_PART = re.compile(r"([.#])([\w-]+)")


@dataclass
class Event:
    """A dispatched event. Mouse coordinates are only meaningful for mouse events."""

    type: str
    target: "Element | None" = None
    current_target: "EventTarget | None" = None
    client_x: int = 0
    client_y: int = 0
    propagation_stopped: bool = field(default=False, init=False)

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass
class _Registration:
    callback: Listener
    options: dict[str, Any]


def _invoke(callback: Listener, event: Event) -> Any:
    """Call a listener with the event, or with nothing when it takes no arguments."""
    try:
        params = inspect.signature(callback).parameters.values()
    except (TypeError, ValueError):
        return callback(event)
    positional = [
        p for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    return callback(event) if positional else callback()


class EventTarget:
    """Anything listeners can be attached to."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[_Registration]] = {}

    def add_event_listener(
        self, type: str, callback: Listener, options: dict[str, Any] | None = None
    ) -> None:
        self._listeners.setdefault(type, []).append(_Registration(callback, dict(options or {})))

    def remove_event_listener(self, type: str, callback: Listener) -> None:
        registrations = self._listeners.get(type, [])
        for registration in registrations:
            if registration.callback is callback:
                registrations.remove(registration)
                return

    def subscribe(self, type: str, callback: Listener) -> Callable[[], None]:
        """
        Add a listener and return the function that removes it.

        Args:
            type: Event type
            callback: Listener

        Returns:
            Idempotent unsubscribe function
        """
        self.add_event_listener(type, callback)
        return lambda: self.remove_event_listener(type, callback)

    def listener_count(self, type: str) -> int:
        return len(self._listeners.get(type, []))

    def _handle(self, event: Event) -> None:
        event.current_target = self
        for registration in list(self._listeners.get(event.type, [])):
            if registration.options.get("once"):
                self.remove_event_listener(event.type, registration.callback)
            _invoke(registration.callback, event)


class Node(EventTarget):
    """Base class of everything that lives in the tree."""

    def __init__(self) -> None:
        super().__init__()
        self.parent: "Element | Document | None" = None


class TextNode(Node):
    """Literal text."""

    def __init__(self, data: str) -> None:
        super().__init__()
        self.data = data

    def __repr__(self) -> str:
        return f"TextNode({self.data!r})"


class ClassList:
    """Ordered set of class names."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def add(self, *names: str) -> None:
        for name in names:
            if name not in self._names:
                self._names.append(name)

    def remove(self, *names: str) -> None:
        for name in names:
            if name in self._names:
                self._names.remove(name)

    def toggle(self, name: str) -> bool:
        """Flip a class; returns True when it is now present."""
        if name in self._names:
            self._names.remove(name)
            return False
        self._names.append(name)
        return True

    def contains(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __str__(self) -> str:
        return " ".join(self._names)


class _ParentNode(Node):
    """Shared child management for elements and the document."""

    def __init__(self) -> None:
        super().__init__()
        self.child_nodes: list[Node] = []

    @property
    def children(self) -> list["Element"]:
        return [n for n in self.child_nodes if isinstance(n, Element)]

    def append_child(self, node: Node) -> Node:
        self._adopt(node)
        self.child_nodes.append(node)
        return node

    def prepend(self, node: Node) -> Node:
        self._adopt(node)
        self.child_nodes.insert(0, node)
        return node

    def remove_child(self, node: Node) -> Node:
        if node.parent is not self:
            raise ValueError("node is not a child of this element")
        self.child_nodes.remove(node)
        node.parent = None
        return node

    def _adopt(self, node: Node) -> None:
        if node is self or (isinstance(node, Element) and node.contains(self)):
            raise ValueError("cannot insert a node inside itself")
        if node.parent is not None:
            node.parent.remove_child(node)
        node.parent = self

    def iter_descendants(self) -> Iterator["Element"]:
        """Descendant elements in document (pre-)order."""
        for node in self.child_nodes:
            if isinstance(node, Element):
                yield node
                yield from node.iter_descendants()

    def query_selector_all(self, selector: str) -> list["Element"]:
        """
        Find descendants matching a compound simple selector (`tag.class#id`).

        Raises:
            ValueError: If the selector uses unsupported syntax
        """
        matcher = _compile_selector(selector)
        return [el for el in self.iter_descendants() if matcher(el)]

    def query_selector(self, selector: str) -> "Element | None":
        matcher = _compile_selector(selector)
        for el in self.iter_descendants():
            if matcher(el):
                return el
        return None


class Element(_ParentNode):
    """A UI element."""

    def __init__(self, tag: str) -> None:
        super().__init__()
        self.tag = tag
        self.class_list = ClassList()
        self.attributes: dict[str, str] = {}
        self.style: dict[str, str] = {}

    def __repr__(self) -> str:
        return f"<{self.tag}{'#' + self.id if self.id else ''}>"

    # -- attributes -----------------------------------------------------

    @property
    def id(self) -> str | None:
        return self.attributes.get("id")

    @id.setter
    def id(self, value: str | None) -> None:
        if value:
            self.attributes["id"] = value
        else:
            self.attributes.pop("id", None)

    def set_attribute(self, name: str, value: str = "") -> None:
        if name == "class":
            self.class_list = ClassList()
            self.class_list.add(*value.split())
        else:
            self.attributes[name] = value

    def get_attribute(self, name: str) -> str | None:
        if name == "class":
            return str(self.class_list) if len(self.class_list) else None
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return self.get_attribute(name) is not None

    def remove_attribute(self, name: str) -> None:
        if name == "class":
            self.class_list = ClassList()
        self.attributes.pop(name, None)

    # -- tree -----------------------------------------------------------

    def contains(self, other: Node | None) -> bool:
        """True if `other` is this element or one of its descendants."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def remove(self) -> None:
        """Detach this element from its parent."""
        if self.parent is not None:
            self.parent.remove_child(self)

    @property
    def text_content(self) -> str:
        parts = []
        for node in self.child_nodes:
            if isinstance(node, TextNode):
                parts.append(node.data)
            elif isinstance(node, Element):
                parts.append(node.text_content)
        return "".join(parts)

    @text_content.setter
    def text_content(self, value: str) -> None:
        for node in list(self.child_nodes):
            self.remove_child(node)
        if value:
            self.append_child(TextNode(value))

    # -- events ---------------------------------------------------------

    def dispatch_event(self, event: Event) -> Event:
        """Run listeners on this element, then bubble up to the document."""
        if event.target is None:
            event.target = self
        node: Node | None = self
        while node is not None and not event.propagation_stopped:
            node._handle(event)
            node = node.parent
        return event

    def click(self, client_x: int = 0, client_y: int = 0) -> Event:
        return self.dispatch_event(Event("click", client_x=client_x, client_y=client_y))

    # -- serialisation --------------------------------------------------

    def to_html(self) -> str:
        attrs = []
        if len(self.class_list):
            attrs.append(f'class="{html.escape(str(self.class_list))}"')
        for name, value in self.attributes.items():
            attrs.append(f'{name}="{html.escape(value)}"' if value else name)
        if self.style:
            css = "; ".join(f"{k}: {v}" for k, v in self.style.items())
            attrs.append(f'style="{html.escape(css)}"')
        opening = " ".join([self.tag, *attrs])

        inner = "".join(
            n.to_html() if isinstance(n, Element) else html.escape(n.data, quote=False)
            for n in self.child_nodes
        )
        return f"<{opening}>{inner}</{self.tag}>"

    def to_dict(self) -> dict[str, Any]:
        """Structural snapshot (listeners excluded)."""
        result: dict[str, Any] = {"tag": self.tag}
        if len(self.class_list):
            result["classes"] = list(self.class_list)
        if self.attributes:
            result["attributes"] = dict(self.attributes)
        if self.style:
            result["style"] = dict(self.style)
        children = [
            n.to_dict() if isinstance(n, Element) else {"text": n.data}
            for n in self.child_nodes
        ]
        if children:
            result["children"] = children
        return result

    def to_json(self, **kwargs: Any) -> str:
        return safe_json_dumps(self.to_dict(), **kwargs)


class Document(_ParentNode):
    """Root of a headless page: owns `body` and the viewport size."""

    def __init__(self, viewport_width: int = 1280, viewport_height: int = 720) -> None:
        super().__init__()
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.body = Element("body")
        self.append_child(self.body)

    def click(self, target: Element, client_x: int = 0, client_y: int = 0) -> Event:
        """Simulate a user click on `target`."""
        return target.click(client_x, client_y)


def _compile_selector(selector: str) -> Callable[[Element], bool]:
    match = _SELECTOR.match(selector.strip())
    if not match or not selector.strip():
        raise ValueError(f"unsupported selector: {selector!r}")
    tag = match.group("tag")
    classes = []
    element_id = None
    for kind, token in _SELECTOR_PART.findall(match.group("rest")):
        if kind == ".":
            classes.append(token)
        else:
            element_id = token

    def matches(el: Element) -> bool:
        if tag and el.tag != tag:
            return False
        if element_id and el.id != element_id:
            return False
        return all(c in el.class_list for c in classes)

    return matches
