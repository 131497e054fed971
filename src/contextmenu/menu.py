"""ContextMenu - right-click menu built from item descriptors."""

import html
from collections.abc import Sequence
from typing import Any

from core import get_logger, get_settings, Prefix, Settings, new_event_name, new_menu_id
from htmlbuilder import Document, Element, Event, EventRegistry, HTMLBuilder, indent_template
from .models import MenuItem

logger = get_logger(__name__)


def _text(value: str | None) -> str:
    """Make free text safe for a `( ... )` content group."""
    if not value:
        return ""
    return html.escape(" ".join(value.split()), quote=False)


class ContextMenu:
    """
    Creates a context menu, opened from a "contextmenu" event.

    The menu is appended to the document body, positioned at the pointer
    (flipped when it would overflow the viewport) and closed by any click
    outside of it.

    Example:
        doc = Document()
        menu = ContextMenu(Event("contextmenu", client_x=10, client_y=10), [
            {"title": "Copy", "shortcut": "Ctrl+C", "onclick": copy},
            {"separator": True},
            {"title": "More", "children": [{"title": "Paste", "onclick": paste}]},
        ], doc)
    """

    ARROW_DOWN = "▼"
    ARROW_UP = "▲"

    def __init__(
        self,
        event: Event,
        items: Sequence[MenuItem | dict[str, Any]],
        document: Document,
        settings: Settings | None = None,
    ) -> None:
        event.stop_propagation()
        self.document = document
        self.settings = settings or get_settings()
        self.items = [item if isinstance(item, MenuItem) else MenuItem.model_validate(item) for item in items]
        self.menu_id: str | None = None
        self.menu: Element | None = None

        self._events = EventRegistry()
        self._builder = HTMLBuilder(parent=document.body, delimiter=self.settings.attribute_delimiter)
        self._unsubscribe = None
        self._icons: list[str] = []

        self.close_all_menus()
        self._build(event)
        self._unsubscribe = document.subscribe("click", self._on_document_click)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def get_menu(self) -> Element | None:
        """The menu element if it is still in the document."""
        if self.menu_id:
            return self.document.query_selector(f"#{self.menu_id}")
        return None

    def close_current_menu(self) -> None:
        """Remove this menu and stop listening for outside clicks."""
        menu = self.get_menu()
        if menu:
            menu.remove()
            logger.debug("menu_closed", menu_id=self.menu_id)
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def close_all_menus(self) -> None:
        """Remove every context menu present in the document."""
        for menu in self.document.query_selector_all(".contextmenu"):
            menu.remove()

    def _on_document_click(self, event: Event) -> None:
        menu = self.get_menu()
        if menu is None or not menu.contains(event.target):
            self.close_current_menu()

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def _build(self, event: Event) -> None:
        menu_id = new_menu_id()
        lines = [f"div.contextmenu#{menu_id}", ">ul"]
        for item in self.items:
            lines.append(indent_template(self._item_template(item), 2))

        self._builder.render("\n".join(lines), events=self._events)

        self.menu_id = menu_id
        self.menu = self.get_menu()
        if self.menu is not None:
            for img, src in zip(self.menu.query_selector_all("img.contextmenu-icon"), self._icons):
                img.set_attribute("src", src)
            self._position(self.menu, event)
        logger.info("menu_opened", menu_id=menu_id, items=len(self.items))

    def _item_template(self, item: MenuItem, nested: bool = False) -> str:
        """Template of one item; sub-items are only honoured at the first level."""
        if item.separator:
            return "div.contextmenu-separator"

        children = item.children if item.children and not nested else None
        if item.children and nested:
            logger.debug("nested_children_ignored", title=item.title)

        event_name = ""
        if children:
            event_name = new_event_name(Prefix.OPEN_CHILDREN)
            self._events.bind(name=event_name, type="click", callback=self._open_children)
        elif item.onclick:
            event_name = new_event_name(Prefix.ITEM_EVENT)
            self._events.bind(name=event_name, type="click", callback=self._item_action(item))

        lines = [
            "li",
            ">button.contextmenu-item" + (f"@{event_name}" if event_name else ""),
            ">>div.contextmenu-container-title",
        ]
        if item.icon:
            # src is set after render, URLs may contain grammar symbols
            self._icons.append(item.icon)
            lines.append(">>>img.contextmenu-icon")
        elif item.fontawesome_icon:
            lines.append(">>>i." + ".".join(item.fontawesome_icon.split()))
        lines.append(f">>>span.contextmenu-title({_text(item.title)})")

        if children:
            lines.append(f">>span.contextmenu-arrow({self.ARROW_DOWN})")
            lines.append(">div.contextmenu-container-children.contextmenu-hidden")
            lines.append(">>ul")
            for child in children:
                lines.append(indent_template(self._item_template(child, nested=True), 3))
        elif item.shortcut:
            lines.append(f">>span.contextmenu-shortcut({_text(item.shortcut)})")

        return "\n".join(lines)

    def _item_action(self, item: MenuItem):
        def action() -> None:
            item.onclick()
            self.close_current_menu()

        return action

    def _open_children(self, event: Event) -> None:
        """Show or hide the sub-menu of the clicked item."""
        li = event.current_target.parent if event.current_target is not None else None
        if li is None:
            return
        container = li.query_selector(".contextmenu-container-children")
        arrow = li.query_selector(".contextmenu-arrow")
        if container and arrow:
            container.class_list.toggle("contextmenu-hidden")
            arrow.text_content = self.ARROW_DOWN if arrow.text_content == self.ARROW_UP else self.ARROW_UP

    def _position(self, menu: Element, event: Event) -> None:
        width = self.settings.menu_width
        height = sum(
            self.settings.menu_separator_height if item.separator else self.settings.menu_item_height
            for item in self.items
        )
        x, y = event.client_x, event.client_y
        left = x - width if x + width >= self.document.viewport_width else x
        top = y - height if y + height >= self.document.viewport_height else y
        menu.style["left"] = f"{left}px"
        menu.style["top"] = f"{top}px"
