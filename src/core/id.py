"""ID Generation.

ULID-based identifiers for menus, event bindings and render passes.

Every generated ID is `<prefix>_<ulid>`: it starts with a letter and only uses
word characters, so it is always a valid `#id` or `@event` token in a template.
"""

from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

MenuID = NewType("MenuID", str)
"""Context menu root element id"""

EventName = NewType("EventName", str)
"""Name of an event binding referenced from a template line"""

RenderID = NewType("RenderID", str)
"""Single render pass identifier (log correlation)"""


class Prefix:
    """ID prefix constants."""

    MENU = "contextmenu"
    ITEM_EVENT = "eventitem"
    OPEN_CHILDREN = "openchildren"
    RENDER = "render"


# ============================================================================
# ULID Generator
# ============================================================================


class Generator:
    """ULID generator."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"


_generator = Generator()


def new_menu_id() -> MenuID:
    """Generate new menu ID."""
    return MenuID(_generator.generate_with_prefix(Prefix.MENU))


def new_event_name(prefix: str = Prefix.ITEM_EVENT) -> EventName:
    """Generate new event binding name."""
    return EventName(_generator.generate_with_prefix(prefix))


def new_render_id() -> RenderID:
    """Generate new render ID."""
    return RenderID(_generator.generate_with_prefix(Prefix.RENDER))
