"""Menu Data Models."""

from collections.abc import Callable
from typing import Any
from pydantic import BaseModel, Field


class MenuItem(BaseModel):
    """One entry of a context menu."""

    title: str | None = Field(default=None, description="Label")
    shortcut: str | None = Field(default=None, description="Shortcut hint shown on leaf items")
    icon: str | None = Field(default=None, description="Image URL (wins over fontawesome_icon)")
    fontawesome_icon: str | None = Field(default=None, description="Icon font classes, e.g. 'fa-solid fa-copy'")
    onclick: Callable[[], Any] | None = Field(default=None, description="Leaf item action")
    separator: bool = Field(default=False, description="Render a separator, other fields ignored")
    children: list["MenuItem"] | None = Field(default=None, description="Sub-menu (one level deep)")


MenuItem.model_rebuild()
