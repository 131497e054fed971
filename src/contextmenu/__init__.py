"""
Context Menu
Right-click menu widget rendered with htmlbuilder templates.
"""

from .menu import ContextMenu
from .models import MenuItem

__all__ = ["ContextMenu", "MenuItem"]
