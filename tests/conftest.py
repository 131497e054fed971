"""Pytest configuration and fixtures."""

import pytest

from core import get_settings
from htmlbuilder import Document, EventRegistry, HTMLBuilder


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_settings():
    """Settings are cached per process; tests that touch env need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


# ============================================================================
# Builder Fixtures
# ============================================================================

@pytest.fixture
def document():
    """Empty headless document (1280x720 viewport)."""
    return Document(viewport_width=1280, viewport_height=720)


@pytest.fixture
def builder(document):
    """Builder rendering into the document body."""
    return HTMLBuilder(parent=document.body)


@pytest.fixture
def registry():
    """Standalone event registry."""
    return EventRegistry()


@pytest.fixture
def sample_template():
    """Nested template with events, attributes and entities."""
    return """
        nav.menu#main
            >ul
                >>li.item(Home)[data-page=home]@open
                >>li.item(About &amp; Contact)
            >p(Footer)
        footer
    """
