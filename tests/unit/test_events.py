"""Event registry tests."""

import pytest

from core import ValidationError
from htmlbuilder import BindingValidationError, EventBinding, EventRegistry


def noop(event=None):
    return None


class TestBind:
    """Test binding validation and normalisation."""

    def test_bind_and_find(self, registry):
        """Bindings are found by name."""
        binding = registry.bind(name="save", type="click", callback=noop)

        assert registry.find("save") is binding
        assert binding.type == "click"
        assert binding.options is None
        assert len(registry) == 1

    def test_bind_from_mapping(self, registry):
        registry.bind({"name": "save", "type": "click", "callback": noop, "options": {"once": True}})
        assert registry.find("save").options == {"once": True}

    def test_bind_prebuilt_binding(self, registry):
        binding = EventBinding(name="hover", type="mouseover", callback=noop)
        assert registry.bind(binding) is binding

    def test_prebuilt_binding_with_fields_is_rejected(self, registry):
        """Fields next to a binding object would be ignored, so the call fails."""
        binding = EventBinding(name="hover", type="mouseover", callback=noop)

        with pytest.raises(BindingValidationError) as exc:
            registry.bind(binding, options={"once": True})

        assert "options" in str(exc.value)
        assert len(registry) == 0

    @pytest.mark.parametrize("name", ["onsubmit", "submit"])
    def test_on_prefix_is_stripped(self, registry, name):
        """'onsubmit' is retrievable under 'submit'."""
        registry.bind(name=name, type="submit", callback=noop)

        assert registry.find("submit") is not None
        assert registry.find("onsubmit") is None

    @pytest.mark.parametrize(
        "fields,missing",
        [
            ({"type": "click", "callback": noop}, "name"),
            ({"name": "a", "callback": noop}, "type"),
            ({"name": "a", "type": "click"}, "callback"),
            ({"name": "", "type": "click", "callback": noop}, "name"),
            ({"name": "on", "type": "click", "callback": noop}, "name"),
            ({"name": "a", "type": "click", "callback": "not callable"}, "callback"),
        ],
    )
    def test_invalid_binding_does_not_mutate_registry(self, registry, fields, missing):
        """Missing name/type/callback raises and leaves the registry untouched."""
        registry.bind(name="existing", type="click", callback=noop)

        with pytest.raises(BindingValidationError) as exc:
            registry.bind(**fields)

        assert missing in str(exc.value)
        assert registry.names() == ["existing"]

    def test_binding_error_is_a_validation_error(self, registry):
        with pytest.raises(ValidationError):
            registry.bind(name="x", type="click")


class TestLookup:
    """Test lookup order and clearing."""

    def test_first_match_wins(self, registry):
        first = registry.bind(name="dup", type="click", callback=noop)
        registry.bind(name="dup", type="dblclick", callback=noop)

        assert registry.find("dup") is first
        assert registry.names() == ["dup", "dup"]

    def test_find_unknown(self, registry):
        assert registry.find("missing") is None

    def test_clear_is_idempotent(self, registry):
        registry.bind(name="a", type="click", callback=noop)
        registry.clear()
        registry.clear()

        assert len(registry) == 0
        assert list(registry) == []

    def test_registries_are_independent(self):
        one, two = EventRegistry(), EventRegistry()
        one.bind(name="a", type="click", callback=noop)
        assert two.find("a") is None
