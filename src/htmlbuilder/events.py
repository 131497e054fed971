"""Event Registry - named callbacks that template lines reference with `@name`."""

from collections.abc import Callable, Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from core import get_logger, ValidationError

logger = get_logger(__name__)


class BindingValidationError(ValidationError):
    """An event binding is missing its name, type or callback."""

    pass


class EventBinding(BaseModel):
    """A named (type, callback, options) triple."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Name referenced from templates (@name)")
    type: str = Field(..., min_length=1, description="Event type the listener reacts to")
    callback: Callable[..., Any] = Field(..., description="Zero- or one-argument listener")
    options: dict[str, Any] | None = Field(default=None, description="Dispatch options (once)")

    @field_validator("name")
    @classmethod
    def strip_on_prefix(cls, v: str) -> str:
        """'onclick' and 'click' resolve to the same binding."""
        if v.startswith("on"):
            v = v[2:]
        if not v:
            raise ValueError("name cannot be empty once the 'on' prefix is removed")
        return v


class EventRegistry:
    """
    Ordered list of event bindings.

    Duplicate names are allowed; lookups return the first match. A registry
    is consumed by a render: HTMLBuilder.render() clears it when done.
    """

    def __init__(self) -> None:
        self._bindings: list[EventBinding] = []

    def bind(self, binding: EventBinding | dict[str, Any] | None = None, **fields: Any) -> EventBinding:
        """
        Register a binding.

        Args:
            binding: EventBinding or mapping with name/type/callback/options
            **fields: Binding fields, when no binding object is given

        Returns:
            The stored (normalised) binding

        Raises:
            BindingValidationError: If name, type or callback is missing, or if
                fields are given along with an EventBinding
        """
        if isinstance(binding, EventBinding) and fields:
            logger.error("invalid_binding", fields=sorted(fields))
            raise BindingValidationError(
                f"cannot bind an event, extra field(s) given with a binding: {', '.join(sorted(fields))}"
            )
        try:
            if isinstance(binding, EventBinding):
                stored = binding
            else:
                stored = EventBinding.model_validate({**(binding or {}), **fields})
        except PydanticValidationError as e:
            missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            logger.error("invalid_binding", fields=missing)
            raise BindingValidationError(
                f"cannot bind an event, invalid field(s): {', '.join(missing)}"
            ) from e

        self._bindings.append(stored)
        logger.debug("event_bound", name=stored.name, type=stored.type)
        return stored

    def find(self, name: str) -> EventBinding | None:
        """Get the first binding registered under `name`."""
        for binding in self._bindings:
            if binding.name == name:
                return binding
        return None

    def clear(self) -> None:
        """Drop every binding."""
        self._bindings = []

    def names(self) -> list[str]:
        """Binding names in registration order."""
        return [b.name for b in self._bindings]

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[EventBinding]:
        return iter(list(self._bindings))
