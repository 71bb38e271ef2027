"""Echo of submitted form values into the rendering context."""

from typing import Any, MutableMapping

from .descriptor import describe


def assign_form(form: Any, context: MutableMapping[str, Any]) -> None:
    """
    Assign form values back to the rendering context.

    Every field not excluded with the ``'-'`` wire name is written under its
    wire name, overwriting any previous value.
    """
    for spec in describe(form).bound_fields():
        context[spec.wire_name] = getattr(form, spec.name)
