"""
Record descriptors built from dataclass field metadata.

Forms are plain dataclasses whose fields are declared with ``form_field``::

    @dataclass
    class LogInForm(Form):
        UserName: str = form_field('username', 'Required;MaxSize(35)')

``describe`` turns such a class into an ordered, immutable table of
``FieldSpec`` entries. Tables are built once per form type and cached.
"""

import dataclasses
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple, Type

import structlog

from .exceptions import FormDeclarationError, RuleSyntaxError
from .rules import Rule, format_rules, parse_rules

logger = structlog.get_logger(__name__)

# Metadata keys carried on dataclass fields
WIRE_NAME_KEY = 'form'
RULES_KEY = 'binding'

# Wire name marking a field excluded from binding and echo
EXCLUDED_WIRE_NAME = '-'

_cache: Dict[type, 'RecordDescriptor'] = {}
_cache_lock = threading.Lock()


def form_field(wire_name: Optional[str] = None, binding: str = '', default: Any = '', **kwargs: Any) -> Any:
    """
    Declare a form field with its wire name and rule string.

    Args:
        wire_name: External key used for binding and echo, ``'-'`` to exclude
        binding: Rule string, e.g. ``'Required;MaxSize(30)'``
        default: Field default value
        **kwargs: Passed through to ``dataclasses.field``

    Returns:
        A dataclass field definition
    """
    metadata = dict(kwargs.pop('metadata', None) or {})
    if wire_name is not None:
        metadata[WIRE_NAME_KEY] = wire_name
    metadata[RULES_KEY] = binding
    return dataclasses.field(default=default, metadata=metadata, **kwargs)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    wire_name: str
    rules: Tuple[Rule, ...] = ()

    @property
    def excluded(self) -> bool:
        return self.wire_name == EXCLUDED_WIRE_NAME


class RecordDescriptor:
    """Ordered field table of one form type."""

    def __init__(self, form_type: type, fields: Tuple[FieldSpec, ...]):
        self.form_type = form_type
        self.fields = fields
        self._by_name = {spec.name: spec for spec in fields}
        self._by_wire_name = {spec.wire_name: spec for spec in fields if not spec.excluded}

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        return f"<RecordDescriptor {type_identity(self.form_type)} fields={len(self.fields)}>"

    def field(self, name: str) -> Optional[FieldSpec]:
        return self._by_name.get(name)

    def by_wire_name(self, wire_name: str) -> Optional[FieldSpec]:
        return self._by_wire_name.get(wire_name)

    def bound_fields(self) -> Tuple[FieldSpec, ...]:
        """Fields that take part in binding and echo."""
        return tuple(spec for spec in self.fields if not spec.excluded)


def type_identity(form_type: type) -> str:
    return f"{form_type.__module__}.{form_type.__qualname__}"


def describe(form: Any) -> RecordDescriptor:
    """
    Return the descriptor of a form instance or form class.

    Raises:
        FormDeclarationError: When the form is not a dataclass, declares a
            malformed rule string, or reuses a wire name
    """
    form_type = form if isinstance(form, type) else type(form)

    descriptor = _cache.get(form_type)
    if descriptor is not None:
        return descriptor

    with _cache_lock:
        descriptor = _cache.get(form_type)
        if descriptor is None:
            descriptor = _build_descriptor(form_type)
            _cache[form_type] = descriptor
    return descriptor


def clear_descriptor_cache() -> None:
    with _cache_lock:
        _cache.clear()


def _build_descriptor(form_type: Type[Any]) -> RecordDescriptor:
    identity = type_identity(form_type)
    if not dataclasses.is_dataclass(form_type):
        raise FormDeclarationError(f"{identity} is not a dataclass and cannot be described", form=identity)

    specs = []
    seen_wire_names: Dict[str, str] = {}
    for dc_field in dataclasses.fields(form_type):
        wire_name = dc_field.metadata.get(WIRE_NAME_KEY, dc_field.name)
        try:
            rules = tuple(parse_rules(dc_field.metadata.get(RULES_KEY, '')))
        except RuleSyntaxError as e:
            raise FormDeclarationError(
                f"Invalid rules on {identity}.{dc_field.name}: {e.message}",
                form=identity,
                field=dc_field.name
            ) from e

        if wire_name != EXCLUDED_WIRE_NAME:
            if wire_name in seen_wire_names:
                raise FormDeclarationError(
                    f"Wire name '{wire_name}' is used by both "
                    f"{seen_wire_names[wire_name]} and {dc_field.name} on {identity}",
                    form=identity,
                    field=dc_field.name
                )
            seen_wire_names[wire_name] = dc_field.name

        specs.append(FieldSpec(name=dc_field.name, wire_name=wire_name, rules=rules))

    logger.debug(
        "Form descriptor built",
        form=identity,
        fields=[f"{spec.name}:{spec.wire_name}:{format_rules(spec.rules)}" for spec in specs]
    )
    return RecordDescriptor(form_type, tuple(specs))
