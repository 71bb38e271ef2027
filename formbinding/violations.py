"""
Violation sets reported by the rule-checking engine.

Violation kinds are the rule names the engine reports (``"Required"``,
``"MaxSize"``, ...). Kinds outside the known set are kept verbatim.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

import structlog
from marshmallow import ValidationError as MarshmallowValidationError

from .descriptor import describe
from .rules import RuleKind

logger = structlog.get_logger(__name__)

REQUIRED_ERROR = RuleKind.REQUIRED.value
ALPHA_DASH_ERROR = RuleKind.ALPHA_DASH.value
ALPHA_DASH_DOT_ERROR = RuleKind.ALPHA_DASH_DOT.value
MIN_SIZE_ERROR = RuleKind.MIN_SIZE.value
MAX_SIZE_ERROR = RuleKind.MAX_SIZE.value
EMAIL_ERROR = RuleKind.EMAIL.value
URL_ERROR = RuleKind.URL.value

# Key marshmallow uses for errors raised by schema-level validators
SCHEMA_ERRORS_KEY = '_schema'


@dataclass
class ViolationSet:
    """
    Overall failures plus at most one violation kind per field.

    Attributes:
        overall: Failures not attributable to a single field
        fields: Field identity to violation kind
    """

    overall: List[Any] = field(default_factory=list)
    fields: Dict[str, str] = field(default_factory=dict)

    def count(self) -> int:
        return len(self.overall) + len(self.fields)

    def __len__(self) -> int:
        return self.count()

    def add_overall(self, failure: Any) -> None:
        self.overall.append(failure)

    def add_field(self, name: str, kind: str) -> None:
        """Record a field violation; the first kind recorded for a field is kept."""
        if isinstance(kind, RuleKind):
            kind = kind.value
        self.fields.setdefault(name, str(kind))

    @classmethod
    def from_marshmallow(
        cls,
        error: MarshmallowValidationError,
        form_type: Optional[Type[Any]] = None
    ) -> 'ViolationSet':
        """
        Convert a marshmallow ValidationError into a ViolationSet.

        Field messages are expected to be violation kinds. Keys are matched to
        fields of ``form_type`` by wire name first, then by attribute name.
        ``_schema`` messages and keys matching no field become overall
        failures. Only the first message of each field is kept.

        Args:
            error: Error raised by a marshmallow schema
            form_type: Form class the schema loads into

        Returns:
            ViolationSet built from the error messages
        """
        violations = cls()
        messages = error.messages
        if not isinstance(messages, dict):
            for message in _as_list(messages):
                violations.add_overall(message)
            return violations

        descriptor = describe(form_type) if form_type is not None else None
        for key, field_messages in messages.items():
            field_messages = _as_list(field_messages)
            if key == SCHEMA_ERRORS_KEY:
                for message in field_messages:
                    violations.add_overall(message)
                continue

            spec = None
            if descriptor is not None:
                spec = descriptor.by_wire_name(key) or descriptor.field(key)
            if descriptor is not None and spec is None:
                for message in field_messages:
                    violations.add_overall(f"{key}: {message}")
                continue

            if field_messages:
                violations.add_field(spec.name if spec else key, field_messages[0])

        logger.debug(
            "Converted marshmallow errors",
            overall_count=len(violations.overall),
            fields=list(violations.fields)
        )
        return violations


def _as_list(messages: Any) -> List[Any]:
    # Nested schemas report dicts, kept as a single opaque message
    return messages if isinstance(messages, list) else [messages]
