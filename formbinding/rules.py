"""
Rule metadata model.

A field declares its rules as a compact string such as
``"Required;MinSize(6);MaxSize(30)"``. The rules themselves are checked by an
external engine; this module only keeps enough of the declaration to render
messages, most importantly the numeric bound of size rules.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional

from .exceptions import RuleSyntaxError

if TYPE_CHECKING:
    from .descriptor import FieldSpec

RULE_SEPARATOR = ';'

_TOKEN_RE = re.compile(r'^(?P<name>[^()]*)(?:\((?P<argument>[^()]*)\))?$')


class RuleKind(str, Enum):
    """Rule kinds known to the message translator."""

    REQUIRED = "Required"
    ALPHA_DASH = "AlphaDash"
    ALPHA_DASH_DOT = "AlphaDashDot"
    MIN_SIZE = "MinSize"
    MAX_SIZE = "MaxSize"
    EMAIL = "Email"
    URL = "Url"
    UNKNOWN = "Unknown"

    @classmethod
    def from_name(cls, name: str) -> 'RuleKind':
        """Map a rule or violation name to its kind, UNKNOWN when unrecognised."""
        for kind in cls:
            if kind is not cls.UNKNOWN and kind.value == name:
                return kind
        return cls.UNKNOWN


SIZE_KINDS = frozenset({RuleKind.MIN_SIZE, RuleKind.MAX_SIZE})


@dataclass(frozen=True)
class Rule:
    """
    A single declared rule with its optional integer parameter.

    ``argument`` keeps the raw text between the parentheses, so rules with
    non-integer arguments such as ``Range(1,10)`` format back unchanged.
    """

    kind: RuleKind
    name: str
    parameter: Optional[int] = None
    argument: Optional[str] = field(default=None, compare=False)

    @property
    def is_size_bound(self) -> bool:
        return self.kind in SIZE_KINDS

    def __str__(self) -> str:
        if self.argument is not None:
            return f"{self.name}({self.argument})"
        if self.parameter is None:
            return self.name
        return f"{self.name}({self.parameter})"


def parse_rule(token: str) -> Rule:
    """
    Parse a single rule token.

    Args:
        token: Rule token such as ``Required`` or ``MaxSize(30)``

    Returns:
        Parsed Rule

    Raises:
        RuleSyntaxError: When parentheses are unbalanced or a size rule lacks
            an integer parameter
    """
    token = token.strip()
    match = _TOKEN_RE.match(token)
    if not match:
        raise RuleSyntaxError(f"Malformed rule token '{token}'", token=token)

    name = match.group('name').strip()
    argument = match.group('argument')
    kind = RuleKind.from_name(name)

    parameter = None
    if argument is not None:
        argument = argument.strip()
        try:
            parameter = int(argument)
        except ValueError:
            if kind in SIZE_KINDS:
                raise RuleSyntaxError(
                    f"Rule '{name}' requires an integer parameter, got '{argument}'",
                    token=token
                )

    if kind in SIZE_KINDS and parameter is None:
        raise RuleSyntaxError(f"Rule '{name}' requires an integer parameter", token=token)

    return Rule(kind=kind, name=name, parameter=parameter, argument=argument)


def parse_rules(rule_string: Optional[str]) -> List[Rule]:
    """
    Parse a rule string into its ordered rules.

    Empty tokens are skipped, so ``""`` and ``"Required;"`` are both valid.
    Unknown rule names parse to ``RuleKind.UNKNOWN`` rather than failing.
    """
    if not rule_string:
        return []
    return [
        parse_rule(token)
        for token in rule_string.split(RULE_SEPARATOR)
        if token.strip()
    ]


def format_rules(rules: Iterable[Rule]) -> str:
    return RULE_SEPARATOR.join(str(rule) for rule in rules)


def find_bound_parameter(field_spec: 'FieldSpec', kind: Optional[str] = None) -> str:
    """
    Return the size bound declared for a field as text.

    With ``kind`` set to MinSize or MaxSize, the first rule of exactly that kind
    supplies the bound. Without ``kind``, the first MinSize or MaxSize rule
    does. An empty string is returned when no matching rule is declared.
    """
    wanted = SIZE_KINDS
    if kind is not None:
        wanted_kind = RuleKind.from_name(kind)
        if wanted_kind in SIZE_KINDS:
            wanted = frozenset({wanted_kind})

    for rule in field_spec.rules:
        if rule.kind in wanted and rule.parameter is not None:
            return str(rule.parameter)
    return ""
