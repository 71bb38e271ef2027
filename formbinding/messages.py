"""Translation of a field violation into the message shown to the user."""

from typing import TYPE_CHECKING

from .descriptor import FieldSpec
from .rules import RuleKind, find_bound_parameter

if TYPE_CHECKING:
    from .forms import Form

MESSAGE_TEMPLATES = {
    RuleKind.REQUIRED: "{label} cannot be empty",
    RuleKind.ALPHA_DASH: "{label} must be valid alpha or numeric or dash(-_) characters",
    RuleKind.ALPHA_DASH_DOT: "{label} must be valid alpha or numeric or dash(-_) or dot characters",
    RuleKind.MIN_SIZE: "{label} must contain at least {bound} characters",
    RuleKind.MAX_SIZE: "{label} must contain at most {bound} characters",
    RuleKind.EMAIL: "{label} is not a valid e-mail address",
    RuleKind.URL: "{label} is not a valid URL",
}

UNKNOWN_ERROR_TEMPLATE = "Unknown error: {kind}"


def render_message(kind: str, label: str, bound: str = '') -> str:
    """
    Render the message for one violation kind.

    Args:
        kind: Violation kind reported by the rule engine
        label: Display name of the violated field
        bound: Size bound, used by MinSize and MaxSize messages

    Returns:
        User-facing message
    """
    template = MESSAGE_TEMPLATES.get(RuleKind.from_name(kind))
    if template is None:
        return UNKNOWN_ERROR_TEMPLATE.format(kind=kind)
    return template.format(label=label, bound=bound)


def translate_violation(form: 'Form', field_spec: FieldSpec, kind: str) -> str:
    """Render the message for a violation of ``field_spec`` on ``form``."""
    bound = ''
    if RuleKind.from_name(kind) in (RuleKind.MIN_SIZE, RuleKind.MAX_SIZE):
        bound = find_bound_parameter(field_spec, kind)
    return render_message(kind, form.name(field_spec.name), bound)
