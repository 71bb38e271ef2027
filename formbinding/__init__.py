"""
formbinding: declarative form validation and error rendering.

Forms declare their fields' wire names and rule strings; the rule engine
reports violations; ``validate`` renders one message into a rendering context
and echoes submitted values so the form can be redisplayed.
"""

from .descriptor import (
    EXCLUDED_WIRE_NAME,
    FieldSpec,
    RecordDescriptor,
    clear_descriptor_cache,
    describe,
    form_field,
)
from .echo import assign_form
from .exceptions import FormBindingError, FormDeclarationError, RuleSyntaxError
from .forms import Form, InstallForm, LogInForm, RegisterForm, default_label
from .messages import render_message, translate_violation
from .rules import Rule, RuleKind, find_bound_parameter, format_rules, parse_rules
from .validation import ERROR_MSG_KEY, HAS_ERROR_KEY, field_error_key, validate
from .violations import ViolationSet

__version__ = '1.0.0'

__all__ = [
    'EXCLUDED_WIRE_NAME',
    'ERROR_MSG_KEY',
    'HAS_ERROR_KEY',
    'FieldSpec',
    'Form',
    'FormBindingError',
    'FormDeclarationError',
    'InstallForm',
    'LogInForm',
    'RecordDescriptor',
    'RegisterForm',
    'Rule',
    'RuleKind',
    'RuleSyntaxError',
    'ViolationSet',
    'assign_form',
    'clear_descriptor_cache',
    'default_label',
    'describe',
    'field_error_key',
    'find_bound_parameter',
    'form_field',
    'format_rules',
    'parse_rules',
    'render_message',
    'translate_violation',
    'validate',
]
