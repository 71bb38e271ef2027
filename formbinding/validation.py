"""
Validation orchestrator.

``validate`` consumes the violations reported by the rule engine for one form
submission and writes the outcome into the rendering context:

- no violations: the context is left untouched;
- overall (untargeted) failures: each one is logged, the context is left
  untouched;
- field violations: ``HasError`` is set, submitted values are echoed back, and
  the first violated field in declaration order gets ``Err_<field>`` and the
  ``ErrorMsg`` message. Other violated fields are not rendered in this pass.
"""

from typing import TYPE_CHECKING, Any, MutableMapping

import structlog

from . import metrics
from .descriptor import describe, type_identity
from .echo import assign_form
from .messages import translate_violation
from .violations import ViolationSet

if TYPE_CHECKING:
    from .forms import Form

logger = structlog.get_logger(__name__)

HAS_ERROR_KEY = 'HasError'
ERROR_MSG_KEY = 'ErrorMsg'
FIELD_ERROR_PREFIX = 'Err_'


def field_error_key(name: str) -> str:
    return FIELD_ERROR_PREFIX + name


def validate(errors: ViolationSet, context: MutableMapping[str, Any], form: 'Form') -> None:
    """
    Render the violations of one submission of ``form`` into ``context``.

    Args:
        errors: Violations reported by the rule engine
        context: Rendering context of the current request
        form: Form instance holding the submitted values
    """
    identity = type_identity(type(form))

    if errors.count() == 0:
        logger.debug("Form passed validation", form=identity)
        return

    if errors.overall:
        for failure in errors.overall:
            logger.error("Untargeted form violation", form=identity, error=failure)
        metrics.record_untargeted_failures(identity, len(errors.overall))
        return

    context[HAS_ERROR_KEY] = True
    assign_form(form, context)

    for spec in describe(form):
        if spec.excluded or spec.name not in errors.fields:
            continue

        kind = errors.fields[spec.name]
        context[field_error_key(spec.name)] = True
        message = translate_violation(form, spec, kind)
        context[ERROR_MSG_KEY] = message

        metrics.record_rendered_violation(identity, kind)
        logger.info(
            "Form violation rendered",
            form=identity,
            field=spec.name,
            kind=kind,
            violated_fields=len(errors.fields)
        )
        return

    logger.warning(
        "Field violations matched no bound field",
        form=identity,
        fields=list(errors.fields)
    )
