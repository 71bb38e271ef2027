"""
Prometheus counters for validation outcomes.

Counters are registered on the default prometheus_client registry and can be
switched off with ``set_enabled(False)`` (``FORMS_METRICS_ENABLED``).
"""

from prometheus_client import Counter

from .rules import RuleKind

violations_rendered = Counter(
    'formbinding_violations_rendered_total',
    'Field violations rendered into a rendering context',
    ['form', 'kind']
)

untargeted_failures = Counter(
    'formbinding_untargeted_failures_total',
    'Violations not attributable to a field, logged and dropped',
    ['form']
)

_enabled = True


def set_enabled(enabled: bool) -> None:
    global _enabled
    _enabled = bool(enabled)


def is_enabled() -> bool:
    return _enabled


def record_rendered_violation(form: str, kind: str) -> None:
    # Unrecognised kinds share the Unknown series
    if _enabled:
        violations_rendered.labels(form=form, kind=RuleKind.from_name(kind).value).inc()


def record_untargeted_failures(form: str, count: int) -> None:
    if _enabled and count:
        untargeted_failures.labels(form=form).inc(count)
