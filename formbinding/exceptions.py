"""
Exception hierarchy for form declaration problems.

Validation outcomes are never expressed as exceptions: a validation pass only
writes into the rendering context. The classes here cover programmer errors in
form declarations (malformed rule strings, duplicate wire names, forms that are
not dataclasses), which surface the first time a form type is described.
"""

from enum import Enum
from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for declaration failures."""

    RULE_SYNTAX = "rule_syntax"
    FORM_DECLARATION = "form_declaration"
    UNKNOWN = "unknown"


class FormBindingError(Exception):
    """
    Base exception class for all formbinding errors.

    Attributes:
        message: Human-readable error message
        code: Error code, defaults to the class name
        category: Error category for classification
        details: Additional error context
    """

    category = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

        self._log_error()

    def _log_error(self) -> None:
        logger.error(
            self.message,
            error_code=self.code,
            error_category=self.category.value,
            details=self.details
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format.

        Returns:
            Dictionary representation of the error
        """
        return {
            'error': True,
            'message': self.message,
            'code': self.code,
            'category': self.category.value,
            'details': self.details
        }

    def __str__(self) -> str:
        return self.message


class FormDeclarationError(FormBindingError):
    """Raised when a form type cannot be described (bad metadata, duplicate wire names)."""

    category = ErrorCategory.FORM_DECLARATION

    def __init__(self, message: str, form: Optional[str] = None, field: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', None) or {}
        if form:
            details['form'] = form
        if field:
            details['field'] = field
        super().__init__(message, details=details, **kwargs)
        self.form = form
        self.field = field


class RuleSyntaxError(FormDeclarationError):
    """Raised when a rule string token cannot be parsed."""

    category = ErrorCategory.RULE_SYNTAX

    def __init__(self, message: str, token: str, **kwargs):
        details = kwargs.pop('details', None) or {}
        details['token'] = token
        super().__init__(message, details=details, **kwargs)
        self.token = token
