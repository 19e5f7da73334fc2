"""Exceptions raised by the listing wizard.

Gate rejections are silent and never raise. These types cover what does
escape the core: bad settings, unknown field names, an incomplete record
at submission time, and a failed create call. Each carries structured
details and a suggestion, and renders them into its message.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = [
    "WizardError",
    "ConfigurationError",
    "UnknownFieldError",
    "ListingSubmissionError",
    "ValidationError",
]


class WizardError(Exception):
    """Base class for wizard errors.

    Args:
        message: Human-readable summary
        step: Name of the wizard step the error relates to, if any
        details: Key/value context, rendered one per line
        suggestion: What the user or operator can do about it
    """

    default_suggestion: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        step: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.step = step
        self.details: Dict[str, Any] = dict(details or {})
        self.suggestion = suggestion or self.default_suggestion
        super().__init__(self._render())

    def _render(self) -> str:
        text = f"[{self.step}] {self.message}" if self.step else self.message
        if self.details:
            text += "\nDetails:\n" + "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
        if self.suggestion:
            text += f"\nSuggestion: {self.suggestion}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the error for structured log records."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "step": self.step,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ConfigurationError(WizardError):
    """Invalid wizard settings."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value
        details = dict(kwargs.pop("details", None) or {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details=details, **kwargs)


class UnknownFieldError(WizardError, KeyError):
    """A field name the listing record does not define.

    Also a ``KeyError`` so mapping-style callers can catch it as one.
    """

    default_suggestion = "Use one of the names in rental_wizard.models.FIELD_DEFAULTS."

    def __init__(self, field: str, **kwargs: Any) -> None:
        self.field = field
        details = dict(kwargs.pop("details", None) or {})
        details["field"] = field
        super().__init__(f"Unknown listing field: {field!r}", details=details, **kwargs)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return Exception.__str__(self)


class ListingSubmissionError(WizardError):
    """The create endpoint answered with an error status or was unreachable."""

    default_suggestion = (
        "Check that the listing service is reachable and press Create again to retry."
    )

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        self.status_code = status_code
        self.url = url
        self.cause = cause
        details = dict(kwargs.pop("details", None) or {})
        if status_code is not None:
            details["status_code"] = status_code
        if url:
            details["url"] = url
        if cause is not None:
            details["cause"] = str(cause)
            details["cause_type"] = type(cause).__name__
        super().__init__(message, details=details, **kwargs)


class ValidationError(WizardError):
    """The record is not complete enough to submit."""

    def __init__(
        self,
        message: str,
        *,
        issues: Optional[List[str]] = None,
        **kwargs: Any,
    ) -> None:
        self.issues = list(issues or [])
        details = dict(kwargs.pop("details", None) or {})
        if self.issues:
            details["issue_count"] = len(self.issues)
            message += "\n\nIssues found:\n" + "\n".join(
                f"  - {issue}" for issue in self.issues
            )
        super().__init__(message, details=details, **kwargs)
