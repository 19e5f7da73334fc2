"""Shared runtime helpers: errors, logging and environment handling."""

from rental_wizard.lib.errors import (
    ConfigurationError,
    ListingSubmissionError,
    UnknownFieldError,
    ValidationError,
    WizardError,
)
from rental_wizard.lib.logging import (
    JSONFormatter,
    WizardLogger,
    get_wizard_logger,
    setup_logging,
)

__all__ = [
    "ConfigurationError",
    "JSONFormatter",
    "ListingSubmissionError",
    "UnknownFieldError",
    "ValidationError",
    "WizardError",
    "WizardLogger",
    "get_wizard_logger",
    "setup_logging",
]
