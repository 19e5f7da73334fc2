"""Multi-step wizard for posting a rental listing.

The wizard assembles a listing record across six pages (category, location,
basics, photos, description and lease dates, price), gates forward progress
on cross-field rules, and submits the finished record to the listing
service.

Usage:
    python -m rental_wizard                 # Interactive console wizard
    python -m rental_wizard --api-url URL   # Post to a specific service
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "RentWizard",
    "WizardContext",
    "HttpListingClient",
    "Step",
]


def __getattr__(name: str):
    """Lazy import of wizard components."""
    if name == "RentWizard":
        from rental_wizard.wizard import RentWizard
        return RentWizard
    if name == "WizardContext":
        from rental_wizard.context import WizardContext
        return WizardContext
    if name == "HttpListingClient":
        from rental_wizard.client import HttpListingClient
        return HttpListingClient
    if name == "Step":
        from rental_wizard.constants import Step
        return Step
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
