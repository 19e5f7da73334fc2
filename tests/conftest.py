"""Shared fixtures for wizard tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from rental_wizard.context import SimpleModalHost, WizardContext
from rental_wizard.models.listing_state import ListingState
from rental_wizard.wizard import RentWizard
from tests.helpers import FakeListingClient, RecordingNotifier


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client() -> FakeListingClient:
    return FakeListingClient()


@pytest.fixture
def modal() -> SimpleModalHost:
    return SimpleModalHost()


@pytest.fixture
def context(
    client: FakeListingClient, modal: SimpleModalHost, notifier: RecordingNotifier
) -> WizardContext:
    return WizardContext(client=client, modal=modal, notifier=notifier)


@pytest.fixture
def wizard(context: WizardContext) -> RentWizard:
    return RentWizard(context)


@pytest.fixture
def state() -> ListingState:
    return ListingState.from_defaults()


SETTINGS_ENV_VARS = ("LISTINGS_API_URL", "LISTINGS_TOKEN", "RENTAL_WIZARD_API_URL")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove settings-related variables, including any a .env file loads."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    for name in SETTINGS_ENV_VARS:
        os.environ.pop(name, None)


@pytest.fixture
def settings_file(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a .rental-wizard.yaml in a temporary project root."""
    config = tmp_path / ".rental-wizard.yaml"
    config.write_text(
        """
wizard:
  api_base_url: ${LISTINGS_API_URL}
  listings_endpoint: /api/listings
  timeout: 12.5
  env_file: .env
  headers:
    Authorization: Bearer ${LISTINGS_TOKEN}
  categories:
    - Apartment
    - Townhouse
""",
        encoding="utf-8",
    )
    (tmp_path / ".env").write_text(
        """
LISTINGS_API_URL=https://edurent.example
LISTINGS_TOKEN=test_token_12345
""",
        encoding="utf-8",
    )
    yield config
