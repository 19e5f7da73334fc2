"""Wizard project settings loader.

Reads project-specific configuration from .rental-wizard.yaml in the
project root. String values may reference environment variables with
${VAR_NAME}; an optional .env file is loaded first.

Example .rental-wizard.yaml:
    wizard:
      api_base_url: ${LISTINGS_API_URL}
      listings_endpoint: /api/listings
      timeout: 30
      env_file: ./.env
      headers:
        Authorization: Bearer ${LISTINGS_TOKEN}
      categories:
        - Apartment
        - House
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from rental_wizard.lib.env import expand_options, load_env_file
from rental_wizard.lib.errors import ConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_FILE = ".rental-wizard.yaml"
API_URL_ENV_VAR = "RENTAL_WIZARD_API_URL"


@dataclass
class WizardSettings:
    """Wizard configuration settings."""

    # Root of the listing service
    api_base_url: str = "http://localhost:3000"

    # Path of the create endpoint
    listings_endpoint: str = "/api/listings"

    # Transport timeout for the create request, in seconds
    timeout: float = 30.0

    # Optional .env file loaded before ${VAR} expansion
    env_file: str | None = None

    # Extra headers sent with the create request
    headers: dict[str, str] = field(default_factory=dict)

    # Categories offered on the first step
    categories: list[str] = field(
        default_factory=lambda: ["Apartment", "House", "Room", "Studio"]
    )

    @classmethod
    def load(cls, project_root: Path | None = None) -> "WizardSettings":
        """Load settings from .rental-wizard.yaml in project root.

        Args:
            project_root: Project root directory. Defaults to cwd.

        Returns:
            WizardSettings with values from config file or defaults.
        """
        root = project_root or Path.cwd()
        config_path = root / SETTINGS_FILE

        if not config_path.exists():
            settings = cls()
        else:
            try:
                settings = cls.from_file(config_path)
            except (yaml.YAMLError, ConfigurationError) as exc:
                # If config file is malformed, use defaults
                logger.warning("Ignoring %s: %s", config_path, exc)
                settings = cls()

        override = os.environ.get(API_URL_ENV_VAR)
        if override:
            settings.api_base_url = override
        return settings

    @classmethod
    def from_file(cls, path: Path) -> "WizardSettings":
        """Parse a settings file.

        Raises:
            ConfigurationError: If the file's shape or values are invalid
            yaml.YAMLError: If the file is not valid YAML
        """
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ConfigurationError("Settings file must contain a mapping", value=path)

        wizard_config = config.get("wizard", {}) or {}
        if not isinstance(wizard_config, dict):
            raise ConfigurationError("'wizard' section must be a mapping", field="wizard")

        env_file = wizard_config.get("env_file")
        if env_file:
            load_env_file(path.parent / env_file)

        return cls.from_dict(expand_options(wizard_config))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WizardSettings":
        defaults = cls()
        try:
            timeout = float(data.get("timeout", defaults.timeout))
        except (TypeError, ValueError):
            raise ConfigurationError(
                "timeout must be a number", field="timeout", value=data.get("timeout")
            ) from None
        if timeout <= 0:
            raise ConfigurationError(
                "timeout must be positive", field="timeout", value=timeout
            )

        headers = data.get("headers", defaults.headers) or {}
        if not isinstance(headers, dict):
            raise ConfigurationError("headers must be a mapping", field="headers")

        categories = data.get("categories", defaults.categories) or []
        if not isinstance(categories, list):
            raise ConfigurationError("categories must be a list", field="categories")

        return cls(
            api_base_url=str(data.get("api_base_url", defaults.api_base_url)),
            listings_endpoint=str(
                data.get("listings_endpoint", defaults.listings_endpoint)
            ),
            timeout=timeout,
            env_file=data.get("env_file"),
            headers={str(k): str(v) for k, v in headers.items()},
            categories=[str(c) for c in categories],
        )


# Global settings instance (loaded on first access)
_settings: WizardSettings | None = None


def get_settings(reload: bool = False) -> WizardSettings:
    """Get the global wizard settings.

    Args:
        reload: Force reload from config file.
    """
    global _settings
    if _settings is None or reload:
        _settings = WizardSettings.load()
    return _settings
