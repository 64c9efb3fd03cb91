"""Wizard configuration loaded from WSFORGE_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class WizardSettings(BaseSettings):
    """Create-workspace wizard settings.

    All fields are read from environment variables with the ``WSFORGE_`` prefix.
    For example, ``WSFORGE_API_URL=https://portal.example/api`` maps to ``api_url``.
    """

    model_config = SettingsConfigDict(
        env_prefix="WSFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "WARNING"
    """Console log level.  ``wsforge create --verbose`` overrides it with DEBUG."""

    log_file: Path | None = None
    """Optional file receiving the full DEBUG log of each session."""

    # -- Backend ---------------------------------------------------------------
    api_url: str = "http://localhost:8080/api"
    """Base URL of the portal API serving catalogs and workspace creation."""

    api_token: SecretStr | None = None
    """Bearer token sent with every request.  Omitted when unset."""

    request_timeout: float = 30.0

    # -- Session identity ------------------------------------------------------
    project_id: str = ""
    """Owning project of new workspaces; also scopes template and image catalogs."""

    user_email: str = ""
    """Recorded as ``created_by`` on the workspace."""

    # -- Wizard behaviour ------------------------------------------------------
    custom_size_code: str = "TX"
    """Tshirt size code that unlocks free cpu/memory entry."""


@lru_cache(maxsize=1)
def get_settings() -> WizardSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests after overriding env vars.
    """
    return WizardSettings()
