"""Provisioning API response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CreateWorkspaceResult(BaseModel):
    """Outcome of a successful create-workspace call.

    ``workspace`` is passed through untouched to the navigation sink; the
    wizard does not interpret it.
    """

    workspace: dict[str, Any] = Field(default_factory=dict)
    message: str = ""
