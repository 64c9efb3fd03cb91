"""Collaborator interfaces consumed by the wizard controller.

The controller never talks to the network, the alert area or the router
directly.  It calls these protocols, and every failure of a remote call is
caught at the call site and turned into a notification.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from wsforge.wizard.models.api import CreateWorkspaceResult
from wsforge.wizard.models.catalog import Image, Template, TshirtSize
from wsforge.wizard.models.enums import BuildKind, NotificationKind, WorkspaceKind


class ApiError(Exception):
    """A collaborator call failed (transport, HTTP status or payload shape).

    ``message`` is user-facing text, normally taken from the backend's error
    body.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@runtime_checkable
class CatalogService(Protocol):
    """Read-only catalog lookups."""

    async def list_templates(self, project_id: str) -> list[Template]:
        """Starter templates visible to *project_id*."""
        ...

    async def list_tshirt_sizes(self) -> list[TshirtSize]:
        ...

    async def list_images(self, project_id: str, workspace_kind: WorkspaceKind, build_kind: BuildKind) -> list[Image]:
        """Build images for a kind / build kind, before any OS filtering."""
        ...


@runtime_checkable
class ProvisioningService(Protocol):
    async def create_workspace(self, payload: dict[str, Any]) -> CreateWorkspaceResult:
        """Create the workspace.  Raises ``ApiError`` on failure."""
        ...


@runtime_checkable
class NotificationSink(Protocol):
    def notify(self, message: str, kind: NotificationKind = NotificationKind.ERROR) -> None:
        """Fire-and-forget user notification."""
        ...


@runtime_checkable
class NavigationSink(Protocol):
    def go_to(self, path: str, context: dict[str, Any]) -> None:
        """Leave the wizard.  Called once, after a successful submit."""
        ...
