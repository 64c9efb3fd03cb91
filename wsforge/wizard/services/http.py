"""HTTP implementation of the catalog and provisioning services.

Talks to the portal API with ``httpx.AsyncClient``.  Every response is an
envelope::

    {"body": <payload>, "message": "<human readable text>"}

and failures carry an ``error`` (or ``message`` / ``detail``) string, which
becomes ``ApiError.message`` so the controller can show it verbatim.

Retries and token refresh are the caller's concern; this adapter makes one
attempt per call.
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType
from typing import Any, Self

import httpx
from loguru import logger
from pydantic import ValidationError

from wsforge.wizard.models.api import CreateWorkspaceResult
from wsforge.wizard.models.catalog import Image, Template, TshirtSize, image_from_record
from wsforge.wizard.models.enums import BuildKind, WorkspaceKind
from wsforge.wizard.services.base import ApiError
from wsforge.wizard.settings import WizardSettings


class HttpWorkspaceApi:
    """Catalog + provisioning client for one portal API base URL.

    Satisfies both ``CatalogService`` and ``ProvisioningService``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: WizardSettings, *, transport: httpx.AsyncBaseTransport | None = None) -> Self:
        token = settings.api_token.get_secret_value() if settings.api_token else None
        return cls(settings.api_url, token=token, timeout=settings.request_timeout, transport=transport)

    # -- Lifecycle -------------------------------------------------------------

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # -- CatalogService --------------------------------------------------------

    async def list_templates(self, project_id: str) -> list[Template]:
        body = await self._request("GET", "templates", params={"project_id": project_id})
        return _parse_list(body, Template.model_validate, "templates")

    async def list_tshirt_sizes(self) -> list[TshirtSize]:
        body = await self._request("GET", "billing/tshirtsize")
        return _parse_list(body, TshirtSize.model_validate, "tshirt sizes")

    async def list_images(self, project_id: str, workspace_kind: WorkspaceKind, build_kind: BuildKind) -> list[Image]:
        body = await self._request(
            "GET",
            f"builds/{workspace_kind}",
            params={"project_id": project_id, "build_type": str(build_kind)},
        )
        return _parse_list(body, image_from_record, "images")

    # -- ProvisioningService ---------------------------------------------------

    async def create_workspace(self, payload: dict[str, Any]) -> CreateWorkspaceResult:
        envelope = await self._request_envelope("POST", "workspaces", json=payload)
        workspace = envelope.get("body")
        return CreateWorkspaceResult(
            workspace=workspace if isinstance(workspace, dict) else {},
            message=str(envelope.get("message") or "Workspace created."),
        )

    # -- Internals -------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        envelope = await self._request_envelope(method, path, **kwargs)
        return envelope.get("body")

    async def _request_envelope(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("{} {} failed: {}", method, path, exc)
            msg = f"Could not reach the server: {exc}"
            raise ApiError(msg) from exc

        if response.is_error:
            raise ApiError(_error_message(response), status_code=response.status_code)

        try:
            envelope = response.json()
        except ValueError:
            msg = f"Invalid JSON from {method} {path}"
            raise ApiError(msg, status_code=response.status_code) from None
        if not isinstance(envelope, dict):
            msg = f"Unexpected response shape from {method} {path}"
            raise ApiError(msg, status_code=response.status_code)
        return envelope


def _error_message(response: httpx.Response) -> str:
    """Best user-facing message for an error response."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("error", "message", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return f"Request failed with status {response.status_code}"


def _parse_list[T](body: Any, parse: Callable[[Any], T], what: str) -> list[T]:
    if body is None:
        return []
    if not isinstance(body, list):
        msg = f"Expected a list of {what}"
        raise ApiError(msg)
    try:
        return [parse(item) for item in body]
    except (ValidationError, AttributeError, TypeError) as exc:
        msg = f"Malformed {what} in response: {exc}"
        raise ApiError(msg) from None
