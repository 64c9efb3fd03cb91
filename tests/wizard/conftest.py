"""Fakes for the wizard's collaborators and a ready-to-use controller."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from wsforge.wizard.controller import WizardController
from wsforge.wizard.models.api import CreateWorkspaceResult
from wsforge.wizard.models.catalog import Image, Template, TshirtSize, image_from_record
from wsforge.wizard.models.enums import BuildKind, NotificationKind, WorkspaceKind
from wsforge.wizard.services.base import ApiError

PROJECT_ID = "proj-1"
USER = "dev@example.com"

TEMPLATES = [
    Template(id="tpl-ide", name="VS Code", type="ide_linux"),
    Template(id="tpl-ide-win", name="VS Code on Windows", type="IDE_Windows"),
    Template(id="tpl-cnv", name="Ubuntu VM", type="linux_cnv"),
    Template(id="tpl-cnv-win", name="Windows VM", type="Windows_CNV"),
]

TSHIRT_SIZES = [
    TshirtSize(size_code="S", cpu=2, memory=4),
    TshirtSize(size_code="M", cpu=4, memory=8),
    TshirtSize(size_code="L", cpu=8, memory=16),
]

IMAGES: dict[tuple[WorkspaceKind, BuildKind], list[Image]] = {
    (WorkspaceKind.IDE, BuildKind.DEFAULT): [
        image_from_record({"name": "python-3.12", "type": "ide", "image_url": "registry/python:3.12"}),
        image_from_record({"name": "node-20", "type": "ide", "ImageURL": "registry/node:20"}),
    ],
    (WorkspaceKind.IDE, BuildKind.CUSTOM): [
        image_from_record({"name": "team-build", "type": "ide"}),
    ],
    (WorkspaceKind.CNV, BuildKind.DEFAULT): [
        image_from_record({"name": "ubuntu-22", "type": "linux_cnv", "image_url": "vm/ubuntu-22"}),
        image_from_record({"name": "rhel-9", "type": "Linux_CNV", "image_url": "vm/rhel-9"}),
        image_from_record({"name": "win-2022", "type": "windows_cnv", "image_url": "vm/win-2022"}),
    ],
}


class FakeCatalogService:
    """In-memory catalog service.

    ``gate`` (when set) blocks every image fetch until the event is set, so
    tests can interleave events with in-flight requests.
    """

    def __init__(self) -> None:
        self.templates = list(TEMPLATES)
        self.sizes = list(TSHIRT_SIZES)
        self.images = dict(IMAGES)
        self.image_calls: list[tuple[str, WorkspaceKind, BuildKind]] = []
        self.template_error: ApiError | None = None
        self.size_error: ApiError | None = None
        self.image_error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def list_templates(self, project_id: str) -> list[Template]:
        if self.template_error is not None:
            raise self.template_error
        return list(self.templates)

    async def list_tshirt_sizes(self) -> list[TshirtSize]:
        if self.size_error is not None:
            raise self.size_error
        return list(self.sizes)

    async def list_images(self, project_id: str, workspace_kind: WorkspaceKind, build_kind: BuildKind) -> list[Image]:
        self.image_calls.append((project_id, workspace_kind, build_kind))
        if self.gate is not None:
            await self.gate.wait()
        if self.image_error is not None:
            raise self.image_error
        return list(self.images.get((workspace_kind, build_kind), []))


class FakeProvisioning:
    def __init__(self) -> None:
        self.payloads: list[dict[str, Any]] = []
        self.error: ApiError | None = None
        self.gate: asyncio.Event | None = None

    async def create_workspace(self, payload: dict[str, Any]) -> CreateWorkspaceResult:
        self.payloads.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return CreateWorkspaceResult(workspace={"id": payload["id"]}, message="Workspace created successfully")


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, NotificationKind]] = []

    def notify(self, message: str, kind: NotificationKind = NotificationKind.ERROR) -> None:
        self.messages.append((message, kind))


class RecordingNavigator:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def go_to(self, path: str, context: dict[str, Any]) -> None:
        self.calls.append((path, context))


@pytest.fixture
def catalog_service() -> FakeCatalogService:
    return FakeCatalogService()


@pytest.fixture
def provisioning() -> FakeProvisioning:
    return FakeProvisioning()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def make_controller(
    catalog_service: FakeCatalogService,
    provisioning: FakeProvisioning,
    notifier: RecordingNotifier,
    navigator: RecordingNavigator,
):
    def _make(**kwargs: Any) -> WizardController:
        return WizardController(
            catalog_service=catalog_service,
            provisioning=provisioning,
            notifier=notifier,
            navigator=navigator,
            project_id=kwargs.pop("project_id", PROJECT_ID),
            created_by=kwargs.pop("created_by", USER),
            **kwargs,
        )

    return _make


@pytest.fixture
async def controller(make_controller) -> WizardController:
    """Controller with templates and tshirt sizes already loaded."""
    ctl = make_controller()
    await ctl.load_catalogs()
    return ctl
