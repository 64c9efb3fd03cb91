"""Catalog entry models.

Templates, tshirt sizes and images are supplied by the backend and never
mutated by the wizard; they are only filtered and looked up.  All models are
frozen so cached lists can be shared between lookups.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wsforge.wizard.models.enums import BuildKind, OperatingSystem, WorkspaceKind

# -- Entries -------------------------------------------------------------------


class Template(BaseModel):
    """Starter template.  ``type`` drives workspace kind and OS."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    type: str = ""
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.id


class TshirtSize(BaseModel):
    """Predefined cpu/memory bundle."""

    model_config = ConfigDict(frozen=True)

    size_code: str
    cpu: int
    memory: int


class Image(BaseModel):
    """Build image, normalized to a single canonical identifier.

    Use ``image_from_record`` to build one from a raw backend record.
    """

    model_config = ConfigDict(frozen=True)

    ref: str = Field(description="Canonical identifier stored in tfconfig.image")
    name: str
    type: str = ""


def image_from_record(record: dict[str, Any]) -> Image:
    """Normalize a raw image record from the builds endpoint.

    Build records carry their identifier in one of three fields depending on
    which backend produced them: ``image_url``, ``ImageURL`` or only ``name``.
    The first non-empty one wins, in that order.  This is the only place the
    fallback is applied; everything downstream compares ``Image.ref``.
    """
    name = record.get("name") or ""
    ref = record.get("image_url") or record.get("ImageURL") or name
    return Image(ref=ref, name=name, type=record.get("type") or "")


# -- Compute sizing ------------------------------------------------------------


class ComputeCatalog(BaseModel):
    """Allowed compute values for one workspace kind."""

    model_config = ConfigDict(frozen=True)

    kind: WorkspaceKind
    cpu: tuple[str, ...]
    memory: tuple[str, ...]
    drive: tuple[str, ...]
    platform: str = "vscode"


IDE_COMPUTES = ComputeCatalog(
    kind=WorkspaceKind.IDE,
    cpu=("1", "2", "3", "4"),
    memory=("2", "4", "6", "8"),
    drive=("10", "20", "30", "40"),
)

CNV_COMPUTES = ComputeCatalog(
    kind=WorkspaceKind.CNV,
    cpu=("2", "4", "8", "16"),
    memory=("4", "8", "16", "32"),
    drive=("60", "80", "100", "120"),
)


def compute_catalog_for(kind: WorkspaceKind) -> ComputeCatalog:
    return CNV_COMPUTES if kind == WorkspaceKind.CNV else IDE_COMPUTES


# -- Image queries -------------------------------------------------------------


class ImageQuery(BaseModel):
    """Parameter tuple that produced an image list.

    Two queries are equal only when every parameter matches, so a landed
    fetch can be compared against the draft's current query to detect
    staleness.  The OS only narrows ``cnv`` results client-side; the remote
    call is keyed by ``fetch_key``.
    """

    model_config = ConfigDict(frozen=True)

    project_id: str
    workspace_kind: WorkspaceKind
    build_kind: BuildKind
    os: OperatingSystem

    @property
    def fetch_key(self) -> tuple[str, WorkspaceKind, BuildKind]:
        return (self.project_id, self.workspace_kind, self.build_kind)

    @property
    def os_filter(self) -> str | None:
        """Substring an image type must contain, or ``None`` for no filtering."""
        if self.workspace_kind != WorkspaceKind.CNV:
            return None
        return f"{self.os}_cnv"

    def filter(self, images: list[Image]) -> list[Image]:
        needle = self.os_filter
        if needle is None:
            return list(images)
        return [img for img in images if needle in img.type.lower()]
