"""Derivation engine -- applies one wizard event to a draft.

``apply(draft, event, catalog)`` is a pure state transition: it reads the
catalog, never writes it, performs no I/O and returns a new draft together
with the effects the controller must carry out (image refresh, compute
catalog swap).

Rules, in the order they fire when one event triggers several:

1. Name -> id slug.
2. Template -> OS, template name, workspace kind (+ compute catalog swap).
3. Kind / build kind / OS / template change -> clear image, refresh images.
4. Tshirt size -> cpu / memory (cleared and editable for the custom size).
5. Image -> image display name.
6. Schedule enabled -> default start/stop cron expressions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import assert_never

from loguru import logger

from wsforge.wizard import steps
from wsforge.wizard.catalog import CatalogCache
from wsforge.wizard.models.catalog import ImageQuery, Template, compute_catalog_for
from wsforge.wizard.models.draft import Draft
from wsforge.wizard.models.enums import OperatingSystem, WorkspaceKind
from wsforge.wizard.models.events import (
    GoNext,
    GoPrevious,
    JumpToStep,
    RenameWorkspace,
    SelectImage,
    SelectTemplate,
    SetBuildKind,
    SetCpu,
    SetDrive,
    SetMemory,
    SetOperatingSystem,
    SetSchedule,
    SetTshirtSize,
    ToggleSchedule,
    WizardEvent,
)
from wsforge.wizard.store import with_field, with_fields

DEFAULT_CUSTOM_SIZE_CODE = "TX"
DEFAULT_START_CRON = "30 6 * * 1-5"
DEFAULT_STOP_CRON = "30 14 * * 1-5"

_WHITESPACE_RUN = re.compile(r"\s+")

# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RefreshImages:
    """Re-fetch the image catalog for ``query`` and drop any older request."""

    query: ImageQuery


@dataclass(frozen=True, slots=True)
class UseComputes:
    """Offer the compute catalog of ``kind`` from now on."""

    kind: WorkspaceKind


Effect = RefreshImages | UseComputes


@dataclass(frozen=True, slots=True)
class Derivation:
    draft: Draft
    effects: tuple[Effect, ...] = field(default=())


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    """Workspace id for *name*: lower-cased, whitespace runs replaced by one dash."""
    return _WHITESPACE_RUN.sub("-", name.lower())


def os_for_template(template: Template) -> OperatingSystem:
    return OperatingSystem.WINDOWS if "windows" in template.type.lower() else OperatingSystem.LINUX


def kind_for_template(template: Template) -> WorkspaceKind:
    return WorkspaceKind.CNV if "cnv" in template.type.lower() else WorkspaceKind.IDE


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _rename(draft: Draft, name: str) -> Derivation:
    return Derivation(with_fields(draft, {"name": name, "id": slugify(name)}))


def _select_template(draft: Draft, template_id: str, catalog: CatalogCache) -> Derivation:
    if template_id == draft.template_id:
        return Derivation(draft)

    template = catalog.find_template(draft.project_id, template_id)
    if template is None:
        logger.debug("Template {} is not in the catalog; kind and OS left unchanged", template_id)
        return Derivation(with_fields(draft, {"template_id": template_id, "template_name": ""}))

    changes: dict[str, object] = {
        "template_id": template_id,
        "template_name": template.name,
        "tfconfig.os": os_for_template(template),
    }
    effects: list[Effect] = []

    kind = kind_for_template(template)
    if kind != draft.workspace_type:
        computes = compute_catalog_for(kind)
        changes["workspace_type"] = kind
        changes["tfconfig.vm"] = computes.platform
        if draft.tfconfig.drive and draft.tfconfig.drive not in computes.drive:
            changes["tfconfig.drive"] = ""
        effects.append(UseComputes(kind))

    # A new template always refreshes images, even when the kind is unchanged.
    refreshed = _refresh_images(with_fields(draft, changes))
    return Derivation(refreshed.draft, (*effects, *refreshed.effects))


def _refresh_images(draft: Draft) -> Derivation:
    """Clear the selected image and request the catalog for the draft's query.

    Nothing is fetched until a template has been chosen.
    """
    draft = with_fields(draft, {"tfconfig.image": "", "tfconfig.image_name": ""})
    if not draft.template_id:
        return Derivation(draft)
    return Derivation(draft, (RefreshImages(draft.image_query()),))


def _select_image(draft: Draft, ref: str, catalog: CatalogCache) -> Derivation:
    image = catalog.find_image(draft.image_query(), ref) if ref else None
    return Derivation(
        with_fields(draft, {"tfconfig.image": ref, "tfconfig.image_name": image.name if image else ""}),
    )


def _set_tshirt_size(draft: Draft, size_code: str, catalog: CatalogCache, custom_size_code: str) -> Derivation:
    if size_code == draft.tshirt_size:
        return Derivation(draft)

    cpu = memory = ""
    if size_code != custom_size_code:
        size = catalog.find_tshirt_size(size_code)
        if size is not None:
            cpu, memory = str(size.cpu), str(size.memory)
        else:
            logger.debug("Tshirt size {} is not in the catalog; cpu and memory cleared", size_code)
    return Derivation(with_fields(draft, {"tshirt_size": size_code, "tfconfig.cpu": cpu, "tfconfig.memory": memory}))


def _set_custom_compute(draft: Draft, path: str, value: str, custom_size_code: str) -> Derivation:
    if draft.tshirt_size != custom_size_code:
        logger.debug("Ignoring {}={!r}: size {!r} is not editable", path, value, draft.tshirt_size)
        return Derivation(draft)
    return Derivation(with_field(draft, path, value))


def _set_drive(draft: Draft, drive: str) -> Derivation:
    if drive and drive not in compute_catalog_for(draft.workspace_type).drive:
        logger.debug("Ignoring drive {!r}: not offered for {} workspaces", drive, draft.workspace_type)
        return Derivation(draft)
    return Derivation(with_field(draft, "tfconfig.drive", drive))


def _toggle_schedule(draft: Draft, enabled: bool) -> Derivation:
    changes: dict[str, object] = {"schedule": enabled}
    if enabled:
        if not draft.start_cron_expression:
            changes["start_cron_expression"] = DEFAULT_START_CRON
        if not draft.stop_cron_expression:
            changes["stop_cron_expression"] = DEFAULT_STOP_CRON
    return Derivation(with_fields(draft, changes))


def _set_schedule(draft: Draft, start: str, stop: str) -> Derivation:
    if not draft.schedule:
        logger.debug("Ignoring schedule {!r}/{!r}: scheduling is disabled", start, stop)
        return Derivation(draft)
    return Derivation(with_fields(draft, {"start_cron_expression": start, "stop_cron_expression": stop}))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def apply(
    draft: Draft,
    event: WizardEvent,
    catalog: CatalogCache,
    *,
    custom_size_code: str = DEFAULT_CUSTOM_SIZE_CODE,
) -> Derivation:
    """Apply *event* to *draft* and return the new draft plus pending effects."""
    match event:
        case RenameWorkspace(name=name):
            return _rename(draft, name)
        case SelectTemplate(template_id=template_id):
            return _select_template(draft, template_id, catalog)
        case SetBuildKind(build_kind=build_kind):
            if build_kind == draft.build_type:
                return Derivation(draft)
            return _refresh_images(with_field(draft, "build_type", build_kind))
        case SetOperatingSystem(os=os):
            if os == draft.tfconfig.os:
                return Derivation(draft)
            return _refresh_images(with_field(draft, "tfconfig.os", os))
        case SelectImage(ref=ref):
            return _select_image(draft, ref, catalog)
        case SetTshirtSize(size_code=size_code):
            return _set_tshirt_size(draft, size_code, catalog, custom_size_code)
        case SetCpu(cpu=cpu):
            return _set_custom_compute(draft, "tfconfig.cpu", cpu, custom_size_code)
        case SetMemory(memory=memory):
            return _set_custom_compute(draft, "tfconfig.memory", memory, custom_size_code)
        case SetDrive(drive=drive):
            return _set_drive(draft, drive)
        case ToggleSchedule(enabled=enabled):
            return _toggle_schedule(draft, enabled)
        case SetSchedule(start=start, stop=stop):
            return _set_schedule(draft, start, stop)
        case GoNext():
            return Derivation(with_field(draft, "step", steps.advance(draft)))
        case GoPrevious():
            return Derivation(with_field(draft, "step", steps.retreat(draft)))
        case JumpToStep(step=step):
            return Derivation(with_field(draft, "step", steps.jump(draft, step)))
        case _:
            assert_never(event)
