"""Data models for the create-workspace wizard."""

from wsforge.wizard.models.api import CreateWorkspaceResult
from wsforge.wizard.models.catalog import (
    CNV_COMPUTES,
    IDE_COMPUTES,
    ComputeCatalog,
    Image,
    ImageQuery,
    Template,
    TshirtSize,
    compute_catalog_for,
    image_from_record,
)
from wsforge.wizard.models.draft import ComputeSpec, Draft, ValidationResult
from wsforge.wizard.models.enums import (
    BuildKind,
    NotificationKind,
    OperatingSystem,
    Step,
    WorkspaceKind,
)
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

__all__ = [
    # Enums
    "BuildKind",
    # Catalog
    "CNV_COMPUTES",
    "ComputeCatalog",
    # Draft
    "ComputeSpec",
    # API
    "CreateWorkspaceResult",
    "Draft",
    # Events
    "GoNext",
    "GoPrevious",
    "IDE_COMPUTES",
    "Image",
    "ImageQuery",
    "JumpToStep",
    "NotificationKind",
    "OperatingSystem",
    "RenameWorkspace",
    "SelectImage",
    "SelectTemplate",
    "SetBuildKind",
    "SetCpu",
    "SetDrive",
    "SetMemory",
    "SetOperatingSystem",
    "SetSchedule",
    "SetTshirtSize",
    "Step",
    "Template",
    "ToggleSchedule",
    "TshirtSize",
    "ValidationResult",
    "WizardEvent",
    "WorkspaceKind",
    "compute_catalog_for",
    "image_from_record",
]
