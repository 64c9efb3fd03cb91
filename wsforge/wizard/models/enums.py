"""Shared enumerations used across the wizard."""

from __future__ import annotations

from enum import StrEnum

# -- Flow ----------------------------------------------------------------------


class Step(StrEnum):
    """Wizard steps, in flow order."""

    TEMPLATE = "template"
    IMAGE = "image"
    COMPUTE = "compute"
    SCHEDULER = "scheduler"


# -- Workspace -----------------------------------------------------------------


class WorkspaceKind(StrEnum):
    IDE = "ide"
    CNV = "cnv"


class BuildKind(StrEnum):
    """Pre-built images (``default``) or user builds (``custom``)."""

    DEFAULT = "default"
    CUSTOM = "custom"


class OperatingSystem(StrEnum):
    LINUX = "linux"
    WINDOWS = "windows"


# -- Notifications -------------------------------------------------------------


class NotificationKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
