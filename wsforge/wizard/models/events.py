"""Wizard events.

Every logical mutation of the draft is a distinct event type, handled by an
explicit case in ``wsforge.wizard.derivation.apply``.  Events carry raw user
input; derived fields are never set directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from wsforge.wizard.models.enums import BuildKind, OperatingSystem, Step

# -- Template step -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RenameWorkspace:
    name: str


@dataclass(frozen=True, slots=True)
class SelectTemplate:
    template_id: str


# -- Image step ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SetBuildKind:
    build_kind: BuildKind


@dataclass(frozen=True, slots=True)
class SetOperatingSystem:
    """Override the template-derived OS (re-filters ``cnv`` images)."""

    os: OperatingSystem


@dataclass(frozen=True, slots=True)
class SelectImage:
    ref: str


# -- Compute step --------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SetTshirtSize:
    size_code: str


@dataclass(frozen=True, slots=True)
class SetCpu:
    """Free cpu entry.  Only honoured while the custom size is selected."""

    cpu: str


@dataclass(frozen=True, slots=True)
class SetMemory:
    """Free memory entry.  Only honoured while the custom size is selected."""

    memory: str


@dataclass(frozen=True, slots=True)
class SetDrive:
    drive: str


# -- Scheduler step ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ToggleSchedule:
    enabled: bool


@dataclass(frozen=True, slots=True)
class SetSchedule:
    """Start/stop cron pair chosen in the schedule picker."""

    start: str
    stop: str


# -- Navigation ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GoNext:
    pass


@dataclass(frozen=True, slots=True)
class GoPrevious:
    pass


@dataclass(frozen=True, slots=True)
class JumpToStep:
    """Externally forced step change (progress indicator click)."""

    step: Step


WizardEvent = (
    RenameWorkspace
    | SelectTemplate
    | SetBuildKind
    | SetOperatingSystem
    | SelectImage
    | SetTshirtSize
    | SetCpu
    | SetMemory
    | SetDrive
    | ToggleSchedule
    | SetSchedule
    | GoNext
    | GoPrevious
    | JumpToStep
)
