"""Workspace draft models.

The draft is the single mutable configuration object assembled by the
wizard.  Field names follow the provisioning API's wire format (``tfconfig``,
``OS``, ``workspace_type``), so the payload assembler only has to remove and
convert fields, never rename them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from wsforge.wizard.models.catalog import ImageQuery
from wsforge.wizard.models.enums import BuildKind, OperatingSystem, Step, WorkspaceKind


class ComputeSpec(BaseModel):
    """Nested compute configuration (``tfconfig`` on the wire).

    Numeric values are kept as entered (strings) until submit; the payload
    assembler converts them.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    image: str = ""
    image_name: str = ""
    cpu: str = ""
    memory: str = ""
    drive: str = ""
    os: OperatingSystem = Field(default=OperatingSystem.LINUX, alias="OS")
    vm: str = "vscode"


class Draft(BaseModel):
    """Full wizard draft.  One live instance per wizard session."""

    model_config = ConfigDict(populate_by_name=True)

    # -- Identity --------------------------------------------------------------
    id: str = ""
    name: str = ""
    project_id: str = ""
    created_by: str = ""

    # -- Selection -------------------------------------------------------------
    template_id: str = ""
    template_name: str = ""
    workspace_type: WorkspaceKind = WorkspaceKind.IDE
    build_type: BuildKind = BuildKind.DEFAULT

    # -- Sizing ----------------------------------------------------------------
    tshirt_size: str = ""
    tfconfig: ComputeSpec = Field(default_factory=ComputeSpec)

    # -- Scheduling ------------------------------------------------------------
    schedule: bool = False
    start_cron_expression: str | None = None
    stop_cron_expression: str | None = None

    # -- Wizard only -----------------------------------------------------------
    step: Step = Step.TEMPLATE

    def image_query(self) -> ImageQuery:
        """Query tuple the image list must match for this draft."""
        return ImageQuery(
            project_id=self.project_id,
            workspace_kind=self.workspace_type,
            build_kind=self.build_type,
            os=self.tfconfig.os,
        )


class ValidationResult(BaseModel):
    """Outcome of validating a full draft.  Errors are keyed by dotted field path."""

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
