"""Payload assembler -- shapes a validated draft into the create-workspace request.

Rules applied at submit time:

1. ``is_custom`` = the tshirt size is the custom sentinel.
2. ``tfconfig.drive`` is sent as an integer.
3. Custom size: ``cpu`` / ``memory`` are sent as integers.  Any other size:
   both are omitted and the backend derives them from ``tshirt_size``.
4. Wizard-only fields are dropped: ``build_type``, ``step``,
   ``template_name``, ``workspace_type`` and ``tfconfig.image_name``.  The
   backend derives the workspace kind from ``template_id``.
5. Scheduling disabled: both cron expressions are omitted.  The ``schedule``
   toggle itself is never sent.
"""

from __future__ import annotations

from typing import Any

from wsforge.wizard.models.draft import Draft
from wsforge.wizard.store import validate_draft

_WIZARD_ONLY_FIELDS = ("build_type", "step", "template_name", "workspace_type")
_CRON_FIELDS = ("start_cron_expression", "stop_cron_expression")


class PayloadAssemblyError(ValueError):
    """The draft cannot be turned into a request.

    Submit gating only lets valid drafts through, so reaching this means the
    caller skipped validation.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or {}


def _to_int(path: str, value: str) -> int:
    """Integer value of a validated numeric field (``"3.0"`` -> ``3``)."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        msg = f"{path} is not numeric: {value!r}"
        raise PayloadAssemblyError(msg, {path: msg}) from None


def assemble_payload(draft: Draft, *, custom_size_code: str) -> dict[str, Any]:
    """Build the create-workspace request body from *draft*.

    Raises ``PayloadAssemblyError`` if the draft does not validate.
    """
    validation = validate_draft(draft)
    if not validation.valid:
        fields = ", ".join(sorted(validation.errors))
        raise PayloadAssemblyError(f"Draft is not valid ({fields})", validation.errors)

    body = draft.model_dump(mode="json", by_alias=True)
    tfconfig = body["tfconfig"]

    tfconfig["drive"] = _to_int("tfconfig.drive", draft.tfconfig.drive)
    if draft.tshirt_size == custom_size_code:
        tfconfig["cpu"] = _to_int("tfconfig.cpu", draft.tfconfig.cpu)
        tfconfig["memory"] = _to_int("tfconfig.memory", draft.tfconfig.memory)
    else:
        del tfconfig["cpu"]
        del tfconfig["memory"]
    del tfconfig["image_name"]

    for key in _WIZARD_ONLY_FIELDS:
        del body[key]

    if not draft.schedule:
        for key in _CRON_FIELDS:
            del body[key]
    del body["schedule"]

    return body
