"""Draft store -- holds the live draft and validates it.

Writes address fields by dotted path (``"tfconfig.cpu"``).  Every write
produces a new ``Draft``; the previous object is never mutated, so the
derivation engine can compare before/after snapshots.

Validation covers the whole draft regardless of the current step and reports
field-scoped messages.  It never raises for bad user input.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from wsforge.wizard.models.draft import Draft, ValidationResult

NAME_MAX_LENGTH = 26

# A letter, optionally followed by alphanumeric runs joined by single spaces
# or dashes.  Equivalent to ``^[a-zA-Z](([a-zA-Z0-9]+[ -]?)*[a-zA-Z0-9])?$``
# without the nested quantifier that backtracks exponentially on bad input.
# Use with ``fullmatch``: ``$`` would also accept a trailing newline.
NAME_PATTERN = re.compile(r"[A-Za-z](?:[A-Za-z0-9]+(?:[ -][A-Za-z0-9]+)*)?")

DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

_PATH_ALIASES = {"tfconfig.OS": "tfconfig.os"}


class UnknownFieldError(KeyError):
    """Raised when a dotted path does not name a draft field."""


# ---------------------------------------------------------------------------
# Field writes
# ---------------------------------------------------------------------------


def with_fields(draft: Draft, changes: Mapping[str, Any]) -> Draft:
    """Return a copy of *draft* with every ``path -> value`` in *changes* applied.

    Values are re-validated through the model, so ``3`` written to
    ``tfconfig.cpu`` is stored as ``"3"``.  Raises ``UnknownFieldError`` for
    a path that does not exist.
    """
    if not changes:
        return draft
    data = draft.model_dump()
    for raw_path, value in changes.items():
        path = _PATH_ALIASES.get(raw_path, raw_path)
        *parents, leaf = path.split(".")
        target = data
        for part in parents:
            child = target.get(part)
            if not isinstance(child, dict):
                raise UnknownFieldError(raw_path)
            target = child
        if leaf not in target:
            raise UnknownFieldError(raw_path)
        target[leaf] = value
    return Draft.model_validate(data)


def with_field(draft: Draft, path: str, value: Any) -> Draft:
    return with_fields(draft, {path: value})


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _as_number(value: str) -> float | None:
    """Parse a numeric form value; ``None`` when it is not a finite number.

    Only plain ASCII decimal text is a number here: ``float`` alone would also
    take ``"1_0"``, ``"nan"`` or non-ASCII digits.
    """
    if not DECIMAL_PATTERN.fullmatch(value.strip()):
        return None
    number = float(value)
    if math.isinf(number):
        return None
    return number


def _check_required(errors: dict[str, str], path: str, value: str | None, message: str) -> None:
    if not value or not value.strip():
        errors[path] = message


def _check_number(
    errors: dict[str, str],
    path: str,
    value: str,
    *,
    label: str,
    required_message: str,
    minimum: float | None = None,
) -> None:
    if not value.strip():
        errors[path] = required_message
        return
    number = _as_number(value)
    if number is None:
        errors[path] = f"{label} must be a number"
    elif minimum is not None and number < minimum:
        errors[path] = f"{label} must be at least {minimum:g}"


def validate_draft(draft: Draft) -> ValidationResult:
    """Validate every field of *draft*, independent of the current step."""
    errors: dict[str, str] = {}

    # -- Name ------------------------------------------------------------------
    if not draft.name:
        errors["name"] = "Name is required"
    elif len(draft.name) > NAME_MAX_LENGTH:
        errors["name"] = f"Name exceeding max length of {NAME_MAX_LENGTH} characters."
    elif not NAME_PATTERN.fullmatch(draft.name):
        errors["name"] = "Name cannot contain special characters other than space and dash."

    # -- Required references ---------------------------------------------------
    _check_required(errors, "template_id", draft.template_id, "Template ID is required")
    _check_required(errors, "project_id", draft.project_id, "Project Name is required")
    _check_required(errors, "created_by", draft.created_by, "Created By is required")
    _check_required(errors, "tshirt_size", draft.tshirt_size, "Tshirt Size is required")

    # -- Compute ---------------------------------------------------------------
    compute = draft.tfconfig
    _check_required(errors, "tfconfig.image", compute.image, "Image name is required")
    _check_number(
        errors, "tfconfig.cpu", compute.cpu, label="CPU", required_message="CPU count is required", minimum=1
    )
    _check_number(
        errors,
        "tfconfig.memory",
        compute.memory,
        label="Memory",
        required_message="Memory size is required",
        minimum=1,
    )
    _check_number(
        errors, "tfconfig.drive", compute.drive, label="Storage size", required_message="Storage size is required"
    )

    return ValidationResult(valid=not errors, errors=errors)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class DraftStore:
    """Owner of the single live draft of a wizard session."""

    def __init__(self, draft: Draft | None = None) -> None:
        self._draft = draft or Draft()

    @property
    def draft(self) -> Draft:
        return self._draft

    def set_field(self, path: str, value: Any) -> Draft:
        """Set a (possibly nested) field by dotted path and return the updated draft.

        This is a raw write: no derivation rules run.  Wizard code paths go
        through events instead; see ``wsforge.wizard.derivation``.
        """
        self._draft = with_field(self._draft, path, value)
        return self._draft

    def replace(self, draft: Draft) -> Draft:
        self._draft = draft
        return self._draft

    def validate(self) -> ValidationResult:
        return validate_draft(self._draft)
