"""Read-only summary of a draft, shown beside the wizard steps."""

from __future__ import annotations

from wsforge.wizard.models.draft import Draft
from wsforge.wizard.steps import STEP_HEADINGS


def heading(draft: Draft) -> str:
    return STEP_HEADINGS[draft.step]


def preview_rows(draft: Draft, *, custom_size_code: str) -> list[tuple[str, str]]:
    """Label / value pairs for every field filled in so far.

    cpu and memory are shown for every size; for predefined sizes they are
    the size's values, for the custom size whatever was typed.
    """
    compute = draft.tfconfig
    rows: list[tuple[str, str]] = [
        ("Workspace Name", draft.name),
        ("Workspace ID", draft.id),
        ("Template", draft.template_name or draft.template_id),
        ("Workspace Type", draft.workspace_type.upper()),
        ("Build Type", "Custom Build" if draft.build_type == "custom" else "Pre Build"),
        ("OS", compute.os.capitalize()),
        ("Image", compute.image_name or compute.image),
    ]

    size = draft.tshirt_size
    if size == custom_size_code:
        size = f"{size} (custom)"
    rows += [
        ("Tshirt Size", size),
        ("CPU", compute.cpu),
        ("Memory", f"{compute.memory} GB" if compute.memory else ""),
        ("Storage", f"{compute.drive} GB" if compute.drive else ""),
    ]

    if draft.schedule:
        rows += [
            ("Start Schedule", draft.start_cron_expression or ""),
            ("Stop Schedule", draft.stop_cron_expression or ""),
        ]
    else:
        rows.append(("Schedule", "Disabled"))

    return [(label, value) for label, value in rows if value]
