"""Tests for the read-only draft summary."""

from __future__ import annotations

from wsforge.wizard.models.draft import Draft
from wsforge.wizard.models.enums import Step
from wsforge.wizard.preview import heading, preview_rows


def test_heading_follows_step() -> None:
    assert heading(Draft()) == "Select starter template for your workspace."
    assert heading(Draft(step=Step.SCHEDULER)) == "Select schedules for your workspace"


def test_empty_draft_shows_defaults_only() -> None:
    rows = dict(preview_rows(Draft(), custom_size_code="TX"))
    assert rows == {
        "Workspace Type": "IDE",
        "Build Type": "Pre Build",
        "OS": "Linux",
        "Schedule": "Disabled",
    }


def test_filled_draft() -> None:
    draft = Draft.model_validate(
        {
            "id": "data-lab",
            "name": "Data Lab",
            "template_id": "tpl-cnv",
            "template_name": "Ubuntu VM",
            "workspace_type": "cnv",
            "build_type": "custom",
            "tshirt_size": "TX",
            "tfconfig": {"image": "vm/ubuntu", "image_name": "ubuntu-22", "cpu": "8", "memory": "16", "drive": "80"},
            "schedule": True,
            "start_cron_expression": "30 6 * * 1-5",
            "stop_cron_expression": "30 14 * * 1-5",
        }
    )
    rows = preview_rows(draft, custom_size_code="TX")

    assert rows == [
        ("Workspace Name", "Data Lab"),
        ("Workspace ID", "data-lab"),
        ("Template", "Ubuntu VM"),
        ("Workspace Type", "CNV"),
        ("Build Type", "Custom Build"),
        ("OS", "Linux"),
        ("Image", "ubuntu-22"),
        ("Tshirt Size", "TX (custom)"),
        ("CPU", "8"),
        ("Memory", "16 GB"),
        ("Storage", "80 GB"),
        ("Start Schedule", "30 6 * * 1-5"),
        ("Stop Schedule", "30 14 * * 1-5"),
    ]
