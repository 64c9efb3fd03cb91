from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any

import click

from wsforge.wizard.models.enums import NotificationKind

if TYPE_CHECKING:
    from wsforge.wizard.controller import WizardController
    from wsforge.wizard.services.http import HttpWorkspaceApi
    from wsforge.wizard.settings import WizardSettings


@click.group()
def main() -> None:
    """wsforge - create compute workspaces from starter templates."""


# ---------------------------------------------------------------------------
# Console sinks
# ---------------------------------------------------------------------------

_NOTIFY_COLOURS = {
    NotificationKind.SUCCESS: "green",
    NotificationKind.ERROR: "red",
    NotificationKind.INFO: "cyan",
}


class ConsoleNotifier:
    """Prints wizard notifications to the terminal."""

    def notify(self, message: str, kind: NotificationKind = NotificationKind.ERROR) -> None:
        click.secho(message, fg=_NOTIFY_COLOURS.get(kind), err=kind == NotificationKind.ERROR)


class ConsoleNavigator:
    """Records where the wizard hands off after a successful submit."""

    def __init__(self) -> None:
        self.destination: tuple[str, dict[str, Any]] | None = None

    def go_to(self, path: str, context: dict[str, Any]) -> None:
        self.destination = (path, context)
        click.echo(f"Workspace is listed under {path}")


def _build_api(settings: WizardSettings) -> HttpWorkspaceApi:
    from wsforge.wizard.services.http import HttpWorkspaceApi

    return HttpWorkspaceApi.from_settings(settings)


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


@main.command()
@click.option("--project", default=None, help="Owning project (default: from WSFORGE_PROJECT_ID).")
@click.option("--user", default=None, help="Creator e-mail (default: from WSFORGE_USER_EMAIL).")
@click.option("--api-url", default=None, help="Portal API base URL (default: from WSFORGE_API_URL).")
@click.option("--dry-run", is_flag=True, default=False, help="Print the request body instead of submitting.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every wizard event to the console.")
def create(project: str | None, user: str | None, api_url: str | None, dry_run: bool, verbose: bool) -> None:
    """Walk through the create-workspace wizard."""
    from wsforge.wizard.log import setup_logging
    from wsforge.wizard.settings import get_settings

    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level, log_file=settings.log_file)
    if api_url:
        settings = settings.model_copy(update={"api_url": api_url})

    project_id = project or settings.project_id
    created_by = user or settings.user_email
    if not project_id:
        raise click.UsageError("A project is required (--project or WSFORGE_PROJECT_ID).")
    if not created_by:
        raise click.UsageError("A creator is required (--user or WSFORGE_USER_EMAIL).")

    ok = asyncio.run(_run_create(settings, project_id=project_id, created_by=created_by, dry_run=dry_run))
    if not ok:
        raise SystemExit(1)


async def _run_create(settings: WizardSettings, *, project_id: str, created_by: str, dry_run: bool) -> bool:
    from wsforge.wizard.controller import WizardController

    api = _build_api(settings)
    try:
        controller = WizardController(
            catalog_service=api,
            provisioning=api,
            notifier=ConsoleNotifier(),
            navigator=ConsoleNavigator(),
            project_id=project_id,
            created_by=created_by,
            custom_size_code=settings.custom_size_code,
        )
        await controller.load_catalogs()
        if not controller.templates:
            click.secho("No templates available for this project.", fg="red", err=True)
            return False

        await _template_step(controller)
        await _image_step(controller)
        await _compute_step(controller)
        if controller.draft.schedule:
            await _scheduler_step(controller)

        _print_preview(controller)
        if not controller.validation.valid:
            click.secho("The workspace configuration is incomplete.", fg="red", err=True)
            return False
        if dry_run:
            click.echo(json.dumps(controller.payload_preview(), indent=2))
            return True
        if not click.confirm("Create this workspace?", default=True):
            return False
        return await controller.submit() is not None
    finally:
        await api.aclose()


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def _heading(controller: WizardController) -> None:
    from wsforge.wizard.preview import heading

    click.secho(heading(controller.draft), bold=True)


def _show_errors(controller: WizardController, *paths: str) -> None:
    for path in paths:
        message = controller.validation.errors.get(path)
        if message:
            click.secho(f"  {message}", fg="yellow")


async def _template_step(controller: WizardController) -> None:
    from wsforge.wizard.models.events import GoNext, RenameWorkspace, SelectTemplate

    _heading(controller)
    while True:
        await controller.dispatch(RenameWorkspace(click.prompt("Workspace name", default=controller.draft.name or None)))
        if "name" not in controller.validation.errors:
            break
        _show_errors(controller, "name")

    for template in controller.templates:
        click.echo(f"  {template.id}: {template.display_name} ({template.type})")
    choice = click.prompt("Starter template", type=click.Choice([t.id for t in controller.templates]))
    await controller.dispatch(SelectTemplate(choice))
    click.echo(f"Workspace type: {controller.draft.workspace_type.upper()}")
    await controller.dispatch(GoNext())


async def _image_step(controller: WizardController) -> None:
    from wsforge.wizard.models.enums import BuildKind, OperatingSystem, WorkspaceKind
    from wsforge.wizard.models.events import GoNext, SelectImage, SetBuildKind, SetOperatingSystem

    _heading(controller)
    while True:
        build = click.prompt(
            "Build type",
            type=click.Choice([str(k) for k in BuildKind]),
            default=str(controller.draft.build_type),
        )
        await controller.dispatch(SetBuildKind(BuildKind(build)))
        if controller.draft.workspace_type == WorkspaceKind.CNV:
            os_name = click.prompt(
                "Operating system",
                type=click.Choice([str(o) for o in OperatingSystem]),
                default=str(controller.draft.tfconfig.os),
            )
            await controller.dispatch(SetOperatingSystem(OperatingSystem(os_name)))
        if controller.images:
            break
        click.secho("No images match this selection; pick another build type.", fg="yellow")

    for image in controller.images:
        click.echo(f"  {image.ref}: {image.name}")
    ref = click.prompt("Build image", type=click.Choice([i.ref for i in controller.images]))
    await controller.dispatch(SelectImage(ref))
    await controller.dispatch(GoNext())


async def _compute_step(controller: WizardController) -> None:
    from wsforge.wizard.models.events import GoNext, SetCpu, SetDrive, SetMemory, SetTshirtSize, ToggleSchedule

    _heading(controller)
    for size in controller.tshirt_sizes:
        click.echo(f"  {size.size_code}: {size.cpu} CPU, {size.memory} GB")
    codes = [s.size_code for s in controller.tshirt_sizes]
    if controller.custom_size_code not in codes:
        codes.append(controller.custom_size_code)
    code = click.prompt(f"Tshirt size ({controller.custom_size_code} = custom)", type=click.Choice(codes))
    await controller.dispatch(SetTshirtSize(code))

    while controller.compute_editable:
        await controller.dispatch(SetCpu(click.prompt("CPU", type=str)))
        await controller.dispatch(SetMemory(click.prompt("Memory (GB)", type=str)))
        if not {"tfconfig.cpu", "tfconfig.memory"} & controller.validation.errors.keys():
            break
        _show_errors(controller, "tfconfig.cpu", "tfconfig.memory")

    drive = click.prompt("Storage (GB)", type=click.Choice(list(controller.computes.drive)))
    await controller.dispatch(SetDrive(drive))

    enabled = click.confirm("Enable start/stop schedule?", default=False)
    await controller.dispatch(ToggleSchedule(enabled))
    if controller.can_advance:
        await controller.dispatch(GoNext())


async def _scheduler_step(controller: WizardController) -> None:
    from wsforge.wizard.models.events import SetSchedule

    _heading(controller)
    draft = controller.draft
    start = click.prompt("Start schedule (cron)", default=draft.start_cron_expression)
    stop = click.prompt("Stop schedule (cron)", default=draft.stop_cron_expression)
    await controller.dispatch(SetSchedule(start, stop))


def _print_preview(controller: WizardController) -> None:
    from wsforge.wizard.preview import preview_rows

    click.echo()
    for label, value in preview_rows(controller.draft, custom_size_code=controller.custom_size_code):
        click.echo(f"{label:<16} {value}")
    for path, message in controller.validation.errors.items():
        click.secho(f"{path}: {message}", fg="yellow")


if __name__ == "__main__":
    main()
