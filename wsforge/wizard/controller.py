"""Wizard controller -- owns one create-workspace session.

Glues the pieces together:

- **DraftStore**: the live draft and its validation.
- **CatalogCache**: fetched templates, sizes and images.
- **Derivation engine**: pure ``(draft, event) -> draft'`` transitions.
- **Collaborators**: catalog / provisioning services, notification and
  navigation sinks.

Everything runs on one event loop.  ``dispatch`` applies an event and its
derivation rules synchronously, re-validates, and only then starts effects,
so the next event always sees a consistent draft.

Image fetches are keyed by ``ImageQuery``.  A refresh for the key already in
flight is reused; a refresh for a different key cancels the older task, and a
result that lands after its key stopped matching the draft is discarded.
Submission is single-flight.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from loguru import logger

from wsforge.wizard import derivation, steps
from wsforge.wizard.catalog import CatalogCache
from wsforge.wizard.derivation import RefreshImages, UseComputes
from wsforge.wizard.models.draft import Draft, ValidationResult
from wsforge.wizard.models.enums import NotificationKind
from wsforge.wizard.payload import assemble_payload
from wsforge.wizard.services.base import ApiError
from wsforge.wizard.store import DraftStore

if TYPE_CHECKING:
    from wsforge.wizard.models.api import CreateWorkspaceResult
    from wsforge.wizard.models.catalog import ComputeCatalog, Image, ImageQuery, Template, TshirtSize
    from wsforge.wizard.models.events import WizardEvent
    from wsforge.wizard.services.base import (
        CatalogService,
        NavigationSink,
        NotificationSink,
        ProvisioningService,
    )


class WizardController:
    """State and behaviour of a single wizard session.

    Created when the wizard opens and dropped when it closes; nothing is
    persisted in between.
    """

    def __init__(
        self,
        *,
        catalog_service: CatalogService,
        provisioning: ProvisioningService,
        notifier: NotificationSink,
        navigator: NavigationSink,
        project_id: str,
        created_by: str,
        custom_size_code: str = derivation.DEFAULT_CUSTOM_SIZE_CODE,
    ) -> None:
        self._catalog_service = catalog_service
        self._provisioning = provisioning
        self._notifier = notifier
        self._navigator = navigator
        self._custom_size_code = custom_size_code

        self._store = DraftStore(Draft(project_id=project_id, created_by=created_by))
        self._catalog = CatalogCache()
        self._validation = self._store.validate()

        self._image_task: asyncio.Task[None] | None = None
        self._image_task_query: ImageQuery | None = None
        self._submitting = False

    # -- Read model ------------------------------------------------------------

    @property
    def draft(self) -> Draft:
        return self._store.draft

    @property
    def validation(self) -> ValidationResult:
        return self._validation

    @property
    def catalog(self) -> CatalogCache:
        return self._catalog

    @property
    def custom_size_code(self) -> str:
        return self._custom_size_code

    @property
    def templates(self) -> list[Template]:
        return self._catalog.templates(self.draft.project_id)

    @property
    def tshirt_sizes(self) -> list[TshirtSize]:
        return self._catalog.tshirt_sizes

    @property
    def images(self) -> list[Image]:
        """Images offered for the draft's current kind / build kind / OS."""
        return self._catalog.images(self.draft.image_query())

    @property
    def computes(self) -> ComputeCatalog:
        return self._catalog.computes

    @property
    def compute_editable(self) -> bool:
        """cpu / memory accept free input only for the custom size."""
        return self.draft.tshirt_size == self._custom_size_code

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def can_advance(self) -> bool:
        return steps.can_advance(self.draft)

    @property
    def can_retreat(self) -> bool:
        return steps.can_retreat(self.draft)

    @property
    def submit_visible(self) -> bool:
        return steps.submit_visible(self.draft)

    @property
    def can_submit(self) -> bool:
        return steps.can_submit(self.draft, self._validation, in_flight=self._submitting)

    # -- Catalog loading -------------------------------------------------------

    async def load_catalogs(self) -> None:
        """Fetch templates and tshirt sizes.  Failures keep the previous lists."""
        await asyncio.gather(self._load_templates(), self._load_tshirt_sizes())

    async def _load_templates(self) -> None:
        project_id = self.draft.project_id
        try:
            templates = await self._catalog_service.list_templates(project_id)
        except ApiError as exc:
            logger.warning("Loading templates for {} failed: {}", project_id, exc.message)
            self._notify(exc.message)
            return
        self._catalog.put_templates(project_id, templates)
        logger.debug("Loaded {} templates for {}", len(templates), project_id)

    async def _load_tshirt_sizes(self) -> None:
        try:
            sizes = await self._catalog_service.list_tshirt_sizes()
        except ApiError as exc:
            logger.warning("Loading tshirt sizes failed: {}", exc.message)
            self._notify(exc.message)
            return
        self._catalog.put_tshirt_sizes(sizes)

    # -- Events ----------------------------------------------------------------

    async def dispatch(self, event: WizardEvent) -> Draft:
        """Apply *event*, run its effects and wait for pending image fetches."""
        self.apply(event)
        await self.settle()
        return self.draft

    def apply(self, event: WizardEvent) -> Draft:
        """Apply *event* synchronously; image fetches are started, not awaited."""
        logger.debug("Wizard event: {}", event)
        result = derivation.apply(self.draft, event, self._catalog, custom_size_code=self._custom_size_code)
        self._store.replace(result.draft)
        # Validate before effects run so gating never lags behind a write.
        self._validation = self._store.validate()

        for effect in result.effects:
            match effect:
                case UseComputes(kind=kind):
                    self._catalog.use_computes(kind)
                case RefreshImages(query=query):
                    self._start_image_refresh(query)
        return self.draft

    async def settle(self) -> None:
        """Wait until the most recent image refresh has finished.

        Superseded (cancelled) refreshes are skipped.  Unexpected errors from
        a refresh are logged by ``_image_task_done`` and never reach the caller.
        """
        while self._image_task is not None and not self._image_task.done():
            await asyncio.wait({self._image_task})
        self._image_task = None

    # -- Image refresh ---------------------------------------------------------

    def _start_image_refresh(self, query: ImageQuery) -> None:
        task = self._image_task
        if task is not None and not task.done():
            if self._image_task_query == query:
                logger.debug("Image refresh for {} already in flight", query)
                return
            logger.debug("Cancelling image refresh for {}", self._image_task_query)
            task.cancel()
        self._image_task_query = query
        self._image_task = asyncio.create_task(self._refresh_images(query))
        self._image_task.add_done_callback(self._image_task_done)

    def _image_task_done(self, task: asyncio.Task[None]) -> None:
        # Runs for every refresh, including ones replaced before anyone awaited them
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error("Image refresh failed unexpectedly: {}", exc)

    def _is_current(self, query: ImageQuery) -> bool:
        return bool(self.draft.template_id) and self.draft.image_query() == query

    async def _refresh_images(self, query: ImageQuery) -> None:
        try:
            images = await self._catalog_service.list_images(query.project_id, query.workspace_kind, query.build_kind)
        except ApiError as exc:
            if not self._is_current(query):
                logger.debug("Ignoring failed image fetch for stale query {}", query)
                return
            logger.warning("Loading images for {} failed: {}", query, exc.message)
            self._catalog.clear_images(query)
            self._notify(exc.message)
            return

        if not self._is_current(query):
            logger.debug("Discarding stale image list for {}", query)
            return
        self._catalog.put_images(query, query.filter(images))

    # -- Submit ----------------------------------------------------------------

    async def submit(self) -> CreateWorkspaceResult | None:
        """Assemble and submit the payload.

        Returns the backend result on success.  On failure the error is
        reported through the notification sink, the draft is left untouched
        and ``None`` is returned.
        """
        if self._submitting:
            logger.warning("Submit ignored: workspace {} is already being created", self.draft.id)
            return None
        if not self.can_submit:
            logger.warning(
                "Submit ignored at step {} (valid={}, errors={})",
                self.draft.step,
                self._validation.valid,
                sorted(self._validation.errors),
            )
            return None

        payload = assemble_payload(self.draft, custom_size_code=self._custom_size_code)

        self._submitting = True
        try:
            result = await self._provisioning.create_workspace(payload)
        except ApiError as exc:
            logger.warning("Creating workspace {} failed: {}", self.draft.id, exc.message)
            self._notify(exc.message)
            return None
        finally:
            self._submitting = False

        logger.info("Workspace {} created in project {}", self.draft.id, self.draft.project_id)
        self._notify(result.message, NotificationKind.SUCCESS)
        self._navigator.go_to(f"/projects/{self.draft.project_id}/workspaces", {"workspace": result.workspace})
        return result

    # -- Helpers ---------------------------------------------------------------

    def _notify(self, message: str, kind: NotificationKind = NotificationKind.ERROR) -> None:
        self._notifier.notify(message, kind)

    def payload_preview(self) -> dict[str, Any]:
        """Request body that ``submit`` would send (raises if the draft is invalid)."""
        return assemble_payload(self.draft, custom_size_code=self._custom_size_code)
