"""Catalog cache.

Holds the externally fetched lists (templates, tshirt sizes, images) keyed by
the query parameters that produced them, plus the compute-size catalog that
matches the draft's current workspace kind.  Entries are immutable; the
wizard only filters and looks them up.

The cache does no I/O.  The controller fetches and stores; the derivation
engine reads.
"""

from __future__ import annotations

from wsforge.wizard.models.catalog import (
    IDE_COMPUTES,
    ComputeCatalog,
    Image,
    ImageQuery,
    Template,
    TshirtSize,
    compute_catalog_for,
)
from wsforge.wizard.models.enums import WorkspaceKind


class CatalogCache:
    """In-memory catalog state for one wizard session."""

    def __init__(self) -> None:
        self._templates: dict[str, list[Template]] = {}
        self._tshirt_sizes: list[TshirtSize] = []
        self._images: dict[ImageQuery, list[Image]] = {}
        self._computes: ComputeCatalog = IDE_COMPUTES

    # -- Templates -------------------------------------------------------------

    def put_templates(self, project_id: str, templates: list[Template]) -> None:
        self._templates[project_id] = list(templates)

    def templates(self, project_id: str) -> list[Template]:
        return list(self._templates.get(project_id, []))

    def find_template(self, project_id: str, template_id: str) -> Template | None:
        for template in self._templates.get(project_id, []):
            if template.id == template_id:
                return template
        return None

    # -- Tshirt sizes ----------------------------------------------------------

    def put_tshirt_sizes(self, sizes: list[TshirtSize]) -> None:
        self._tshirt_sizes = list(sizes)

    @property
    def tshirt_sizes(self) -> list[TshirtSize]:
        return list(self._tshirt_sizes)

    def find_tshirt_size(self, size_code: str) -> TshirtSize | None:
        for size in self._tshirt_sizes:
            if size.size_code == size_code:
                return size
        return None

    # -- Images ----------------------------------------------------------------

    def put_images(self, query: ImageQuery, images: list[Image]) -> None:
        """Store the (already OS-filtered) image list for *query*."""
        self._images[query] = list(images)

    def clear_images(self, query: ImageQuery) -> None:
        self._images[query] = []

    def images(self, query: ImageQuery) -> list[Image]:
        return list(self._images.get(query, []))

    def find_image(self, query: ImageQuery, ref: str) -> Image | None:
        for image in self._images.get(query, []):
            if image.ref == ref:
                return image
        return None

    # -- Compute sizing --------------------------------------------------------

    @property
    def computes(self) -> ComputeCatalog:
        """Compute catalog currently offered (cpu/memory/drive choices)."""
        return self._computes

    def use_computes(self, kind: WorkspaceKind) -> ComputeCatalog:
        self._computes = compute_catalog_for(kind)
        return self._computes
