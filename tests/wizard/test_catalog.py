"""Tests for catalog models and the in-memory catalog cache."""

from __future__ import annotations

import pytest

from wsforge.wizard.catalog import CatalogCache
from wsforge.wizard.models.catalog import (
    CNV_COMPUTES,
    IDE_COMPUTES,
    Image,
    ImageQuery,
    Template,
    TshirtSize,
    compute_catalog_for,
    image_from_record,
)
from wsforge.wizard.models.enums import BuildKind, OperatingSystem, WorkspaceKind


def _query(kind: WorkspaceKind = WorkspaceKind.CNV, os: OperatingSystem = OperatingSystem.LINUX) -> ImageQuery:
    return ImageQuery(project_id="proj-1", workspace_kind=kind, build_kind=BuildKind.DEFAULT, os=os)


# ---------------------------------------------------------------------------
# Image records
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("record", "ref"),
    [
        ({"name": "a", "image_url": "registry/a", "ImageURL": "registry/other"}, "registry/a"),
        ({"name": "a", "image_url": "", "ImageURL": "registry/A"}, "registry/A"),
        ({"name": "a"}, "a"),
        ({"name": "a", "image_url": None}, "a"),
    ],
)
def test_image_ref_fallback(record: dict, ref: str) -> None:
    image = image_from_record(record)
    assert image.ref == ref
    assert image.name == "a"


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def test_ide_query_does_not_filter() -> None:
    images = [Image(ref="a", name="a", type="ide"), Image(ref="b", name="b", type="")]
    assert _query(WorkspaceKind.IDE).os_filter is None
    assert _query(WorkspaceKind.IDE).filter(images) == images


def test_cnv_query_filters_by_os_case_insensitively() -> None:
    images = [
        Image(ref="a", name="a", type="linux_cnv"),
        Image(ref="b", name="b", type="LINUX_CNV_GPU"),
        Image(ref="c", name="c", type="windows_cnv"),
        Image(ref="d", name="d", type=""),
    ]
    assert [i.ref for i in _query().filter(images)] == ["a", "b"]
    assert [i.ref for i in _query(os=OperatingSystem.WINDOWS).filter(images)] == ["c"]


def test_query_identity() -> None:
    linux, windows = _query(), _query(os=OperatingSystem.WINDOWS)
    assert linux == _query()
    assert linux != windows
    assert linux.fetch_key == windows.fetch_key
    assert len({linux, windows, _query()}) == 2


def test_compute_catalogs() -> None:
    assert compute_catalog_for(WorkspaceKind.IDE) is IDE_COMPUTES
    assert compute_catalog_for(WorkspaceKind.CNV) is CNV_COMPUTES
    assert IDE_COMPUTES.drive == ("10", "20", "30", "40")
    assert CNV_COMPUTES.cpu == ("2", "4", "8", "16")


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


def test_templates_are_scoped_by_project() -> None:
    cache = CatalogCache()
    cache.put_templates("proj-1", [Template(id="t1", name="One")])

    assert [t.id for t in cache.templates("proj-1")] == ["t1"]
    assert cache.templates("proj-2") == []
    assert cache.find_template("proj-1", "t1").name == "One"
    assert cache.find_template("proj-2", "t1") is None


def test_tshirt_size_lookup() -> None:
    cache = CatalogCache()
    cache.put_tshirt_sizes([TshirtSize(size_code="S", cpu=2, memory=4)])
    assert cache.find_tshirt_size("S").cpu == 2
    assert cache.find_tshirt_size("XL") is None


def test_images_are_keyed_by_full_query() -> None:
    cache = CatalogCache()
    image = Image(ref="vm/ubuntu", name="ubuntu", type="linux_cnv")
    cache.put_images(_query(), [image])

    assert cache.images(_query()) == [image]
    assert cache.images(_query(os=OperatingSystem.WINDOWS)) == []
    assert cache.find_image(_query(), "vm/ubuntu") == image
    assert cache.find_image(_query(), "ubuntu") is None

    cache.clear_images(_query())
    assert cache.images(_query()) == []


def test_returned_lists_are_copies() -> None:
    cache = CatalogCache()
    cache.put_templates("proj-1", [Template(id="t1")])
    cache.templates("proj-1").clear()
    assert len(cache.templates("proj-1")) == 1


def test_use_computes() -> None:
    cache = CatalogCache()
    assert cache.computes is IDE_COMPUTES
    assert cache.use_computes(WorkspaceKind.CNV) is CNV_COMPUTES
    assert cache.computes is CNV_COMPUTES
