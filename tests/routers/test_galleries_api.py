"""Test gallery view endpoints and role scoping."""

import pytest

from brandgallery.documents import HierarchyRepository
from brandgallery.settings import settings


@pytest.fixture
def seeded(memory_store, sample_hierarchy):
    HierarchyRepository(memory_store, settings.photos_document_key).save(sample_hierarchy)
    return sample_hierarchy


def _file_names(body):
    return [
        item["name"]
        for brand in body["brands"]
        for person in brand["persons"]
        for date in person["dates"]
        for item in date["files"]
    ]


def test_gallery_requires_login(client, seeded):
    assert client.get("/api/v1/galleries/main").status_code == 401


def test_unknown_view_is_404(admin_client):
    assert admin_client.get("/api/v1/galleries/archive").status_code == 404


def test_admin_view_shows_everything(admin_client, seeded):
    body = admin_client.get("/api/v1/galleries/admin").json()

    assert body["is_admin"] is True
    assert _file_names(body) == ["1_plain.jpg", "2_sales.jpg", "3_other.jpg", "4_main.jpg", "5_other2.png"]


def test_boss_cannot_open_admin_view(boss_client, seeded):
    assert boss_client.get("/api/v1/galleries/admin").status_code == 403


@pytest.mark.parametrize(
    "view_name,expected",
    [
        ("main", ["1_plain.jpg", "4_main.jpg"]),
        ("other", ["3_other.jpg"]),
        ("other2", ["5_other2.png"]),
        ("sales", ["2_sales.jpg"]),
    ],
)
def test_category_views(boss_client, seeded, view_name, expected):
    body = boss_client.get(f"/api/v1/galleries/{view_name}").json()

    assert body["view"] == view_name
    assert body["is_admin"] is False
    assert _file_names(body) == expected


def test_boss_exclusions(boss_client, seeded, monkeypatch):
    monkeypatch.setattr(settings, "boss_excluded_brands", ["Acme"])

    body = boss_client.get("/api/v1/galleries/main").json()

    assert [brand["brand"] for brand in body["brands"]] == ["Globex"]


def test_admin_ignores_boss_exclusions(admin_client, seeded, monkeypatch):
    monkeypatch.setattr(settings, "boss_excluded_brands", ["Acme"])

    body = admin_client.get("/api/v1/galleries/main").json()

    assert [brand["brand"] for brand in body["brands"]] == ["Acme", "Globex"]
