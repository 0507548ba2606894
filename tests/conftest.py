"""Test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from brandgallery.documents import HierarchyRepository, PurchaseRepository, SheetLinkRepository
from brandgallery.hierarchy import AssetRecord, PhotoHierarchy, insert_asset
from brandgallery.services import IncomingFile, PhotoService, PurchaseService, SheetService
from brandgallery.storage import MemoryObjectStore

STORAGE_ROOT = "https://cdn.example.test/"


@pytest.fixture
def memory_store():
    """Empty in-memory object store."""
    return MemoryObjectStore(storage_root=STORAGE_ROOT)


@pytest.fixture
def hierarchy_repo(memory_store):
    return HierarchyRepository(memory_store, "metadata/photos.json")


@pytest.fixture
def sheet_repo(memory_store):
    return SheetLinkRepository(memory_store, "metadata/sheets.json")


@pytest.fixture
def purchase_repo(memory_store):
    return PurchaseRepository(memory_store, "metadata/purchases.json")


@pytest.fixture
def photo_service(memory_store, hierarchy_repo):
    return PhotoService(memory_store, hierarchy_repo)


@pytest.fixture
def sheet_service(sheet_repo):
    return SheetService(sheet_repo)


@pytest.fixture
def purchase_service(memory_store, purchase_repo):
    return PurchaseService(memory_store, purchase_repo)


def make_record(name, category=None, key_prefix="photos/Acme/J-Smith/2024-01-01"):
    storage_key = f"{key_prefix}/{name}"
    return AssetRecord(
        name=name,
        url=f"{STORAGE_ROOT}{storage_key}",
        storage_key=storage_key,
        category=category,
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def sample_hierarchy():
    """Two brands with a mix of categories.

    Acme / J-Smith / 2024-01-01: one untagged, one sales
    Acme / J-Smith / 2024-02-01: one other
    Globex / K-Lee / 2024-03-01: one main, one other2
    """
    doc = PhotoHierarchy()
    doc = insert_asset(doc, "Acme", "J Smith", "2024-01-01", make_record("1_plain.jpg"))
    doc = insert_asset(doc, "Acme", "J Smith", "2024-01-01", make_record("2_sales.jpg", "sales"))
    doc = insert_asset(doc, "Acme", "J Smith", "2024-02-01", make_record("3_other.jpg", "other"))
    doc = insert_asset(doc, "Globex", "K Lee", "2024-03-01", make_record("4_main.jpg", "main"))
    doc = insert_asset(doc, "Globex", "K Lee", "2024-03-01", make_record("5_other2.png", "other2"))
    return doc


@pytest.fixture
def image_file():
    return IncomingFile(filename="beach.jpg", data=b"\xff\xd8fake-jpeg", content_type="image/jpeg")


@pytest.fixture
def client(memory_store):
    """API client backed by the in-memory store, rate limiting off."""
    from brandgallery.api import app
    from brandgallery.dependencies import get_object_store
    from brandgallery.ratelimit import limiter

    app.dependency_overrides[get_object_store] = lambda: memory_store
    limiter.enabled = False
    with TestClient(app) as test_client:
        yield test_client
    limiter.enabled = True
    app.dependency_overrides.clear()


def login(test_client, role):
    from brandgallery.settings import settings

    if role == "admin":
        credentials = {"username": settings.admin_username, "password": settings.admin_password}
    else:
        credentials = {"username": settings.boss_username, "password": settings.boss_password}
    response = test_client.post("/api/v1/auth/login", json=credentials)
    assert response.status_code == 200, response.text
    return response


@pytest.fixture
def admin_client(client):
    login(client, "admin")
    return client


@pytest.fixture
def boss_client(client):
    login(client, "boss")
    return client
