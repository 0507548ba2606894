"""Test photo upload, rename and delete endpoints."""

from brandgallery.errors import StorageFailure
from brandgallery.settings import settings


def _upload(test_client, *names, **form):
    files = [("files", (name, b"\xff\xd8data", "image/jpeg")) for name in names]
    return test_client.post("/api/v1/photos/upload", data=form, files=files)


def test_upload_requires_login(client):
    assert _upload(client, "a.jpg", brand="Acme").status_code == 401


def test_upload_forbidden_for_boss(boss_client):
    assert _upload(boss_client, "a.jpg", brand="Acme").status_code == 403


def test_upload_records_files(admin_client, memory_store):
    response = _upload(admin_client, "a.jpg", "b.jpg", brand="Acme", person="J Smith", date="2024-01-01", category="sales")

    assert response.status_code == 200
    body = response.json()
    assert body["uploaded"] == 2
    first = body["files"][0]
    assert first["storageKey"].startswith("photos/Acme/J-Smith/2024-01-01/")
    assert first["category"] == "sales"
    assert first["storageKey"] in memory_store.objects

    sales = admin_client.get("/api/v1/galleries/sales").json()
    assert sales["brands"][0]["persons"][0]["person"] == "J-Smith"


def test_upload_uses_defaults(admin_client):
    first = _upload(admin_client, "a.jpg").json()["files"][0]
    assert first["storageKey"].startswith("photos/DefaultBrand/DefaultPerson/NoDate/")


def test_upload_rejects_oversized_file(admin_client, monkeypatch, memory_store):
    monkeypatch.setattr(settings, "max_upload_bytes", 2)

    response = _upload(admin_client, "a.jpg", brand="Acme")

    assert response.status_code == 413
    assert memory_store.objects == {}


def test_storage_failure_maps_to_503(admin_client, memory_store, monkeypatch):
    def fail(*args, **kwargs):
        raise StorageFailure("down")

    monkeypatch.setattr(memory_store, "get_bytes", fail)

    response = admin_client.get("/api/v1/galleries/main")

    assert response.status_code == 503
    assert response.json() == {"detail": "Storage unavailable"}


def test_rename_and_delete(admin_client, memory_store):
    name = _upload(admin_client, "a.jpg", brand="Acme", person="J", date="2024").json()["files"][0]["name"]
    target = {"brand": "Acme", "person": "J", "date": "2024"}

    renamed = admin_client.post(
        "/api/v1/photos/rename", json={**target, "oldfilename": name, "newfilename": "cover"}
    )
    assert renamed.json()["status"] == "renamed"
    assert renamed.json()["file"]["name"] == "cover.jpg"

    deleted = admin_client.post("/api/v1/photos/delete", json={**target, "filename": "cover.jpg"})
    assert deleted.json()["status"] == "deleted"
    assert not any(key.startswith("photos/") for key in memory_store.objects)


def test_rename_missing_record_is_unchanged(admin_client):
    response = admin_client.post(
        "/api/v1/photos/rename",
        json={"brand": "A", "person": "B", "date": "C", "oldfilename": "x.jpg", "newfilename": "y"},
    )
    assert response.json() == {"status": "unchanged"}


def test_delete_missing_field_is_400(admin_client):
    response = admin_client.post("/api/v1/photos/delete", json={"brand": "A", "person": "B", "date": "C"})

    assert response.status_code == 400
    assert response.json()["field"] == "name"
