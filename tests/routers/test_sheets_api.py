"""Test spreadsheet link endpoints."""


def test_boss_can_list_but_not_add(boss_client):
    assert boss_client.get("/api/v1/sheets").json() == {"is_admin": False, "sheets": []}

    response = boss_client.post(
        "/api/v1/sheets", json={"brand": "Acme", "person": "J", "date": "2024", "sheetId": "abc"}
    )
    assert response.status_code == 403


def test_add_list_and_remove(admin_client):
    added = admin_client.post(
        "/api/v1/sheets",
        json={"brand": "Acme", "person": "J Smith", "date": "2024-01-01", "sheetId": "abc", "displayName": "Q1"},
    )
    assert added.status_code == 200
    assert added.json()["embedUrl"] == "https://docs.google.com/spreadsheets/d/abc/edit"

    sheets = admin_client.get("/api/v1/sheets").json()["sheets"]
    assert sheets == [added.json()]
    assert sheets[0]["person"] == "J Smith"

    admin_client.post("/api/v1/sheets/remove", json={"brand": "Acme", "person": "J Smith", "date": "2024-01-01"})
    assert admin_client.get("/api/v1/sheets").json()["sheets"] == []


def test_add_without_sheet_id_is_400(admin_client, memory_store):
    response = admin_client.post("/api/v1/sheets", json={"brand": "Acme", "person": "J", "date": "2024"})

    assert response.status_code == 400
    assert response.json()["field"] == "sheet_id"
    assert memory_store.objects == {}


def test_add_with_slash_in_person(admin_client):
    response = admin_client.post(
        "/api/v1/sheets",
        json={"brand": "Acme", "person": "J/K Smith", "date": "2024-01-01", "sheetId": "abc"},
    )

    assert response.status_code == 200
    assert response.json()["person"] == "J/K Smith"
    assert response.json()["date"] == "2024-01-01"
    assert len(admin_client.get("/api/v1/sheets").json()["sheets"]) == 1
