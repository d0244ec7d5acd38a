"""Tests for note endpoints."""

from fastapi.testclient import TestClient


def test_create_and_list_notes(client: TestClient):
    """Test creating a note and listing it back."""
    response = client.post(
        "/notes", json={"title": "Idea", "content": "text", "tags": ["a"]}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["created"] is True
    assert data["note"]["tags"] == ["a"]

    notes = client.get("/notes").json()["notes"]
    assert notes == [{"id": data["id"], **data["note"]}]


def test_create_note_defaults(client: TestClient):
    note = client.post("/notes", json={}).json()["note"]
    assert note["title"] == "Untitled"
    assert note["tags"] == []
    assert note["content"] is None


def test_update_note(client: TestClient):
    note_id = client.post("/notes", json={"title": "Draft"}).json()["id"]

    response = client.put(f"/notes/{note_id}", json={"content": {"body": 1}})
    assert response.status_code == 200
    note = response.json()["note"]
    assert note["content"] == {"body": 1}
    assert note["title"] == "Draft"


def test_update_missing_note(client: TestClient):
    response = client.put("/notes/note:1", json={"title": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Note not found"}


def test_delete_note(client: TestClient):
    note_id = client.post("/notes", json={"title": "Temp"}).json()["id"]

    assert client.delete(f"/notes/{note_id}").json() == {"deleted": True, "id": note_id}
    assert client.get("/notes").json()["notes"] == []
