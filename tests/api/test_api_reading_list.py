# tests/api/test_api_reading_list.py

def test_reading_list_requires_identity(client):
    assert client.get("/api/reading-list").status_code == 401

def test_add_update_and_remove(client, test_book, auth_headers):
    response = client.post("/api/reading-list", json={"book_id": test_book.id}, headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["status"] == "want_to_read"

    # Adding again overwrites the status instead of duplicating
    response = client.post(
        "/api/reading-list", json={"book_id": test_book.id, "status": "reading"}, headers=auth_headers
    )
    assert response.status_code == 201
    assert response.json()["status"] == "reading"

    response = client.put(
        f"/api/reading-list/{test_book.id}", json={"status": "read", "user_rating": 5}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "read"
    assert response.json()["user_rating"] == 5

    entries = client.get("/api/reading-list", headers=auth_headers).json()
    assert len(entries) == 1
    assert entries[0]["book"]["title"] == "Review Test Book"

    response = client.delete(f"/api/reading-list/{test_book.id}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get("/api/reading-list", headers=auth_headers).json() == []

def test_status_filter(client, make_book, auth_headers):
    first = make_book(title="First")
    second = make_book(title="Second")
    client.post("/api/reading-list", json={"book_id": first.id, "status": "read"}, headers=auth_headers)
    client.post("/api/reading-list", json={"book_id": second.id}, headers=auth_headers)

    entries = client.get("/api/reading-list", params={"status": "read"}, headers=auth_headers).json()
    assert [entry["book_id"] for entry in entries] == [first.id]

def test_invalid_status_rejected(client, test_book, auth_headers):
    response = client.post(
        "/api/reading-list", json={"book_id": test_book.id, "status": "abandoned"}, headers=auth_headers
    )
    assert response.status_code == 400

    response = client.get("/api/reading-list", params={"status": "abandoned"}, headers=auth_headers)
    assert response.status_code == 400

def test_add_unknown_book(client, auth_headers):
    response = client.post("/api/reading-list", json={"book_id": 99999}, headers=auth_headers)
    assert response.status_code == 404

def test_update_entry_not_on_list(client, test_book, auth_headers):
    response = client.put(f"/api/reading-list/{test_book.id}", json={"status": "read"}, headers=auth_headers)
    assert response.status_code == 404

def test_update_entry_rejects_null_status(client, test_book, auth_headers):
    client.post("/api/reading-list", json={"book_id": test_book.id, "status": "reading"}, headers=auth_headers)

    response = client.put(f"/api/reading-list/{test_book.id}", json={"status": None}, headers=auth_headers)
    assert response.status_code == 400
    assert "status" in response.json()["errors"]

    (entry,) = client.get("/api/reading-list", headers=auth_headers).json()
    assert entry["status"] == "reading"

def test_update_entry_accepts_null_rating(client, test_book, auth_headers):
    client.post("/api/reading-list", json={"book_id": test_book.id}, headers=auth_headers)
    client.put(f"/api/reading-list/{test_book.id}", json={"user_rating": 4}, headers=auth_headers)

    response = client.put(f"/api/reading-list/{test_book.id}", json={"user_rating": None}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["user_rating"] is None
    assert response.json()["status"] == "want_to_read"

def test_remove_missing_entry_is_ok(client, test_book, auth_headers):
    response = client.delete(f"/api/reading-list/{test_book.id}", headers=auth_headers)
    assert response.status_code == 200
