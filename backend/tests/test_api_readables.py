"""Tests for readables API endpoints."""

from fastapi.testclient import TestClient


class TestListReadables:
    """Test listing readables."""

    def test_list_all(self, client: TestClient, test_readables):
        response = client.get("/api/v1/readables")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 5
        assert data[0]["title"] == "A Quiet Bakery"

    def test_list_to_read_queue(self, client: TestClient, test_readables):
        response = client.get("/api/v1/readables?status=to-read")

        assert response.status_code == 200
        assert [item["priority"] for item in response.json()] == [5, 4, 3, 2]

    def test_list_finished(self, client: TestClient, test_readables):
        response = client.get("/api/v1/readables?status=finished")

        assert [item["title"] for item in response.json()] == ["Piranesi"]

    def test_invalid_status(self, client: TestClient):
        response = client.get("/api/v1/readables?status=someday")
        assert response.status_code == 422


class TestGetReadable:
    def test_get_fanfic(self, client: TestClient, test_readables):
        fic = test_readables[2]
        response = client.get(f"/api/v1/readables/{fic.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "fanfic"
        assert data["source"] == "ao3"
        assert data["available_chapters"] == 12
        assert data["total_chapters"] == 20

    def test_get_not_found(self, client: TestClient):
        response = client.get("/api/v1/readables/does-not-exist")
        assert response.status_code == 404


class TestCreateReadable:
    """Test adding readables."""

    def test_create_book(self, client: TestClient):
        response = client.post(
            "/api/v1/readables",
            json={
                "type": "book",
                "title": "Babel",
                "author": "R. F. Kuang",
                "priority": 4,
                "mood_tags": ["dark", "dense"],
                "page_count": 560,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["source"] == "manual"
        assert data["mood_tags"] == ["dark", "dense"]
        assert data["created_at"] == data["updated_at"]

    def test_create_reading_fanfic_stamps_started_at(self, client: TestClient):
        response = client.post(
            "/api/v1/readables",
            json={
                "type": "fanfic",
                "title": "Ongoing",
                "status": "reading",
                "available_chapters": 6,
                "complete": False,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["started_at"] is not None
        assert data["chapter_count"] == 6

    def test_create_rejects_bad_priority(self, client: TestClient):
        response = client.post("/api/v1/readables", json={"type": "book", "title": "X", "priority": 8})
        assert response.status_code == 422

    def test_create_rejects_unknown_type(self, client: TestClient):
        response = client.post("/api/v1/readables", json={"type": "podcast", "title": "X"})
        assert response.status_code == 422


class TestUpdateReadable:
    """Test updating readables."""

    def test_put_replaces(self, client: TestClient, test_readables):
        book = test_readables[0]
        body = book.model_dump(mode="json")
        body["title"] = "Cerulean"
        body["id"] = "ignored"

        response = client.put(f"/api/v1/readables/{book.id}", json=body)

        assert response.status_code == 200
        assert response.json()["id"] == book.id
        assert response.json()["title"] == "Cerulean"

    def test_put_not_found(self, client: TestClient):
        response = client.put("/api/v1/readables/nope", json={"type": "book", "title": "Ghost"})
        assert response.status_code == 404

    def test_patch_status_finished(self, client: TestClient, test_readables):
        book = test_readables[0]
        response = client.patch(f"/api/v1/readables/{book.id}/status", json={"status": "finished"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "finished"
        assert data["progress_percent"] == 100
        assert data["finished_at"] is not None

    def test_patch_status_not_found(self, client: TestClient):
        response = client.patch("/api/v1/readables/nope/status", json={"status": "reading"})
        assert response.status_code == 404

    def test_patch_progress(self, client: TestClient, test_readables):
        book = test_readables[0]
        response = client.patch(
            f"/api/v1/readables/{book.id}/progress", json={"progress_percent": 120}
        )

        assert response.status_code == 200
        assert response.json()["progress_percent"] == 100

    def test_patch_notes(self, client: TestClient, test_readables):
        book = test_readables[0]
        response = client.patch(f"/api/v1/readables/{book.id}/notes", json={"notes": "Lovely"})

        assert response.status_code == 200
        assert response.json()["notes"] == "Lovely"

    def test_delete(self, client: TestClient, test_readables):
        book = test_readables[0]

        assert client.delete(f"/api/v1/readables/{book.id}").status_code == 204
        assert client.get(f"/api/v1/readables/{book.id}").status_code == 404
        assert client.delete(f"/api/v1/readables/{book.id}").status_code == 404


class TestReadableProgress:
    """Test progress tracker endpoints."""

    def test_get_progress_snapshot(self, client: TestClient, test_readables):
        fic = test_readables[2]
        response = client.get(f"/api/v1/readables/{fic.id}/progress")

        assert response.status_code == 200
        data = response.json()
        assert data["percent"]["percent"] == 0
        assert data["trackers"][0]["kind"] == "chapters"
        assert data["trackers"][0]["total"] == 20

    def test_record_pages(self, client: TestClient, test_readables):
        book = test_readables[0]
        response = client.post(
            f"/api/v1/readables/{book.id}/progress", json={"kind": "pages", "current_page": 100}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["current_page"] == 100
        assert data["progress_percent"] == 25
        assert data["progress_mode"] == "units"

    def test_record_time(self, client: TestClient, test_readables):
        book = test_readables[1]
        response = client.post(
            f"/api/v1/readables/{book.id}/progress",
            json={"kind": "time", "current_seconds": 900, "total_seconds": 3600},
        )

        assert response.status_code == 200
        assert response.json()["progress_mode"] == "time"
        assert response.json()["progress_percent"] == 25

    def test_record_unknown_kind(self, client: TestClient, test_readables):
        book = test_readables[0]
        response = client.post(f"/api/v1/readables/{book.id}/progress", json={"kind": "vibes"})
        assert response.status_code == 422


class TestSearch:
    """Test library search and vocabulary."""

    def test_search_with_filters(self, client: TestClient, test_readables):
        response = client.post(
            "/api/v1/readables/search",
            json={"type": "fanfic", "sort_field": "title", "sort_direction": "asc"},
        )

        assert response.status_code == 200
        assert [item["title"] for item in response.json()] == ["A Quiet Bakery", "Slow Tides"]

    def test_search_terms(self, client: TestClient, test_readables):
        response = client.post("/api/v1/readables/search", json={"search_terms": ["found family"]})

        assert [item["title"] for item in response.json()] == ["The House in the Cerulean Sea"]

    def test_vocabulary(self, client: TestClient, test_readables):
        response = client.get("/api/v1/readables/vocabulary")

        assert response.status_code == 200
        ids = {token["id"] for token in response.json()}
        assert "fandom::good omens" in ids
        assert "mood::cozy" in ids
        assert "author::tj klune" in ids
