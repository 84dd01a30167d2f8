"""End-to-end tests through the HTTP API."""

from fastapi.testclient import TestClient
from jose import jwt

from conftest import PDF_BYTES, PNG_BYTES
from shelf.main import create_app


# =============================================================================
# Service endpoints
# =============================================================================


def test_root_and_health(client: TestClient):
    assert client.get("/").json() == {"message": "Welcome to Shelf API"}

    health = client.get("/health").json()
    assert health["status"] == "OK"
    assert "timestamp" in health


# =============================================================================
# Auth
# =============================================================================


class TestAuth:
    def test_register_returns_token_and_public_user(self, client: TestClient):
        response = client.post(
            "/api/auth/register",
            json={"name": "Ann", "email": "ann@example.com", "password": "secret123"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "ann@example.com"
        assert "createdAt" in body["user"]
        assert "password" not in body["user"]

    def test_duplicate_registration_conflicts(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/auth/register",
            json={"name": "Again", "email": "reader@example.com", "password": "secret123"},
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "User with this email already exists"

    def test_short_password_rejected(self, client: TestClient):
        response = client.post(
            "/api/auth/register",
            json={"name": "Ann", "email": "ann@example.com", "password": "123"},
        )
        assert response.status_code == 422

    def test_login_and_verify(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/auth/login", json={"email": "reader@example.com", "password": "secret123"}
        )
        assert response.status_code == 200
        token = response.json()["token"]

        me = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "reader@example.com"

    def test_login_with_wrong_password(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/auth/login", json={"email": "reader@example.com", "password": "wrong-pass"}
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_protected_routes_require_token(self, client: TestClient):
        assert client.get("/api/books").status_code == 401
        assert client.get(
            "/api/tasks", headers={"Authorization": "Bearer not-a-token"}
        ).status_code == 401

    def test_logout(self, client: TestClient):
        assert client.post("/api/auth/logout").json() == {"message": "Logged out successfully"}


# =============================================================================
# Books
# =============================================================================


class TestBooks:
    def test_create_with_pdf_and_download(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/books",
            data={"title": "Dune", "author": "Herbert", "genre": "SciFi",
                  "status": "currently_reading", "totalPages": "412"},
            files={"pdf": ("dune.pdf", PDF_BYTES, "application/pdf")},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
        book = response.json()
        assert book["status"] == "currently_reading"
        assert book["totalPages"] == 412
        assert book["startDate"]
        assert book["pdfPath"] == f"{book['id']}.pdf"

        download = client.get(f"/api/books/{book['id']}/download", headers=auth_headers)
        assert download.status_code == 200
        assert download.content == PDF_BYTES

    def test_rejects_non_pdf_upload(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/books",
            data={"title": "Dune", "author": "Herbert", "genre": "SciFi"},
            files={"pdf": ("dune.txt", b"plain", "text/plain")},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Only PDF files are allowed"
        assert client.get("/api/books", headers=auth_headers).json() == []

    def test_update_status_and_stats(self, client: TestClient, auth_headers):
        created = client.post(
            "/api/books",
            data={"title": "Emma", "author": "Austen", "genre": "Classic"},
            headers=auth_headers,
        ).json()
        assert created["status"] == "want_to_read"

        updated = client.put(
            f"/api/books/{created['id']}",
            data={"status": "finished", "rating": "5"},
            headers=auth_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["finishDate"]
        assert updated.json()["title"] == "Emma"

        stats = client.get("/api/books/stats", headers=auth_headers).json()
        assert stats["total"] == 1
        assert stats["finished"] == 1
        assert stats["averageRating"] == 5
        assert stats["topGenres"] == [{"genre": "Classic", "count": 1}]

        by_status = client.get("/api/books/status/finished", headers=auth_headers).json()
        assert [b["id"] for b in by_status] == [created["id"]]

    def test_download_without_file(self, client: TestClient, auth_headers):
        book = client.post(
            "/api/books",
            data={"title": "Emma", "author": "Austen", "genre": "Classic"},
            headers=auth_headers,
        ).json()

        response = client.get(f"/api/books/{book['id']}/download", headers=auth_headers)
        assert response.status_code == 404

    def test_other_users_cannot_see_books(self, client: TestClient, auth_headers, other_headers):
        book = client.post(
            "/api/books",
            data={"title": "Emma", "author": "Austen", "genre": "Classic"},
            headers=auth_headers,
        ).json()

        assert client.get(f"/api/books/{book['id']}", headers=other_headers).status_code == 404
        assert client.delete(f"/api/books/{book['id']}", headers=other_headers).status_code == 404
        assert client.delete(f"/api/books/{book['id']}", headers=auth_headers).status_code == 204


# =============================================================================
# Journals and writing projects
# =============================================================================


class TestContent:
    def test_journal_content(self, client: TestClient, auth_headers):
        journal = client.post(
            "/api/journals", json={"title": "Diary"}, headers=auth_headers
        ).json()
        assert journal["privacy"] == "private"

        url = f"/api/journals/{journal['id']}/content"
        assert client.get(url, headers=auth_headers).json()["content"] == ""

        saved = client.post(
            url, json={"content": "Dear diary", "wordCount": 2, "theme": "dark"},
            headers=auth_headers,
        )
        assert saved.json() == {"success": True}

        body = client.get(url, headers=auth_headers).json()
        assert body["content"] == "Dear diary"
        assert body["wordCount"] == 2
        assert body["theme"] == "dark"

    def test_journal_content_is_private(self, client: TestClient, auth_headers, other_headers):
        journal = client.post(
            "/api/journals", json={"title": "Diary"}, headers=auth_headers
        ).json()

        url = f"/api/journals/{journal['id']}/content"
        assert client.get(url, headers=other_headers).status_code == 404
        assert client.post(
            url, json={"content": "hi", "wordCount": 1}, headers=other_headers
        ).status_code == 404

    def test_notebook_save_sets_word_count(self, client: TestClient, auth_headers):
        project = client.post(
            "/api/writing-projects", json={"title": "Novel", "type": "fiction"},
            headers=auth_headers,
        ).json()
        assert project["status"] == "planning"
        assert project["currentWordCount"] == 0

        client.post(
            f"/api/writing-projects/{project['id']}/content",
            json={"content": "Once upon a time", "wordCount": 120},
            headers=auth_headers,
        )

        stored = client.get(f"/api/writing-projects/{project['id']}", headers=auth_headers).json()
        assert stored["currentWordCount"] == 120

    def test_word_count_patch(self, client: TestClient, auth_headers):
        project = client.post(
            "/api/writing-projects", json={"title": "Essay", "type": "nonfiction"},
            headers=auth_headers,
        ).json()

        response = client.patch(
            f"/api/writing-projects/{project['id']}/word-count",
            json={"wordCount": 900}, headers=auth_headers,
        )
        assert response.json()["currentWordCount"] == 900


# =============================================================================
# Tasks, notes and quick notes
# =============================================================================


class TestTasksAndNotes:
    def test_task_flow(self, client: TestClient, auth_headers):
        task = client.post(
            "/api/tasks",
            json={"title": "Plan", "status": "todo", "dueDate": "2024-05-01"},
            headers=auth_headers,
        ).json()

        on_date = client.get("/api/tasks/date/2024-05-01", headers=auth_headers).json()
        assert [t["id"] for t in on_date] == [task["id"]]

        stats = client.get("/api/tasks/stats", headers=auth_headers).json()
        assert stats["tasksByDate"] == {"2024-05-01": 1}

        deleted = client.delete(f"/api/tasks/{task['id']}", headers=auth_headers)
        assert deleted.json() == {"message": "Task deleted successfully"}

    def test_note_search_requires_query(self, client: TestClient, auth_headers):
        client.post(
            "/api/notes", json={"title": "Groceries", "content": "Milk", "tags": ["home"]},
            headers=auth_headers,
        )

        assert client.get("/api/notes/search", headers=auth_headers).status_code == 400
        found = client.get("/api/notes/search", params={"q": "MILK"}, headers=auth_headers)
        assert [n["title"] for n in found.json()] == ["Groceries"]

    def test_quick_note_limits(self, client: TestClient, auth_headers):
        too_long = client.post(
            "/api/quick-notes",
            json={"content": " ".join(["word"] * 16), "color": "yellow"},
            headers=auth_headers,
        )
        assert too_long.status_code == 400
        assert too_long.json()["detail"] == "Quick note cannot exceed 15 words"

        for i in range(8):
            response = client.post(
                "/api/quick-notes", json={"content": f"note {i}", "color": "yellow"},
                headers=auth_headers,
            )
            assert response.status_code == 201

        ninth = client.post(
            "/api/quick-notes", json={"content": "one more", "color": "yellow"},
            headers=auth_headers,
        )
        assert ninth.status_code == 400
        assert ninth.json()["detail"] == "Maximum of 8 quick notes allowed"
        assert client.get("/api/quick-notes/count", headers=auth_headers).json() == {"count": 8}


# =============================================================================
# Reading goals
# =============================================================================


def test_reading_goal_activation(client: TestClient, auth_headers):
    first = client.post(
        "/api/reading-goals", json={"targetBooks": 10, "year": 2024}, headers=auth_headers
    ).json()
    second = client.post(
        "/api/reading-goals", json={"targetBooks": 20, "year": 2024}, headers=auth_headers
    ).json()

    current = client.get("/api/reading-goals/year/2024", headers=auth_headers).json()
    assert current["id"] == second["id"]

    goals = {g["id"]: g for g in client.get("/api/reading-goals", headers=auth_headers).json()}
    assert goals[first["id"]]["isActive"] is False
    assert goals[second["id"]]["isActive"] is True

    assert client.get("/api/reading-goals/year/1999", headers=auth_headers).json() is None


# =============================================================================
# Vision boards
# =============================================================================


class TestVisionBoards:
    def test_image_upload_serve_and_delete(self, client: TestClient, auth_headers):
        board = client.post(
            "/api/vision-boards", json={"year": 2024, "month": 1, "title": "January"},
            headers=auth_headers,
        ).json()
        assert board["images"] == []

        response = client.post(
            f"/api/vision-boards/{board['id']}/images",
            files={"image": ("beach.png", PNG_BYTES, "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
        image = response.json()
        assert image["zIndex"] == 0
        assert image["position"] == {"x": 100, "y": 100}
        assert image["size"] == {"width": 200, "height": 200}

        # Served without a token
        served = client.get(f"/api/vision-boards/images/{image['id']}")
        assert served.status_code == 200
        assert served.content == PNG_BYTES
        assert served.headers["cross-origin-resource-policy"] == "cross-origin"

        moved = client.put(
            f"/api/vision-boards/{board['id']}/images/{image['id']}",
            json={"position": {"x": 10, "y": 20}, "zIndex": 5},
            headers=auth_headers,
        ).json()
        assert moved["position"] == {"x": 10, "y": 20}
        assert moved["zIndex"] == 5

        deleted = client.delete(
            f"/api/vision-boards/{board['id']}/images/{image['id']}", headers=auth_headers
        )
        assert deleted.json() == {"message": "Image deleted successfully"}
        assert client.get(f"/api/vision-boards/images/{image['id']}").status_code == 404

    def test_rejects_non_image_upload(self, client: TestClient, auth_headers):
        board = client.post(
            "/api/vision-boards", json={"year": 2024, "month": 2}, headers=auth_headers
        ).json()

        response = client.post(
            f"/api/vision-boards/{board['id']}/images",
            files={"image": ("notes.pdf", PDF_BYTES, "application/pdf")},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_missing_board(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/vision-boards/missing/images",
            files={"image": ("beach.png", PNG_BYTES, "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 404
        assert client.get(
            "/api/vision-boards/year/2024/month/5", headers=auth_headers
        ).status_code == 404

    def test_invalid_month(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/vision-boards", json={"year": 2024, "month": 13}, headers=auth_headers
        )
        assert response.status_code == 422


# =============================================================================
# Per-app settings
# =============================================================================


class TestAppSettings:
    def test_settings_passed_to_app_are_used(self, test_settings):
        settings = test_settings.model_copy(
            update={"SECRET_KEY": "rotated-secret", "MAX_PDF_SIZE": 16, "MAX_IMAGE_SIZE": 16}
        )

        with TestClient(create_app(settings)) as client:
            token = client.post(
                "/api/auth/register",
                json={"name": "Ann", "email": "ann@example.com", "password": "secret123"},
            ).json()["token"]
            claims = jwt.decode(token, "rotated-secret", algorithms=[settings.ALGORITHM])
            assert claims["email"] == "ann@example.com"

            headers = {"Authorization": f"Bearer {token}"}
            assert client.get("/api/auth/verify", headers=headers).status_code == 200

            too_big = client.post(
                "/api/books",
                data={"title": "Dune", "author": "Herbert", "genre": "SciFi"},
                files={"pdf": ("dune.pdf", PDF_BYTES, "application/pdf")},
                headers=headers,
            )
            assert too_big.status_code == 413

            board = client.post(
                "/api/vision-boards", json={"year": 2024, "month": 1}, headers=headers
            ).json()
            image = client.post(
                f"/api/vision-boards/{board['id']}/images",
                files={"image": ("beach.png", PNG_BYTES, "image/png")},
                headers=headers,
            )
            assert image.status_code == 413

    def test_token_from_another_secret_rejected(self, client: TestClient, auth_headers, test_settings):
        foreign = jwt.encode(
            {"sub": "someone", "email": "x@example.com"}, "not-the-key",
            algorithm=test_settings.ALGORITHM,
        )
        response = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {foreign}"})
        assert response.status_code == 401
