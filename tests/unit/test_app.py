"""Unit tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from backend.app import build_toc, create_app
from catalog import Section
from retrieval import QueryService


@pytest.fixture
def client(content_dir):
    service = QueryService.from_directory(content_dir)
    return TestClient(create_app(service))


class TestEndpoints:
    """Tests for the catalog endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_categories(self, client):
        response = client.get("/api/categories")
        assert response.status_code == 200
        assert response.json() == {"categories": ["git", "python"]}

    def test_articles_in_category(self, client):
        response = client.get("/api/categories/git/articles")
        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "git"
        assert [a["slug"] for a in data["articles"]] == ["merge", "rebase"]
        assert data["articles"][1]["title"] == "Git Rebase"

    def test_unknown_category_is_empty_list(self, client):
        response = client.get("/api/categories/nonexistent-category/articles")
        assert response.status_code == 200
        assert response.json()["articles"] == []

    def test_get_article(self, client):
        response = client.get("/api/articles/git/rebase")
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Git Rebase"
        assert data["description"] == "Rebase replays commits on top of another branch."
        assert data["content"].startswith("# Git Rebase")
        assert data["sections"] == [
            {"text": "Git Rebase", "level": 1},
            {"text": "Overview", "level": 2},
            {"text": "Usage", "level": 2},
        ]
        assert [item["id"] for item in data["toc"]] == ["git-rebase", "overview", "usage"]

    def test_get_article_not_found(self, client):
        response = client.get("/api/articles/git/missing")
        assert response.status_code == 404
        assert "git/missing" in response.json()["detail"]

    def test_stats(self, client):
        response = client.get("/api/stats")
        assert response.status_code == 200
        data = response.json()
        assert data["total_articles"] == 3
        assert data["by_category"] == {"git": 2, "python": 1}


class TestBuildToc:
    """Tests for table of contents anchors."""

    def test_punctuation_removed_and_lowercased(self):
        toc = build_toc([Section("Rebase vs. Merge!", 2)])
        assert toc == [{"level": 2, "title": "Rebase vs. Merge!", "id": "rebase-vs-merge"}]

    def test_duplicate_anchors_get_suffix(self):
        toc = build_toc([Section("Example", 2), Section("Example", 2), Section("Example", 3)])
        assert [item["id"] for item in toc] == ["example", "example-1", "example-2"]

    def test_empty_and_punctuation_headings_get_placeholder_anchor(self):
        toc = build_toc([Section("", 2), Section("!!!", 2), Section("Usage", 2)])
        assert [item["id"] for item in toc] == ["section", "section-1", "usage"]
