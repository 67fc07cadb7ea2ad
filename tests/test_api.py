import asyncio

import pytest
import uvicorn
from fastapi.testclient import TestClient

import app.app as api
from app.app import app
from content.loader import get_site


@pytest.fixture
def client():
    """FastAPI test client (runs the lifespan so content is loaded)."""
    with TestClient(app) as c:
        yield c


class TestHealthAndContent:
    """Test GET /health and GET /content."""

    def test_health(self, client):
        """Test that /health reports the number of use cases."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "use_cases": 3}

    def test_content_structure(self, client):
        """Test that /content returns every top-level block."""
        response = client.get("/content")
        assert response.status_code == 200
        data = response.json()
        for key in ("project", "contact", "sections", "use_cases", "opportunities",
                    "collaboration", "faq", "nav", "artifacts"):
            assert key in data, f"{key} missing from content"
        assert data["project"]["name"] == "Institutions in Your Pocket"
        assert data["contact"]["location"] == "Stockholm, Sweden"

    def test_content_includes_slugs(self, client):
        """Test that serialised use cases carry their slug."""
        data = client.get("/content").json()
        assert all("slug" in uc for uc in data["use_cases"])

    def test_lifespan_uses_process_cache(self, client):
        """Test that the API serves the same cached Site as get_site()."""
        assert api._site is get_site()


class TestUseCasesEndpoint:
    """Test GET /use-cases."""

    def test_no_query_returns_all_in_order(self, client):
        """Test that a missing q returns all use cases in original order."""
        data = client.get("/use-cases").json()
        assert data["query"] == ""
        assert data["total"] == data["count"] == 3
        assert [uc["title"] for uc in data["use_cases"]] == [
            "Citizen-facing land law guidance",
            "Support for legal aid organizations",
            "Institutional evaluation",
        ]

    def test_whitespace_query_returns_all(self, client):
        """Test that a whitespace-only query is the identity case."""
        data = client.get("/use-cases", params={"q": "   "}).json()
        assert data["count"] == 3

    def test_filtered(self, client):
        """Test that a query narrows the result."""
        data = client.get("/use-cases", params={"q": "Paralegal"}).json()
        assert data["count"] == 1
        assert data["total"] == 3
        assert data["use_cases"][0]["title"] == "Support for legal aid organizations"

    def test_case_insensitive(self, client):
        """Test that matching ignores case."""
        upper = client.get("/use-cases", params={"q": "KENYA"}).json()
        lower = client.get("/use-cases", params={"q": "kenya"}).json()
        assert upper["use_cases"] == lower["use_cases"]
        assert upper["count"] == 2

    def test_no_match_is_not_an_error(self, client):
        """Test that no hits is a 200 with an empty list."""
        response = client.get("/use-cases", params={"q": "zzz-no-match"})
        assert response.status_code == 200
        assert response.json()["count"] == 0
        assert response.json()["use_cases"] == []

    def test_special_characters(self, client):
        """Test that punctuation in the query is accepted."""
        for q in ["Rural & peri-urban", "(RCTs)", "100%", "a/b"]:
            response = client.get("/use-cases", params={"q": q})
            assert response.status_code == 200

    def test_use_case_fields(self, client):
        """Test the fields of a returned use case."""
        uc = client.get("/use-cases").json()["use_cases"][0]
        assert set(uc) >= {"title", "subtitle", "tags", "points", "icon", "slug"}
        assert uc["tags"] == ["Citizens", "Rural & peri-urban", "Land"]


class TestUseCaseLookup:
    """Test GET /use-cases/{slug}."""

    def test_known_slug(self, client):
        """Test lookup of an existing use case by slug."""
        response = client.get("/use-cases/institutional-evaluation")
        assert response.status_code == 200
        assert response.json()["subtitle"] == "Field experiment in Kenya"

    def test_unknown_slug(self, client):
        """Test that an unknown slug returns 404 naming the slug."""
        response = client.get("/use-cases/does-not-exist")
        assert response.status_code == 404
        assert "does-not-exist" in response.json()["detail"]


class TestLaunchServer:
    """Test serving inside an already-running event loop."""

    def test_task_reference_kept(self, monkeypatch):
        """Test that the server task is stored so it is not garbage-collected."""
        served = []

        async def fake_serve(self, sockets=None):
            served.append(True)

        monkeypatch.setattr(uvicorn.Server, "serve", fake_serve)
        monkeypatch.setattr(api, "_server_task", None)

        async def main():
            api._launch_server()
            task = api._server_task
            assert isinstance(task, asyncio.Task)
            await task

        asyncio.run(main())
        assert served == [True]
