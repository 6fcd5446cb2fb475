"""
Tests for the External PR Viewer API endpoints.

These tests use FastAPI's TestClient against a store whose fetcher is
mocked, so no network access or running server is required.
"""

from unittest.mock import Mock, patch
import pytest
from fastapi.testclient import TestClient

from backend.app import create_app
from fetchers.errors import UpstreamStatusError
from models.config_models import RepositoryConfig
from viewer.state import PullRequestStore


@pytest.fixture
def prs(pr_record):
    return [
        pr_record(1, "outsider"),
        pr_record(2, "kitten"),
        pr_record(3, "newcomer"),
    ]


@pytest.fixture
def mock_fetcher(prs):
    """Fetcher mock returning `prs` as a single page."""
    def fetch_open_prs(owner, repo, per_page=100, max_pages=5, on_page=None):
        if on_page is not None:
            on_page(list(prs), 1)
        return list(prs)

    fetcher = Mock()
    fetcher.fetch_open_prs.side_effect = fetch_open_prs
    return fetcher


@pytest.fixture
def store(mock_fetcher):
    return PullRequestStore(
        mock_fetcher,
        RepositoryConfig(owner="expo", name="expo"),
        excluded_authors=["kitten", "Kudo"],
    )


@pytest.fixture
def client(store):
    """Create FastAPI test client without the startup fetch."""
    app = create_app(store=store, autoload=False)
    with TestClient(app) as test_client:
        yield test_client


class TestListPRs:
    """Tests for GET /api/prs endpoint."""

    def test_before_any_fetch(self, client):
        response = client.get("/api/prs")

        assert response.status_code == 200
        data = response.json()
        assert data["prs"] == []
        assert data["status"] == "idle"
        assert data["repository"] == "expo/expo"
        assert data["shown"] == 0
        assert data["total"] == 0

    def test_after_fetch(self, client, store):
        store.load()

        response = client.get("/api/prs")

        assert response.status_code == 200
        data = response.json()
        assert [pr["number"] for pr in data["prs"]] == [1, 3]
        assert data["shown"] == 2
        assert data["total"] == 3
        assert data["status"] == "idle"
        assert data["pages_fetched"] == 1
        assert data["prs"][0]["user"]["login"] == "outsider"
        assert data["prs"][0]["html_url"] == "https://github.com/expo/expo/pull/1"

    def test_error_state(self, client, store, mock_fetcher):
        mock_fetcher.fetch_open_prs.side_effect = UpstreamStatusError(403, "Forbidden")
        store.load()

        response = client.get("/api/prs")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "error"
        assert data["error"] == "GitHub API error: 403 Forbidden"


class TestStatus:
    """Tests for GET /api/status endpoint."""

    def test_status_has_counts_not_records(self, client, store):
        store.load()

        response = client.get("/api/status")

        assert response.status_code == 200
        data = response.json()
        assert "prs" not in data
        assert data["shown"] == 2
        assert data["total"] == 3
        assert data["generation"] == 1


class TestRefresh:
    """Tests for POST /api/refresh endpoint."""

    def test_refresh_runs_fetch(self, client, mock_fetcher):
        response = client.post("/api/refresh")

        assert response.status_code == 202
        assert response.json() == {"generation": 1, "status": "loading"}

        # TestClient runs background tasks before returning
        mock_fetcher.fetch_open_prs.assert_called_once()
        data = client.get("/api/prs").json()
        assert data["status"] == "idle"
        assert data["shown"] == 2

    def test_refresh_bumps_generation(self, client):
        client.post("/api/refresh")
        response = client.post("/api/refresh")

        assert response.json()["generation"] == 2


class TestExcludedAuthors:
    """Tests for the excluded-author endpoints."""

    def test_list(self, client):
        response = client.get("/api/excluded-authors")

        assert response.status_code == 200
        assert response.json() == {"excluded_authors": ["kitten", "Kudo"]}

    def test_add(self, client, store):
        store.load()

        response = client.post("/api/excluded-authors", json={"login": "  outsider "})

        assert response.status_code == 201
        assert response.json() == {"added": True, "excluded_authors": ["kitten", "Kudo", "outsider"]}
        assert [pr["number"] for pr in client.get("/api/prs").json()["prs"]] == [3]

    @pytest.mark.parametrize("login", ["kitten", "", "   "])
    def test_add_noop(self, client, login):
        response = client.post("/api/excluded-authors", json={"login": login})

        assert response.status_code == 200
        assert response.json() == {"added": False, "excluded_authors": ["kitten", "Kudo"]}

    def test_add_requires_login(self, client):
        response = client.post("/api/excluded-authors", json={})
        assert response.status_code == 422

    def test_remove(self, client, store, mock_fetcher):
        store.load()

        response = client.delete("/api/excluded-authors/kitten")

        assert response.status_code == 200
        assert response.json() == {"removed": True, "excluded_authors": ["Kudo"]}
        assert client.get("/api/prs").json()["shown"] == 3
        # Filtering again must not refetch
        mock_fetcher.fetch_open_prs.assert_called_once()

    def test_remove_absent(self, client):
        response = client.delete("/api/excluded-authors/nobody")

        assert response.status_code == 200
        assert response.json() == {"removed": False, "excluded_authors": ["kitten", "Kudo"]}

    def test_remove_bot_login(self, client):
        client.post("/api/excluded-authors", json={"login": "dependabot[bot]"})

        response = client.delete("/api/excluded-authors/dependabot[bot]")

        assert response.json()["removed"] is True


class TestStartup:
    """Tests for app startup behaviour."""

    def test_autoload_starts_fetch(self, store):
        app = create_app(store=store, autoload=True)

        with patch("backend.app.start_background_load") as mock_start:
            with TestClient(app):
                pass

        mock_start.assert_called_once_with(store)

    def test_no_autoload(self, store):
        app = create_app(store=store, autoload=False)

        with patch("backend.app.start_background_load") as mock_start:
            with TestClient(app):
                pass

        mock_start.assert_not_called()

    def test_start_background_load_runs_thread(self, store, mock_fetcher):
        from backend.app import start_background_load

        with patch("backend.app.threading.Thread") as mock_thread:
            generation = start_background_load(store)

        assert generation == 1
        assert store.snapshot().status == "loading"
        mock_thread.assert_called_once()
        assert mock_thread.call_args[1]["target"] == store.load
        assert mock_thread.call_args[1]["args"] == (1,)
        mock_thread.return_value.start.assert_called_once()

    def test_builds_store_from_config(self, empty_env):
        app = create_app(autoload=False)
        assert app.state.store.repository.full_name == "expo/expo"

    def test_builds_store_and_cors_from_config(self, empty_env, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173")
        app = create_app(autoload=False)

        with TestClient(app) as client:
            response = client.get("/api/status", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


class TestCORS:
    """CORS headers are only sent for configured origins."""

    def test_no_cors_headers_by_default(self, client):
        response = client.get("/api/status", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    def test_allowed_origin_gets_header(self, store):
        app = create_app(store=store, autoload=False, cors_origins=["https://prs.example.com"])

        with TestClient(app) as client:
            allowed = client.get("/api/status", headers={"Origin": "https://prs.example.com"})
            other = client.get("/api/status", headers={"Origin": "http://localhost:5173"})

        assert allowed.headers["access-control-allow-origin"] == "https://prs.example.com"
        assert "access-control-allow-origin" not in other.headers

    def test_preflight_for_delete(self, store):
        app = create_app(store=store, autoload=False, cors_origins=["https://prs.example.com"])

        with TestClient(app) as client:
            response = client.options(
                "/api/excluded-authors/kitten",
                headers={
                    "Origin": "https://prs.example.com",
                    "Access-Control-Request-Method": "DELETE",
                },
            )

        assert response.status_code == 200
        assert "DELETE" in response.headers["access-control-allow-methods"]
