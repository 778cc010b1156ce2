"""API tests for the LLM proxy backend."""

from __future__ import annotations

import random
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from llm_proxy.backends import SimulatedBackend
from llm_proxy.backends.simulate import FATIGUE_TIP, GENERAL_TIPS
from llm_proxy.errors import ProviderError
from llm_proxy.main import app, get_backend, get_static_dir


class StubBackend:
    """Fake backend returning fixed values or raising a fixed error."""

    mode = "local"
    info = "stub"

    def __init__(self, *, result: str = "", error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, ...]] = []

    async def rewrite(self, text: str, tone: str | None) -> str:
        self.calls.append(("rewrite", text, tone))
        if self.error:
            raise self.error
        return self.result

    async def suggest(self, context: str | None) -> str:
        self.calls.append(("suggest", context))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture(name="client")
def client_fixture() -> TestClient:
    """Run the app against the simulator regardless of the environment."""
    backend = SimulatedBackend(rng=random.Random(7))
    app.dependency_overrides[get_backend] = lambda: backend
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(name="stub_client")
def stub_client_fixture() -> tuple[TestClient, StubBackend]:
    backend = StubBackend()
    app.dependency_overrides[get_backend] = lambda: backend
    yield TestClient(app), backend
    app.dependency_overrides.clear()


def test_health_endpoint(client: TestClient) -> None:
    """Health endpoint should return ok."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["mode"] == "simulate"


def test_mode_endpoint_reports_simulate(client: TestClient) -> None:
    response = client.get("/api/mode")
    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "simulate"
    assert "OPENAI_API_KEY" in data["info"]


def test_rewrite_without_tone_uses_professional_template(client: TestClient) -> None:
    response = client.post("/api/rewrite", json={"text": "The quarterly results exceeded expectations."})
    assert response.status_code == 200
    assert response.json() == {
        "rewritten": "Professional summary: The quarterly results exceeded expectations...."
    }


def test_rewrite_with_tone(client: TestClient) -> None:
    response = client.post("/api/rewrite", json={"text": "We shipped it.", "tone": "dramatic"})
    assert response.status_code == 200
    assert response.json()["rewritten"] == "Dramatic retelling: We shipped it.!"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"text": None},
        {"text": 42},
        {"text": ["a", "b"]},
        {"text": ""},
        {"tone": "simple"},
    ],
)
def test_rewrite_rejects_invalid_text(client: TestClient, body: dict) -> None:
    """Missing, non-string or empty text is an invalid-input error."""
    response = client.post("/api/rewrite", json=body)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid text"


@pytest.mark.parametrize("tone", [5, None, ["simple"], {"name": "dramatic"}, True])
def test_rewrite_non_string_tone_falls_back_to_professional(client: TestClient, tone: object) -> None:
    response = client.post("/api/rewrite", json={"text": "Hi", "tone": tone})
    assert response.status_code == 200
    assert response.json() == {"rewritten": "Professional summary: Hi..."}


def test_rewrite_rejects_text_over_length_cap(client: TestClient) -> None:
    response = client.post("/api/rewrite", json={"text": "a" * 20_001})
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid text"
    assert "20000" in data["details"]


def test_rewrite_accepts_text_at_length_cap(client: TestClient) -> None:
    response = client.post("/api/rewrite", json={"text": "a" * 20_000})
    assert response.status_code == 200


def test_rewrite_rejects_malformed_json(client: TestClient) -> None:
    response = client.post(
        "/api/rewrite",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400


def test_suggestion_for_tired_context(client: TestClient) -> None:
    response = client.post("/api/suggestion", json={"context": "I feel so tired today"})
    assert response.status_code == 200
    assert response.json() == {"suggestion": "You seem tired — stand up and walk for 2 minutes."}


def test_suggestion_without_context_uses_canned_tips(client: TestClient) -> None:
    for body in ({}, {"context": None}, {"context": "reading about whales"}):
        response = client.post("/api/suggestion", json=body)
        assert response.status_code == 200
        suggestion = response.json()["suggestion"]
        assert suggestion in GENERAL_TIPS
        assert suggestion != FATIGUE_TIP


def test_suggestion_without_body(client: TestClient) -> None:
    response = client.post("/api/suggestion")
    assert response.status_code == 200
    assert response.json()["suggestion"] in GENERAL_TIPS


def test_backend_receives_raw_fields(stub_client: tuple[TestClient, StubBackend]) -> None:
    client, backend = stub_client
    backend.result = "  done  "
    client.post("/api/rewrite", json={"text": "hello", "tone": "loud"})
    response = client.post("/api/suggestion", json={"context": "busy day"})
    assert backend.calls == [("rewrite", "hello", "loud"), ("suggest", "busy day")]
    assert response.json() == {"suggestion": "done"}


def test_empty_backend_result_is_an_empty_string(stub_client: tuple[TestClient, StubBackend]) -> None:
    client, _ = stub_client
    rewrite = client.post("/api/rewrite", json={"text": "hello"})
    suggestion = client.post("/api/suggestion", json={})
    assert rewrite.status_code == 200
    assert rewrite.json() == {"rewritten": ""}
    assert suggestion.json() == {"suggestion": ""}


def test_provider_error_maps_to_500(stub_client: tuple[TestClient, StubBackend]) -> None:
    client, backend = stub_client
    backend.error = ProviderError('{"error": "quota exceeded"}')
    for path, body in (("/api/rewrite", {"text": "hello"}), ("/api/suggestion", {})):
        response = client.post(path, json=body)
        assert response.status_code == 500
        assert response.json() == {
            "error": "LLM provider error",
            "details": '{"error": "quota exceeded"}',
        }


def test_unexpected_error_maps_to_server_error(stub_client: tuple[TestClient, StubBackend]) -> None:
    client, backend = stub_client
    backend.error = RuntimeError("boom")
    response = client.post("/api/rewrite", json={"text": "hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "server_error", "details": None}


def test_oversized_body_is_rejected(client: TestClient) -> None:
    response = client.post("/api/rewrite", json={"text": "a" * 250_000})
    assert response.status_code == 413
    assert response.json()["error"] == "payload_too_large"


def test_chunked_oversized_body_is_rejected(client: TestClient) -> None:
    """Bodies without a Content-Length are counted as they stream in."""

    def chunks():
        yield b'{"context": "'
        for _ in range(30):
            yield b"a" * 10_000
        yield b'"}'

    response = client.post(
        "/api/suggestion",
        content=chunks(),
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 413
    assert response.json()["error"] == "payload_too_large"


def test_chunked_body_under_cap_is_accepted(client: TestClient) -> None:
    def chunks():
        yield b'{"context": '
        yield b'"so tired"}'

    response = client.post(
        "/api/suggestion",
        content=chunks(),
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 200
    assert response.json() == {"suggestion": FATIGUE_TIP}


@pytest.mark.parametrize("path", ["/api/mode", "/anything"])
def test_wrong_method_uses_error_envelope(client: TestClient, path: str) -> None:
    response = client.post(path, json={})
    assert response.status_code == 405
    assert response.json() == {"error": "method_not_allowed", "details": "Method Not Allowed"}
    assert "GET" in response.headers["allow"]


def test_security_headers_present(client: TestClient) -> None:
    response = client.get("/api/mode")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"


@pytest.fixture(name="static_dir")
def static_dir_fixture(tmp_path: Path) -> Path:
    (tmp_path / "index.html").write_text("<html>entry</html>", encoding="utf-8")
    (tmp_path / "app.js").write_text("console.log('hi');", encoding="utf-8")
    app.dependency_overrides[get_static_dir] = lambda: tmp_path
    return tmp_path


def test_static_file_is_served(client: TestClient, static_dir: Path) -> None:
    response = client.get("/app.js")
    assert response.status_code == 200
    assert "console.log" in response.text


@pytest.mark.parametrize("path", ["/", "/reader/chapter-3"])
def test_unknown_paths_fall_back_to_index(client: TestClient, static_dir: Path, path: str) -> None:
    response = client.get(path)
    assert response.status_code == 200
    assert response.text == "<html>entry</html>"


def test_unknown_api_path_is_json_404(client: TestClient, static_dir: Path) -> None:
    response = client.get("/api/unknown")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_missing_bundle_is_json_404(client: TestClient, tmp_path: Path) -> None:
    app.dependency_overrides[get_static_dir] = lambda: tmp_path / "missing"
    response = client.get("/")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"
