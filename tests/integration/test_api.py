"""Integration tests for API endpoints."""
import pytest
from httpx import AsyncClient, ASGITransport
from src.main import create_app


@pytest.fixture
def app():
    application = create_app()
    # Lifespan doesn't run in test; run rule-based only
    application.state.semantic_service = None
    return application


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["semantic_backend"] == "none"
    assert data["semantic_ready"] is False
    assert "x-request-id" in response.headers


@pytest.mark.asyncio
async def test_list_frameworks(client):
    response = await client.get("/api/v1/frameworks")
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 8
    assert [f["id"] for f in data["frameworks"]] == [
        "cot", "tot", "ape", "race", "roses", "guide", "smart", "create",
    ]


@pytest.mark.asyncio
async def test_analyze_structured_prompt(client, structured_prompt):
    response = await client.post("/api/v1/analyze", json={"prompt": structured_prompt})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["intent"]["role"] == "Marketing Manager"
    assert data["intent"]["topic"] == "Social media strategy for Q4"
    assert "race" in data["preferred_frameworks"]


@pytest.mark.asyncio
async def test_analyze_template_only(client):
    response = await client.post("/api/v1/analyze", json={"prompt": "Role:\nTopic:"})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "needs_more_detail"
    assert data["message"] == "Please provide more details about what you want to create."


@pytest.mark.asyncio
async def test_apply_framework(client, messy_prompt):
    response = await client.post(
        "/api/v1/frameworks/cot/apply",
        json={"prompt": messy_prompt},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["framework"] == "cot"
    assert "Chain of Thought" in data["optimized"]
    assert "plz" not in data["optimized"]


@pytest.mark.asyncio
async def test_apply_unknown_framework(client):
    response = await client.post(
        "/api/v1/frameworks/unknown/apply",
        json={"prompt": "Write about AI"},
    )
    assert response.status_code == 404
    assert response.json()["error"] == "FrameworkNotFoundError"


@pytest.mark.asyncio
async def test_apply_empty_prompt(client):
    response = await client.post("/api/v1/frameworks/race/apply", json={})
    assert response.status_code == 200
    assert response.json()["optimized"] == "Please provide a prompt to optimize."


@pytest.mark.asyncio
async def test_rank(client):
    response = await client.post(
        "/api/v1/rank",
        json={"prompt": "Explain quantum computing in simple terms for beginners"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 8
    scores = {e["framework"]: e["score"] for e in data["entries"]}
    assert data["top"] == "guide"
    assert scores["cot"] > scores["roses"]


@pytest.mark.asyncio
async def test_prompt_too_large(client, monkeypatch):
    from src.config import settings
    monkeypatch.setattr(settings, "max_prompt_chars", 10)
    response = await client.post("/api/v1/rank", json={"prompt": "Write a long essay about AI"})
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidPromptError"
