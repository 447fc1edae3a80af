from fastapi.testclient import TestClient

from research_agent.main import app

client = TestClient(app)


def test_healthcheck_returns_200():
    response = client.get("/health")
    assert response.status_code == 200


def test_healthcheck_response_body():
    response = client.get("/health")
    assert response.json() == {"status": "ok", "message": "Research Agent is running."}


def test_healthcheck_response_structure():
    response = client.get("/health")
    data = response.json()
    assert "status" in data
    assert isinstance(data["message"], str)


def test_root():
    assert client.get("/").json() == {"message": "Research Agent API"}
