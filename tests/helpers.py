from typing import Any

from fastapi.testclient import TestClient


def register(client: TestClient, name: str, email: str | None = None, password: str = "secret1") -> dict[str, Any]:
    """Register a user through the API; the client keeps the session cookie."""
    response = client.post("/auth/register", json={"name": name, "email": email or f"{name}@example.com", "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def login(client: TestClient, login: str, password: str = "secret1") -> dict[str, Any]:
    response = client.post("/auth/login", json={"login": login, "password": password})
    assert response.status_code == 200, response.text
    return response.json()
