"""Fixtures for end-to-end API tests.

Every test drives a fresh app whose container swaps persistence for
in-memory repositories.
"""

import pytest

from tests.harness import create_client_fixture

client = create_client_fixture()


class Api:
    """Thin helpers over the TestClient for account setup.

    Logins drop the cookies the server sets and hand back the access token,
    so each call can pick its principal with an explicit Bearer header.
    """

    password = "hunter22"

    def __init__(self, client):
        self.client = client

    @staticmethod
    def auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def register_user(self, username: str) -> dict:
        response = self.client.post(
            "/users/register",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "fullname": username.capitalize(),
                "password": self.password,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    def login_user(self, username: str) -> str:
        response = self.client.post(
            "/users/login", json={"username": username, "password": self.password}
        )
        assert response.status_code == 200, response.text
        self.client.cookies.clear()
        return response.json()["data"]["accessToken"]

    def register_service(self, name: str) -> dict:
        response = self.client.post(
            "/services/register",
            json={
                "name": name,
                "email": f"{name.lower()}@example.com",
                "password": self.password,
                "description": f"{name} builds things",
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    def login_service(self, name: str) -> str:
        response = self.client.post(
            "/services/login",
            json={"email": f"{name.lower()}@example.com", "password": self.password},
        )
        assert response.status_code == 200, response.text
        self.client.cookies.clear()
        return response.json()["data"]["accessToken"]

    def user(self, username: str) -> tuple[dict, str]:
        """Register and log in a user."""
        return self.register_user(username), self.login_user(username)

    def service(self, name: str) -> tuple[dict, str]:
        """Register and log in a service."""
        return self.register_service(name), self.login_service(name)

    def create_target(
        self,
        token: str,
        service_id: str,
        collection: str,
        title: str = "Login broken",
        description: str = "Cannot log in on Safari",
    ) -> dict:
        response = self.client.post(
            f"/services/{service_id}/{collection}",
            json={"title": title, "description": description},
            headers=self.auth(token),
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]


@pytest.fixture
def api(client):
    return Api(client)
