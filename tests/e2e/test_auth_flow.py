"""End-to-end tests for registration, login and session handling."""

from uuid import uuid4



class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["environment"] == "test"


class TestRegistration:
    """Tests for account registration."""

    def test_register_user_returns_public_fields(self, api):
        user = api.register_user("Ursula")

        assert user["username"] == "ursula"
        assert "passwordHash" not in user
        assert "refreshToken" not in user

    def test_duplicate_user_conflicts(self, client, api):
        api.register_user("ursula")

        response = client.post(
            "/users/register",
            json={
                "username": "ursula",
                "email": "other@example.com",
                "fullname": "Other",
                "password": api.password,
            },
        )

        assert response.status_code == 409
        assert response.json() == {
            "statusCode": 409,
            "message": "User with this email or username already exists.",
            "success": False,
        }

    def test_missing_fields_rejected(self, client):
        response = client.post("/users/register", json={"username": "ursula"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_register_service(self, api):
        service = api.register_service("Acme")

        assert service["name"] == "Acme"
        assert service["upvotes"] == 0


class TestSessions:
    """Tests for cookie sessions and refresh-token rotation."""

    def test_login_sets_cookies_and_me_resolves_user(self, client, api):
        """The access cookie alone authenticates the next request."""
        user = api.register_user("ursula")

        login = client.post(
            "/users/login",
            json={"email": "ursula@example.com", "password": api.password},
        )
        me = client.get("/auth/me")

        assert login.status_code == 200
        assert "accessToken" in login.cookies
        assert "refreshToken" in login.cookies
        assert me.status_code == 200
        assert me.json()["data"] == {
            "kind": "user",
            "id": user["id"],
            "name": "Ursula",
            "email": "ursula@example.com",
        }

    def test_me_resolves_service_from_bearer_header(self, client, api):
        service, token = api.service("Acme")

        response = client.get("/auth/me", headers=api.auth(token))

        assert response.status_code == 200
        assert response.json()["data"]["kind"] == "service"
        assert response.json()["data"]["id"] == service["id"]

    def test_wrong_password(self, client, api):
        api.register_user("ursula")

        response = client.post(
            "/users/login", json={"username": "ursula", "password": "nope"}
        )

        assert response.status_code == 401

    def test_unknown_account(self, client):
        response = client.post(
            "/services/login", json={"email": "ghost@example.com", "password": "x"}
        )

        assert response.status_code == 404

    def test_refresh_rotates_and_old_token_is_rejected(self, client, api):
        """Refresh via cookie, then replay the old token via the body."""
        # Arrange
        api.register_user("ursula")
        login = client.post(
            "/users/login", json={"username": "ursula", "password": api.password}
        )
        old_refresh = login.json()["data"]["refreshToken"]

        # Act
        refreshed = client.post("/users/refresh-token")
        client.cookies.clear()
        replay = client.post("/users/refresh-token", json={"refreshToken": old_refresh})

        # Assert
        assert refreshed.status_code == 200
        assert refreshed.json()["data"]["refreshToken"] != old_refresh
        assert replay.status_code == 401

    def test_refresh_without_token(self, client):
        response = client.post("/users/refresh-token")

        assert response.status_code == 401
        assert response.json()["message"] == "Refresh token is required."

    def test_service_token_rejected_on_user_refresh(self, client, api):
        api.register_service("Acme")
        login = client.post(
            "/services/login",
            json={"email": "acme@example.com", "password": api.password},
        )
        refresh_token = login.json()["data"]["refreshToken"]
        client.cookies.clear()

        response = client.post(
            "/users/refresh-token", json={"refreshToken": refresh_token}
        )

        assert response.status_code == 401

    def test_logout_clears_session(self, client, api):
        """After logout the refresh token no longer works."""
        api.register_user("ursula")
        login = client.post(
            "/users/login", json={"username": "ursula", "password": api.password}
        )
        refresh_token = login.json()["data"]["refreshToken"]

        logout = client.post("/users/logout")
        client.cookies.clear()
        replay = client.post(
            "/users/refresh-token", json={"refreshToken": refresh_token}
        )

        assert logout.status_code == 200
        assert replay.status_code == 401

    def test_service_cannot_use_user_logout(self, client, api):
        _, token = api.service("Acme")

        response = client.post("/users/logout", headers=api.auth(token))

        assert response.status_code == 403

    def test_garbage_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_no_token(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 401


class TestUserProfile:
    """Tests for user profile endpoints."""

    def test_profile_requires_authentication(self, client, api):
        user = api.register_user("ursula")

        response = client.get(f"/users/profile/{user['id']}")

        assert response.status_code == 401

    def test_profile_counts_contributions(self, client, api):
        user, user_token = api.user("ursula")
        service = api.register_service("Acme")
        api.create_target(user_token, service["id"], "issues")
        api.create_target(user_token, service["id"], "bugs")

        response = client.get(
            f"/users/profile/{user['id']}", headers=api.auth(user_token)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == user["id"]
        assert data["services"][0]["serviceName"] == "Acme"
        assert data["totals"] == {"feedbacks": 0, "issues": 1, "bugs": 1, "total": 2}

    def test_update_self(self, client, api):
        user, token = api.user("ursula")

        response = client.put(
            f"/users/{user['id']}",
            json={"currentPassword": api.password, "fullname": "Ursula K."},
            headers=api.auth(token),
        )

        assert response.status_code == 200
        assert response.json()["data"]["fullname"] == "Ursula K."

    def test_update_other_user_forbidden(self, client, api):
        ursula = api.register_user("ursula")
        _, victor_token = api.user("victor")

        response = client.put(
            f"/users/{ursula['id']}",
            json={"currentPassword": api.password, "fullname": "Hijacked"},
            headers=api.auth(victor_token),
        )

        assert response.status_code == 403

    def test_list_user_issues(self, client, api):
        user, token = api.user("ursula")
        service = api.register_service("Acme")
        issue = api.create_target(token, service["id"], "issues")

        response = client.get(f"/users/{user['id']}/issues")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [item["id"] for item in data["items"]] == [issue["id"]]
        assert data["total"] == 1

    def test_unknown_user_profile(self, client, api):
        _, token = api.user("ursula")

        response = client.get(f"/users/profile/{uuid4()}", headers=api.auth(token))

        assert response.status_code == 404
