"""End-to-end tests for service listings, profiles, upvotes and activity."""

from uuid import uuid4


class TestListings:
    """Tests for the public service listings."""

    def test_list_with_search(self, client, api):
        for name in ("Acme", "Globex", "Acme Labs"):
            api.register_service(name.replace(" ", ""))

        response = client.get("/services", params={"search": "acme"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert {item["name"] for item in data["items"]} == {"Acme", "AcmeLabs"}

    def test_list_paginates(self, client, api):
        for name in ("Acme", "Globex", "Initech"):
            api.register_service(name)

        response = client.get("/services", params={"limit": 2, "page": 2})

        data = response.json()["data"]
        assert data["total"] == 3
        assert data["totalPages"] == 2
        assert data["currentPage"] == 2
        assert data["limit"] == 2
        assert len(data["items"]) == 1

    def test_sort_by_upvotes(self, client, api):
        api.register_service("Acme")
        globex = api.register_service("Globex")
        _, token = api.user("ursula")
        client.post(f"/services/{globex['id']}/upvote", headers=api.auth(token))

        listed = client.get("/services", params={"sort": "top"})
        top = client.get("/services/top")

        assert listed.json()["data"]["items"][0]["name"] == "Globex"
        assert top.status_code == 200
        assert top.json()["data"]["services"][0]["id"] == globex["id"]

    def test_unknown_sort_rejected(self, client):
        response = client.get("/services", params={"sort": "random"})

        assert response.status_code == 400


class TestServiceUpvotes:
    """Tests for upvoting services."""

    def test_upvote_then_conflict(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        url = f"/services/{service['id']}/upvote"

        first = client.post(url, headers=api.auth(token))
        second = client.post(url, headers=api.auth(token))

        assert first.status_code == 200
        assert first.json()["data"] == {
            "serviceId": service["id"],
            "upvotes": 1,
            "hasUpvoted": True,
        }
        assert second.status_code == 409
        assert second.json()["message"] == "You have already upvoted this service."

    def test_remove_upvote(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        url = f"/services/{service['id']}/upvote"
        client.post(url, headers=api.auth(token))

        removed = client.delete(url, headers=api.auth(token))
        again = client.delete(url, headers=api.auth(token))

        assert removed.status_code == 200
        assert removed.json()["data"]["upvotes"] == 0
        assert removed.json()["data"]["hasUpvoted"] is False
        assert again.status_code == 404

    def test_service_cannot_upvote(self, client, api):
        target = api.register_service("Acme")
        _, token = api.service("Globex")

        response = client.post(
            f"/services/{target['id']}/upvote", headers=api.auth(token)
        )

        assert response.status_code == 403

    def test_upvote_unknown_service(self, client, api):
        _, token = api.user("ursula")

        response = client.post(f"/services/{uuid4()}/upvote", headers=api.auth(token))

        assert response.status_code == 404


class TestServiceProfile:
    """Tests for service details, updates and deletion."""

    def test_details_show_viewer_upvote(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        api.create_target(token, service["id"], "bugs")
        client.post(f"/services/{service['id']}/upvote", headers=api.auth(token))

        anonymous = client.get(f"/services/{service['id']}")
        viewer = client.get(f"/services/{service['id']}", headers=api.auth(token))

        assert anonymous.status_code == 200
        assert anonymous.json()["data"]["hasUpvoted"] is False
        assert anonymous.json()["data"]["service"]["upvotes"] == 1
        assert anonymous.json()["data"]["counts"]["bugs"] == 1
        assert viewer.json()["data"]["hasUpvoted"] is True

    def test_unknown_service(self, client):
        response = client.get(f"/services/{uuid4()}")

        assert response.status_code == 404

    def test_update_self(self, client, api):
        service, token = api.service("Acme")

        response = client.patch(
            f"/services/{service['id']}",
            json={
                "description": "Rockets and anvils",
                "logoUrl": "https://acme.test/logo.png",
            },
            headers=api.auth(token),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["description"] == "Rockets and anvils"
        assert data["logoUrl"] == "https://acme.test/logo.png"
        assert data["name"] == "Acme"

    def test_update_other_service_forbidden(self, client, api):
        acme = api.register_service("Acme")
        _, token = api.service("Globex")

        response = client.patch(
            f"/services/{acme['id']}",
            json={"name": "Hijacked"},
            headers=api.auth(token),
        )

        assert response.status_code == 403

    def test_user_cannot_update_service(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")

        response = client.patch(
            f"/services/{service['id']}",
            json={"name": "Hijacked"},
            headers=api.auth(token),
        )

        assert response.status_code == 403

    def test_delete_self_cascades(self, client, api):
        """Deleting a service removes its targets and upvotes."""
        # Arrange
        service, service_token = api.service("Acme")
        _, user_token = api.user("ursula")
        issue = api.create_target(user_token, service["id"], "issues")
        client.post(f"/services/{service['id']}/upvote", headers=api.auth(user_token))

        # Act
        response = client.delete(
            f"/services/{service['id']}", headers=api.auth(service_token)
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["data"] == {
            "serviceId": service["id"],
            "deletedTargets": 1,
            "deletedUpvotes": 1,
        }
        assert client.get(f"/services/{service['id']}").status_code == 404
        assert client.get(f"/issues/{issue['id']}").status_code == 404

    def test_delete_other_service_forbidden(self, client, api):
        acme = api.register_service("Acme")
        _, token = api.service("Globex")

        response = client.delete(f"/services/{acme['id']}", headers=api.auth(token))

        assert response.status_code == 403
        assert client.get(f"/services/{acme['id']}").status_code == 200


class TestActivity:
    """Tests for the service activity dashboard."""

    def test_own_activity_defaults_to_minimum_window(self, client, api):
        service, service_token = api.service("Acme")
        _, user_token = api.user("ursula")
        api.create_target(user_token, service["id"], "feedbacks")
        client.post(f"/services/{service['id']}/upvote", headers=api.auth(user_token))

        response = client.get(
            f"/services/{service['id']}/activity", headers=api.auth(service_token)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["days"] == 7
        assert len(data["activity"]) == 7
        today = data["activity"][-1]
        assert today["upvotes"] == 1
        assert today["feedbacks"] == 1

    def test_explicit_window(self, client, api):
        service, token = api.service("Acme")

        response = client.get(
            f"/services/{service['id']}/activity",
            params={"days": 14},
            headers=api.auth(token),
        )

        assert response.json()["data"]["days"] == 14

    def test_other_service_activity_forbidden(self, client, api):
        acme = api.register_service("Acme")
        _, token = api.service("Globex")

        response = client.get(
            f"/services/{acme['id']}/activity", headers=api.auth(token)
        )

        assert response.status_code == 403
