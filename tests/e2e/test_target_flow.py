"""End-to-end tests for feedback, issues, bugs and their votes."""

from uuid import uuid4


class TestVoting:
    """Tests for the vote endpoints."""

    def test_upvote_twice_on_new_issue(self, client, api):
        """Register, log in, open an issue, upvote it, then retract."""
        # Arrange
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        issue = api.create_target(token, service["id"], "issues")

        # Act
        first = client.post(f"/issues/{issue['id']}/upvote", headers=api.auth(token))
        second = client.post(f"/issues/{issue['id']}/upvote", headers=api.auth(token))

        # Assert
        assert first.status_code == 200
        assert first.json()["data"]["voteType"] == "upvote"
        assert first.json()["data"]["upvotes"] == 1
        assert first.json()["data"]["netVotes"] == 1
        assert first.json()["message"] == "Vote recorded"

        assert second.json()["data"]["voteType"] is None
        assert second.json()["data"]["upvotes"] == 0
        assert second.json()["data"]["netVotes"] == 0
        assert second.json()["message"] == "Vote removed"

    def test_switch_and_get_vote(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        feedback = api.create_target(token, service["id"], "feedbacks")
        base = f"/feedbacks/{feedback['id']}"

        client.post(f"{base}/upvote", headers=api.auth(token))
        switched = client.post(f"{base}/downvote", headers=api.auth(token))
        current = client.get(f"{base}/vote", headers=api.auth(token))

        data = switched.json()["data"]
        assert (data["upvotes"], data["downvotes"], data["netVotes"]) == (0, 1, -1)
        assert current.json()["data"] == {"voteType": "downvote"}

    def test_bugs_have_no_vote_routes(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        bug = api.create_target(token, service["id"], "bugs")

        response = client.post(f"/bugs/{bug['id']}/upvote", headers=api.auth(token))

        assert response.status_code == 404

    def test_service_cannot_vote(self, client, api):
        service, service_token = api.service("Acme")
        _, user_token = api.user("ursula")
        issue = api.create_target(user_token, service["id"], "issues")

        response = client.post(
            f"/issues/{issue['id']}/upvote", headers=api.auth(service_token)
        )

        assert response.status_code == 403

    def test_vote_requires_authentication(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        issue = api.create_target(token, service["id"], "issues")

        response = client.post(f"/issues/{issue['id']}/upvote")

        assert response.status_code == 401

    def test_vote_on_missing_target(self, client, api):
        _, token = api.user("ursula")

        response = client.post(f"/feedbacks/{uuid4()}/upvote", headers=api.auth(token))

        assert response.status_code == 404
        assert response.json()["message"] == "Feedback not found."

    def test_invalid_id(self, client, api):
        _, token = api.user("ursula")

        response = client.post("/feedbacks/not-a-uuid/upvote", headers=api.auth(token))

        assert response.status_code == 400


class TestTargets:
    """Tests for target creation, listing and deletion."""

    def test_create_issue_starts_open(self, api):
        service = api.register_service("Acme")
        user, token = api.user("ursula")

        issue = api.create_target(token, service["id"], "issues")

        assert issue["status"] == "open"
        assert issue["openedBy"] == user["id"]
        assert issue["targetType"] == "issue"

    def test_create_requires_title(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")

        response = client.post(
            f"/services/{service['id']}/feedbacks",
            json={"title": "", "description": "Something"},
            headers=api.auth(token),
        )

        assert response.status_code == 400

    def test_create_against_missing_service(self, client, api):
        _, token = api.user("ursula")

        response = client.post(
            f"/services/{uuid4()}/bugs",
            json={"title": "Crash", "description": "On save"},
            headers=api.auth(token),
        )

        assert response.status_code == 404

    def test_service_cannot_create_targets(self, client, api):
        service, token = api.service("Acme")

        response = client.post(
            f"/services/{service['id']}/feedbacks",
            json={"title": "Self praise", "description": "We are great"},
            headers=api.auth(token),
        )

        assert response.status_code == 403

    def test_list_search_and_paginate(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        for title in ("Dark mode", "Export CSV", "Dark icons"):
            api.create_target(token, service["id"], "feedbacks", title=title)
        url = f"/services/{service['id']}/feedbacks"

        pages = [
            client.get(
                url, params={"search": "dark", "limit": 1, "page": page, "sort": "newest"}
            )
            for page in (1, 2)
        ]

        assert all(page.status_code == 200 for page in pages)
        second = pages[1].json()["data"]
        assert second["total"] == 2
        assert second["totalPages"] == 2
        assert second["currentPage"] == 2
        titles = {page.json()["data"]["items"][0]["title"] for page in pages}
        assert titles == {"Dark mode", "Dark icons"}

    def test_get_target_shows_viewer_vote(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        feedback = api.create_target(token, service["id"], "feedbacks")
        client.post(f"/feedbacks/{feedback['id']}/upvote", headers=api.auth(token))

        anonymous = client.get(f"/feedbacks/{feedback['id']}")
        viewer = client.get(f"/feedbacks/{feedback['id']}", headers=api.auth(token))

        assert anonymous.json()["data"]["userVote"] is None
        assert anonymous.json()["data"]["openedByName"] == "Ursula"
        assert viewer.json()["data"]["userVote"] == "upvote"

    def test_get_with_wrong_kind_is_not_found(self, client, api):
        service = api.register_service("Acme")
        _, token = api.user("ursula")
        bug = api.create_target(token, service["id"], "bugs")

        response = client.get(f"/issues/{bug['id']}")

        assert response.status_code == 404

    def test_non_owner_cannot_delete(self, client, api):
        service = api.register_service("Acme")
        _, owner_token = api.user("ursula")
        _, other_token = api.user("victor")
        feedback = api.create_target(owner_token, service["id"], "feedbacks")

        response = client.delete(
            f"/feedbacks/{feedback['id']}", headers=api.auth(other_token)
        )

        assert response.status_code == 403
        assert client.get(f"/feedbacks/{feedback['id']}").status_code == 200

    def test_owner_delete_cascades_votes(self, client, api):
        """A prior voter starts from no vote once the target is gone."""
        service = api.register_service("Acme")
        _, owner_token = api.user("ursula")
        _, voter_token = api.user("victor")
        issue = api.create_target(owner_token, service["id"], "issues")
        client.post(f"/issues/{issue['id']}/upvote", headers=api.auth(voter_token))

        deleted = client.delete(f"/issues/{issue['id']}", headers=api.auth(owner_token))
        vote = client.get(f"/issues/{issue['id']}/vote", headers=api.auth(voter_token))

        assert deleted.status_code == 200
        assert client.get(f"/issues/{issue['id']}").status_code == 404
        assert vote.status_code == 404


class TestIssueStatus:
    """Tests for PATCH /issues/{id}/status."""

    def test_owning_service_updates_status(self, client, api):
        service, service_token = api.service("Acme")
        _, user_token = api.user("ursula")
        issue = api.create_target(user_token, service["id"], "issues")

        response = client.patch(
            f"/issues/{issue['id']}/status",
            json={"status": "in-progress"},
            headers=api.auth(service_token),
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "in-progress"

    def test_other_service_forbidden(self, client, api):
        service = api.register_service("Acme")
        _, other_token = api.service("Globex")
        _, user_token = api.user("ursula")
        issue = api.create_target(user_token, service["id"], "issues")

        response = client.patch(
            f"/issues/{issue['id']}/status",
            json={"status": "closed"},
            headers=api.auth(other_token),
        )

        assert response.status_code == 403

    def test_invalid_status(self, client, api):
        service, service_token = api.service("Acme")
        _, user_token = api.user("ursula")
        issue = api.create_target(user_token, service["id"], "issues")

        response = client.patch(
            f"/issues/{issue['id']}/status",
            json={"status": "done"},
            headers=api.auth(service_token),
        )

        assert response.status_code == 400

    def test_user_cannot_update_status(self, client, api):
        service = api.register_service("Acme")
        _, user_token = api.user("ursula")
        issue = api.create_target(user_token, service["id"], "issues")

        response = client.patch(
            f"/issues/{issue['id']}/status",
            json={"status": "closed"},
            headers=api.auth(user_token),
        )

        assert response.status_code == 403

    def test_bugs_have_no_status_route(self, client, api):
        service, service_token = api.service("Acme")
        _, user_token = api.user("ursula")
        bug = api.create_target(user_token, service["id"], "bugs")

        response = client.patch(
            f"/bugs/{bug['id']}/status",
            json={"status": "closed"},
            headers=api.auth(service_token),
        )

        assert response.status_code == 404
