"""Tests for the application lifecycle: apply, review, approve, reject."""
from hwtube.config import settings
from hwtube.models.application import NetworkApplication
from hwtube.models.network import NetworkMembership
from tests.conftest import auth, create_test_network, create_test_user


def _apply(client, applicant, network, message=None):
    payload = {} if message is None else {"message": message}
    return client.post(f"/api/networks/{network['network_id']}/apply", json=payload, headers=auth(applicant))


def _decide(client, owner, network, application, action):
    return client.patch(
        f"/api/networks/{network['network_id']}/applications/{application['application_id']}",
        json={"action": action},
        headers=auth(owner),
    )


class TestApplyScenario:

    def test_apply_review_approve_then_reapply(self, client, db):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice, name="Tech Reviewers", themes=["tech"])

        resp = _apply(client, bob, network, message="hi")
        assert resp.status_code == 200, resp.text
        assert resp.json()["status"] == "pending"

        pending = client.get(f"/api/networks/{network['network_id']}/applications", headers=auth(alice))
        assert pending.status_code == 200
        entries = pending.json()
        assert len(entries) == 1
        assert entries[0]["applicant"]["user_id"] == bob["user_id"]
        assert entries[0]["applicant"]["display_name"] == "Bob"
        assert entries[0]["message"] == "hi"

        assert _decide(client, alice, network, entries[0], "approve").status_code == 200

        membership = db.query(NetworkMembership).filter(
            NetworkMembership.network_id == network["network_id"],
            NetworkMembership.user_id == bob["user_id"],
        ).one()
        assert membership.role.value == "member"
        assert membership.status.value == "active"

        again = _apply(client, bob, network, message="hi again")
        assert again.status_code == 409
        assert again.json()["kind"] == "conflict"


class TestApply:

    def test_owner_cannot_apply(self, client):
        alice = create_test_user(client, name="Alice")
        network = create_test_network(client, alice)
        assert _apply(client, alice, network).status_code == 409

    def test_duplicate_pending_application_conflicts(self, client, db):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice)
        assert _apply(client, bob, network).status_code == 200
        assert _apply(client, bob, network).status_code == 409
        assert db.query(NetworkApplication).count() == 1

    def test_reapply_after_rejection_conflicts_by_default(self, client, db):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice)
        application = _apply(client, bob, network).json()
        _decide(client, alice, network, application, "reject")

        resp = _apply(client, bob, network, message="reconsider?")
        assert resp.status_code == 409
        assert resp.json()["context"]["status"] == "rejected"
        assert db.query(NetworkApplication).count() == 1

    def test_apply_to_missing_network(self, client):
        bob = create_test_user(client, name="Bob")
        resp = client.post("/api/networks/missing/apply", json={}, headers=auth(bob))
        assert resp.status_code == 404

    def test_reapply_after_rejection_when_enabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ALLOW_REAPPLY_AFTER_TERMINAL", True)
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice)
        application = _apply(client, bob, network).json()
        _decide(client, alice, network, application, "reject")

        resp = _apply(client, bob, network, message="reconsider?")
        assert resp.status_code == 200
        assert resp.json()["application_id"] == application["application_id"]
        assert resp.json()["status"] == "pending"


class TestReview:

    def test_pending_list_is_newest_first_and_excludes_decided(self, client):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        carol = create_test_user(client, name="Carol")
        dave = create_test_user(client, name="Dave")
        network = create_test_network(client, alice)
        bob_app = _apply(client, bob, network).json()
        _apply(client, carol, network)
        _apply(client, dave, network)
        _decide(client, alice, network, bob_app, "reject")

        entries = client.get(f"/api/networks/{network['network_id']}/applications", headers=auth(alice)).json()
        assert [e["applicant"]["display_name"] for e in entries] == ["Dave", "Carol"]

    def test_only_owner_lists_applications(self, client):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice)
        resp = client.get(f"/api/networks/{network['network_id']}/applications", headers=auth(bob))
        assert resp.status_code == 403

    def test_list_applications_missing_network(self, client):
        alice = create_test_user(client, name="Alice")
        resp = client.get("/api/networks/missing/applications", headers=auth(alice))
        assert resp.status_code == 404


class TestDecide:

    def test_reject_leaves_no_membership(self, client, db):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice)
        application = _apply(client, bob, network).json()

        assert _decide(client, alice, network, application, "reject").status_code == 200
        assert db.get(NetworkApplication, application["application_id"]).status.value == "rejected"
        assert db.query(NetworkMembership).filter(NetworkMembership.user_id == bob["user_id"]).count() == 0

    def test_applicant_cannot_approve_self(self, client, db):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice)
        application = _apply(client, bob, network).json()

        assert _decide(client, bob, network, application, "approve").status_code == 403
        assert db.get(NetworkApplication, application["application_id"]).status.value == "pending"

    def test_invalid_action(self, client):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice)
        application = _apply(client, bob, network).json()
        assert _decide(client, alice, network, application, "accept").status_code == 400

    def test_application_from_other_network_not_found(self, client):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        first = create_test_network(client, alice, name="First")
        second = create_test_network(client, alice, name="Second")
        application = _apply(client, bob, first).json()
        assert _decide(client, alice, second, application, "approve").status_code == 404

    def test_approve_twice_conflicts_and_keeps_status(self, client, db):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        network = create_test_network(client, alice)
        application = _apply(client, bob, network).json()
        assert _decide(client, alice, network, application, "approve").status_code == 200
        assert _decide(client, alice, network, application, "approve").status_code == 409
        assert db.get(NetworkApplication, application["application_id"]).status.value == "approved"
