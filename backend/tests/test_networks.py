"""Tests for Network CRUD and the owner-membership invariant."""
from hwtube.models.application import NetworkApplication
from hwtube.models.invitation import NetworkInvitation
from hwtube.models.network import Network, NetworkMembership
from tests.conftest import auth, create_test_network, create_test_user


class TestNetworkCreate:

    def test_create_network(self, client):
        owner = create_test_user(client, name="Alice")
        resp = client.post("/api/networks", json={
            "name": "Tech Reviewers",
            "description": "Gadgets, mostly",
            "themes": ["tech", "reviews"],
            "logo_url": "https://example.com/logo.png",
        }, headers=auth(owner))
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["name"] == "Tech Reviewers"
        assert data["themes"] == ["tech", "reviews"]
        assert data["logo_url"] == "https://example.com/logo.png"
        assert data["owner_id"] == owner["user_id"]

    def test_owner_gets_exactly_one_active_owner_membership(self, client, db):
        owner = create_test_user(client, name="Alice")
        network = create_test_network(client, owner)

        memberships = db.query(NetworkMembership).filter(
            NetworkMembership.network_id == network["network_id"]
        ).all()
        assert len(memberships) == 1
        assert memberships[0].user_id == owner["user_id"]
        assert memberships[0].role.value == "owner"
        assert memberships[0].status.value == "active"

    def test_create_requires_identity(self, client):
        resp = client.post("/api/networks", json={"name": "Anon", "themes": ["x"]})
        assert resp.status_code == 401

    def test_name_too_long(self, client):
        owner = create_test_user(client)
        resp = client.post("/api/networks", json={"name": "x" * 101, "themes": ["tech"]}, headers=auth(owner))
        assert resp.status_code == 400
        body = resp.json()
        assert body["kind"] == "validation_error"
        assert body["context"]["fields"][0]["field"] == "name"

    def test_empty_name(self, client):
        owner = create_test_user(client)
        resp = client.post("/api/networks", json={"name": "", "themes": ["tech"]}, headers=auth(owner))
        assert resp.status_code == 400

    def test_themes_required(self, client):
        owner = create_test_user(client)
        resp = client.post("/api/networks", json={"name": "No themes", "themes": []}, headers=auth(owner))
        assert resp.status_code == 400

    def test_too_many_themes(self, client):
        owner = create_test_user(client)
        themes = [f"t{i}" for i in range(11)]
        resp = client.post("/api/networks", json={"name": "Busy", "themes": themes}, headers=auth(owner))
        assert resp.status_code == 400

    def test_blank_theme_rejected(self, client):
        owner = create_test_user(client)
        resp = client.post("/api/networks", json={"name": "Blank", "themes": ["tech", "  "]}, headers=auth(owner))
        assert resp.status_code == 400

    def test_invalid_logo_url(self, client):
        owner = create_test_user(client)
        resp = client.post("/api/networks", json={
            "name": "Bad logo", "themes": ["tech"], "logo_url": "not a url",
        }, headers=auth(owner))
        assert resp.status_code == 400

    def test_logo_url_too_long(self, client):
        alice = create_test_user(client, name="Alice")
        resp = client.post("/api/networks", json={
            "name": "Long logo", "themes": ["tech"],
            "logo_url": "https://example.com/" + "a" * 2040,
        }, headers=auth(alice))
        assert resp.status_code == 400

    def test_description_too_long(self, client):
        owner = create_test_user(client)
        resp = client.post("/api/networks", json={
            "name": "Verbose", "themes": ["tech"], "description": "d" * 501,
        }, headers=auth(owner))
        assert resp.status_code == 400


class TestNetworkRead:

    def test_list_networks_newest_first_with_counts(self, client):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        first = create_test_network(client, alice, name="First")
        second = create_test_network(client, alice, name="Second")
        client.post(f"/api/networks/{first['network_id']}/apply", json={}, headers=auth(bob))
        apps = client.get(f"/api/networks/{first['network_id']}/applications", headers=auth(alice)).json()
        client.patch(
            f"/api/networks/{first['network_id']}/applications/{apps[0]['application_id']}",
            json={"action": "approve"}, headers=auth(alice),
        )

        resp = client.get("/api/networks")
        assert resp.status_code == 200
        data = resp.json()
        assert [n["network_id"] for n in data] == [second["network_id"], first["network_id"]]
        assert data[0]["member_count"] == 1
        assert data[1]["member_count"] == 2
        assert data[1]["owner"]["display_name"] == "Alice"

    def test_get_network_with_members(self, client):
        owner = create_test_user(client, name="Alice")
        network = create_test_network(client, owner)
        resp = client.get(f"/api/networks/{network['network_id']}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["owner"]["user_id"] == owner["user_id"]
        assert len(data["memberships"]) == 1
        assert data["memberships"][0]["role"] == "owner"
        assert data["memberships"][0]["user"]["display_name"] == "Alice"

    def test_get_network_not_found(self, client):
        resp = client.get("/api/networks/00000000-0000-0000-0000-000000000000")
        assert resp.status_code == 404
        assert resp.json()["kind"] == "not_found"


class TestNetworkUpdate:

    def test_owner_can_update_partially(self, client):
        owner = create_test_user(client)
        network = create_test_network(client, owner, name="Old Name", themes=["a", "b"])
        resp = client.patch(f"/api/networks/{network['network_id']}", json={
            "name": "New Name",
        }, headers=auth(owner))
        assert resp.status_code == 200
        assert resp.json()["name"] == "New Name"
        assert resp.json()["themes"] == ["a", "b"]

    def test_non_owner_update_forbidden_and_unchanged(self, client):
        owner = create_test_user(client, name="Alice")
        intruder = create_test_user(client, name="Dave")
        network = create_test_network(client, owner, name="Tech Reviewers")

        resp = client.patch(f"/api/networks/{network['network_id']}", json={
            "name": "Hijacked",
        }, headers=auth(intruder))
        assert resp.status_code == 403
        assert resp.json()["kind"] == "forbidden"
        assert client.get(f"/api/networks/{network['network_id']}").json()["name"] == "Tech Reviewers"

    def test_update_revalidates_fields(self, client):
        owner = create_test_user(client)
        network = create_test_network(client, owner)
        resp = client.patch(f"/api/networks/{network['network_id']}", json={"themes": []}, headers=auth(owner))
        assert resp.status_code == 400

    def test_update_cannot_null_name(self, client):
        owner = create_test_user(client)
        network = create_test_network(client, owner)
        resp = client.patch(f"/api/networks/{network['network_id']}", json={"name": None}, headers=auth(owner))
        assert resp.status_code == 400

    def test_update_missing_network(self, client):
        owner = create_test_user(client)
        resp = client.patch("/api/networks/missing", json={"name": "x"}, headers=auth(owner))
        assert resp.status_code == 404


class TestNetworkDelete:

    def test_delete_cascades_to_children(self, client, db):
        owner = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        carol = create_test_user(client, name="Carol")
        network = create_test_network(client, owner)
        nid = network["network_id"]
        client.post(f"/api/networks/{nid}/invite", json={"user_id": carol["user_id"]}, headers=auth(owner))
        client.post(f"/api/networks/{nid}/apply", json={"message": "hi"}, headers=auth(bob))

        resp = client.delete(f"/api/networks/{nid}", headers=auth(owner))
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}

        assert db.get(Network, nid) is None
        assert db.query(NetworkMembership).filter(NetworkMembership.network_id == nid).count() == 0
        assert db.query(NetworkInvitation).filter(NetworkInvitation.network_id == nid).count() == 0
        assert db.query(NetworkApplication).filter(NetworkApplication.network_id == nid).count() == 0

    def test_non_owner_cannot_delete(self, client):
        owner = create_test_user(client, name="Alice")
        other = create_test_user(client, name="Bob")
        network = create_test_network(client, owner)
        resp = client.delete(f"/api/networks/{network['network_id']}", headers=auth(other))
        assert resp.status_code == 403
        assert client.get(f"/api/networks/{network['network_id']}").status_code == 200

    def test_delete_missing_network(self, client):
        owner = create_test_user(client)
        resp = client.delete("/api/networks/missing", headers=auth(owner))
        assert resp.status_code == 404
