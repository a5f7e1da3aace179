"""
End-to-end tests for registration, login and the user endpoints.
"""

from tests.helpers import PASSWORD, create_post, login, register, role_id


class TestRegister:
    def test_register_assigns_default_role(self, client):
        resp = register(client, "alice", "Alice@Example.com")
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["username"] == "alice"
        assert data["email"] == "alice@example.com"
        assert data["role"] == "user"
        assert "password" not in data
        assert "password_hash" not in data

    def test_role_id_zero_means_default(self, client):
        assert register(client, "alice", "alice@example.com", role_id=0).json()["data"]["role"] == "user"

    def test_explicit_role(self, client, user_headers):
        editor = role_id(client, user_headers, "editor")
        resp = register(client, "ed", "ed@example.com", role_id=editor)
        assert resp.json()["data"]["role"] == "editor"
        assert resp.json()["data"]["role_id"] == editor

    def test_unknown_role(self, client):
        resp = register(client, "alice", "alice@example.com", role_id=999)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "INVALID_ROLE"

    def test_field_rules_are_reported_together(self, client):
        resp = register(client, "a b", "not-an-email", password="weak")
        assert resp.status_code == 400
        fields = {e["field"] for e in resp.json()["errors"]}
        assert fields == {"username", "email", "password"}

    def test_duplicate_email(self, client):
        register(client, "alice", "alice@example.com")
        resp = register(client, "alice2", "ALICE@example.com")
        assert resp.status_code == 409
        assert resp.json()["errors"][0]["code"] == "EMAIL_TAKEN"

    def test_duplicate_username(self, client):
        register(client, "alice", "alice@example.com")
        resp = register(client, "alice", "other@example.com")
        assert resp.status_code == 409
        assert resp.json()["errors"][0]["code"] == "USERNAME_TAKEN"

    def test_missing_fields(self, client):
        assert client.post("/api/register", json={"username": "x"}).status_code == 422


class TestLogin:
    def test_login(self, client):
        register(client, "alice", "alice@example.com")
        resp = client.post("/api/login", json={"email": "alice@example.com", "password": PASSWORD})
        assert resp.status_code == 200
        body = resp.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 24 * 3600
        assert body["access_token"]
        assert body["user"]["username"] == "alice"
        assert body["user"]["role"] == "user"

    def test_wrong_password(self, client):
        register(client, "alice", "alice@example.com")
        resp = client.post("/api/login", json={"email": "alice@example.com", "password": "Wrong123!"})
        assert resp.status_code == 401
        assert resp.json()["errors"][0]["code"] == "INVALID_CREDENTIALS"

    def test_unknown_email(self, client):
        resp = client.post("/api/login", json={"email": "ghost@example.com", "password": PASSWORD})
        assert resp.status_code == 401
        assert resp.json()["errors"][0]["code"] == "INVALID_CREDENTIALS"


class TestUsers:
    def test_list_requires_authentication(self, client):
        assert client.get("/api/users").status_code == 401

    def test_list(self, client, admin_headers):
        body = client.get("/api/users?sort=username:asc", headers=admin_headers).json()
        assert [u["username"] for u in body["data"]] == ["alice", "root"]
        assert [f["name"] for f in body["metadata"]["allowed_sort"]] == [
            "username",
            "email",
            "created_at",
        ]

    def test_search_by_role(self, client, admin_headers):
        admin = role_id(client, admin_headers, "admin")
        body = client.get(f"/api/users?search=role_id:eq:{admin}", headers=admin_headers).json()
        assert [u["username"] for u in body["data"]] == ["root"]

    def test_get(self, client, user_headers):
        me = client.get("/api/users?search=username:eq:alice", headers=user_headers).json()["data"][0]
        resp = client.get(f"/api/users/{me['id']}", headers=user_headers)
        assert resp.json()["data"]["email"] == "alice@example.com"
        assert client.get("/api/users/999", headers=user_headers).status_code == 404

    def test_update_self(self, client, user_headers):
        me = client.get("/api/users?search=username:eq:alice", headers=user_headers).json()["data"][0]
        resp = client.put(
            f"/api/users/{me['id']}",
            json={"username": "alice2", "password": "NewSecret1!"},
            headers=user_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["username"] == "alice2"
        login(client, "alice@example.com", "NewSecret1!")

    def test_update_validates_fields(self, client, user_headers):
        me = client.get("/api/users?search=username:eq:alice", headers=user_headers).json()["data"][0]
        resp = client.put(f"/api/users/{me['id']}", json={"email": "bad"}, headers=user_headers)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "email"

    def test_cannot_update_someone_else(self, client, admin_headers, user_headers):
        root = client.get("/api/users?search=username:eq:root", headers=user_headers).json()["data"][0]
        resp = client.put(f"/api/users/{root['id']}", json={"username": "x"}, headers=user_headers)
        assert resp.status_code == 403

    def test_cannot_change_own_role(self, client, user_headers):
        me = client.get("/api/users?search=username:eq:alice", headers=user_headers).json()["data"][0]
        admin = role_id(client, user_headers, "admin")
        resp = client.put(f"/api/users/{me['id']}", json={"role_id": admin}, headers=user_headers)
        assert resp.status_code == 403

    def test_admin_changes_role(self, client, admin_headers):
        alice = client.get("/api/users?search=username:eq:alice", headers=admin_headers).json()["data"][0]
        editor = role_id(client, admin_headers, "editor")
        resp = client.put(f"/api/users/{alice['id']}", json={"role_id": editor}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["role"] == "editor"

    def test_update_to_taken_email(self, client, admin_headers, user_headers):
        me = client.get("/api/users?search=username:eq:alice", headers=user_headers).json()["data"][0]
        resp = client.put(
            f"/api/users/{me['id']}", json={"email": "root@example.com"}, headers=user_headers
        )
        assert resp.status_code == 409

    def test_delete_requires_admin(self, client, admin_headers, user_headers):
        root = client.get("/api/users?search=username:eq:root", headers=user_headers).json()["data"][0]
        resp = client.delete(f"/api/users/{root['id']}", headers=user_headers)
        assert resp.status_code == 403
        assert resp.json()["errors"][0]["code"] == "FORBIDDEN"

    def test_delete_cascades_to_posts(self, client, admin_headers, user_headers):
        create_post(client, user_headers, "Orphan")
        alice = client.get("/api/users?search=username:eq:alice", headers=admin_headers).json()["data"][0]

        resp = client.delete(f"/api/users/{alice['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["message"] == "User deleted successfully"
        assert client.get("/api/posts/orphan").status_code == 404
        # The deleted user's token no longer authenticates
        assert client.get("/api/users", headers=user_headers).status_code == 401
