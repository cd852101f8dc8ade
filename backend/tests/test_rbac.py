"""
Tests for the role / permission registry.
"""


class TestRoles:
    """Roles and role-permission grants."""

    def test_admin_creates_role(self, client, make_user):
        admin = make_user("Admin", admin=True)
        response = client.post("/api/roles", json={"name": "editor", "description": "Edits games"}, headers=admin.headers)
        assert response.status_code == 201
        assert response.json()["rolePermissions"] == []

    def test_regular_user_cannot_create_role(self, client, make_user):
        ann = make_user("Ann")
        response = client.post("/api/roles", json={"name": "editor"}, headers=ann.headers)
        assert response.status_code == 403

    def test_duplicate_role_is_400(self, client, make_user):
        admin = make_user("Admin", admin=True)
        client.post("/api/roles", json={"name": "editor"}, headers=admin.headers)
        response = client.post("/api/roles", json={"name": "editor"}, headers=admin.headers)
        assert response.status_code == 400

    def test_grant_permission(self, client, make_user):
        admin = make_user("Admin", admin=True)
        role = client.post("/api/roles", json={"name": "editor"}, headers=admin.headers).json()
        permission = client.post("/api/permissions", json={"name": "games:write"}, headers=admin.headers).json()

        response = client.post(
            "/api/roles/permissions",
            json={"roleId": role["id"], "permissionId": permission["id"]},
            headers=admin.headers,
        )
        assert response.status_code == 201
        assert response.json()["permission"]["name"] == "games:write"

        roles = client.get("/api/roles", headers=admin.headers).json()
        assert [rp["permission"]["name"] for rp in roles[0]["rolePermissions"]] == ["games:write"]

        again = client.post(
            "/api/roles/permissions",
            json={"roleId": role["id"], "permissionId": permission["id"]},
            headers=admin.headers,
        )
        assert again.status_code == 400

    def test_grant_unknown_ids_is_404(self, client, make_user):
        admin = make_user("Admin", admin=True)
        response = client.post("/api/roles/permissions", json={"roleId": 1, "permissionId": 1}, headers=admin.headers)
        assert response.status_code == 404


class TestPermissions:

    def test_list_permissions(self, client, make_user):
        admin, ann = make_user("Admin", admin=True), make_user("Ann")
        client.post("/api/permissions", json={"name": "games:read"}, headers=admin.headers)
        client.post("/api/permissions", json={"name": "games:write"}, headers=admin.headers)

        names = [p["name"] for p in client.get("/api/permissions", headers=ann.headers).json()]
        assert names == ["games:read", "games:write"]

    def test_duplicate_permission_is_400(self, client, make_user):
        admin = make_user("Admin", admin=True)
        client.post("/api/permissions", json={"name": "games:read"}, headers=admin.headers)
        response = client.post("/api/permissions", json={"name": "games:read"}, headers=admin.headers)
        assert response.status_code == 400
