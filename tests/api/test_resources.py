"""API resource tests."""

from falcon.testing import TestClient

from orgperms.domain.value_objects import PermissionKey

from tests.conftest import HOME_ORG_ID


class TestSchemaResource:
    def test_lists_keys_in_canonical_order(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/permissions/schema")
        assert result.status_code == 200
        items = result.json["items"]
        assert [i["key"] for i in items] == [k.value for k in PermissionKey]
        assert items[0] == {"key": "viewIncidents", "default": True}


class TestOrganizationPermissions:
    def test_get_organization(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/organizations/acme/permissions")
        assert result.status_code == 200
        assert result.json["name"] == "Acme"
        assert set(result.json["permissions"]) == {"lastUpdated"}
        assert result.json["inherited"]["viewIncidents"] is True

    def test_get_missing_organization(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/organizations/nope/permissions")
        assert result.status_code == 404
        assert result.json["kind"] == "NotFound"

    def test_patch_flag(self, client: TestClient, seeded_uow) -> None:
        result = client.simulate_patch(
            "/v1/organizations/acme/permissions/viewAIReports", json={"value": True}
        )
        assert result.status_code == 200
        assert result.json["changes"] == [{"key": "viewAIReports", "from": None, "to": True}]
        assert result.json["log_id"]
        assert len(seeded_uow.permission_logs.entries) == 1

    def test_patch_home_org_forbidden(self, client: TestClient) -> None:
        result = client.simulate_patch(
            f"/v1/organizations/{HOME_ORG_ID}/permissions/manageUsers", json={"value": True}
        )
        assert result.status_code == 403
        assert result.json["kind"] == "Forbidden"

    def test_patch_unknown_key(self, client: TestClient) -> None:
        result = client.simulate_patch(
            "/v1/organizations/acme/permissions/launchRockets", json={"value": True}
        )
        assert result.status_code == 400
        assert result.json["kind"] == "ValidationError"

    def test_patch_missing_value(self, client: TestClient) -> None:
        result = client.simulate_patch("/v1/organizations/acme/permissions/manageUsers", json={})
        assert result.status_code == 400

    def test_put_services(self, client: TestClient) -> None:
        result = client.simulate_put(
            "/v1/organizations/acme/permissions",
            json={"services": {"instantIncidents": True, "weeklyReports": True}},
        )
        assert result.status_code == 200
        permissions = result.json["permissions"]
        assert permissions["createIncidents"] is True
        assert permissions["viewReports"] is True
        assert permissions["viewAIReports"] is False

    def test_put_requires_flags_or_services(self, client: TestClient) -> None:
        result = client.simulate_put("/v1/organizations/acme/permissions", json={})
        assert result.status_code == 400

    def test_apply_defaults(self, client: TestClient, seeded_uow) -> None:
        result = client.simulate_post("/v1/organizations/acme/permissions/apply")
        assert result.status_code == 200
        assert result.json["affected_users"] == 1
        assert seeded_uow.permission_logs.entries[0].notes == (
            "Applied organization defaults to all users."
        )

    def test_apply_without_stored_set_conflicts(self, client: TestClient) -> None:
        result = client.simulate_post(f"/v1/organizations/{HOME_ORG_ID}/permissions/apply")
        assert result.status_code == 409
        assert result.json["kind"] == "InvalidState"


class TestUserPermissions:
    def test_get_effective(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/alice/permissions")
        assert result.status_code == 200
        assert result.json["inherited_from_org"] is True
        assert result.json["stored"] is None
        assert result.json["effective"]["manageUsers"] is False
        assert {f["source"] for f in result.json["flags"]} == {"default"}

    def test_patch_then_reset(self, client: TestClient) -> None:
        patched = client.simulate_patch("/v1/users/alice/permissions/manageUsers", json={"value": True})
        assert patched.status_code == 200
        assert patched.json["changes"] == [{"key": "manageUsers", "from": False, "to": True}]
        assert patched.json["permissions"]["inheritedFromOrg"] is False

        effective = client.simulate_get("/v1/users/alice/permissions").json
        assert effective["effective"]["manageUsers"] is True
        assert effective["inherited_from_org"] is False

        reset = client.simulate_post("/v1/users/alice/permissions/reset", json={"notes": "offboarding"})
        assert reset.status_code == 200
        assert reset.json["changes"] == [{"key": "manageUsers", "from": True, "to": False}]

    def test_reset_missing_user(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/users/ghost/permissions/reset")
        assert result.status_code == 404

    def test_forbidden_actor(self, client: TestClient, mock_authorizer) -> None:
        mock_authorizer.can_manage_permissions.return_value = False
        result = client.simulate_patch("/v1/users/alice/permissions/manageUsers", json={"value": True})
        assert result.status_code == 403


class TestPermissionLogs:
    def test_pagination(self, client: TestClient) -> None:
        for key in ("manageUsers", "viewAIReports", "manageSettings"):
            client.simulate_patch(f"/v1/users/alice/permissions/{key}", json={"value": True})

        first = client.simulate_get("/v1/permission-logs", params={"limit": 2})
        assert first.status_code == 200
        assert len(first.json["items"]) == 2
        cursor = first.json["next_cursor"]
        assert cursor

        second = client.simulate_get("/v1/permission-logs", params={"limit": 2, "cursor": cursor})
        assert len(second.json["items"]) == 1
        assert second.json["next_cursor"] is None
        ids = [i["id"] for i in first.json["items"] + second.json["items"]]
        assert len(set(ids)) == 3

    def test_filter_by_key(self, client: TestClient) -> None:
        client.simulate_patch("/v1/users/alice/permissions/manageUsers", json={"value": True})
        client.simulate_patch("/v1/organizations/acme/permissions/viewQuotes", json={"value": False})

        result = client.simulate_get("/v1/permission-logs", params={"key": "viewQuotes"})
        items = result.json["items"]
        assert len(items) == 1
        assert items[0]["scope"] == "organization"
        assert items[0]["changed"] == [{"key": "viewQuotes", "from": None, "to": False}]

    def test_naive_from_is_treated_as_utc(self, client: TestClient) -> None:
        client.simulate_patch("/v1/users/alice/permissions/manageUsers", json={"value": True})

        result = client.simulate_get("/v1/permission-logs", params={"from": "2020-01-01T00:00:00"})
        assert result.status_code == 200
        assert len(result.json["items"]) == 1

    def test_naive_to_is_treated_as_utc(self, client: TestClient) -> None:
        client.simulate_patch("/v1/users/alice/permissions/manageUsers", json={"value": True})

        result = client.simulate_get("/v1/permission-logs", params={"to": "2020-01-01T00:00:00"})
        assert result.status_code == 200
        assert result.json["items"] == []

    def test_bad_cursor(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/permission-logs", params={"cursor": "garbage"})
        assert result.status_code == 400
        assert result.json["kind"] == "ValidationError"

    def test_bad_scope(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/permission-logs", params={"scope": "galaxy"})
        assert result.status_code == 400


class TestAuthentication:
    def test_rejected_token_is_unauthorized(self, anonymous_client: TestClient) -> None:
        result = anonymous_client.simulate_get("/v1/permission-logs")
        assert result.status_code == 401
