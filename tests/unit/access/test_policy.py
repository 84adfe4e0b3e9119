"""Tests for access table evaluation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from rage.access import DEFAULT_ACCESS_TABLE, AccessPolicy, AccessTable, default_policy


@pytest.fixture
def policy() -> AccessPolicy:
    return default_policy()


class TestDefaultTable:
    """Tests against the built-in analytics backend table."""

    def test_student_may_update_class(self, policy: AccessPolicy) -> None:
        """student PUT /classes/123 matches /classes/:classId."""
        assert policy.is_allowed("student", "/classes/123", "put")

    def test_student_may_not_delete_class(self, policy: AccessPolicy) -> None:
        """student DELETE /classes/123 is denied."""
        assert not policy.is_allowed("student", "/classes/123", "delete")

    def test_verbs_are_case_insensitive(self, policy: AccessPolicy) -> None:
        assert policy.is_allowed("student", "/classes/123", "PUT")

    def test_wildcard_permission_grants_every_verb(self, policy: AccessPolicy) -> None:
        """teacher has * on /kibana/* and /classes/:classId."""
        for verb in ["get", "post", "put", "delete"]:
            assert policy.is_allowed("teacher", "/kibana/visualization/list", verb)
            assert policy.is_allowed("teacher", "/classes/c1", verb)

    def test_allowed_permissions_merges_rules(self, policy: AccessPolicy) -> None:
        """Several matching rules contribute their verbs."""
        assert policy.allowed_permissions("teacher", "/courses") == {"get", "post"}
        assert policy.allowed_permissions("student", "/activities/a1") == {"get", "put"}

    def test_developer_game_permissions(self, policy: AccessPolicy) -> None:
        """developers manage games but only read classes."""
        assert policy.is_allowed("developer", "/games/g1/versions/v1", "delete")
        assert policy.is_allowed("developer", "/games", "post")
        assert policy.is_allowed("developer", "/classes/c1", "get")
        assert not policy.is_allowed("developer", "/classes/c1", "put")

    def test_teaching_assistant_read_only(self, policy: AccessPolicy) -> None:
        assert policy.is_allowed("teachingassistant", "/activities/a1/results", "get")
        assert not policy.is_allowed("teachingassistant", "/activities/a1/results", "post")

    def test_any_of_several_roles(self, policy: AccessPolicy) -> None:
        """A user holding several roles gets the union."""
        assert policy.is_allowed(["student", "developer"], "/games", "post")
        assert not policy.is_allowed(["student"], "/games", "post")

    def test_unknown_role_denied(self, policy: AccessPolicy) -> None:
        assert not policy.is_allowed("admin", "/games/public", "get")
        assert policy.allowed_permissions("admin", "/games/public") == set()

    def test_anonymous_routes(self, policy: AccessPolicy) -> None:
        """Collector and public LTI routes need no authorization."""
        assert policy.is_anonymous("/collector/start/abc123")
        assert policy.is_anonymous("/games/g1/xapi/v1")
        assert policy.is_anonymous("/env")
        assert not policy.is_anonymous("/games/g1")

    def test_autoroles(self, policy: AccessPolicy) -> None:
        assert policy.is_autorole("teacher")
        assert not policy.is_autorole("admin")

    def test_roles_listed(self, policy: AccessPolicy) -> None:
        assert policy.roles() == ["student", "teacher", "teachingassistant", "developer"]

    def test_default_policy_cached(self) -> None:
        assert default_policy() is default_policy()
        assert default_policy().table is DEFAULT_ACCESS_TABLE


class TestCustomTables:
    """Tests for tables built from data."""

    def test_roles_accept_string_or_list(self) -> None:
        """An entry can grant the same rules to several roles."""
        table = AccessTable.model_validate({
            "roles": [
                {
                    "roles": ["teacher", "developer"],
                    "allows": [{"resources": ["/reports/:id"], "permissions": ["GET"]}],
                },
            ],
        })
        policy = AccessPolicy(table)
        assert policy.is_allowed("developer", "/reports/r1", "get")
        assert policy.is_allowed("teacher", "/reports/r1", "get")

    def test_relative_resource_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AccessTable.model_validate({
                "roles": [
                    {"roles": "student", "allows": [{"resources": ["games"], "permissions": ["get"]}]},
                ],
            })

    def test_from_toml(self, tmp_path: Path) -> None:
        """A table can be loaded from TOML."""
        table_file = tmp_path / "roles.toml"
        table_file.write_text(
            'anonymous = ["/health"]\n'
            'autoroles = ["student"]\n'
            "\n"
            "[[roles]]\n"
            'roles = "student"\n'
            "\n"
            "[[roles.allows]]\n"
            'resources = ["/classes/:classId"]\n'
            'permissions = ["get", "put"]\n'
        )

        policy = AccessPolicy.from_toml(table_file)

        assert policy.is_allowed("student", "/classes/123", "put")
        assert not policy.is_allowed("student", "/classes/123", "delete")
        assert policy.is_anonymous("/health")
        assert policy.is_autorole("student")
