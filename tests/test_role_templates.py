# /tests/test_role_templates.py

import pytest

from app.core.errors import ErrorKind
from app.core.permissions import DefaultRoles
from app.services import role_template_service


@pytest.fixture
def valid_template():
    return {
        "name": "LAB_ASSISTANT",
        "displayName": "Lab Assistant",
        "permissions": ["classes:view", "attendance:mark"],
        "settings": {"scope": "CLASS", "allowCustomization": True},
    }


def test_every_default_role_has_a_template():
    names = [t.name for t in role_template_service.get_default_templates()]

    assert names == [role.value for role in DefaultRoles]


def test_default_templates_validate_against_the_schema():
    for template in role_template_service.get_default_templates():
        check = role_template_service.validate_template(template.model_dump(mode="json"))
        assert check.valid, check.errors


def test_lookup_is_case_insensitive():
    result = role_template_service.get_default_template("teacher")

    assert result.value.settings.scope.value == "CLASS"


def test_unknown_role_is_not_found():
    assert role_template_service.get_default_template("janitor").error.kind is ErrorKind.NOT_FOUND


def test_schema_describes_the_template():
    schema = role_template_service.get_template_schema()

    assert schema["title"] == "RoleTemplate"
    assert set(schema["required"]) == {"name", "displayName", "permissions"}
    assert "settings" in schema["properties"]


def test_validate_accepts_a_custom_template(valid_template):
    assert role_template_service.validate_template(valid_template).valid


@pytest.mark.parametrize("change, field", [
    ({"name": "lab assistant"}, "name"),
    ({"permissions": []}, "permissions"),
    ({"permissions": ["classes:view", "classes:view"]}, "permissions"),
    ({"permissions": ["classes:destroy"]}, "permissions"),
    ({"settings": {"scope": "PLANET"}}, "settings"),
    ({"colour": "blue"}, "colour"),
])
def test_validate_reports_invalid_templates(valid_template, change, field):
    check = role_template_service.validate_template({**valid_template, **change})

    assert not check.valid
    assert any(err.startswith(field) for err in check.errors)


# --- HTTP ---

def test_role_template_endpoints(anonymous_client, valid_template):
    listed = anonymous_client.get("/api/role-templates")
    schema = anonymous_client.get("/api/role-templates/schema")
    valid = anonymous_client.post("/api/role-templates/validate", json=valid_template)
    invalid = anonymous_client.post("/api/role-templates/validate", json={"name": "x"})

    assert len(listed.json()) == len(DefaultRoles)
    assert schema.json()["title"] == "RoleTemplate"
    assert valid.json() == {"valid": True, "errors": []}
    assert invalid.status_code == 200
    assert invalid.json()["valid"] is False
    assert anonymous_client.get("/api/role-templates/admin").json()["name"] == "ADMIN"
    assert anonymous_client.get("/api/role-templates/janitor").status_code == 404
