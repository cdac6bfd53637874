# /app/services/role_template_service.py

from typing import Any, Dict, List

from pydantic import ValidationError

from ..core.errors import ErrorKind, Result
from ..core.permissions import DEFAULT_ROLE_PERMISSIONS, DefaultRoles
from ..models.role_template_model import RoleScope, RoleTemplate, RoleTemplateSettings, RoleTemplateValidation

_DEFAULT_SCOPES = {
    DefaultRoles.SUPER_ADMIN: RoleScope.GLOBAL,
    DefaultRoles.ADMIN: RoleScope.GLOBAL,
    DefaultRoles.PROGRAM_COORDINATOR: RoleScope.CAMPUS,
    DefaultRoles.TEACHER: RoleScope.CLASS,
    DefaultRoles.STUDENT: RoleScope.CLASS,
    DefaultRoles.PARENT: RoleScope.CLASS,
}


def get_default_templates() -> List[RoleTemplate]:
    """One template per built-in role."""
    return [
        RoleTemplate(
            name=role.value,
            displayName=role.value.replace("_", " ").title(),
            description=f"Built-in {role.value.replace('_', ' ').lower()} role.",
            permissions=DEFAULT_ROLE_PERMISSIONS[role],
            settings=RoleTemplateSettings(
                scope=_DEFAULT_SCOPES[role],
                allowCustomization=role not in (DefaultRoles.SUPER_ADMIN, DefaultRoles.STUDENT, DefaultRoles.PARENT),
            ),
        )
        for role in DefaultRoles
    ]


def get_default_template(role: str) -> Result[RoleTemplate]:
    for template in get_default_templates():
        if template.name == role.upper():
            return Result.ok(template)
    return Result.fail(ErrorKind.NOT_FOUND, f"No built-in role named {role}")


def get_template_schema() -> Dict[str, Any]:
    return RoleTemplate.model_json_schema()


def validate_template(payload: Dict[str, Any]) -> RoleTemplateValidation:
    """Checks an arbitrary object against the role template contract."""
    try:
        RoleTemplate.model_validate(payload)
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()]
        return RoleTemplateValidation(valid=False, errors=errors)
    return RoleTemplateValidation(valid=True)
