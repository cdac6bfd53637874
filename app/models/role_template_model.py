# /app/models/role_template_model.py

"""
The role template configuration object. Its JSON Schema (served by the role
templates router) is the contract for anything that stores or edits role
templates outside this service.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.permissions import Permission


class RoleScope(str, Enum):
    GLOBAL = "GLOBAL"
    CAMPUS = "CAMPUS"
    CLASS = "CLASS"


class RoleTemplateSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    scope: RoleScope = Field(default=RoleScope.GLOBAL, description="Where the role's permissions apply.")
    allowCustomization: bool = Field(default=False, description="Whether assignees may get a tailored copy.")
    allowPermissionOverride: bool = Field(default=False, description="Whether single permissions may be toggled per assignment.")


class RoleTemplate(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"title": "RoleTemplate", "description": "Role template configuration."},
    )

    name: str = Field(..., min_length=1, pattern=r"^[A-Z][A-Z0-9_]*$", description="Stable identifier, e.g. TEACHER.")
    displayName: str = Field(..., min_length=1)
    description: Optional[str] = None
    permissions: List[Permission] = Field(..., min_length=1)
    settings: RoleTemplateSettings = Field(default_factory=RoleTemplateSettings)

    @field_validator("permissions")
    @classmethod
    def permissions_must_be_unique(cls, v):
        if len(set(v)) != len(v):
            raise ValueError("Permissions must not repeat.")
        return v


class RoleTemplateValidation(BaseModel):
    valid: bool
    errors: List[str] = []
