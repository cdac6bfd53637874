# /app/routers/role_templates_router.py

from typing import Any, Dict, List

from fastapi import APIRouter, Body

from ..core.http_errors import unwrap_or_raise
from ..models.role_template_model import RoleTemplate, RoleTemplateValidation
from ..services import role_template_service

router = APIRouter()


@router.get("", response_model=List[RoleTemplate], summary="List the Built-in Role Templates")
def list_default_templates():
    return role_template_service.get_default_templates()


@router.get("/schema", summary="JSON Schema of a Role Template")
def get_template_schema() -> Dict[str, Any]:
    return role_template_service.get_template_schema()


@router.post("/validate", response_model=RoleTemplateValidation, summary="Validate a Role Template Object")
def validate_template(payload: Dict[str, Any] = Body(...)):
    """Always answers 200; the body says whether the object fits the contract."""
    return role_template_service.validate_template(payload)


@router.get("/{role}", response_model=RoleTemplate, summary="Get a Built-in Role Template")
def get_default_template(role: str):
    return unwrap_or_raise(role_template_service.get_default_template(role))
