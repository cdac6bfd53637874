# /app/routers/pages_router.py

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..pages.api_client import ProcedureClient, get_procedure_client
from ..pages.teacher_edit_page import load_edit_teacher_page

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/{role}/teacher/{teacher_id}/edit", response_class=HTMLResponse, summary="Edit Teacher Page")
async def edit_teacher_page(
    request: Request,
    role: str,
    teacher_id: str,
    client: ProcedureClient = Depends(get_procedure_client),
):
    """
    Renders the edit form. Not-found and load failures are rendered inline
    with a 200 so the dashboard shell stays intact.
    """
    page = await load_edit_teacher_page(client, role=role, teacher_id=teacher_id)
    return templates.TemplateResponse(
        request,
        "teacher_edit.html",
        {"page": page},
    )
