# /app/core/deps.py

"""
FastAPI dependencies that build the per-request context.

Handlers never reach for ambient session state: the caller identity and the
store handle travel together in a `RequestContext` that is passed explicitly
to every procedure.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from . import config
from .errors import ErrorKind
from .http_errors import ERROR_KIND_HEADER
from ..db.models.user_models import User
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    db: DatabaseService
    user: Optional[User] = None
    # Who issued the call, e.g. "rsc" for the server-side page renderer.
    source: Optional[str] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user is not None else None


def get_request_context(
    request: Request,
    db: DatabaseService = Depends(get_db_service),
) -> RequestContext:
    """Resolves the caller from the identity header. Unknown or missing IDs give an anonymous context."""
    user = None
    user_id = request.headers.get(config.USER_HEADER)
    if user_id:
        user = db.get_user_by_id(user_id)
        if user is None:
            logger.warning("Ignoring unknown caller id %s", user_id)
    return RequestContext(db=db, user=user, source=request.headers.get(config.SOURCE_HEADER))


def get_protected_context(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
    """Same as `get_request_context`, but answers 401 when there is no caller."""
    if ctx.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You must be logged in to access this resource",
            headers={ERROR_KIND_HEADER: ErrorKind.UNAUTHORIZED.value},
        )
    return ctx
