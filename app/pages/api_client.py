# /app/pages/api_client.py

"""
The client server-side pages use to call the procedure endpoints.

It forwards the incoming request's headers (so the caller identity travels
with the call), tags every call with `x-source: rsc`, and logs each call in
debug and every failed call at warning level.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx
from fastapi import Request

from ..core import config
from ..core.http_errors import ERROR_KIND_HEADER

logger = logging.getLogger(__name__)

# Hop-by-hop or body-specific headers that must not be forwarded.
_DROPPED_HEADERS = {"host", "content-length", "content-type", "connection", "accept-encoding", "transfer-encoding"}


class ProcedureCallError(Exception):
    """A procedure answered with an error status."""

    def __init__(self, message: str, status_code: int, kind: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.kind = kind


def forwarded_headers(incoming: Mapping[str, str]) -> Dict[str, str]:
    headers = {k: v for k, v in incoming.items() if k.lower() not in _DROPPED_HEADERS}
    headers[config.SOURCE_HEADER] = "rsc"
    return headers


class ProcedureClient:
    def __init__(
        self,
        base_url: str = config.APP_URL,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = config.PAGE_FETCH_TIMEOUT,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=forwarded_headers(headers or {}),
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "ProcedureClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def query(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GETs a procedure and returns its decoded JSON body."""
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("-> %s %s", path, clean_params)
        response = await self._client.get(path, params=clean_params)
        if response.is_error:
            message = _error_message(response)
            logger.warning("<- %s failed with %s: %s", path, response.status_code, message)
            raise ProcedureCallError(message, response.status_code, response.headers.get(ERROR_KIND_HEADER))
        logger.debug("<- %s %s", path, response.status_code)
        return response.json()

    # --- Procedure Shortcuts ---

    async def get_teacher(self, teacher_id: str) -> Optional[Dict]:
        return await self.query(f"/api/teachers/{teacher_id}")

    async def search_subjects(self, **filters) -> List[Dict]:
        return await self.query("/api/subjects/search", filters)

    async def search_classes(self, **filters) -> List[Dict]:
        return await self.query("/api/classes/search", filters)


def _error_message(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, str) and detail:
        return detail
    if detail:
        return str(detail)
    return f"Request failed with status {response.status_code}"


async def get_procedure_client(request: Request):
    """FastAPI dependency: a client bound to the current request's headers."""
    async with ProcedureClient(headers=request.headers) as client:
        yield client
