"""Rate-limited meal suggestion endpoint."""

from __future__ import annotations

from typing import Any
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from protein_tracker.api.dependencies import (
    caller_id,
    get_container,
    optional_user,
    user_timezone,
)

router = APIRouter(prefix="/api", tags=["suggestion"])


@router.post("/suggestion")
async def suggestion(
    request: Request,
    payload: dict[str, Any] = Body(...),
    user_id: UUID | None = Depends(optional_user),
    timezone_name: str = Depends(user_timezone),
) -> dict[str, str]:
    """Return a short AI suggestion for closing the protein gap.

    Signed-in callers also get the suggestion cached on their current day, so
    ``GET /api/today`` shows it until the next entry is added.
    """
    container = get_container(request)
    text = await container.suggestion_service.suggest(
        caller_id(request),
        payload.get("remainingProtein"),
        payload.get("todayEntries"),
    )
    if user_id is not None:
        container.tracker_service.remember_suggestion(user_id, timezone_name, text)
    return {"suggestion": text}


@router.api_route(
    "/suggestion",
    methods=["GET", "HEAD", "OPTIONS", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def suggestion_method_not_allowed() -> JSONResponse:
    """Reject every method except POST."""
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
        headers={"Allow": "POST"},
    )
