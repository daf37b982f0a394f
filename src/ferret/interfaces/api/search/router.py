from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import Response

from ferret.domain.entities import Query
from ferret.domain.exceptions import SearchError
from ferret.infrastructure.common import parse_limit, parse_page, parse_timeout
from ferret.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["search"])


def _render(request: Request, payload: Any, *, status_code: int = 200) -> Response:
    """Serialize *payload* as JSON, or JSONP when ``callback`` is given."""
    if request.query_params.get("output") == "pretty":
        body = json.dumps(payload, indent=2, ensure_ascii=False)
    else:
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)

    callback = request.query_params.get("callback")
    if callback:
        return Response(
            content=f"{callback}({body})",
            media_type="application/javascript",
            status_code=status_code,
        )
    return Response(content=body, media_type="application/json", status_code=status_code)


def _error(request: Request, status_code: int, message: str) -> Response:
    return _render(
        request,
        {
            "statusCode": status_code,
            "error": HTTPStatus(status_code).phrase,
            "message": message,
        },
        status_code=status_code,
    )


@router.get("/search")
async def search(request: Request) -> Response:
    state = cast(AppState, request.app.state)
    params = request.query_params

    query = Query(
        provider=params.get("provider", ""),
        keyword=params.get("keyword", ""),
        page=parse_page(params.get("page")),
        limit=parse_limit(params.get("limit")),
        timeout=parse_timeout(params.get("timeout"), state.config.search_timeout),
    )

    if query.provider not in {p.name for p in state.ui_providers}:
        return _error(request, 400, "invalid provider")

    try:
        await state.search_uc.execute(query)
    except SearchError as e:
        return _error(request, query.http_status or e.http_status, str(e))

    return _render(request, [r.to_dict() for r in query.results])


@router.get("/providers")
async def providers(request: Request) -> Response:
    state = cast(AppState, request.app.state)
    return _render(
        request, [{"name": p.name, "title": p.title} for p in state.ui_providers]
    )
