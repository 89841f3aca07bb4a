"""
Integration API
===============

Endpoints used by the loader script embedded on customer websites.

Endpoints:
- POST /api/integration/variants - resolve variants for the current page view
- GET /api/integration/widget.js - the loader script itself
"""

import json
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from api.dependencies import get_website_repository
from config import get_settings
from middleware.auth import ApiKeyPrincipal, get_api_key_principal
from models.api.integration import ContextPayload, ErrorResponse, VariantsResponse
from repositories import WebsiteRepository
from services.errors import AuthenticationError
from services.variant_resolver import resolve_website

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/integration", tags=["integration"])

WIDGET_PATH = Path(__file__).resolve().parent.parent / "static" / "widget.js"


async def _read_context(request: Request) -> ContextPayload:
    """
    Parse the context body leniently.

    An empty or non-object body is an empty context rather than an error:
    the loader should still get default content.
    """
    raw = await request.body()
    if not raw:
        return ContextPayload()
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Integration request with unparseable context body")
        return ContextPayload()
    if not isinstance(data, dict):
        return ContextPayload()
    return ContextPayload.model_validate(data)


@router.post(
    "/variants",
    response_model=VariantsResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def serve_variants(
    request: Request,
    principal: ApiKeyPrincipal = Depends(get_api_key_principal),
    websites: WebsiteRepository = Depends(get_website_repository),
):
    """
    Resolve which content each tracked element should show.

    Requires the X-API-Key header of an active website.

    Returns:
        variants: [{selector, content}] in element order
    """
    try:
        website = await websites.find_active_by_api_key(principal.api_key)
        if website is None:
            raise AuthenticationError()

        payload = await _read_context(request)
        resolved = resolve_website(website, payload.to_context())

        return {"variants": [r.to_dict() for r in resolved]}

    except AuthenticationError:
        raise
    except Exception:
        logger.exception("Error serving variants")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


@router.get("/widget.js")
async def widget_script():
    """Serve the embeddable loader script"""
    settings = get_settings()
    script = WIDGET_PATH.read_text(encoding="utf-8")
    return Response(
        content=script,
        media_type="application/javascript",
        headers={"Cache-Control": f"public, max-age={settings.widget_cache_seconds}"},
    )
