"""
Markup API Endpoints.

Live preview for the post editor and plain text extraction.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from loguru import logger
from pydantic import BaseModel, Field

from agora.core.config import settings
from agora.modules.markup import MarkupService, get_markup_service

router = APIRouter()

EMPTY_PREVIEW = '<p class="text-base-content/50 italic">Nothing to preview</p>'

MAX_BYTES_PER_CHAR = 4


# ==================== Schemas ====================


class PlainTextRequest(BaseModel):
    """Markup to convert to plain text."""

    content: str
    max_length: int | None = Field(None, ge=1)


# ==================== Helpers ====================


def _reject_oversize(size: int, unit: str) -> None:
    logger.warning(
        f"Rejected markup of {size} {unit} (limit {settings.markup_max_input_chars} chars)"
    )
    raise HTTPException(
        status_code=413,
        detail=f"Markup exceeds {settings.markup_max_input_chars} characters",
    )


def _check_size(content: str) -> None:
    """Reject markup above the configured size limit."""
    if len(content) > settings.markup_max_input_chars:
        _reject_oversize(len(content), "chars")


async def _read_markup_body(request: Request) -> str:
    """
    Read a raw markup body, stopping as soon as it is certainly too large.

    A UTF-8 character takes at most MAX_BYTES_PER_CHAR bytes, so a body above
    that many bytes per allowed character is rejected before decoding.
    """
    byte_limit = settings.markup_max_input_chars * MAX_BYTES_PER_CHAR

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > byte_limit:
        _reject_oversize(int(declared), "bytes")

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > byte_limit:
            _reject_oversize(len(body), "bytes")

    content = body.decode("utf-8", errors="replace")
    _check_size(content)
    return content


# ==================== Endpoints ====================


@router.post("/preview", response_class=HTMLResponse)
async def preview_markup(
    request: Request,
    markup: MarkupService = Depends(get_markup_service),
) -> HTMLResponse:
    """
    Render a live preview of post markup.

    The request body is the raw markup (any content type); the response is
    an HTML fragment ready to swap into the editor's preview pane.
    """
    content = await _read_markup_body(request)

    if not content.strip():
        return HTMLResponse(EMPTY_PREVIEW)

    html = markup.to_html(content)
    return HTMLResponse(f'<div class="prose prose-sm max-w-none">{html}</div>')


@router.post("/plain")
async def plain_text(
    request: PlainTextRequest,
    markup: MarkupService = Depends(get_markup_service),
) -> dict[str, Any]:
    """Extract plain text and a short snippet from markup."""
    _check_size(request.content)

    return {
        "text": markup.to_plain_text(request.content),
        "snippet": markup.snippet(request.content, max_length=request.max_length),
    }
