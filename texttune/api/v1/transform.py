from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException, status

from texttune.api.deps import get_gemini_client
from texttune.core.errors import UpstreamError, ValidationError
from texttune.core.logging import get_logger
from texttune.schemas.common import ErrorResponse
from texttune.schemas.transform import GenerateRequest, GenerateResponse, RewriteRequest, RewriteResponse
from texttune.services.gemini import GeminiClient
from texttune.services.prompting import Mode
from texttune.services.transform import transform_text

router = APIRouter()
logger = get_logger(__name__)

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


async def _run(
    client: GeminiClient,
    mode: Mode,
    raw_input: str | None,
    body: RewriteRequest | GenerateRequest,
) -> str:
    try:
        return await transform_text(
            client,
            mode,
            raw_input=raw_input,
            max_word_limit=body.word_limit,
            min_word_limit=body.min_word_limit,
            tone=body.tone,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except UpstreamError as exc:
        logger.error("transform_failed", mode=mode.name.lower(), error_type=type(exc).__name__, error=exc.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=mode.failure_message(exc.message),
        ) from exc


@router.post("/rewrite", response_model=RewriteResponse, responses=_ERROR_RESPONSES)
async def rewrite_text(
    body: RewriteRequest | None = Body(default=None),
    client: GeminiClient = Depends(get_gemini_client),
):
    if body is None:
        body = RewriteRequest()
    rewritten = await _run(client, Mode.REWRITE, body.text, body)
    return RewriteResponse(rewrittenText=rewritten)


@router.post("/generate", response_model=GenerateResponse, responses=_ERROR_RESPONSES)
async def generate_text(
    body: GenerateRequest | None = Body(default=None),
    client: GeminiClient = Depends(get_gemini_client),
):
    if body is None:
        body = GenerateRequest()
    generated = await _run(client, Mode.GENERATE, body.prompt, body)
    return GenerateResponse(generatedText=generated)
