import httpx
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.background import BackgroundTask

from .deps import get_http_client
from .errors import server_error
from .logging_config import get_logger
from .provider import gemini_sdk, input_tools, speech, translate
from .romanization import normalize_romanized
from .schemas import (
    ResultResponse,
    SuggestRequest,
    SuggestResponse,
    TextRequest,
    TransliterateRequest,
)
from .settings import settings
from .upstream import UpstreamError, UpstreamShapeError

logger = get_logger("api")

router = APIRouter(prefix="/api", tags=["relay"])


@router.post("/transliterate", response_model=ResultResponse)
async def transliterate(
    payload: TransliterateRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    text = normalize_romanized(payload.text or "")
    if not text:
        return ResultResponse(result="")

    try:
        if payload.engine == "inputtools":
            result = await input_tools.transliterate_text(client, text)
        else:
            result = await translate.translate_to_nepali(client, text)
    except UpstreamShapeError as exc:
        logger.warning("transliterate: unexpected upstream shape: %s", exc)
        return server_error(translate.TRANSLATE_SHAPE_ERROR)
    except UpstreamError as exc:
        logger.error("transliterate: proxy error: %s", exc)
        return server_error("Server Error", details=str(exc))

    return ResultResponse(result=result)


@router.post("/suggest", response_model=SuggestResponse)
async def suggest(
    payload: SuggestRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    text = normalize_romanized(payload.text or "")
    if not text:
        return SuggestResponse()

    try:
        candidates = await input_tools.suggest(client, text, num=payload.num)
    except UpstreamError as exc:
        logger.error("suggest: proxy error: %s", exc)
        return server_error("Server Error", details=str(exc))

    return SuggestResponse(suggestions=candidates[: payload.num])


@router.post("/unicode", response_model=ResultResponse)
async def to_unicode(payload: TextRequest):
    text = (payload.text or "").strip()
    if not text:
        return ResultResponse(result="")

    if not settings.gemini_configured:
        return server_error(gemini_sdk.MODEL_NOT_INITIALIZED)

    try:
        result = await gemini_sdk.generate_nepali(text)
    except gemini_sdk.GeminiError as exc:
        logger.error("unicode: Gemini error: %s", exc)
        return server_error("AI Generation Failed", details=str(exc))

    return ResultResponse(result=result)


@router.get("/tts")
async def tts(
    text: str | None = Query(default=None),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    text = (text or "").strip()
    if not text:
        return PlainTextResponse(
            "Missing text parameter", status_code=status.HTTP_400_BAD_REQUEST
        )
    if len(text) > settings.tts_max_chars:
        return PlainTextResponse(
            f"Text too long (max {settings.tts_max_chars} characters)",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        upstream = await speech.open_speech_stream(client, text)
    except UpstreamError as exc:
        logger.error("tts: proxy error: %s", exc)
        return PlainTextResponse(
            "Error fetching audio",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return StreamingResponse(
        upstream.iter_bytes(),
        media_type=speech.AUDIO_MEDIA_TYPE,
        background=BackgroundTask(upstream.aclose),
    )
