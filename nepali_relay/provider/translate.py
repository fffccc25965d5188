from typing import Any, Dict

import httpx

from ..logging_config import get_logger
from ..settings import settings
from ..upstream import UpstreamShapeError, fetch_json

logger = get_logger("provider.translate")

TRANSLATE_SHAPE_ERROR = "Failed to fetch from Google"


def build_translate_params(text: str) -> Dict[str, str]:
    return {
        "client": "gtx",
        "sl": settings.source_language,
        "tl": settings.target_language,
        "dt": "t",
        "q": text,
    }


def extract_translation(data: Any) -> str:
    """
    Join the translated segments of a GTX response.

    The response looks like [[["translated", "original", ...], ...], ...];
    one segment per sentence. Raises UpstreamShapeError when the outer shape is
    missing.
    """
    if not isinstance(data, list) or not data or not data[0]:
        raise UpstreamShapeError(TRANSLATE_SHAPE_ERROR)
    segments = data[0]
    if not isinstance(segments, list):
        raise UpstreamShapeError(TRANSLATE_SHAPE_ERROR)

    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, list) and segment and isinstance(segment[0], str):
            parts.append(segment[0])
    return "".join(parts)


async def translate_to_nepali(client: httpx.AsyncClient, text: str) -> str:
    data = await fetch_json(
        client=client,
        url=settings.translate_url,
        params=build_translate_params(text),
        name="translate",
    )
    result = extract_translation(data)
    logger.debug(
        "%d chars in, %d chars out",
        len(text),
        len(result),
        extra={"upstream": "translate"},
    )
    return result
