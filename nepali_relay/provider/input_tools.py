from typing import Any, Dict, List

import httpx

from ..settings import settings
from ..upstream import UpstreamShapeError, fetch_json

DEFAULT_SUGGESTIONS = 5
MAX_SUGGESTIONS = 10


def build_input_tools_params(text: str, num: int) -> Dict[str, Any]:
    return {
        "text": text,
        "itc": settings.input_tools_itc,
        "num": num,
        "cp": 0,
        "cs": 1,
        "ie": "utf-8",
        "oe": "utf-8",
        "app": "demopage",
    }


def extract_candidates(data: Any) -> List[str]:
    """
    Pull the candidate list out of an Input Tools response.

    Expected shape: ["SUCCESS", [[input, [candidate, ...], ...], ...]].
    Only the first entry is used since the whole text is sent as one request.
    """
    if not isinstance(data, list) or not data or data[0] != "SUCCESS":
        status = data[0] if isinstance(data, list) and data else None
        raise UpstreamShapeError(f"Input tools request failed: {status!r}")
    if len(data) < 2 or not isinstance(data[1], list) or not data[1]:
        return []

    entry = data[1][0]
    if not isinstance(entry, list) or len(entry) < 2 or not isinstance(entry[1], list):
        return []
    return [item for item in entry[1] if isinstance(item, str)]


async def suggest(
    client: httpx.AsyncClient,
    text: str,
    num: int = DEFAULT_SUGGESTIONS,
) -> List[str]:
    data = await fetch_json(
        client=client,
        url=settings.input_tools_url,
        params=build_input_tools_params(text, num),
        name="input_tools",
    )
    return extract_candidates(data)


async def transliterate_text(client: httpx.AsyncClient, text: str) -> str:
    """
    Transliterate the whole text with the top candidate, or echo it back
    when the input tool has nothing to offer.
    """
    candidates = await suggest(client, text, num=1)
    if not candidates:
        return text
    return candidates[0]
