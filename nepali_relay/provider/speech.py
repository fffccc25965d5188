from typing import Dict

import httpx

from ..settings import settings
from ..upstream import UpstreamStream, open_stream

AUDIO_MEDIA_TYPE = "audio/mpeg"


def build_tts_params(text: str) -> Dict[str, str]:
    # client=tw-ob is the variant that accepts calls without a browser session.
    return {
        "ie": "UTF-8",
        "tl": settings.target_language,
        "client": "tw-ob",
        "q": text,
    }


async def open_speech_stream(client: httpx.AsyncClient, text: str) -> UpstreamStream:
    return await open_stream(
        client=client,
        url=settings.tts_url,
        params=build_tts_params(text),
        name="tts",
    )
