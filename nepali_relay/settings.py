from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read from OS env and optional .env file in project root.
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, alias="PORT")

    # HTTP timeouts for every upstream call, in seconds.
    upstream_timeout: float = Field(30.0, alias="UPSTREAM_TIMEOUT")

    # Upstream endpoints.
    translate_url: str = Field(
        "https://translate.googleapis.com/translate_a/single",
        alias="TRANSLATE_URL",
        description="Google Translate GTX endpoint used for romanized -> Nepali",
    )
    input_tools_url: str = Field(
        "https://inputtools.google.com/request",
        alias="INPUT_TOOLS_URL",
        description="Google Input Tools endpoint returning transliteration candidates",
    )
    tts_url: str = Field(
        "https://translate.google.com/translate_tts",
        alias="TTS_URL",
        description="Google Translate speech endpoint returning audio/mpeg",
    )

    source_language: str = Field("en", alias="SOURCE_LANGUAGE")
    target_language: str = Field("ne", alias="TARGET_LANGUAGE")
    input_tools_itc: str = Field(
        "ne-t-i0-und",
        alias="INPUT_TOOLS_ITC",
        description="Input tool code, e.g. 'ne-t-i0-und' for Nepali transliteration",
    )

    # Google Translate speech rejects long inputs, so we refuse them early.
    tts_max_chars: int = Field(200, alias="TTS_MAX_CHARS", ge=1)

    # Generative model used by /api/unicode.
    gemini_api_key: Optional[str] = Field(
        default=None,
        alias="GEMINI_API_KEY",
        description="API key for the Gemini model; /api/unicode is disabled when unset",
    )
    gemini_model: str = Field("gemini-1.5-flash", alias="GEMINI_MODEL")

    # Browser-mimic headers for upstream.
    mask_as_browser: bool = Field(True, alias="MASK_AS_BROWSER")
    mask_user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36",
        alias="MASK_USER_AGENT",
    )
    mask_origin: Optional[str] = Field(None, alias="MASK_ORIGIN")
    mask_referer: Optional[str] = Field(None, alias="MASK_REFERER")

    cors_allow_origins: str = Field(
        "*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated allowed origins; '*' allows every origin",
    )

    # Frontend bundle served next to the API, when present.
    static_dir: str = Field("public", alias="STATIC_DIR")

    log_level: str = Field(
        "INFO",
        alias="LOG_LEVEL",
        description="Application log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_timezone: Optional[str] = Field(
        default=None,
        alias="LOG_TIMEZONE",
        description="Timezone name for log timestamps, e.g. 'Asia/Kathmandu'. Defaults to system local time.",
    )
    log_dir: str = Field("logs", alias="LOG_DIR")

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    def get_cors_origins(self) -> List[str]:
        """
        Return allowed CORS origins from CORS_ALLOW_ORIGINS.
        Whitespace is stripped and empty entries are ignored.
        """
        if not self.cors_allow_origins or self.cors_allow_origins.strip() == "*":
            return ["*"]
        return [
            item.strip()
            for item in self.cors_allow_origins.split(",")
            if item.strip()
        ]


settings = Settings()  # Reads from environment if available


def build_upstream_headers() -> Dict[str, str]:
    """
    Build headers for calling upstream, optionally mimicking a browser page.

    The Google endpoints used here are meant for browsers; a browser
    User-Agent keeps them from rejecting server-side calls.
    """
    headers: Dict[str, str] = {
        "Accept": "*/*",
    }

    if settings.mask_as_browser:
        headers["User-Agent"] = settings.mask_user_agent
        if settings.mask_origin:
            headers["Origin"] = settings.mask_origin
        if settings.mask_referer:
            headers["Referer"] = settings.mask_referer

    return headers
