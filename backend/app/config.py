"""Application configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "LingoRead"
    debug: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    frontend_port: int = 3000

    # Document store
    database_url: str = "sqlite+aiosqlite:///./lingoread.db"

    # Blob store (book JSON bodies and raw uploads)
    storage_dir: Path = Path(__file__).parent.parent.parent / "data" / "storage"
    # Used to build download URLs handed back to clients
    public_base_url: str = "http://localhost:8000"
    blob_signing_key: str = "change-me"

    # Upload limits
    max_upload_size_mb: int = 50

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    # Authentication (optional - for network-exposed deployments)
    # Set API_AUTH_TOKEN to enable authentication on sensitive endpoints
    api_auth_token: Optional[str] = None
    # If True, the language proxies also require the token
    require_auth_all: bool = False

    # Word explanation / translation (Google)
    google_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    google_translate_url: str = "https://translation.googleapis.com/language/translate/v2"

    # Speech service (Azure)
    azure_speech_key: Optional[str] = None
    azure_speech_region: str = "eastus"

    # Dictionary lookups
    wiktionary_url: str = "https://en.wiktionary.org/api/rest_v1/page/definition"

    # Video metadata for transcript imports
    youtube_oembed_url: str = "https://www.youtube.com/oembed"

    # Timeout for every outbound call (seconds)
    upstream_timeout: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Build CORS origins based on frontend port
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
            ]


settings = Settings()
