from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Remote job/application store
    api_base_url: str = "http://localhost:4000/api"
    request_timeout: float = 10.0  # seconds, applied to every store call

    # Server
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "INFO"

    # Views
    page_size: int = 12
    recent_applications_limit: int = 2  # shown on each company card

    # Store-side search
    search_debounce_ms: int = 500

    # Form checks
    max_notes_length: int = 5000

    model_config = {"env_prefix": "RECRUIT_ADMIN_"}


settings = Settings()
