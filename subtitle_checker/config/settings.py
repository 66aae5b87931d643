from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    subtitles_dir: Path = Path("subtitles")
    state_file: Path = Path(".subtitle-checker-state.json")
    subtitle_extension: str = ".vtt"
    backup_suffix: str = ".backup"

    max_concurrency: int = Field(default=3, ge=1)

    analysis_provider: str = "openrouter"
    analysis_temperature: float = 0.1
    analysis_max_tokens: int = 2000
    analysis_max_retries: int = Field(default=0, ge=0)

    openrouter_api_key: str = ""
    openrouter_model_name: str = "deepseek/deepseek-r1-0528-qwen3-8b"
    openrouter_timeout_seconds: int = 30

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 30

    openai_compatible_base_url: str = ""
    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""
    openai_compatible_timeout_seconds: int = 30

    ollama_base_url: str = "http://localhost:11434/v1"
    deepseek_model: str = "deepseek-chat:7b"
    ollama_timeout_seconds: int = 60
    ollama_max_text_chars: int = 2000
