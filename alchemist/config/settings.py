from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    ai_provider: str = "gemini"
    ai_temperature: float = 0.0

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-2.5-flash"
    gemini_timeout_seconds: int = 120

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 120
    openai_compatible_base_url: str = ""

    translation_max_concurrency: int = 0

    output_dir: str = "."
