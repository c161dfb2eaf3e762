from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_fast_model: str = "gemini-2.5-flash"
    gemini_pro_model: str = "gemini-2.5-pro"

    fast_timeout_seconds: float = 30.0
    pro_timeout_seconds: float = 120.0
    fast_max_output_tokens: int = 8192
    pro_max_output_tokens: int = 16384
    max_retries: int = 3
    retry_base_delay_seconds: float = 1.0

    log_level: str = "INFO"


settings = Settings()


def get_settings() -> Settings:
    return settings
