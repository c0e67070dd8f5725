from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    environment: str = "development"
    log_level: str = "INFO"

    # Rechat API
    rechat_api_base: str = "https://api.rechat.com"

    # Form defaults (demo channel doubles as the webhook credential)
    default_lead_channel: str = "54a57918-ad9b-4adb-a35a-9232bf78d734"
    default_tag: str = "website_inquiry"
    default_lead_source: str = "real_estate_website"

    # Recent-leads history, persisted as a small JSON file
    history_file: str = ".lead_history.json"
    history_limit: int = 10

    # Empty means the openapi.yaml shipped in app/static
    openapi_spec_path: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from .env (called on module reload by uvicorn --reload)."""
    global _settings
    _settings = None
    return get_settings()
