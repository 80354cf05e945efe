from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    API_BASE_URL: str = "http://localhost:8000/v1"
    COMPANY_SLUG: str = ""
    HTTP_TIMEOUT_SECONDS: float = 10.0

    VIEWER_TIMEZONE: str = "UTC"
    VIEWER_LOCALE: str = "en"

    SLOT_INTERVAL_MINUTES: int = 15
    STRICT_SLOT_DURATION: bool = False

    DEFAULT_PHONE_COUNTRY_CODE: str = "+372"

    ENV: str = "dev"
    USE_MOCK_API: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
