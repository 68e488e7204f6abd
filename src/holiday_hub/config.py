from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Remote holiday API (Calendarific), used for the countries registered in mapping.SOURCE_CODES
    CALENDARIFIC_API_KEY: str = ""
    CALENDARIFIC_BASE_URL: str = "https://calendarific.com/api/v2"

    # Language of rule-based holiday names, when the country supports it
    HOLIDAY_LANGUAGE: str = "en_US"

    # CLI
    LOG_LEVEL: str = "WARNING"


settings = Settings()
