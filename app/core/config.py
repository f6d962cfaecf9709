from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "Hera's Nails and Lashes"
    BUSINESS_TIMEZONE: str = "Europe/Madrid"
    DEFAULT_LANGUAGE: str = "en"  # "en" | "es" | "auto"

    KNOWLEDGE_DATA_DIR: str | None = None

    TWILIO_ACCOUNT_SID: str | None = None
    TWILIO_AUTH_TOKEN: str | None = None
    TWILIO_VOICE: str = "alice"
    PUBLIC_BASE_URL: str | None = None

    CAL_COM_API_KEY: str | None = None
    CAL_COM_CALENDAR_ID: str | None = None
    CAL_COM_BASE_URL: str = "https://api.cal.com/v1"
    APPOINTMENT_DURATION_MINUTES: int = 60
    OPENING_HOUR: int = 10
    CLOSING_HOUR: int = 18


settings = Settings()
