from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    WEBHOOK_URL: str = "https://n8n-latest-sgyi.onrender.com/webhook-test/book-appointment"
    WEBHOOK_ENABLED: bool = False
    WEBHOOK_TIMEOUT_SECONDS: float = 10.0

    AGENT_REPLY_DELAY_SECONDS: float = 1.5
    SUBMISSION_RESOLVE_SECONDS: float = 4.0
    SUBMISSION_DISMISS_SECONDS: float = 4.0


settings = Settings()
