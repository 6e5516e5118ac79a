from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "MySavings API"
    # Comma-separated origins for CORS. Use "*" only for local/demo environments.
    cors_allow_origins: str = "*"
    log_level: str = "INFO"
    currency_symbol: str = "₹"
    # fixed delay before the simulated assistant answers a chat message
    chat_reply_delay_seconds: float = 1.5
    profile_name: str = "Saver"
    profile_email: str = "saver@example.com"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
