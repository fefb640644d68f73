from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")
    PACT_BROKER_URL: str = "http://localhost:9292"
    PACT_BROKER_USERNAME: str = ""
    PACT_BROKER_PASSWORD: SecretStr = SecretStr("")
    PACT_BROKER_TOKEN: SecretStr = SecretStr("")
    REQUEST_TIMEOUT: float = 10.0
    LOG_LEVEL: str = "INFO"
    REFRESH_AFTER_WRITE: bool = False


__all__ = ["settings", "Settings"]

settings = Settings()
