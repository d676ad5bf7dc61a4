from functools import lru_cache

from pydantic_settings import BaseSettings

DEFAULT_BEARER_TOKEN = "your-secret-token"


class Settings(BaseSettings):
    PROJECT_NAME: str = "Webhook Sink"
    VERSION: str = "1.0.0"

    PORT: int = 3000
    BEARER_TOKEN: str = DEFAULT_BEARER_TOKEN
    DATA_DIR: str = "/app/data"
    MAX_BODY_BYTES: int = 10 * 1024 * 1024
    REQUIRE_DATA_DIR: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True

    @property
    def uses_default_token(self) -> bool:
        return self.BEARER_TOKEN == DEFAULT_BEARER_TOKEN

    def redacted_token(self) -> str:
        """Masked token for logs: keeps at most the last two characters."""
        if len(self.BEARER_TOKEN) <= 4:
            return "****"
        return "****" + self.BEARER_TOKEN[-2:]


@lru_cache
def get_settings() -> Settings:
    return Settings()
