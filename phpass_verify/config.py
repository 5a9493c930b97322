"""Runtime configuration loaded from the environment and an optional .env file."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # WordPress writes exponent 13. Anything above the limit is refused before
    # the digest chain runs; raise it for installs with stronger settings.
    max_count_log2: int = Field(default=16, ge=0, le=63)

    auth_enabled: bool = False
    auth_username: str = "admin"
    # bcrypt hash, PHPass hash or legacy plaintext
    auth_password: str = ""

    log_level: str = "INFO"

    @property
    def is_auth_configured(self) -> bool:
        return self.auth_enabled and bool(self.auth_username) and bool(self.auth_password)


@lru_cache
def get_settings() -> Settings:
    return Settings()
