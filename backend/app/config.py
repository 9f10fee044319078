# backend/app/config.py

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ORIGIN = "https://simplifymytext.org"
LOCALHOST_ORIGINS = ("http://localhost", "https://localhost")


class Settings(BaseSettings):
    """Service configuration, read from the environment and ``.env``.

    Field names map to upper-case env vars (``word_limit`` <- ``WORD_LIMIT``).
    Invalid values raise ``ValidationError`` instead of falling back.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    openai_api_key: str = ""
    openai_model: str = "gpt-4"
    max_tokens: int = Field(200, gt=0)
    temperature: float = Field(0.7, ge=0, le=2)

    app_env: str = "development"
    ssl_key_path: Optional[str] = None
    ssl_cert_path: Optional[str] = None
    port: int = Field(7171, gt=0, lt=65536)

    allowed_origin: str = DEFAULT_ORIGIN
    extension_id: Optional[str] = None
    dev_token: str = "No token provided"

    word_limit: int = Field(5000, gt=0)
    redis_url: Optional[str] = None

    @property
    def deploy(self) -> bool:
        return self.app_env == "deploy"


def load_settings() -> Settings:
    return Settings()
