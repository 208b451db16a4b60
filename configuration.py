from typing import Literal
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from errors import ConfigError


class Configuration(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    gemini_api_key: str
    mcp_secret_token: str
    port: int = 8080
    host: str = "0.0.0.0"
    mcp_transport: Literal["streamable-http", "http", "sse"] = "streamable-http"
    mcp_path: str = "/mcp"
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    gemini_model: str = "gemini-2.0-flash-preview-image-generation"
    image_provider: Literal["gemini", "mock"] = "gemini"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


def load_settings(**overrides) -> Configuration:
    """Read the environment once into an immutable Configuration.

    Raises ConfigError naming every missing or malformed variable.
    """
    try:
        return Configuration(**overrides)
    except ValidationError as e:
        problems = ", ".join(
            f"{str(err['loc'][0]).upper() if err['loc'] else 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(problems) from e
