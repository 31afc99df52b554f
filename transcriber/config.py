from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from transcriber.constants import (
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_PROVIDER_TIMEOUT,
    OPENAI_BASE_URL,
)


@dataclass(frozen=True)
class Config:
    openai_api_key: Optional[str]
    openai_base_url: str
    log_level: str
    fetch_timeout: float
    provider_timeout: float
    host: str
    port: int

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        openai_api_key = os.getenv("OPENAI_API_KEY", "").strip() or None
        base_url = os.getenv("OPENAI_BASE_URL") or OPENAI_BASE_URL
        log_level = os.getenv("LOG_LEVEL", "INFO")
        fetch_timeout = os.getenv("FETCH_TIMEOUT", str(DEFAULT_FETCH_TIMEOUT))
        provider_timeout = os.getenv("PROVIDER_TIMEOUT", str(DEFAULT_PROVIDER_TIMEOUT))
        host = os.getenv("HOST") or DEFAULT_HOST
        port = os.getenv("PORT", str(DEFAULT_PORT))

        return cls._validate(
            openai_api_key=openai_api_key,
            openai_base_url=base_url.rstrip("/"),
            log_level=log_level,
            fetch_timeout=_parse_number("FETCH_TIMEOUT", fetch_timeout, float),
            provider_timeout=_parse_number("PROVIDER_TIMEOUT", provider_timeout, float),
            host=host,
            port=_parse_number("PORT", port, int),
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.openai_api_key)

    @staticmethod
    def _validate(
        openai_api_key: Optional[str],
        openai_base_url: str,
        log_level: str,
        fetch_timeout: float,
        provider_timeout: float,
        host: str,
        port: int,
    ) -> "Config":
        match fetch_timeout:
            case t if t <= 0:
                raise ValueError("FETCH_TIMEOUT must be a positive number of seconds")
            case _:
                pass

        match provider_timeout:
            case t if t <= 0:
                raise ValueError("PROVIDER_TIMEOUT must be a positive number of seconds")
            case _:
                pass

        match port:
            case p if not 0 < p < 65536:
                raise ValueError("PORT must be between 1 and 65535")
            case _:
                pass

        return Config(
            openai_api_key=openai_api_key,
            openai_base_url=openai_base_url,
            log_level=log_level,
            fetch_timeout=fetch_timeout,
            provider_timeout=provider_timeout,
            host=host,
            port=port,
        )


def _parse_number(name: str, raw: str, kind: type) -> float | int:
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
