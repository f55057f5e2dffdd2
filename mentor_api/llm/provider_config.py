"""Provider/runtime configuration for the evaluation service.

Architectural role:
    Centralizes provider selection, credential lookup, and the deployment
    "variant" settings consumed by `core.engine` and `llm.client`.

Lifecycle:
    Environment variables are loaded once via `load_dotenv()` and read into frozen
    dataclasses. The settings objects are then passed explicitly into the pipeline
    instead of being read as ambient globals, so tests can supply their own.

Failure behavior:
    - A missing API key is represented as `None`; `llm.client` raises
      `MisconfiguredError` before any network I/O.
    - Malformed numeric values or unknown gentle shapes raise `ValueError` at load
      time so a bad deployment fails on startup rather than per request.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from mentor_api.prompting.prompt_builder import GENTLE_TASK_SHAPES, WORD_COUNT_SHAPE
from mentor_api.safety.validator import MAX_WORDS

load_dotenv()


API_KEY_ENV = "OPENAI_API_KEY"

DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class ProviderSettings:
    """Connection settings for the text-generation provider.

    Attributes:
        api_key: Bearer credential, or `None` when not configured.
        model: Model identifier sent with every request.
        base_url: Provider API root; `/responses` is appended.
        timeout: Per-request timeout in seconds.
        api_key_name: Name reported in misconfiguration errors.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    api_key_name: str = API_KEY_ENV

    @property
    def responses_url(self) -> str:
        return self.base_url.rstrip("/") + "/responses"


@dataclass(frozen=True)
class EvaluationVariant:
    """Deployment variant of the evaluation pipeline.

    Attributes:
        gentle_task_shape: Shape used for gentle mode when task context is present.
        max_words: Hard essay word ceiling.
    """

    gentle_task_shape: str = WORD_COUNT_SHAPE
    max_words: int = MAX_WORDS


@dataclass(frozen=True)
class ServiceInfo:
    name: str = "mentor-api"
    env: str = "dev"
    cors_origins: Tuple[str, ...] = ("*",)


def _env(name: str) -> Optional[str]:
    """Return a stripped environment value, treating blanks as unset."""
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_provider_settings() -> ProviderSettings:
    """Read provider settings from the process environment."""
    timeout = _env("PROVIDER_TIMEOUT_SECONDS")

    return ProviderSettings(
        api_key=_env(API_KEY_ENV),
        model=_env("OPENAI_MODEL") or DEFAULT_MODEL,
        base_url=_env("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        timeout=float(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS,
    )


def load_evaluation_variant() -> EvaluationVariant:
    """Read the deployment variant from the process environment.

    Raises:
        ValueError: If `GENTLE_TASK_SHAPE` is not a known shape or
            `MAX_ESSAY_WORDS` is not a positive integer.
    """
    shape = _env("GENTLE_TASK_SHAPE") or WORD_COUNT_SHAPE
    if shape not in GENTLE_TASK_SHAPES:
        raise ValueError(
            f"GENTLE_TASK_SHAPE must be one of {', '.join(GENTLE_TASK_SHAPES)}; got {shape!r}"
        )

    max_words_raw = _env("MAX_ESSAY_WORDS")
    max_words = int(max_words_raw) if max_words_raw else MAX_WORDS
    if max_words <= 0:
        raise ValueError("MAX_ESSAY_WORDS must be a positive integer")

    return EvaluationVariant(gentle_task_shape=shape, max_words=max_words)


def load_service_info() -> ServiceInfo:
    origins = _env("CORS_ALLOW_ORIGINS") or "*"
    return ServiceInfo(
        name=_env("SERVICE_NAME") or "mentor-api",
        env=_env("APP_ENV") or "dev",
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )
