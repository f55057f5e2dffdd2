"""
HTTP API adapter for the Mentor evaluation service.

Architectural role:
- Expose the `/evaluate` and `/health` HTTP interfaces.
- Translate request JSON into a `Submission` and delegate to
  `mentor_api.core.engine.process_submission`.
- Map the pipeline error taxonomy to HTTP status codes and bodies.

API request lifecycle (`POST /evaluate`):
1. Parse request JSON (`essay` or `essayText`, optional `mode`, `taskTitle`,
   `quote`, `instruction`). A body that is not a JSON object counts as `{}`.
2. Validate and compose via the core pipeline.
3. Invoke the provider and return `{feedback, score, tokens_used}`.

Error handling strategy:
- `ValidationError` -> 400 `{error, wordCount?}`.
- `MisconfiguredError` -> 500 `{error}`.
- `ProviderRejectedError` -> 502 `{error, details}`.
- Everything else -> 500 with a generic message; details are logged only.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Logs pipeline outcomes; essay text is never logged.
"""

from dotenv import load_dotenv

load_dotenv()

import json
import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mentor_api.core.engine import process_submission
from mentor_api.core.errors import (
    ESSAY_TOO_LONG,
    InternalFailureError,
    MisconfiguredError,
    ProviderRejectedError,
    ValidationError,
)
from mentor_api.core.pipeline_types import Submission
from mentor_api.llm.provider_config import (
    EvaluationVariant,
    ProviderSettings,
    ServiceInfo,
    load_evaluation_variant,
    load_provider_settings,
    load_service_info,
)


logger = logging.getLogger(__name__)

PROVIDER_ERROR_MESSAGE = "OpenAI API error"
INTERNAL_ERROR_MESSAGE = "Failed to generate feedback"

ESSAY_FIELDS = ("essay", "essayText")


# ============================================================
# Response Schemas
# ============================================================

class FeedbackResponse(BaseModel):
    """Success body. `score` stays `null`; any score lives inside `feedback`."""

    feedback: str
    score: Optional[int] = None
    tokens_used: Optional[int] = None


class HealthResponse(BaseModel):
    status: str
    service: str
    env: str


# ============================================================
# Dependencies
# ============================================================
# Resolved once per process from the environment and cached; tests replace them
# with `app.dependency_overrides`.

@lru_cache()
def get_provider_settings() -> ProviderSettings:
    return load_provider_settings()


@lru_cache()
def get_evaluation_variant() -> EvaluationVariant:
    return load_evaluation_variant()


@lru_cache()
def get_service_info() -> ServiceInfo:
    return load_service_info()


def get_http_transport():
    """Transport used for provider calls; `None` selects `requests`."""
    return None


# ============================================================
# Application
# ============================================================

# A malformed deployment variant fails here, when the app is imported, rather than
# on the first request.
get_evaluation_variant()
get_provider_settings()

app = FastAPI(title="Mentor API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_service_info().cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


def submission_from_body(body) -> Submission:
    """Build a `Submission` from a decoded JSON body.

    `essay` takes precedence over `essayText` when both are present.
    """
    if not isinstance(body, dict):
        body = {}

    text = None
    for field in ESSAY_FIELDS:
        if body.get(field) is not None:
            text = body[field]
            break

    return Submission(
        text=text,
        mode=body.get("mode"),
        task_title=body.get("taskTitle"),
        quote=body.get("quote"),
        instruction=body.get("instruction"),
    )


def error_response(err: Exception) -> JSONResponse:
    """Map a pipeline exception to its client-facing JSON response."""
    if isinstance(err, ValidationError):
        content = {"error": err.message}
        if err.kind == ESSAY_TOO_LONG:
            content["wordCount"] = err.word_count
        return JSONResponse(status_code=400, content=content)

    if isinstance(err, MisconfiguredError):
        return JSONResponse(status_code=500, content={"error": str(err)})

    if isinstance(err, ProviderRejectedError):
        return JSONResponse(
            status_code=502,
            content={"error": PROVIDER_ERROR_MESSAGE, "details": err.details},
        )

    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


# ============================================================
# Health
# ============================================================

@app.get("/health", response_model=HealthResponse)
def health(info: ServiceInfo = Depends(get_service_info)):
    """Liveness check. No core logic is involved."""
    return HealthResponse(status="ok", service=info.name, env=info.env)


# ============================================================
# Evaluate
# ============================================================

@app.post("/evaluate", response_model=FeedbackResponse)
async def evaluate(
    request: Request,
    settings: ProviderSettings = Depends(get_provider_settings),
    variant: EvaluationVariant = Depends(get_evaluation_variant),
    http=Depends(get_http_transport),
):
    """
    Evaluate one essay and return generated feedback.

    Input validation behavior:
    - Missing, non-string, or blank essay -> 400.
    - Essay above the word ceiling -> 400 with `wordCount`.

    Determinism considerations:
    - Prompt composition is deterministic; feedback text is provider-generated.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = {}

    submission = submission_from_body(body)

    try:
        result = await process_submission(submission, settings, variant, http=http)
    except ValidationError as err:
        logger.info("Rejected submission: kind=%s word_count=%s", err.kind, err.word_count)
        return error_response(err)
    except MisconfiguredError as err:
        logger.error("Evaluation refused: %s", err)
        return error_response(err)
    except ProviderRejectedError as err:
        return error_response(err)
    except InternalFailureError as err:
        logger.error("Evaluation failed: %s", err)
        return error_response(err)
    except Exception:
        logger.exception("Unhandled failure in /evaluate")
        return error_response(InternalFailureError(INTERNAL_ERROR_MESSAGE))

    return FeedbackResponse(feedback=result.feedback_text, score=None, tokens_used=result.tokens_used)
