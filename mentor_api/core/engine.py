"""Core request orchestration for essay evaluation.

Architectural role:
    Provides the single canonical pipeline used by the HTTP and CLI adapters to turn
    one submission into generated feedback.

Control-flow model:
    1. Validate the submission (`safety.validator`); short-circuit on failure.
    2. Compose the mode-specific prompt (`prompting.prompt_builder`).
    3. Invoke the provider in a worker thread (`llm.service`).
    4. Return the mapped `FeedbackResult`.

Variant handling:
    Deployment differences (gentle task shape, word ceiling) are carried by one
    `EvaluationVariant` value instead of separate code paths.

Error handling strategy:
    Classified errors (`MentorError` subclasses) propagate unchanged. Any other
    exception raised during invocation is logged and re-raised as
    `InternalFailureError` so callers only ever see the pipeline taxonomy.

Side effects:
    Only the provider call performs I/O. Nothing is persisted.
"""

import asyncio
import logging
from typing import Any, Optional, Tuple

from mentor_api.core.errors import InternalFailureError, MentorError
from mentor_api.core.pipeline_types import FeedbackResult, NormalizedSubmission, PromptDocument, Submission
from mentor_api.llm.provider_config import EvaluationVariant, ProviderSettings
from mentor_api.llm.service import generate_feedback
from mentor_api.prompting.prompt_builder import compose_prompt
from mentor_api.safety.validator import validate_submission


logger = logging.getLogger(__name__)


def prepare_prompt(submission: Submission, variant: EvaluationVariant) -> Tuple[NormalizedSubmission, PromptDocument]:
    """Run validation and composition without touching the provider.

    Raises:
        ValidationError: Submission rejected by the validator.
    """
    normalized = validate_submission(submission, max_words=variant.max_words)
    document = compose_prompt(normalized, gentle_task_shape=variant.gentle_task_shape)

    logger.info(
        "Composed prompt: mode=%s shape=%s family=%s words=%d max_output_tokens=%d",
        document.mode,
        document.shape,
        document.family,
        normalized.word_count,
        document.max_output_tokens,
    )
    return normalized, document


def _invoke(document: PromptDocument, settings: ProviderSettings, http: Optional[Any]) -> FeedbackResult:
    try:
        return generate_feedback(document, settings, http=http)
    except MentorError:
        raise
    except Exception as err:
        logger.exception("Unexpected failure during provider invocation")
        raise InternalFailureError("Unexpected failure during provider invocation") from err


def evaluate_essay(
    submission: Submission,
    settings: ProviderSettings,
    variant: EvaluationVariant,
    http: Optional[Any] = None,
) -> FeedbackResult:
    """Synchronous pipeline: validate, compose, invoke, map."""
    _, document = prepare_prompt(submission, variant)
    return _invoke(document, settings, http)


async def process_submission(
    submission: Submission,
    settings: ProviderSettings,
    variant: EvaluationVariant,
    http: Optional[Any] = None,
) -> FeedbackResult:
    """Async pipeline used by the HTTP adapter.

    Validation and composition run inline (they are pure and fast); the blocking
    provider call runs via `asyncio.to_thread` so the event loop stays free.
    """
    _, document = prepare_prompt(submission, variant)
    result = await asyncio.to_thread(_invoke, document, settings, http)

    logger.info("Feedback generated: mode=%s tokens_used=%s", document.mode, result.tokens_used)
    return result
