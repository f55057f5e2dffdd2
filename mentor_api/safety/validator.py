"""Structural and length gate for incoming essays.

Purpose:
    Decide whether a submission may proceed to prompt composition and provider
    invocation. Runs before any external call and short-circuits on failure.

Validation model:
    - Essay text must be a string that is non-empty after trimming.
    - Word count is the number of whitespace-delimited, non-empty tokens.
    - A hard word ceiling is enforced regardless of any client-side limit.
    - No minimum length is enforced here; the recommended minimum only appears
      inside gentle prompt text.

Determinism:
    Pure and synchronous. No I/O, no side effects beyond the returned value or
    raised `ValidationError`.
"""

from typing import Any

from mentor_api.core.errors import ESSAY_TOO_LONG, MISSING_OR_INVALID_TEXT, ValidationError
from mentor_api.core.pipeline_types import NormalizedSubmission, Submission


MAX_WORDS = 1000

MISSING_TEXT_MESSAGE = "Missing or invalid 'essay' text"


def count_words(text: str) -> int:
    """Return the number of whitespace-delimited tokens in `text`.

    `str.split()` without arguments splits on runs of whitespace and drops empty
    tokens, so leading/trailing whitespace never produces a phantom word.
    """
    return len(text.split())


def _optional_text(value: Any) -> str:
    """Normalize an optional task-context field to a string."""
    if isinstance(value, str):
        return value
    return ""


def validate_submission(submission: Submission, max_words: int = MAX_WORDS) -> NormalizedSubmission:
    """Validate a raw submission and return its normalized form.

    Args:
        submission: Raw transport-level submission.
        max_words: Hard ceiling on the essay word count.

    Returns:
        `NormalizedSubmission` with trimmed text and computed word count.

    Raises:
        ValidationError: `MISSING_OR_INVALID_TEXT` when text is absent, not a
            string, or blank after trimming; `ESSAY_TOO_LONG` (with
            `word_count`) when the ceiling is exceeded.

    Edge cases:
        - A non-string `mode` is treated as absent and later resolves to gentle.
        - Non-string task-context fields become empty strings.
    """
    text = submission.text
    if not isinstance(text, str):
        raise ValidationError(MISSING_OR_INVALID_TEXT, MISSING_TEXT_MESSAGE)

    trimmed = text.strip()
    if not trimmed:
        raise ValidationError(MISSING_OR_INVALID_TEXT, MISSING_TEXT_MESSAGE)

    word_count = count_words(trimmed)
    if word_count > max_words:
        raise ValidationError(
            ESSAY_TOO_LONG,
            f"Essay too long. Limit is {max_words} words.",
            word_count=word_count,
        )

    mode = submission.mode if isinstance(submission.mode, str) else None

    return NormalizedSubmission(
        text=trimmed,
        word_count=word_count,
        mode=mode,
        task_title=_optional_text(submission.task_title),
        quote=_optional_text(submission.quote),
        instruction=_optional_text(submission.instruction),
    )
