"""Error taxonomy for the evaluation pipeline.

Architectural role:
    Defines the terminal outcomes that short-circuit `core.engine.evaluate_essay`.
    The HTTP adapter maps each class to one status code and response body; no other
    layer decides how an error is presented to the client.

Taxonomy:
    - `ValidationError`: client-caused (HTTP 400).
    - `MisconfiguredError`: operator-caused (HTTP 500).
    - `ProviderRejectedError`: upstream returned a structured error body (HTTP 502).
    - `InternalFailureError`: anything unclassified (HTTP 500).
"""

from typing import Any, Optional


MISSING_OR_INVALID_TEXT = "MissingOrInvalidText"
ESSAY_TOO_LONG = "EssayTooLong"


class MentorError(Exception):
    """Base class for every classified pipeline failure."""


class ValidationError(MentorError):
    """Submission rejected before any external call.

    Attributes:
        kind: `MISSING_OR_INVALID_TEXT` or `ESSAY_TOO_LONG`.
        word_count: Computed word count, set only for `ESSAY_TOO_LONG`.
    """

    def __init__(self, kind: str, message: str, word_count: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.word_count = word_count


class MisconfiguredError(MentorError):
    """Required provider configuration is missing."""

    def __init__(self, setting: str):
        super().__init__(f"Server misconfigured: missing {setting}")
        self.setting = setting


class ProviderRejectedError(MentorError):
    """Provider answered with an error status and a structured body."""

    def __init__(self, status_code: int, details: Any):
        super().__init__(f"Provider rejected request with status {status_code}")
        self.status_code = status_code
        self.details = details


class InternalFailureError(MentorError):
    """Network, timeout or unexpected response failure.

    The message is for logs only and is never returned to the caller.
    """
