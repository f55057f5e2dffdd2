"""Prompt-document-to-payload adapter and response mapper.

Architectural role:
    Canonical text-generation entrypoint used by `core.engine`. Bridges prompt
    composition (`prompting`) to transport (`llm.client`) and maps the raw provider
    response into a `FeedbackResult`.

Token behavior:
    The output budget is taken from `PromptDocument.max_output_tokens` (fixed per
    template family); it is never negotiated per request.

Determinism:
    Payload construction and response mapping are deterministic. Generated text is
    not, because inference runs remotely.
"""

from typing import Any, Optional

from mentor_api.core.pipeline_types import FeedbackResult, PromptDocument
from mentor_api.llm.client import send_request
from mentor_api.llm.provider_config import ProviderSettings


NO_FEEDBACK_PLACEHOLDER = "No feedback generated."


def build_payload(document: PromptDocument, settings: ProviderSettings) -> dict:
    return {
        "model": settings.model,
        "input": document.text,
        "max_output_tokens": document.max_output_tokens,
    }


def _first_text(data: dict) -> Optional[str]:
    """Return `output[0].content[0].text`, or `None` if any step is missing."""
    output = data.get("output")
    if not isinstance(output, list) or not output:
        return None

    first_item = output[0]
    if not isinstance(first_item, dict):
        return None

    content = first_item.get("content")
    if not isinstance(content, list) or not content:
        return None

    first_segment = content[0]
    if not isinstance(first_segment, dict):
        return None

    text = first_segment.get("text")
    return text if isinstance(text, str) else None


def _total_tokens(data: dict) -> Optional[int]:
    usage = data.get("usage")
    if not isinstance(usage, dict):
        return None
    total = usage.get("total_tokens")
    # bool is an int subclass
    if isinstance(total, int) and not isinstance(total, bool):
        return total
    return None


def map_response(data: dict) -> FeedbackResult:
    """Map a decoded provider response to a `FeedbackResult`.

    Edge cases:
        - Missing or malformed output falls back to `NO_FEEDBACK_PLACEHOLDER`.
        - Missing usage data yields `tokens_used=None`.
    """
    text = _first_text(data)
    return FeedbackResult(
        feedback_text=text if text is not None else NO_FEEDBACK_PLACEHOLDER,
        tokens_used=_total_tokens(data),
    )


def generate_feedback(document: PromptDocument, settings: ProviderSettings, http: Optional[Any] = None) -> FeedbackResult:
    """Invoke the provider with a composed prompt and map its response.

    Args:
        document: Composed prompt and its output budget.
        settings: Provider settings, injected by the caller.
        http: Optional transport override forwarded to `client.send_request`.

    Returns:
        `FeedbackResult` with feedback text and token usage.

    Failure scenarios:
        Errors raised by `client.send_request` propagate unchanged; they are
        already classified into the pipeline taxonomy.
    """
    data = send_request(build_payload(document, settings), settings, http=http)
    return map_response(data)
