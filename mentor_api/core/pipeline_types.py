"""Request-scoped data contracts for the evaluation pipeline.

Architectural role:
    Defines the records passed between validator, composer and provider layers.
    Every instance is created and discarded within a single request.

Determinism:
    The dataclasses are purely structural. `PromptDocument` is frozen so a composed
    prompt cannot be altered between composition and invocation.
"""

from dataclasses import dataclass
from typing import Any, Optional


LIGHT_FAMILY = "light"
SCORED_FAMILY = "scored"


@dataclass
class Submission:
    """Raw submission as received from the transport layer.

    Attributes:
        text: Essay value exactly as supplied (may be any JSON type or `None`).
        mode: Requested feedback mode, if any.
        task_title: Title of the writing task, if any.
        quote: Quote the task is built around, if any.
        instruction: Task instruction shown to the writer, if any.
    """

    text: Any = None
    mode: Any = None
    task_title: Any = None
    quote: Any = None
    instruction: Any = None


@dataclass(frozen=True)
class NormalizedSubmission:
    """Submission that passed validation."""

    text: str
    word_count: int
    mode: Optional[str] = None
    task_title: str = ""
    quote: str = ""
    instruction: str = ""

    @property
    def has_task_context(self) -> bool:
        return any(value.strip() for value in (self.task_title, self.quote, self.instruction))


@dataclass(frozen=True)
class PromptDocument:
    """Fully assembled instruction text plus the settings it was composed for.

    Attributes:
        text: Final prompt string sent as provider `input`.
        mode: Resolved mode key (never an unknown value).
        family: `LIGHT_FAMILY` or `SCORED_FAMILY`.
        shape: Template shape that produced `text` (for logs and tests).
        max_output_tokens: Output budget fixed by `family`.
    """

    text: str
    mode: str
    family: str
    shape: str
    max_output_tokens: int


@dataclass(frozen=True)
class FeedbackResult:
    feedback_text: str
    tokens_used: Optional[int] = None
