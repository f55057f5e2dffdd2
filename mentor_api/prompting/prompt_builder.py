"""Prompt assembly for essay feedback.

This module only builds prompt strings from an already validated submission.
Validation, provider configuration, and model invocation happen outside it.

Design constraints:
    - Deterministic construction for identical inputs (no timestamps, no randomness).
    - Fixed ordering of prompt components per template shape.
    - No hidden side effects (no I/O, no global state mutation).

Template shapes:
    - `light`: gentle mode without task context. Short, unscored, 2-4 paragraphs.
    - `reflective`: gentle mode with task context. Unscored, 1-3 paragraphs, never
      mentions word count.
    - `word_count`: gentle mode with task context. Like `reflective`, plus an
      encouraging note about length only when the essay is below the recommended
      minimum.
    - `scored`: every other mode (and gentle with task context when configured).
      Five-field structured output with score, bullets and optional quote.

Prompt safety model:
    - Safety is instruction-led, not parser-enforced.
    - Essay text and task context are interpolated as raw strings.
"""

from mentor_api.core.pipeline_types import (
    LIGHT_FAMILY,
    SCORED_FAMILY,
    NormalizedSubmission,
    PromptDocument,
)
from mentor_api.prompting.tone_templates import ToneTemplate, resolve_tone


RECOMMENDED_MIN_WORDS = 30

LIGHT_SHAPE = "light"
REFLECTIVE_SHAPE = "reflective"
WORD_COUNT_SHAPE = "word_count"
SCORED_SHAPE = "scored"

GENTLE_TASK_SHAPES = (REFLECTIVE_SHAPE, WORD_COUNT_SHAPE, SCORED_SHAPE)

SHAPE_FAMILIES = {
    LIGHT_SHAPE: LIGHT_FAMILY,
    REFLECTIVE_SHAPE: LIGHT_FAMILY,
    WORD_COUNT_SHAPE: LIGHT_FAMILY,
    SCORED_SHAPE: SCORED_FAMILY,
}

MAX_OUTPUT_TOKENS = {
    LIGHT_FAMILY: 400,
    SCORED_FAMILY: 600,
}


# =========================================================
# SHARED BLOCKS
# =========================================================
# `MENTOR_IDENTITY` is always prepended before the tone block.

MENTOR_IDENTITY = (
    "You give feedback on reflective writing submitted through the Mentor app.\n"
    "Respond in the language of the essay.\n"
    "Address the writer directly as \"you\".\n\n"
)

SCORED_FORMAT = (
    "Respond using exactly this structure and these headings:\n"
    "Score: <one whole number from 0 to 10>\n"
    "Summary: <3-5 sentences>\n"
    "Strengths:\n"
    "- <first strength>\n"
    "- <second strength>\n"
    "Improvements:\n"
    "- <first improvement>\n"
    "- <second improvement>\n"
    "Quote: <a short real quotation with its author, or NONE>\n\n"
    "Rules:\n"
    "- Score is an integer between 0 and 10 inclusive.\n"
    "- Give exactly two Strengths and exactly two Improvements.\n"
    "- Do not rewrite the essay or produce a corrected version of it.\n"
)

QUOTE_RULES = (
    "Quote rules:\n"
    "- Only use a quotation you are certain is real and correctly attributed.\n"
    "- Never invent, paraphrase, or guess a quotation or its author.\n"
    "- If you are not sure of the exact wording or author, write Quote: NONE.\n"
    "- Write Quote: NONE if the essay suggests the writer may be in crisis or at risk,\n"
    "  if a quotation could feel dismissive of their situation, or if the only fitting\n"
    "  sources are extremist, hateful, or otherwise inappropriate.\n"
)

COUNTER_PERSPECTIVE_RULE = (
    "Counter-perspective rule:\n"
    "- If the essay argues only one side without acknowledging the opposite view,\n"
    "  weave one brief alternative viewpoint into the Summary.\n"
    "- Never add it as a separate heading and never place it inside Strengths or Improvements.\n"
    "- If the essay already shows balanced awareness, leave the alternative view out.\n"
)


def _task_context_block(submission: NormalizedSubmission) -> str:
    return (
        "Task context:\n"
        f"Task title: {submission.task_title.strip()}\n"
        f"Quote: {submission.quote.strip()}\n"
        f"Instruction: {submission.instruction.strip()}\n\n"
    )


def _essay_block(submission: NormalizedSubmission) -> str:
    return "Essay:\n" + submission.text + "\n\nFeedback:\n"


# =========================================================
# SHAPE SELECTION
# =========================================================

def select_shape(tone: ToneTemplate, submission: NormalizedSubmission, gentle_task_shape: str) -> str:
    """Pick the template shape for a resolved tone and submission.

    Scored-family tones always use the scored shape. The light-family tone
    (gentle) has more than one shape; its with-task-context shape
    is a deployment setting, never inferred from essay content.

    Raises:
        ValueError: If `gentle_task_shape` is not one of `GENTLE_TASK_SHAPES`.
    """
    if gentle_task_shape not in GENTLE_TASK_SHAPES:
        raise ValueError(f"Unknown gentle task shape: {gentle_task_shape!r}")

    if tone.family == SCORED_FAMILY:
        return SCORED_SHAPE

    if not submission.has_task_context:
        return LIGHT_SHAPE

    return gentle_task_shape


# =========================================================
# LIGHT PROMPT
# =========================================================
# Component order:
#   1) `MENTOR_IDENTITY`
#   2) Tone block
#   3) Length facts (word count + recommended minimum)
#   4) Light-feedback rules
#   5) Essay + assistant cue

def build_light_prompt(tone: ToneTemplate, submission: NormalizedSubmission) -> str:
    """Build the short, unscored gentle prompt used without task context."""
    return (
        MENTOR_IDENTITY +
        tone.tone + "\n" +
        f"The essay has {submission.word_count} words "
        f"(recommended minimum: {RECOMMENDED_MIN_WORDS} words).\n"
        "If it is shorter than the recommended minimum, kindly invite the writer to expand it.\n\n"
        "Write 2-4 short paragraphs of feedback.\n"
        "Do not give a numeric score, grade, or rating of any kind.\n"
        "Do not rewrite the essay or produce a corrected version of it.\n\n" +
        _essay_block(submission)
    )


# =========================================================
# GENTLE TASK PROMPTS
# =========================================================
# Component order:
#   1) `MENTOR_IDENTITY`
#   2) Tone block
#   3) Optional length note (`word_count` shape, short essays only)
#   4) Task context
#   5) Reflective-feedback rules
#   6) Essay + assistant cue

def _reflective_rules(length_line: str = "Do not comment on the length of the essay.\n") -> str:
    return (
        "This is a no-pressure reflection.\n"
        "Write 1-3 short paragraphs that respond to the ideas in relation to the task.\n"
        "Do not give a score, grade, or rating of any kind.\n" +
        length_line +
        "Do not rewrite the essay or produce a corrected version of it.\n\n"
    )


def build_reflective_prompt(tone: ToneTemplate, submission: NormalizedSubmission) -> str:
    """Build the gentle task prompt that never mentions length."""
    return (
        MENTOR_IDENTITY +
        tone.tone + "\n" +
        _task_context_block(submission) +
        _reflective_rules() +
        _essay_block(submission)
    )


def build_word_count_prompt(tone: ToneTemplate, submission: NormalizedSubmission) -> str:
    """Build the gentle task prompt with a length note for short essays.

    Edge cases:
        - Essays at or above `RECOMMENDED_MIN_WORDS` get exactly the reflective
          prompt, with no mention of length or count.
    """
    if submission.word_count >= RECOMMENDED_MIN_WORDS:
        return build_reflective_prompt(tone, submission)

    missing = RECOMMENDED_MIN_WORDS - submission.word_count
    count_label = "word" if submission.word_count == 1 else "words"
    missing_label = "word" if missing == 1 else "words"
    length_note = (
        "Begin your feedback with one encouraging sentence noting that the essay "
        f"currently has {submission.word_count} {count_label} and that about {missing} more {missing_label} "
        f"(recommended minimum: {RECOMMENDED_MIN_WORDS} words) would help the reflection grow. "
        "After that sentence, do not mention length again.\n\n"
    )

    return (
        MENTOR_IDENTITY +
        tone.tone + "\n" +
        length_note +
        _task_context_block(submission) +
        _reflective_rules(length_line="") +
        _essay_block(submission)
    )


# =========================================================
# SCORED PROMPT
# =========================================================
# Component order:
#   1) `MENTOR_IDENTITY`
#   2) Tone block
#   3) Task context
#   4) Structured format + rules
#   5) Quote rules
#   6) Counter-perspective rule
#   7) Essay + assistant cue

def build_scored_prompt(tone: ToneTemplate, submission: NormalizedSubmission) -> str:
    """Build the five-field structured prompt used by scored modes."""
    return (
        MENTOR_IDENTITY +
        tone.tone + "\n" +
        _task_context_block(submission) +
        SCORED_FORMAT + "\n" +
        QUOTE_RULES + "\n" +
        COUNTER_PERSPECTIVE_RULE + "\n" +
        _essay_block(submission)
    )


_BUILDERS = {
    LIGHT_SHAPE: build_light_prompt,
    REFLECTIVE_SHAPE: build_reflective_prompt,
    WORD_COUNT_SHAPE: build_word_count_prompt,
    SCORED_SHAPE: build_scored_prompt,
}


def compose_prompt(submission: NormalizedSubmission, gentle_task_shape: str = WORD_COUNT_SHAPE) -> PromptDocument:
    """Compose the provider prompt for a validated submission.

    Args:
        submission: Output of `safety.validator.validate_submission`.
        gentle_task_shape: Deployment setting for gentle mode with task context.

    Returns:
        `PromptDocument` with the prompt text, resolved mode, family, shape, and
        the family's fixed output token budget.

    Determinism:
        Byte-identical output for identical inputs.

    Edge cases:
        - Unknown or absent modes compose exactly like `gentle`.
        - Missing task-context fields render as empty values.
    """
    tone = resolve_tone(submission.mode)
    shape = select_shape(tone, submission, gentle_task_shape)
    family = SHAPE_FAMILIES[shape]

    return PromptDocument(
        text=_BUILDERS[shape](tone, submission),
        mode=tone.mode,
        family=family,
        shape=shape,
        max_output_tokens=MAX_OUTPUT_TOKENS[family],
    )
