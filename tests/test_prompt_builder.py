"""
Tests for mode resolution and prompt composition
"""
import pytest

from mentor_api.core.pipeline_types import LIGHT_FAMILY, SCORED_FAMILY, NormalizedSubmission
from mentor_api.prompting.prompt_builder import (
    LIGHT_SHAPE,
    REFLECTIVE_SHAPE,
    SCORED_SHAPE,
    WORD_COUNT_SHAPE,
    compose_prompt,
    select_shape,
)
from mentor_api.prompting.tone_templates import ToneTemplate, list_modes, resolve_tone


SCORED_MODES = ["direct", "balanced", "soberSoft", "soberBrother", "soberCoach"]


def make_submission(word_count=12, mode=None, **context):
    text = " ".join(["lorem"] * word_count)
    return NormalizedSubmission(text=text, word_count=word_count, mode=mode, **context)


def with_task(word_count=12, mode="gentle"):
    return make_submission(
        word_count=word_count,
        mode=mode,
        task_title="A hard day",
        quote="Fall seven times, stand up eight.",
        instruction="Describe a setback.",
    )


# ----------------------------------------------------------------
# Tone table
# ----------------------------------------------------------------

def test_all_modes_are_listed():
    assert set(list_modes()) == {"gentle", *SCORED_MODES}


@pytest.mark.parametrize("mode", [None, "", "surprise", "Direct", "GENTLE "])
def test_unknown_modes_resolve_to_gentle(mode):
    assert resolve_tone(mode).mode == "gentle"


def test_mode_lookup_trims_whitespace():
    assert resolve_tone("  balanced ").mode == "balanced"


# ----------------------------------------------------------------
# Families and budgets
# ----------------------------------------------------------------

@pytest.mark.parametrize("mode", SCORED_MODES)
def test_scored_modes_use_scored_family(mode):
    document = compose_prompt(make_submission(mode=mode))
    assert document.mode == mode
    assert document.family == SCORED_FAMILY
    assert document.shape == SCORED_SHAPE
    assert document.max_output_tokens == 600


def test_gentle_without_context_is_light():
    document = compose_prompt(make_submission(mode="gentle"))
    assert document.family == LIGHT_FAMILY
    assert document.shape == LIGHT_SHAPE
    assert document.max_output_tokens == 400


def test_unknown_mode_composes_identically_to_gentle():
    gentle = compose_prompt(make_submission(mode="gentle"))
    surprise = compose_prompt(make_submission(mode="surprise"))
    assert surprise == gentle


@pytest.mark.parametrize("mode", ["gentle", *SCORED_MODES])
@pytest.mark.parametrize("shape", [REFLECTIVE_SHAPE, WORD_COUNT_SHAPE, SCORED_SHAPE])
def test_composition_is_idempotent(mode, shape):
    first = compose_prompt(with_task(mode=mode), gentle_task_shape=shape)
    second = compose_prompt(with_task(mode=mode), gentle_task_shape=shape)
    assert first.text == second.text
    assert first == second


def test_gentle_task_shape_is_configuration_driven():
    tone = resolve_tone("gentle")
    for shape in (REFLECTIVE_SHAPE, WORD_COUNT_SHAPE, SCORED_SHAPE):
        assert select_shape(tone, with_task(), shape) == shape
        assert select_shape(tone, make_submission(), shape) == LIGHT_SHAPE


def test_unknown_gentle_task_shape_raises():
    with pytest.raises(ValueError):
        compose_prompt(make_submission(), gentle_task_shape="loud")


def test_scored_modes_ignore_gentle_task_shape():
    for shape in (REFLECTIVE_SHAPE, WORD_COUNT_SHAPE):
        assert compose_prompt(with_task(mode="direct"), gentle_task_shape=shape).shape == SCORED_SHAPE


def test_gentle_scored_shape_uses_scored_budget():
    document = compose_prompt(with_task(), gentle_task_shape=SCORED_SHAPE)
    assert document.mode == "gentle"
    assert document.family == SCORED_FAMILY
    assert document.max_output_tokens == 600


# ----------------------------------------------------------------
# Prompt content
# ----------------------------------------------------------------

def test_light_prompt_bans_scores_and_rewrites():
    text = compose_prompt(make_submission(word_count=12)).text
    assert "2-4 short paragraphs" in text
    assert "Do not give a numeric score" in text
    assert "Do not rewrite the essay" in text
    assert "The essay has 12 words" in text
    assert "recommended minimum: 30 words" in text
    assert "Score:" not in text


@pytest.mark.parametrize("mode", SCORED_MODES)
def test_scored_prompt_has_five_fields_and_rules(mode):
    text = compose_prompt(make_submission(mode=mode)).text
    for heading in ("Score:", "Summary:", "Strengths:", "Improvements:", "Quote:"):
        assert heading in text
    assert "between 0 and 10 inclusive" in text
    assert "exactly two Strengths and exactly two Improvements" in text
    assert "Quote: NONE" in text
    assert "Never invent" in text
    assert "Counter-perspective rule" in text
    assert "weave one brief alternative viewpoint into the Summary" in text
    assert "Never add it as a separate heading" in text
    assert "never place it inside Strengths or Improvements" in text
    assert "If the essay already shows balanced awareness, leave the alternative view out." in text


def test_light_prompt_has_no_counter_perspective_rule():
    assert "Counter-perspective" not in compose_prompt(make_submission()).text


def test_tone_text_differs_per_mode():
    texts = {mode: compose_prompt(make_submission(mode=mode)).text for mode in SCORED_MODES}
    assert len(set(texts.values())) == len(SCORED_MODES)


def test_task_context_is_rendered():
    text = compose_prompt(with_task(mode="balanced")).text
    assert "Task title: A hard day" in text
    assert "Quote: Fall seven times, stand up eight." in text
    assert "Instruction: Describe a setback." in text


def test_missing_task_context_renders_empty_values():
    text = compose_prompt(make_submission(mode="direct")).text
    assert "Task title: \n" in text
    assert "Instruction: \n" in text


def test_essay_text_is_included_last():
    submission = NormalizedSubmission(text="My unique essay body.", word_count=4, mode="direct")
    text = compose_prompt(submission).text
    assert text.endswith("Essay:\nMy unique essay body.\n\nFeedback:\n")


def test_reflective_shape_never_mentions_word_count():
    text = compose_prompt(with_task(word_count=5), gentle_task_shape=REFLECTIVE_SHAPE).text
    assert "1-3 short paragraphs" in text
    assert "word count" not in text.lower()
    assert "5 words" not in text
    assert "Score:" not in text


def test_word_count_shape_mentions_count_for_short_essays():
    document = compose_prompt(with_task(word_count=5), gentle_task_shape=WORD_COUNT_SHAPE)
    assert document.shape == WORD_COUNT_SHAPE
    assert "currently has 5 words" in document.text
    assert "about 25 more words" in document.text
    assert document.max_output_tokens == 400


def test_word_count_shape_is_silent_for_long_enough_essays():
    text = compose_prompt(with_task(word_count=42), gentle_task_shape=WORD_COUNT_SHAPE).text
    assert "42" not in text
    assert "word count" not in text.lower()
    assert "more words" not in text
    assert "recommended minimum" not in text


def test_word_count_boundary_at_recommended_minimum():
    at_minimum = compose_prompt(with_task(word_count=30), gentle_task_shape=WORD_COUNT_SHAPE).text
    below = compose_prompt(with_task(word_count=29), gentle_task_shape=WORD_COUNT_SHAPE).text
    assert "more words" not in at_minimum
    assert "about 1 more word (" in below


def test_reflective_rules_forbid_length_comments():
    text = compose_prompt(with_task(word_count=42), gentle_task_shape=REFLECTIVE_SHAPE).text
    assert "Do not give a score, grade, or rating of any kind.\nDo not comment on the length of the essay.\n" in text


def test_short_word_count_prompt_drops_length_ban():
    text = compose_prompt(with_task(word_count=5), gentle_task_shape=WORD_COUNT_SHAPE).text
    assert "Do not comment on the length of the essay." not in text
    assert "Do not give a score, grade, or rating of any kind.\nDo not rewrite the essay" in text


def test_shape_follows_tone_family():
    light_tone = ToneTemplate(mode="custom", label="Custom", tone="Be kind.\n", family=LIGHT_FAMILY)
    scored_tone = ToneTemplate(mode="gentle", label="Gentle", tone="Be kind.\n", family=SCORED_FAMILY)

    assert select_shape(light_tone, make_submission(), WORD_COUNT_SHAPE) == LIGHT_SHAPE
    assert select_shape(light_tone, with_task(), REFLECTIVE_SHAPE) == REFLECTIVE_SHAPE
    assert select_shape(scored_tone, make_submission(), WORD_COUNT_SHAPE) == SCORED_SHAPE
