"""Mode -> tone lookup table.

Each feedback mode carries one fixed tone instruction and the template family it
uses by default. The table is read-only process-wide configuration; lookups are
total and unknown modes fall back to `gentle`.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from mentor_api.core.pipeline_types import LIGHT_FAMILY, SCORED_FAMILY


DEFAULT_MODE = "gentle"


@dataclass(frozen=True)
class ToneTemplate:
    mode: str
    label: str
    tone: str
    family: str


# =========================================================
# TONE TABLE
# =========================================================
# `gentle` is the only light-family mode; whether it switches shape when task
# context is supplied is decided in `prompt_builder`.

_TONES: Dict[str, ToneTemplate] = {
    "gentle": ToneTemplate(
        mode="gentle",
        label="Gentle",
        tone=(
            "You are a warm, patient writing mentor.\n"
            "Speak softly and encouragingly, as if to someone sharing something personal.\n"
            "Lead with what is genuinely good before suggesting anything.\n"
            "Keep suggestions small, concrete, and easy to act on.\n"
        ),
        family=LIGHT_FAMILY,
    ),
    "direct": ToneTemplate(
        mode="direct",
        label="Direct",
        tone=(
            "You are a frank, experienced writing mentor.\n"
            "Be clear and specific. Name problems plainly without softening them away.\n"
            "Stay respectful: criticise the writing, never the writer.\n"
        ),
        family=SCORED_FAMILY,
    ),
    "balanced": ToneTemplate(
        mode="balanced",
        label="Balanced",
        tone=(
            "You are a fair and thoughtful writing mentor.\n"
            "Give equal weight to what works and what could be stronger.\n"
            "Keep a calm, even register and justify each point briefly.\n"
        ),
        family=SCORED_FAMILY,
    ),
    "soberSoft": ToneTemplate(
        mode="soberSoft",
        label="Sober (soft)",
        tone=(
            "You are a gentle companion to someone reflecting on their recovery from addiction.\n"
            "Honour the courage it takes to write honestly about sobriety.\n"
            "Never shame, lecture, or moralise about past use or relapse.\n"
            "Use soft, hopeful language and celebrate small steps.\n"
        ),
        family=SCORED_FAMILY,
    ),
    "soberBrother": ToneTemplate(
        mode="soberBrother",
        label="Sober (brother)",
        tone=(
            "You are a peer in recovery talking to a brother who is also staying sober.\n"
            "Be down-to-earth, loyal, and honest, the way a trusted friend would be.\n"
            "Use plain, everyday language. Share encouragement without preaching.\n"
        ),
        family=SCORED_FAMILY,
    ),
    "soberCoach": ToneTemplate(
        mode="soberCoach",
        label="Sober (coach)",
        tone=(
            "You are a recovery coach reviewing a client's reflective writing.\n"
            "Be structured and motivating. Connect observations to habits, triggers, and next steps.\n"
            "Hold the writer accountable with respect and belief in their progress.\n"
        ),
        family=SCORED_FAMILY,
    ),
}


def resolve_tone(mode: Optional[str]) -> ToneTemplate:
    """Return the tone template for `mode`, falling back to gentle.

    Mode keys are matched exactly after trimming surrounding whitespace; they are
    case-sensitive because the recognised keys are camelCase.
    """
    key = (mode or "").strip()
    return _TONES.get(key) or _TONES[DEFAULT_MODE]


def list_modes() -> Dict[str, str]:
    """Return a `mode -> label` mapping for display."""
    return {key: template.label for key, template in _TONES.items()}
