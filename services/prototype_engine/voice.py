# services/prototype_engine/voice.py
# Derives the assistant's voice from an archetype blend, plus archetype phrasing helpers.

import logging
from typing import Dict, List, Optional, Sequence

from .archetypes import DEFAULT_CATALOG, get_archetype_definition
from .models import (
    ArchetypeBlend,
    ArchetypeCatalog,
    ArchetypeId,
    IncompleteStateError,
    InvalidSelectionError,
    VoiceProfile,
)
from .values import INSPIRATIONS_BY_ID, VALUES_BY_ID

logger = logging.getLogger(__name__)

REQUIRED_VALUE_COUNT = 5
MIN_INSPIRATIONS = 5
MAX_INSPIRATIONS = 10
VOICE_BLEND_THRESHOLD = 15.0
FUTURE_SELF_MAX_CHARS = 120

INSPIRATION_PHRASE = "What would {inspiration} do next?"
FUTURE_SELF_PHRASE = "Act as the person you are becoming: {future_self}"

ARCHETYPE_VERBS: Dict[ArchetypeId, Dict[str, List[str]]] = {
    ArchetypeId.MACHINE: {
        "primary": ["Execute", "Systematize", "Automate", "Implement", "Process"],
        "secondary": ["Track", "Optimize", "Configure", "Deploy", "Install"],
        "celebration": ["Completed", "Processed", "Executed", "Systematized", "Optimized"],
    },
    ArchetypeId.WARRIOR: {
        "primary": ["Attack", "Conquer", "Dominate", "Crush", "Overcome"],
        "secondary": ["Push", "Fight", "Battle", "Charge", "Strike"],
        "celebration": ["Conquered", "Dominated", "Crushed", "Defeated", "Won"],
    },
    ArchetypeId.ARTIST: {
        "primary": ["Create", "Explore", "Express", "Craft", "Design"],
        "secondary": ["Flow", "Discover", "Shape", "Compose", "Envision"],
        "celebration": ["Created", "Expressed", "Crafted", "Discovered", "Manifested"],
    },
    ArchetypeId.SCIENTIST: {
        "primary": ["Test", "Measure", "Analyze", "Experiment", "Research"],
        "secondary": ["Observe", "Hypothesize", "Iterate", "Document", "Validate"],
        "celebration": ["Validated", "Proven", "Measured", "Discovered", "Confirmed"],
    },
    ArchetypeId.STOIC: {
        "primary": ["Accept", "Endure", "Focus", "Persist", "Embrace"],
        "secondary": ["Control", "Release", "Observe", "Practice", "Maintain"],
        "celebration": ["Accepted", "Endured", "Maintained", "Persisted", "Mastered"],
    },
    ArchetypeId.VISIONARY: {
        "primary": ["Envision", "Build", "Transform", "Launch", "Scale"],
        "secondary": ["Imagine", "Pioneer", "Revolutionize", "Inspire", "Lead"],
        "celebration": ["Launched", "Transformed", "Built", "Pioneered", "Achieved"],
    },
}

# How each archetype breaks large goals down, with its stock motivation lines.
BREAKDOWN_STRATEGIES: Dict[ArchetypeId, Dict[str, object]] = {
    ArchetypeId.MACHINE: {
        "approach_name": "Systematic Execution",
        "description": "Break down into precise, measurable steps with clear processes",
        "motivation_phrases": [
            "The system works. Trust the process.",
            "Execute. No excuses.",
            "One process at a time. Stack the wins.",
            "Efficiency is the goal. Optimize everything.",
            "Build the machine. Let it run.",
        ],
    },
    ArchetypeId.WARRIOR: {
        "approach_name": "Progressive Conquest",
        "description": "Frame as battles to win, with increasing difficulty",
        "motivation_phrases": [
            "This is your moment. Attack.",
            "No retreat. No surrender.",
            "Pain is temporary. Victory is forever.",
            "The battle is won in the mind first.",
            "Warriors don't make excuses. They make progress.",
        ],
    },
    ArchetypeId.ARTIST: {
        "approach_name": "Creative Discovery",
        "description": "Explore and discover through creative expression",
        "motivation_phrases": [
            "Let the work flow through you.",
            "Find the beauty in the process.",
            "Create something only you can create.",
            "Trust your intuition. It knows the way.",
            "The masterpiece emerges one brushstroke at a time.",
        ],
    },
    ArchetypeId.SCIENTIST: {
        "approach_name": "Iterative Experimentation",
        "description": "Test hypotheses, measure results, iterate based on data",
        "motivation_phrases": [
            "Let's examine the data.",
            "Test, measure, iterate.",
            "Every failure is data. Every success is validated.",
            "The truth is in the numbers.",
            "Curiosity drives discovery.",
        ],
    },
    ArchetypeId.STOIC: {
        "approach_name": "Virtuous Progress",
        "description": "Focus on what you control, accept what you cannot",
        "motivation_phrases": [
            "Focus on what you can control.",
            "This too shall pass. Keep moving.",
            "The obstacle is the way.",
            "Do what is right, not what is easy.",
            "Amor fati. Love your fate.",
        ],
    },
    ArchetypeId.VISIONARY: {
        "approach_name": "Vision-Driven Impact",
        "description": "Work backward from the grand vision to today's action",
        "motivation_phrases": [
            "Think bigger. Go further.",
            "Build the future you want to see.",
            "Today's action, tomorrow's legacy.",
            "Dream it. Build it. Ship it.",
            "The world needs what only you can create.",
        ],
    },
}

MOTIVATIONS_BY_STYLE: Dict[str, Dict[str, str]] = {
    "challenge": {
        "gentle": "You can handle {context}. Rise to it.",
        "moderate": "This is your moment. Attack {context}.",
        "intense": "{context} won't conquer itself. Dominate it. Now.",
    },
    "support": {
        "gentle": "Take your time with {context}. You've got this.",
        "moderate": "You're ready for {context}. One step at a time.",
        "intense": "I believe in you completely. Crush {context}.",
    },
    "logic": {
        "gentle": "{context} is achievable based on your track record.",
        "moderate": "The data shows {context} is within reach. Here's the path.",
        "intense": "Statistically, you're positioned to excel at {context}. Execute the plan.",
    },
    "inspiration": {
        "gentle": "Imagine completing {context}. How does that feel?",
        "moderate": "Picture yourself after {context}. That person is waiting for you.",
        "intense": "{context} is your destiny. Everything is lining up to help you achieve it.",
    },
    "discipline": {
        "gentle": "{context}. Small consistent steps.",
        "moderate": "{context}. Execute. No excuses.",
        "intense": "{context}. Do it now. Discipline equals freedom.",
    },
}

GREETINGS: Dict[ArchetypeId, Dict[str, str]] = {
    ArchetypeId.MACHINE: {
        "morning": "{name}. New day. New opportunities to execute.",
        "afternoon": "{name}. Halfway through. Stay on target.",
        "evening": "{name}. Final push. Finish strong.",
    },
    ArchetypeId.WARRIOR: {
        "morning": "Rise, {name}. The battle begins.",
        "afternoon": "{name}. The fight continues.",
        "evening": "{name}. One more round.",
    },
    ArchetypeId.ARTIST: {
        "morning": "Good morning, {name}. What will you create today?",
        "afternoon": "{name}, the afternoon light awaits your work.",
        "evening": "{name}, let the evening inspire reflection.",
    },
    ArchetypeId.SCIENTIST: {
        "morning": "{name}. Begin today's observations.",
        "afternoon": "{name}. Midday analysis point.",
        "evening": "{name}. Time to review today's data.",
    },
    ArchetypeId.STOIC: {
        "morning": "{name}. Another day to practice virtue.",
        "afternoon": "{name}. The present moment is all we have.",
        "evening": "{name}. Reflect on what was within your control.",
    },
    ArchetypeId.VISIONARY: {
        "morning": "{name}! A new day to build the future.",
        "afternoon": "{name}, the vision is taking shape.",
        "evening": "{name}, dream bigger tomorrow.",
    },
}

# (minimum completion rate, message per archetype), checked in order
DAILY_MESSAGES = [
    (0.8, {
        ArchetypeId.MACHINE: "Systems performing optimally.",
        ArchetypeId.WARRIOR: "Victory is yours today.",
        ArchetypeId.ARTIST: "Beautiful work today.",
        ArchetypeId.SCIENTIST: "Excellent data points collected.",
        ArchetypeId.STOIC: "Virtue practiced consistently.",
        ArchetypeId.VISIONARY: "The future is closer.",
    }),
    (0.5, {
        ArchetypeId.MACHINE: "Progress made. Optimize tomorrow.",
        ArchetypeId.WARRIOR: "A partial victory. Regroup.",
        ArchetypeId.ARTIST: "Not every day is a masterpiece.",
        ArchetypeId.SCIENTIST: "Data suggests room for improvement.",
        ArchetypeId.STOIC: "Some things were beyond control.",
        ArchetypeId.VISIONARY: "Small steps still move forward.",
    }),
    (0.0, {
        ArchetypeId.MACHINE: "System recalibration needed.",
        ArchetypeId.WARRIOR: "Fall seven times, stand up eight.",
        ArchetypeId.ARTIST: "Rest is part of creation.",
        ArchetypeId.SCIENTIST: "Failed experiments teach the most.",
        ArchetypeId.STOIC: "Tomorrow offers new choices.",
        ArchetypeId.VISIONARY: "Even setbacks serve the vision.",
    }),
]

OBSTACLE_FRAMES: Dict[ArchetypeId, str] = {
    ArchetypeId.MACHINE: "System interrupt: {obstacle} -> Protocol: {solution}",
    ArchetypeId.WARRIOR: "If {obstacle} attacks, counter with: {solution}",
    ArchetypeId.ARTIST: "When {obstacle} blocks the flow, redirect: {solution}",
    ArchetypeId.SCIENTIST: "Hypothesis: if {obstacle} occurs, then {solution}",
    ArchetypeId.STOIC: "When facing {obstacle}, remember: {solution}",
    ArchetypeId.VISIONARY: "Obstacle: {obstacle} -> Pivot: {solution}",
}


# --- Selection validation ---

def validate_value_selection(value_ids: Sequence[str]) -> List[str]:
    ids = list(value_ids or [])
    if len(ids) != REQUIRED_VALUE_COUNT:
        raise InvalidSelectionError(f"Exactly {REQUIRED_VALUE_COUNT} core values are required, got {len(ids)}")
    if len(set(ids)) != len(ids):
        raise InvalidSelectionError("Core value selection contains duplicates")
    unknown = [vid for vid in ids if vid not in VALUES_BY_ID]
    if unknown:
        raise InvalidSelectionError(f"Unknown core value IDs: {', '.join(unknown)}")
    return ids


def validate_inspiration_selection(inspiration_ids: Sequence[str]) -> List[str]:
    ids = list(inspiration_ids or [])
    if not MIN_INSPIRATIONS <= len(ids) <= MAX_INSPIRATIONS:
        raise InvalidSelectionError(
            f"Between {MIN_INSPIRATIONS} and {MAX_INSPIRATIONS} inspirations are required, got {len(ids)}"
        )
    if len(set(ids)) != len(ids):
        raise InvalidSelectionError("Inspiration selection contains duplicates")
    unknown = [iid for iid in ids if iid not in INSPIRATIONS_BY_ID]
    if unknown:
        raise InvalidSelectionError(f"Unknown inspiration IDs: {', '.join(unknown)}")
    return ids


# --- Voice profile ---

def _render(template: str, name: Optional[str], value_name: str) -> str:
    address = f", {name}" if name else ""
    return template.format(address=address, value=value_name.lower(), Value=value_name)


def _summarize_future_self(text: str) -> str:
    summary = " ".join(text.split())
    if len(summary) > FUTURE_SELF_MAX_CHARS:
        summary = summary[: FUTURE_SELF_MAX_CHARS - 3].rstrip() + "..."
    return summary


def _blend_text(primary: str, secondary: str, joiner: str) -> str:
    if primary == secondary:
        return primary
    return joiner.format(primary=primary, secondary=secondary)


def generate_voice_profile(
    blend: Optional[ArchetypeBlend],
    selected_value_ids: Sequence[str],
    selected_inspiration_ids: Sequence[str],
    future_self: Optional[str] = None,
    name: Optional[str] = None,
    catalog: ArchetypeCatalog = DEFAULT_CATALOG,
    blend_threshold: float = VOICE_BLEND_THRESHOLD,
) -> VoiceProfile:
    """
    Builds the voice profile. Tone and motivation style come from the primary
    archetype; when the secondary scores within `blend_threshold` points they are
    blended with the secondary's. Example phrases (3-5) are rendered from the
    primary's templates with the first selected value, then one phrase naming the
    first selected inspiration, then the secondary's phrase when blended and the
    future-self phrase when given.
    """
    if blend is None:
        raise IncompleteStateError("An archetype blend is required to generate a voice profile")
    value_ids = validate_value_selection(selected_value_ids)
    inspiration_ids = validate_inspiration_selection(selected_inspiration_ids)

    primary = get_archetype_definition(blend.primary, catalog)
    secondary = get_archetype_definition(blend.secondary, catalog)
    if primary is None or secondary is None:
        raise IncompleteStateError("Archetype blend refers to archetypes missing from the catalog")

    gap = blend.scores[blend.primary] - blend.scores[blend.secondary]
    blended = gap <= blend_threshold

    tone = primary.voice.tone
    motivation_style = primary.voice.motivation_style
    if blended:
        tone = _blend_text(tone, secondary.voice.tone, "{primary} with {secondary} undertones")
        motivation_style = _blend_text(
            motivation_style, secondary.voice.motivation_style, "{primary}, tempered by {secondary}"
        )

    top_value = VALUES_BY_ID[value_ids[0]].name
    top_inspiration = INSPIRATIONS_BY_ID[inspiration_ids[0]].name

    phrases = [_render(t, name, top_value) for t in primary.voice.phrase_templates[:2]]
    phrases.append(INSPIRATION_PHRASE.format(inspiration=top_inspiration))
    if blended:
        phrases.append(_render(secondary.voice.blend_phrase, name, top_value))
    if future_self and future_self.strip():
        phrases.append(FUTURE_SELF_PHRASE.format(future_self=_summarize_future_self(future_self)))

    logger.debug(
        f"Voice for {blend.primary.value}/{blend.secondary.value}: gap={gap:.2f}, blended={blended}"
    )
    return VoiceProfile(
        tone=tone,
        motivation_style=motivation_style,
        detail_level=primary.voice.detail_level,
        time_orientation=primary.voice.time_orientation,
        example_phrases=phrases,
    )


# --- Phrasing helpers ---

def get_action_verbs(archetype_id: ArchetypeId) -> Dict[str, List[str]]:
    return ARCHETYPE_VERBS[ArchetypeId(archetype_id)]


def get_breakdown_strategy(archetype_id: ArchetypeId) -> Dict[str, object]:
    return BREAKDOWN_STRATEGIES[ArchetypeId(archetype_id)]


def get_motivation(style: str, context: str, intensity: str = "moderate") -> str:
    # Blended styles ("logic, tempered by support") use their leading style.
    base_style = style.split(",")[0].strip()
    if base_style not in MOTIVATIONS_BY_STYLE:
        raise ValueError(f"Unknown motivation style: '{style}'")
    templates = MOTIVATIONS_BY_STYLE[base_style]
    if intensity not in templates:
        raise ValueError(f"Unknown intensity '{intensity}'. Expected gentle, moderate or intense.")
    return templates[intensity].format(context=context)


def time_of_day(hour: int) -> str:
    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    return "evening"


def get_archetype_greeting(archetype_id: ArchetypeId, name: str, period: str) -> str:
    templates = GREETINGS.get(ArchetypeId(archetype_id), {})
    if period not in templates:
        return f"Good {period}, {name}"
    return templates[period].format(name=name)


def get_motivational_message(archetype_id: ArchetypeId, completion_rate: float) -> str:
    archetype_id = ArchetypeId(archetype_id)
    for minimum, messages in DAILY_MESSAGES:
        if completion_rate >= minimum:
            return messages[archetype_id]
    return DAILY_MESSAGES[-1][1][archetype_id]


def frame_obstacle(obstacle: str, solution: str, archetype_id: ArchetypeId) -> str:
    return OBSTACLE_FRAMES[ArchetypeId(archetype_id)].format(obstacle=obstacle, solution=solution)
