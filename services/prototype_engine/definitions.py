# services/prototype_engine/definitions.py
# Trait dimensions, the statement pairs that measure them, and the screen grouping.

import logging
from typing import Dict, List, Optional, Tuple

from .models import (
    ALL_TRAIT_KEYS,
    StatementGroup,
    StatementPair,
    TraitDimension,
    TraitKey,
)

logger = logging.getLogger(__name__)

# --- Trait Catalog ---

TRAIT_DEFINITIONS: List[TraitDimension] = [
    TraitDimension(
        key=TraitKey.INTROVERT_EXTROVERT,
        left_label="Introvert",
        right_label="Extrovert",
        left_description="Energy from solitude, deep focus, internal processing",
        right_description="Energy from social interaction, external processing",
        category="energy",
    ),
    TraitDimension(
        key=TraitKey.INTUITIVE_ANALYTICAL,
        left_label="Intuitive",
        right_label="Analytical",
        left_description="Trust gut feelings, pattern recognition, holistic thinking",
        right_description="Data-driven decisions, systematic analysis, logical reasoning",
        category="decision",
    ),
    TraitDimension(
        key=TraitKey.SPONTANEOUS_STRUCTURED,
        left_label="Spontaneous",
        right_label="Structured",
        left_description="Flexible, adaptable, go with the flow",
        right_description="Planned, scheduled, systematic approach",
        category="work",
    ),
    TraitDimension(
        key=TraitKey.RISK_AVERSE_SEEKING,
        left_label="Risk-Averse",
        right_label="Risk-Seeking",
        left_description="Prefer security, minimize uncertainty, careful evaluation",
        right_description="Embrace uncertainty, seek high stakes, bold moves",
        category="approach",
    ),
    TraitDimension(
        key=TraitKey.SPECIALIST_GENERALIST,
        left_label="Specialist",
        right_label="Generalist",
        left_description="Deep expertise in focused areas, mastery of few",
        right_description="Broad knowledge across domains, jack of all trades",
        category="work",
    ),
    TraitDimension(
        key=TraitKey.INDEPENDENT_COLLABORATIVE,
        left_label="Independent",
        right_label="Collaborative",
        left_description="Self-reliant, autonomous, work best alone",
        right_description="Team-oriented, synergistic, thrive with others",
        category="social",
    ),
    TraitDimension(
        key=TraitKey.PATIENT_URGENT,
        left_label="Patient",
        right_label="Urgent",
        left_description="Long-term focus, delayed gratification, steady progress",
        right_description="Immediate action, fast results, now-oriented",
        category="approach",
    ),
    TraitDimension(
        key=TraitKey.PRAGMATIC_IDEALISTIC,
        left_label="Pragmatic",
        right_label="Idealistic",
        left_description="Focus on what works, practical solutions, realistic",
        right_description="Focus on what's right, principled, vision-driven",
        category="decision",
    ),
    TraitDimension(
        key=TraitKey.MINIMALIST_MAXIMALIST,
        left_label="Minimalist",
        right_label="Maximalist",
        left_description="Less is more, essentialism, reduce complexity",
        right_description="More is more, abundance, embrace complexity",
        category="approach",
    ),
    TraitDimension(
        key=TraitKey.PRIVATE_PUBLIC,
        left_label="Private",
        right_label="Public",
        left_description="Guard privacy, selective sharing, behind scenes",
        right_description="Open sharing, visible, comfortable in spotlight",
        category="social",
    ),
    TraitDimension(
        key=TraitKey.HARMONIOUS_CONFRONTATIONAL,
        left_label="Harmonious",
        right_label="Confrontational",
        left_description="Avoid conflict, seek consensus, diplomatic",
        right_description="Direct confrontation, address issues head-on",
        category="social",
    ),
    TraitDimension(
        key=TraitKey.PROCESS_OUTCOME,
        left_label="Process-Oriented",
        right_label="Outcome-Oriented",
        left_description="Value the journey, focus on how, enjoy the work",
        right_description="Value the result, focus on what, ends-driven",
        category="work",
    ),
    TraitDimension(
        key=TraitKey.CONSERVATIVE_EXPERIMENTAL,
        left_label="Conservative",
        right_label="Experimental",
        left_description="Proven methods, tradition, stability",
        right_description="Novel approaches, innovation, change-seeking",
        category="approach",
    ),
    TraitDimension(
        key=TraitKey.HUMBLE_CONFIDENT,
        left_label="Humble",
        right_label="Confident",
        left_description="Self-effacing, understated, open to being wrong",
        right_description="Self-assured, bold assertions, strong presence",
        category="social",
    ),
    TraitDimension(
        key=TraitKey.REACTIVE_PROACTIVE,
        left_label="Reactive",
        right_label="Proactive",
        left_description="Respond to environment, adapt, flexible response",
        right_description="Shape environment, initiate, create conditions",
        category="approach",
    ),
]

# --- Statement Catalog ---

_STATEMENT_TEXT: Dict[TraitKey, Tuple[str, str]] = {
    TraitKey.INTROVERT_EXTROVERT: (
        "I feel recharged after spending time alone. Quiet reflection and solitary activities restore my energy.",
        "I feel energized after being around people. Social interactions and group activities give me a boost.",
    ),
    TraitKey.INTUITIVE_ANALYTICAL: (
        "I often make decisions based on gut feelings and instinct. I trust my intuition to guide me.",
        "I prefer to analyze data and facts before making decisions. I want evidence to support my choices.",
    ),
    TraitKey.PRAGMATIC_IDEALISTIC: (
        "I focus on what works in practice, even if it's not perfect. Results matter more than ideals.",
        "I'm guided by principles and values, even when it's harder. Doing what's right matters most.",
    ),
    TraitKey.SPONTANEOUS_STRUCTURED: (
        "I thrive on flexibility and adapt easily to changing situations. I prefer going with the flow.",
        "I work best with clear plans and schedules. Structure and routines help me stay productive.",
    ),
    TraitKey.SPECIALIST_GENERALIST: (
        "I prefer to develop deep expertise in specific areas. I'd rather know a lot about a few things.",
        "I enjoy learning broadly across many domains. I'd rather know something about many things.",
    ),
    TraitKey.PROCESS_OUTCOME: (
        "I find satisfaction in the work itself. How I do something matters as much as the result.",
        "I'm most focused on achieving results. The end goal is what drives me, not the journey.",
    ),
    TraitKey.INDEPENDENT_COLLABORATIVE: (
        "I do my best work alone. I'm self-reliant and prefer to figure things out by myself.",
        "I thrive when working with others. Collaboration brings out my best ideas and efforts.",
    ),
    TraitKey.PRIVATE_PUBLIC: (
        "I'm selective about what I share. I prefer to keep my thoughts and personal life private.",
        "I'm comfortable sharing openly. I don't mind being visible and putting myself out there.",
    ),
    TraitKey.HARMONIOUS_CONFRONTATIONAL: (
        "I naturally seek harmony and avoid conflict. I prefer diplomatic solutions over direct confrontation.",
        "I address issues head-on, even if uncomfortable. Direct confrontation is sometimes necessary.",
    ),
    TraitKey.HUMBLE_CONFIDENT: (
        "I tend to downplay my abilities and stay understated. I'm always open to being wrong.",
        "I'm self-assured and comfortable asserting my views. I project confidence in what I know.",
    ),
    TraitKey.RISK_AVERSE_SEEKING: (
        "I prefer security and carefully evaluate risks before acting. I avoid unnecessary uncertainty.",
        "I'm drawn to challenges with uncertain outcomes. High stakes and bold moves excite me.",
    ),
    TraitKey.PATIENT_URGENT: (
        "I'm comfortable with slow, steady progress. I can delay gratification for long-term gains.",
        "I prefer quick action and fast results. I have a sense of urgency about getting things done.",
    ),
    TraitKey.MINIMALIST_MAXIMALIST: (
        "I believe less is more. I prefer simplicity and eliminating the unnecessary.",
        "I embrace abundance and variety. More options and possibilities energize me.",
    ),
    TraitKey.CONSERVATIVE_EXPERIMENTAL: (
        "I trust proven methods and established approaches. Stability and tradition are valuable.",
        "I'm drawn to new approaches and experimentation. Innovation and change energize me.",
    ),
    TraitKey.REACTIVE_PROACTIVE: (
        "I respond well to situations as they arise. I'm adaptable and flexible to circumstances.",
        "I prefer to anticipate and shape outcomes. I take initiative rather than wait for things.",
    ),
}

STATEMENT_GROUPS: List[StatementGroup] = [
    StatementGroup(
        id="energy_decision",
        title="Energy & Decision Making",
        description="How you recharge and make choices",
        trait_keys=[
            TraitKey.INTROVERT_EXTROVERT,
            TraitKey.INTUITIVE_ANALYTICAL,
            TraitKey.PRAGMATIC_IDEALISTIC,
        ],
    ),
    StatementGroup(
        id="work",
        title="Work Style",
        description="How you approach tasks and learning",
        trait_keys=[
            TraitKey.SPONTANEOUS_STRUCTURED,
            TraitKey.SPECIALIST_GENERALIST,
            TraitKey.PROCESS_OUTCOME,
        ],
    ),
    StatementGroup(
        id="social",
        title="Social Style",
        description="How you interact with others",
        trait_keys=[
            TraitKey.INDEPENDENT_COLLABORATIVE,
            TraitKey.PRIVATE_PUBLIC,
            TraitKey.HARMONIOUS_CONFRONTATIONAL,
            TraitKey.HUMBLE_CONFIDENT,
        ],
    ),
    StatementGroup(
        id="approach",
        title="Approach to Life",
        description="How you handle risk, pace, and change",
        trait_keys=[
            TraitKey.RISK_AVERSE_SEEKING,
            TraitKey.PATIENT_URGENT,
            TraitKey.MINIMALIST_MAXIMALIST,
            TraitKey.CONSERVATIVE_EXPERIMENTAL,
            TraitKey.REACTIVE_PROACTIVE,
        ],
    ),
]

# Lookup maps
TRAITS_BY_KEY: Dict[TraitKey, TraitDimension] = {t.key: t for t in TRAIT_DEFINITIONS}

TRAIT_STATEMENTS: List[StatementPair] = [
    StatementPair(
        trait_key=key,
        left_statement=_STATEMENT_TEXT[key][0],
        right_statement=_STATEMENT_TEXT[key][1],
        category=TRAITS_BY_KEY[key].category,
    )
    for group in STATEMENT_GROUPS
    for key in group.trait_keys
]
STATEMENTS_BY_KEY: Dict[TraitKey, StatementPair] = {s.trait_key: s for s in TRAIT_STATEMENTS}
GROUPS_BY_ID: Dict[str, StatementGroup] = {g.id: g for g in STATEMENT_GROUPS}

# Left-side bands: (exclusive upper bound, leaning, intensity)
INTERPRETATION_BANDS = [
    (20, "left", "strong"),
    (35, "left", "moderate"),
    (45, "left", "slight"),
]


def _as_trait_key(key) -> Optional[TraitKey]:
    try:
        return TraitKey(key)
    except ValueError:
        return None


def get_trait_by_id(key) -> Optional[TraitDimension]:
    trait_key = _as_trait_key(key)
    return TRAITS_BY_KEY.get(trait_key) if trait_key else None


def get_traits_by_category(category: str) -> List[TraitDimension]:
    return [t for t in TRAIT_DEFINITIONS if t.category == category]


def get_statement_by_trait_id(key) -> Optional[StatementPair]:
    trait_key = _as_trait_key(key)
    return STATEMENTS_BY_KEY.get(trait_key) if trait_key else None


def get_statements_by_category(category: str) -> List[StatementPair]:
    return [s for s in TRAIT_STATEMENTS if s.category == category]


def get_group_by_id(group_id: str) -> Optional[StatementGroup]:
    return GROUPS_BY_ID.get(group_id)


def get_group_for_trait(key) -> Optional[StatementGroup]:
    trait_key = _as_trait_key(key)
    for group in STATEMENT_GROUPS:
        if trait_key in group.trait_keys:
            return group
    return None


def interpret_trait_value(value: float) -> Tuple[str, str]:
    """
    Maps a 0-100 trait score to a (leaning, intensity) pair.

    Scores from 45 to 55 inclusive read as ("center", "balanced").
    """
    for upper, leaning, intensity in INTERPRETATION_BANDS:
        if value < upper:
            return leaning, intensity
    if value <= 55:
        return "center", "balanced"
    if value < 65:
        return "right", "slight"
    if value < 80:
        return "right", "moderate"
    return "right", "strong"


def describe_trait_value(key, value: float) -> str:
    """Human-readable reading such as 'moderately Introvert'."""
    trait = get_trait_by_id(key)
    if trait is None:
        return ""
    leaning, intensity = interpret_trait_value(value)
    if leaning == "center":
        return f"balanced between {trait.left_label} and {trait.right_label}"
    label = trait.left_label if leaning == "left" else trait.right_label
    adverb = {"strong": "strongly", "moderate": "moderately", "slight": "slightly"}[intensity]
    return f"{adverb} {label}"


def validate_catalogs() -> None:
    """
    Checks the catalog invariants: one dimension and one statement pair per key,
    and groups that partition the key set. Raises ValueError on the first violation.
    """
    if len(TRAITS_BY_KEY) != len(TRAIT_DEFINITIONS):
        raise ValueError("Duplicate trait dimension found in TRAIT_DEFINITIONS")
    if set(TRAITS_BY_KEY) != set(ALL_TRAIT_KEYS):
        raise ValueError("TRAIT_DEFINITIONS does not cover every trait key")
    if len(STATEMENTS_BY_KEY) != len(TRAIT_STATEMENTS):
        raise ValueError("Duplicate statement pair found in TRAIT_STATEMENTS")
    if set(STATEMENTS_BY_KEY) != set(ALL_TRAIT_KEYS):
        missing = sorted(k.value for k in set(ALL_TRAIT_KEYS) - set(STATEMENTS_BY_KEY))
        raise ValueError(f"Traits without a statement pair: {missing}")
    if len(GROUPS_BY_ID) != len(STATEMENT_GROUPS):
        raise ValueError("Duplicate statement group ID found")

    seen: Dict[TraitKey, str] = {}
    for group in STATEMENT_GROUPS:
        for key in group.trait_keys:
            if key in seen:
                raise ValueError(f"Trait '{key.value}' appears in groups '{seen[key]}' and '{group.id}'")
            seen[key] = group.id
    if set(seen) != set(ALL_TRAIT_KEYS):
        missing = sorted(k.value for k in set(ALL_TRAIT_KEYS) - set(seen))
        raise ValueError(f"Traits not assigned to any statement group: {missing}")
    logger.debug(f"Trait catalogs validated: {len(TRAIT_DEFINITIONS)} traits in {len(STATEMENT_GROUPS)} groups")


validate_catalogs()
