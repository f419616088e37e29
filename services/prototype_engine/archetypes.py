# services/prototype_engine/archetypes.py
# Built-in archetype definitions, their target trait vectors and curated blend names.

from typing import Dict, List, Optional

from .models import (
    ArchetypeCatalog,
    ArchetypeDefinition,
    ArchetypeId,
    TraitKey,
    VoiceTemplate,
)

T = TraitKey

# Target vectors give one score per trait, in this order.
_TARGET_ORDER = [
    T.INTROVERT_EXTROVERT, T.INTUITIVE_ANALYTICAL, T.SPONTANEOUS_STRUCTURED,
    T.RISK_AVERSE_SEEKING, T.SPECIALIST_GENERALIST, T.INDEPENDENT_COLLABORATIVE,
    T.PATIENT_URGENT, T.PRAGMATIC_IDEALISTIC, T.MINIMALIST_MAXIMALIST,
    T.PRIVATE_PUBLIC, T.HARMONIOUS_CONFRONTATIONAL, T.PROCESS_OUTCOME,
    T.CONSERVATIVE_EXPERIMENTAL, T.HUMBLE_CONFIDENT, T.REACTIVE_PROACTIVE,
]


def _target(*scores: float) -> Dict[TraitKey, float]:
    if len(scores) != len(_TARGET_ORDER):
        raise ValueError(f"Expected {len(_TARGET_ORDER)} target scores, got {len(scores)}")
    return dict(zip(_TARGET_ORDER, (float(s) for s in scores)))


ARCHETYPE_DEFINITIONS: List[ArchetypeDefinition] = [
    ArchetypeDefinition(
        id=ArchetypeId.MACHINE,
        name="The Machine",
        description="Systematic, efficient, relentless execution. You build systems and processes that compound over time.",
        target=_target(40, 65, 90, 40, 35, 35, 75, 35, 20, 35, 55, 75, 35, 60, 90),
        core_traits=[T.SPONTANEOUS_STRUCTURED, T.REACTIVE_PROACTIVE, T.PATIENT_URGENT],
        values=["discipline", "excellence", "order", "mastery"],
        voice=VoiceTemplate(
            tone="direct",
            motivation_style="discipline",
            detail_level="sparse",
            time_orientation="immediate",
            phrase_templates=[
                "Execute. No excuses{address}.",
                "The system works. Trust the process and let {value} compound.",
                "One task at a time. Complete it.",
            ],
            blend_phrase="Build the system, then let it run.",
        ),
    ),
    ArchetypeDefinition(
        id=ArchetypeId.WARRIOR,
        name="The Warrior",
        description="Confrontational, courageous, driven by challenge. You thrive in adversity and competition.",
        target=_target(60, 50, 60, 80, 50, 40, 75, 50, 50, 65, 85, 80, 55, 90, 80),
        core_traits=[T.HARMONIOUS_CONFRONTATIONAL, T.HUMBLE_CONFIDENT, T.RISK_AVERSE_SEEKING],
        values=["courage", "discipline", "integrity", "excellence"],
        voice=VoiceTemplate(
            tone="direct",
            motivation_style="challenge",
            detail_level="sparse",
            time_orientation="immediate",
            phrase_templates=[
                "This is your moment{address}. Attack.",
                "Pain is temporary. {Value} is forever.",
                "No retreat. No surrender.",
            ],
            blend_phrase="When it gets hard, push through anyway.",
        ),
    ),
    ArchetypeDefinition(
        id=ArchetypeId.ARTIST,
        name="The Artist",
        description="Creative, intuitive, emotionally intelligent. You see beauty and meaning where others see mundane.",
        target=_target(35, 20, 25, 55, 40, 35, 40, 70, 45, 40, 35, 20, 85, 45, 55),
        core_traits=[T.INTUITIVE_ANALYTICAL, T.CONSERVATIVE_EXPERIMENTAL, T.PROCESS_OUTCOME],
        values=["creativity", "craftsmanship", "presence", "simplicity"],
        voice=VoiceTemplate(
            tone="warm",
            motivation_style="inspiration",
            detail_level="moderate",
            time_orientation="balanced",
            phrase_templates=[
                "Let the work flow through you{address}.",
                "Find the beauty in the process and let {value} shape it.",
                "Create something that matters to you.",
            ],
            blend_phrase="Leave room for play and discovery.",
        ),
    ),
    ArchetypeDefinition(
        id=ArchetypeId.SCIENTIST,
        name="The Scientist",
        description="Analytical, systematic, truth-seeking. You understand through data and experimentation.",
        target=_target(30, 90, 70, 40, 25, 40, 35, 30, 35, 30, 45, 45, 65, 45, 60),
        core_traits=[T.INTUITIVE_ANALYTICAL, T.PRAGMATIC_IDEALISTIC, T.SPECIALIST_GENERALIST],
        values=["wisdom", "growth", "quality", "integrity"],
        voice=VoiceTemplate(
            tone="analytical",
            motivation_style="logic",
            detail_level="detailed",
            time_orientation="long-term",
            phrase_templates=[
                "Let's examine the data{address}.",
                "What does the evidence say about {value}?",
                "Test, measure, iterate.",
            ],
            blend_phrase="Measure it first, then decide.",
        ),
    ),
    ArchetypeDefinition(
        id=ArchetypeId.STOIC,
        name="The Stoic",
        description="Calm, accepting, focused on what you control. You find peace through perspective.",
        target=_target(30, 55, 65, 30, 50, 40, 20, 50, 20, 20, 25, 35, 35, 30, 35),
        core_traits=[T.REACTIVE_PROACTIVE, T.PATIENT_URGENT, T.HARMONIOUS_CONFRONTATIONAL],
        values=["peace", "wisdom", "discipline", "gratitude"],
        voice=VoiceTemplate(
            tone="philosophical",
            motivation_style="support",
            detail_level="moderate",
            time_orientation="long-term",
            phrase_templates=[
                "Focus on what you can control{address}.",
                "{Value} is practiced, not found.",
                "Accept, adapt, advance.",
            ],
            blend_phrase="Stay steady. This too shall pass.",
        ),
    ),
    ArchetypeDefinition(
        id=ArchetypeId.VISIONARY,
        name="The Visionary",
        description="Bold, future-focused, inspiring. You see possibilities where others see obstacles.",
        target=_target(65, 45, 45, 85, 70, 60, 65, 85, 75, 75, 55, 70, 90, 75, 85),
        core_traits=[T.PRAGMATIC_IDEALISTIC, T.RISK_AVERSE_SEEKING, T.CONSERVATIVE_EXPERIMENTAL],
        values=["innovation", "impact", "ambition", "legacy"],
        voice=VoiceTemplate(
            tone="energetic",
            motivation_style="inspiration",
            detail_level="moderate",
            time_orientation="long-term",
            phrase_templates=[
                "Think bigger{address}. Go further.",
                "Build the future you want to see, grounded in {value}.",
                "This is just the beginning.",
            ],
            blend_phrase="Keep the long game in view.",
        ),
    ),
]

del T

# Keyed "<Primary>_<Secondary>"
BLEND_NAMES: Dict[str, str] = {
    "Machine_Warrior": "The Relentless Builder",
    "Machine_Artist": "The Precise Craftsman",
    "Machine_Scientist": "The Systematic Mind",
    "Machine_Stoic": "The Disciplined Monk",
    "Machine_Visionary": "The Strategic Executor",
    "Warrior_Machine": "The Iron Will",
    "Warrior_Artist": "The Creative Fighter",
    "Warrior_Scientist": "The Tactical Mind",
    "Warrior_Stoic": "The Stoic Warrior",
    "Warrior_Visionary": "The Bold Pioneer",
    "Artist_Machine": "The Methodical Artist",
    "Artist_Warrior": "The Fearless Maker",
    "Artist_Scientist": "The Analytical Creator",
    "Artist_Stoic": "The Peaceful Creator",
    "Artist_Visionary": "The Imaginative Pioneer",
    "Scientist_Machine": "The Analytical Engine",
    "Scientist_Warrior": "The Strategic Analyst",
    "Scientist_Artist": "The Curious Explorer",
    "Scientist_Stoic": "The Wise Observer",
    "Scientist_Visionary": "The Innovative Mind",
    "Stoic_Machine": "The Steady Hand",
    "Stoic_Warrior": "The Calm Commander",
    "Stoic_Artist": "The Serene Creator",
    "Stoic_Scientist": "The Patient Scholar",
    "Stoic_Visionary": "The Wise Dreamer",
    "Visionary_Machine": "The Ambitious Builder",
    "Visionary_Warrior": "The Bold Dreamer",
    "Visionary_Artist": "The Creative Visionary",
    "Visionary_Scientist": "The Innovative Thinker",
    "Visionary_Stoic": "The Patient Revolutionary",
}

DEFAULT_CATALOG = ArchetypeCatalog(archetypes=ARCHETYPE_DEFINITIONS, blend_names=BLEND_NAMES)


def blend_name_key(primary: ArchetypeId, secondary: ArchetypeId) -> str:
    return f"{ArchetypeId(primary).value}_{ArchetypeId(secondary).value}"


def get_archetype_definition(
    archetype_id: ArchetypeId, catalog: ArchetypeCatalog = DEFAULT_CATALOG
) -> Optional[ArchetypeDefinition]:
    for archetype in catalog.archetypes:
        if archetype.id == archetype_id:
            return archetype
    return None


def generate_blend_name(
    primary: ArchetypeId, secondary: ArchetypeId, catalog: ArchetypeCatalog = DEFAULT_CATALOG
) -> str:
    """Curated name for the pair, else a generic '<Primary> blended with <Secondary>'."""
    name = catalog.blend_names.get(blend_name_key(primary, secondary))
    if name:
        return name
    return f"The {ArchetypeId(primary).value} blended with {ArchetypeId(secondary).value}"
