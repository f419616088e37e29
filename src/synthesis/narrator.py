# src/synthesis/narrator.py
# Formats a stored prototype and the user's day context into the chat assistant's system instruction.

import logging
from typing import List, Optional

from services.prototype_engine.archetypes import get_archetype_definition
from services.prototype_engine.blend import closest_traits
from services.prototype_engine.definitions import describe_trait_value, get_trait_by_id
from services.prototype_engine.models import UserPrototype
from services.prototype_engine.values import get_values_by_ids
from services.prototype_engine.voice import (
    frame_obstacle,
    get_action_verbs,
    get_archetype_greeting,
    get_breakdown_strategy,
    get_motivation,
    get_motivational_message,
    time_of_day,
)
from src.schemas.prototype import ContextSnapshot

logger = logging.getLogger(__name__)

RESPONSE_FORMAT_RULES = [
    "Be concise and actionable",
    "When suggesting tasks or actions, format them clearly",
    "If you suggest creating tasks, routines, or goals, indicate this clearly",
    "Match the user's archetype communication style",
    "End with a clear next step or question when appropriate",
]


def _profile_section(prototype: UserPrototype, formality: str, push_level: str) -> List[str]:
    blend = prototype.archetype_blend
    voice = prototype.voice_profile
    strategy = get_breakdown_strategy(blend.primary)
    lines = [
        "## User Profile",
        f"- Primary archetype: {blend.primary.value} ({strategy['approach_name']})",
        f"- Secondary archetype: {blend.secondary.value}",
        f"- Voice tone: {voice.tone}",
        f"- Motivation style: {voice.motivation_style}",
        f"- Detail level: {voice.detail_level}",
        f"- Time orientation: {voice.time_orientation}",
        f"- Formality: {formality}",
        f"- Push level: {push_level}",
    ]
    if blend.name:
        lines.append(f'- Archetype blend name: "{blend.name}"')

    values = get_values_by_ids(prototype.selected_value_ids)
    if values:
        lines.append(f"- Core values: {', '.join(v.name for v in values)}")

    primary = get_archetype_definition(blend.primary)
    if primary is not None:
        readings = []
        for key in closest_traits(prototype.traits, primary):
            trait = get_trait_by_id(key)
            readings.append(f"{trait.left_label}/{trait.right_label}: {describe_trait_value(key, prototype.traits[key])}")
        lines.append(f"- Defining traits: {'; '.join(readings)}")
    if prototype.future_self:
        lines.append(f"- Future self: {prototype.future_self}")
    lines.append("")
    return lines


def _context_section(context: Optional[ContextSnapshot]) -> List[str]:
    lines = ["## Current Context"]
    if context is None:
        lines.append("- No context snapshot available")
        lines.append("")
        return lines

    if context.day_types:
        lines.append(f"- Day type(s): {', '.join(context.day_types)}")
    if context.tasks_summary:
        t = context.tasks_summary
        lines.append(f"- Tasks: {t.total} active, {t.due_today} due today, {t.overdue} overdue")
    if context.routines_total:
        lines.append(f"- Routines today: {context.routines_completed or 0}/{context.routines_total} completed")
    if context.health:
        health_parts = []
        if context.health.steps:
            health_parts.append(f"{context.health.steps} steps")
        if context.health.sleep_hours:
            health_parts.append(f"{context.health.sleep_hours}h sleep")
        if context.health.sleep_score:
            health_parts.append(f"sleep score: {context.health.sleep_score}")
        if health_parts:
            lines.append(f"- Health: {', '.join(health_parts)}")
    if context.local_hour is not None:
        lines.append(f"- Time of day: {time_of_day(context.local_hour)}")
    if len(lines) == 1:
        lines.append("- No context snapshot available")
    lines.append("")
    return lines


def build_system_instruction(
    prototype: UserPrototype,
    context: Optional[ContextSnapshot] = None,
    assistant_name: str = "Opus",
    push_level: str = "moderate",
    formality: str = "casual",
    use_emoji: bool = False,
    user_name: Optional[str] = None,
) -> str:
    """
    Builds the system instruction handed to the chat completion collaborator.

    Sections: User Profile, Current Context, Voice Guidelines,
    Archetype-Specific Language and Response Format. The greeting needs both
    `user_name` and the snapshot's `local_hour`; the daily check-in needs a routine count.
    """
    logger.info(f"Building system instruction for user {prototype.user_id}")
    blend = prototype.archetype_blend
    strategy = get_breakdown_strategy(blend.primary)
    verbs = get_action_verbs(blend.primary)

    parts: List[str] = [
        f"You are {assistant_name}, a personal assistant that speaks in the user's own voice.",
        "",
    ]
    parts.extend(_profile_section(prototype, formality, push_level))
    parts.extend(_context_section(context))

    parts.append("## Voice Guidelines")
    parts.append(f"Respond in a {prototype.voice_profile.tone} tone with {push_level} intensity.")
    parts.append(f"Use {formality} language.")
    parts.append("Use emojis sparingly to add warmth." if use_emoji else "Do not use emojis.")
    parts.append("Examples of the user's voice:")
    for phrase in prototype.voice_profile.example_phrases:
        parts.append(f'- "{phrase}"')
    parts.append("")

    parts.append("## Archetype-Specific Language")
    parts.append(f"Use these action verbs: {', '.join(verbs['primary'])}")
    parts.append(f'Motivation phrases: "{strategy["motivation_phrases"][0]}"')
    nudge = get_motivation(prototype.voice_profile.motivation_style, "the next task", push_level)
    parts.append(f'Nudge toward a task like this: "{nudge}"')
    parts.append(f'Frame obstacles like this: "{frame_obstacle("<obstacle>", "<plan>", blend.primary)}"')
    if context is not None and context.local_hour is not None and user_name:
        greeting = get_archetype_greeting(blend.primary, user_name, time_of_day(context.local_hour))
        parts.append(f'Open with a greeting like: "{greeting}"')
    if context is not None and context.routines_total:
        rate = (context.routines_completed or 0) / context.routines_total
        parts.append(f'Daily check-in: "{get_motivational_message(blend.primary, rate)}"')
    parts.append("")

    parts.append("## Response Format")
    parts.extend(f"- {rule}" for rule in RESPONSE_FORMAT_RULES)

    return "\n".join(parts)
