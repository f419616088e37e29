# tests/synthesis/test_system_instruction.py
import pytest

from src.schemas.prototype import ContextSnapshot, HealthSnapshot, TasksSummary
from src.synthesis.narrator import RESPONSE_FORMAT_RULES, build_system_instruction

VALUE_IDS = ["wisdom", "discipline", "peace", "gratitude", "integrity"]
INSPIRATION_IDS = ["marcus_aurelius", "marie_curie", "eliud_kipchoge", "warren_buffett", "nelson_mandela"]


@pytest.fixture
def prototype(prototype_engine, introvert_social_traits):
    return prototype_engine.generate_prototype(
        "user-1", introvert_social_traits, VALUE_IDS, INSPIRATION_IDS, future_self="Calm and focused."
    )

# --- Test Cases ---

def test_sections_in_order(prototype):
    """Test every section is present, in order."""
    prompt = build_system_instruction(prototype)
    headings = ["## User Profile", "## Current Context", "## Voice Guidelines",
                "## Archetype-Specific Language", "## Response Format"]
    positions = [prompt.index(h) for h in headings]
    assert positions == sorted(positions)
    assert prompt.startswith("You are Opus,")

def test_profile_section(prototype):
    """Test the profile reflects the stored blend, voice and values."""
    prompt = build_system_instruction(prototype, assistant_name="Ada")
    assert prompt.startswith("You are Ada,")
    assert "- Primary archetype: Stoic (Virtuous Progress)" in prompt
    assert "- Secondary archetype: Scientist" in prompt
    assert "- Voice tone: philosophical with analytical undertones" in prompt
    assert '- Archetype blend name: "The Patient Scholar"' in prompt
    assert "- Core values: Wisdom, Discipline, Peace, Gratitude, Integrity" in prompt
    assert "- Future self: Calm and focused." in prompt
    assert "- Defining traits: " in prompt

def test_voice_guidelines(prototype):
    """Test voice modifiers and example phrases."""
    prompt = build_system_instruction(prototype, push_level="gentle", formality="professional", use_emoji=True)
    assert "with gentle intensity" in prompt
    assert "Use professional language." in prompt
    assert "Use emojis sparingly" in prompt
    for phrase in prototype.voice_profile.example_phrases:
        assert f'- "{phrase}"' in prompt
    assert "Do not use emojis." in build_system_instruction(prototype)

def test_archetype_language(prototype):
    """Test the primary archetype's verbs and lead motivation phrase."""
    prompt = build_system_instruction(prototype)
    assert "Use these action verbs: Accept, Endure, Focus, Persist, Embrace" in prompt
    assert 'Motivation phrases: "Focus on what you can control."' in prompt
    for rule in RESPONSE_FORMAT_RULES:
        assert f"- {rule}" in prompt

def test_context_section(prototype):
    """Test context lines and the placeholder for an empty snapshot."""
    context = ContextSnapshot(
        day_types=["recovery"],
        tasks_summary=TasksSummary(total=3, due_today=1, overdue=0),
        routines_completed=2,
        routines_total=4,
        health=HealthSnapshot(steps=8000, sleep_hours=7.5),
    )
    prompt = build_system_instruction(prototype, context=context)
    assert "- Day type(s): recovery" in prompt
    assert "- Tasks: 3 active, 1 due today, 0 overdue" in prompt
    assert "- Routines today: 2/4 completed" in prompt
    assert "- Health: 8000 steps, 7.5h sleep" in prompt
    assert "- No context snapshot available" not in prompt

    assert "- No context snapshot available" in build_system_instruction(prototype, context=ContextSnapshot())

@pytest.mark.parametrize("push_level, nudge", [
    ("gentle", "Take your time with the next task. You've got this."),
    ("moderate", "You're ready for the next task. One step at a time."),
    ("intense", "I believe in you completely. Crush the next task."),
])
def test_nudge_follows_motivation_style_and_push_level(prototype, push_level, nudge):
    """Test the nudge uses the leading motivation style at the requested intensity."""
    prompt = build_system_instruction(prototype, push_level=push_level)
    assert f'Nudge toward a task like this: "{nudge}"' in prompt
    assert 'Frame obstacles like this: "When facing <obstacle>, remember: <plan>"' in prompt

@pytest.mark.parametrize("hour, period, greeting", [
    (7, "morning", "Sam. Another day to practice virtue."),
    (13, "afternoon", "Sam. The present moment is all we have."),
    (21, "evening", "Sam. Reflect on what was within your control."),
])
def test_greeting_needs_name_and_local_hour(prototype, hour, period, greeting):
    """Test the greeting matches the archetype and time of day."""
    context = ContextSnapshot(local_hour=hour)
    prompt = build_system_instruction(prototype, context=context, user_name="Sam")
    assert f"- Time of day: {period}" in prompt
    assert f'Open with a greeting like: "{greeting}"' in prompt

    assert "Open with a greeting like" not in build_system_instruction(prototype, context=context)
    assert "Open with a greeting like" not in build_system_instruction(prototype, user_name="Sam")

@pytest.mark.parametrize("completed, total, message", [
    (4, 4, "Virtue practiced consistently."),
    (2, 4, "Some things were beyond control."),
    (None, 3, "Tomorrow offers new choices."),
])
def test_daily_check_in_follows_routine_completion(prototype, completed, total, message):
    """Test the check-in message tracks how many routines are done."""
    context = ContextSnapshot(routines_completed=completed, routines_total=total)
    prompt = build_system_instruction(prototype, context=context)
    assert f'Daily check-in: "{message}"' in prompt

def test_no_check_in_without_routines(prototype):
    """Test the check-in is omitted when no routine count is known."""
    assert "Daily check-in" not in build_system_instruction(prototype)
    assert "Daily check-in" not in build_system_instruction(prototype, context=ContextSnapshot(day_types=["rest"]))
