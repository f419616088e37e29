# tests/prototype/test_prototype_engine.py
from datetime import datetime, timezone

import pytest

from services.prototype_engine.engine import PrototypeEngine
from services.prototype_engine.models import (
    ALL_TRAIT_KEYS,
    ArchetypeId,
    ClarificationRequiredError,
    IncompleteAssessmentError,
    InvalidResponseError,
    InvalidSelectionError,
    UserPrototype,
)

# --- Test Cases ---

def test_generate_prototype(prototype_engine, introvert_social_traits, value_ids, inspiration_ids):
    """Test the full pipeline from final traits to an immutable prototype."""
    prototype = prototype_engine.generate_prototype(
        "user-1", introvert_social_traits, value_ids, inspiration_ids, name="Sam"
    )

    assert prototype.user_id == "user-1"
    assert prototype.traits == introvert_social_traits
    assert prototype.archetype_blend.primary == ArchetypeId.STOIC
    assert prototype.archetype_blend.secondary == ArchetypeId.SCIENTIST
    assert prototype.archetype_blend.name == "The Patient Scholar"
    assert prototype.voice_profile.tone == "philosophical with analytical undertones"
    assert prototype.voice_profile.example_phrases[0] == "Focus on what you can control, Sam."
    assert prototype.selected_value_ids == value_ids
    assert prototype.selected_inspiration_ids == inspiration_ids
    assert prototype.future_self is None
    assert prototype.created_at.tzinfo is not None

def test_generate_prototype_accepts_plain_score_dict(prototype_engine, introvert_social_traits, value_ids, inspiration_ids):
    """Test traits may be passed as a string-keyed dict."""
    prototype = prototype_engine.generate_prototype(
        "user-2", introvert_social_traits.to_dict(), value_ids, inspiration_ids
    )
    assert prototype.traits == introvert_social_traits

def test_generate_prototype_rejects_incomplete_traits(prototype_engine, introvert_social_traits, value_ids, inspiration_ids):
    """Test a trait map missing keys is an invalid submission."""
    partial = introvert_social_traits.to_dict()
    partial.pop("reactive_proactive")
    with pytest.raises(InvalidResponseError, match="reactive_proactive"):
        prototype_engine.generate_prototype("user-3", partial, value_ids, inspiration_ids)

def test_generate_prototype_rejects_blank_user_id(prototype_engine, introvert_social_traits, value_ids, inspiration_ids):
    """Test the user id is required."""
    with pytest.raises(InvalidResponseError):
        prototype_engine.generate_prototype("  ", introvert_social_traits, value_ids, inspiration_ids)

def test_generate_prototype_rejects_bad_selection(prototype_engine, introvert_social_traits, value_ids, inspiration_ids):
    """Test selection rules are enforced before anything is generated."""
    with pytest.raises(InvalidSelectionError):
        prototype_engine.generate_prototype("user-4", introvert_social_traits, value_ids[:4], inspiration_ids)
    with pytest.raises(InvalidSelectionError):
        prototype_engine.generate_prototype("user-4", introvert_social_traits, value_ids, inspiration_ids[:3])

def test_build_from_responses(prototype_engine, introvert_social_responses, introvert_social_traits, value_ids, inspiration_ids):
    """Test raw responses and overrides resolve to the same prototype as the final traits."""
    responses, overrides = introvert_social_responses
    prototype = prototype_engine.build_from_responses(
        "user-5", responses, overrides, value_ids, inspiration_ids, future_self=" Calm and focused. "
    )
    assert prototype.traits == introvert_social_traits
    assert prototype.archetype_blend.primary == ArchetypeId.STOIC
    assert prototype.future_self == "Calm and focused."
    assert prototype.voice_profile.example_phrases[-1] == "Act as the person you are becoming: Calm and focused."

def test_build_from_responses_needs_clarification(prototype_engine, introvert_social_responses, value_ids, inspiration_ids):
    """Test ambiguous traits without overrides stop generation."""
    responses, _ = introvert_social_responses
    with pytest.raises(ClarificationRequiredError):
        prototype_engine.build_from_responses("user-6", responses, {}, value_ids, inspiration_ids)

def test_build_from_responses_incomplete(prototype_engine, uniform_responses, value_ids, inspiration_ids):
    """Test missing ratings stop generation."""
    responses = uniform_responses(1, 5)
    del responses["humble_confident"]
    with pytest.raises(IncompleteAssessmentError):
        prototype_engine.build_from_responses("user-7", responses, None, value_ids, inspiration_ids)

def test_value_bonus_is_opt_in(introvert_social_traits, value_ids, inspiration_ids):
    """Test the value bonus changes scores only when enabled."""
    plain = PrototypeEngine().blend(introvert_social_traits, value_ids, inspiration_ids)
    boosted = PrototypeEngine(apply_value_bonus=True).blend(introvert_social_traits, value_ids, inspiration_ids)
    assert plain.scores[ArchetypeId.STOIC] == 79.52
    # peace, wisdom, discipline and gratitude are all Stoic values
    assert boosted.scores[ArchetypeId.STOIC] == 99.52
    assert boosted.scores[ArchetypeId.SCIENTIST] == 84.52

def test_inspiration_blend_is_opt_in(introvert_social_traits, value_ids, inspiration_ids):
    """Test inspiration profiles move the scores only when enabled."""
    plain = PrototypeEngine().blend(introvert_social_traits, value_ids, inspiration_ids)
    mixed = PrototypeEngine(blend_inspirations=True).blend(introvert_social_traits, value_ids, inspiration_ids)
    assert set(mixed.scores) == set(ArchetypeId)
    assert mixed.scores != plain.scores

def test_wizard_uses_engine_groups(prototype_engine):
    """Test the engine hands out fresh collectors and wizards."""
    first = prototype_engine.new_wizard()
    second = prototype_engine.new_wizard()
    assert first.collector is not second.collector
    assert [g.id for g in first.groups] == ["energy_decision", "work", "social", "approach"]

def test_get_catalog(prototype_engine):
    """Test the onboarding catalog payload."""
    catalog = prototype_engine.get_catalog()
    assert set(catalog) == {"traits", "groups", "value_categories", "values", "inspirations", "archetypes"}
    assert len(catalog["traits"]) == len(ALL_TRAIT_KEYS)
    assert sum(len(g["statements"]) for g in catalog["groups"]) == len(ALL_TRAIT_KEYS)
    assert catalog["groups"][0]["statements"][0]["trait_key"] == "introvert_extrovert"
    stoic = next(a for a in catalog["archetypes"] if a["id"] == "Stoic")
    assert stoic["approach_name"] == "Virtuous Progress"
    assert stoic["tone"] == "philosophical"

def test_prototype_record_shape(prototype_engine, introvert_social_traits, value_ids, inspiration_ids):
    """Test the exported camelCase record and reading it back."""
    prototype = prototype_engine.generate_prototype(
        "user-8", introvert_social_traits, value_ids, inspiration_ids, future_self="Calm."
    )
    record = prototype.to_record()
    assert set(record) == {
        "userId", "traits", "archetypeBlend", "voiceProfile",
        "selectedValueIds", "selectedInspirationIds", "futureSelf",
    }
    assert record["archetypeBlend"]["primary"] == "Stoic"
    assert record["voiceProfile"]["motivationStyle"] == "support, tempered by logic"
    assert record["traits"]["introvert_extrovert"] == 0.0

    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    restored = UserPrototype.from_record(record, created_at=created)
    assert restored == prototype.model_copy(update={"created_at": created})

def test_record_omits_empty_future_self(prototype_engine, introvert_social_traits, value_ids, inspiration_ids):
    """Test futureSelf is only exported when set."""
    prototype = prototype_engine.generate_prototype("user-9", introvert_social_traits, value_ids, inspiration_ids)
    assert "futureSelf" not in prototype.to_record()
