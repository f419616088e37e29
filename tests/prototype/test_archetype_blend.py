# tests/prototype/test_archetype_blend.py
import math

import numpy as np
import pytest

from services.prototype_engine.archetypes import (
    BLEND_NAMES,
    DEFAULT_CATALOG,
    generate_blend_name,
    get_archetype_definition,
)
from services.prototype_engine.blend import (
    adjust_scores_for_values,
    average_inspiration_vector,
    blend_with_inspirations,
    calculate_archetype_blend,
    calculate_archetype_scores,
    closest_traits,
    rank_archetypes,
)
from services.prototype_engine.models import (
    ALL_TRAIT_KEYS,
    ArchetypeCatalog,
    ArchetypeId,
    Inspiration,
    TraitKey,
    UserTraits,
)


def traits_matching(archetype_id: ArchetypeId) -> UserTraits:
    return UserTraits(scores=dict(get_archetype_definition(archetype_id).target))


def uniform_traits(value: float) -> UserTraits:
    return UserTraits(scores={key: value for key in ALL_TRAIT_KEYS})

# --- Test Cases ---

@pytest.mark.parametrize("archetype_id", list(ArchetypeId))
def test_exact_target_match_scores_100_and_wins(archetype_id):
    """Test a vector equal to an archetype's target scores 100 and ranks it first."""
    blend = calculate_archetype_blend(traits_matching(archetype_id))
    assert blend.scores[archetype_id] == 100.0
    assert blend.primary == archetype_id

def test_scores_cover_every_archetype_within_bounds():
    """Test one score per archetype on the 0-100 scale."""
    for value in (0.0, 50.0, 100.0):
        scores = calculate_archetype_scores(uniform_traits(value).as_vector())
        assert set(scores) == set(ArchetypeId)
        assert all(0.0 <= s <= 100.0 for s in scores.values())

def test_all_balanced_traits_are_deterministic():
    """Test an all-50 vector produces finite scores and the same result every time."""
    first = calculate_archetype_blend(uniform_traits(50.0))
    second = calculate_archetype_blend(uniform_traits(50.0))
    assert first == second
    assert all(math.isfinite(s) for s in first.scores.values())
    assert len({first.primary, first.secondary, first.tertiary}) == 3

def test_scores_rounded_to_two_decimals(introvert_social_traits):
    """Test stored scores carry two decimal places."""
    blend = calculate_archetype_blend(introvert_social_traits)
    assert blend.scores[ArchetypeId.STOIC] == 79.52
    assert blend.scores[ArchetypeId.SCIENTIST] == 74.52
    assert blend.primary == ArchetypeId.STOIC
    assert blend.secondary == ArchetypeId.SCIENTIST
    assert blend.name == "The Patient Scholar"

def test_bad_vector_shape():
    """Test vectors that are not one score per trait are rejected."""
    with pytest.raises(ValueError):
        calculate_archetype_scores([50.0] * 14)

def test_ties_keep_definition_order():
    """Test equal scores rank in catalog order."""
    machine = get_archetype_definition(ArchetypeId.MACHINE)
    warrior = get_archetype_definition(ArchetypeId.WARRIOR).model_copy(
        update={"target": machine.target, "core_traits": machine.core_traits}
    )
    others = [a for a in DEFAULT_CATALOG.archetypes if a.id not in (ArchetypeId.MACHINE, ArchetypeId.WARRIOR)]
    catalog = ArchetypeCatalog(archetypes=[machine, warrior, *others], blend_names=BLEND_NAMES)

    blend = calculate_archetype_blend(traits_matching(ArchetypeId.MACHINE), catalog=catalog)
    assert blend.scores[ArchetypeId.MACHINE] == blend.scores[ArchetypeId.WARRIOR] == 100.0
    assert (blend.primary, blend.secondary) == (ArchetypeId.MACHINE, ArchetypeId.WARRIOR)
    assert blend.name == "The Relentless Builder"

def test_rank_archetypes_descending():
    """Test ranking order."""
    scores = {aid: float(i) for i, aid in enumerate(ArchetypeId)}
    ranked = rank_archetypes(scores)
    assert [aid for aid, _ in ranked] == list(reversed(list(ArchetypeId)))

def test_adjust_scores_for_values_caps_at_100():
    """Test +5 per matching value, never above 100."""
    scores = {aid: 90.0 for aid in ArchetypeId}
    adjusted = adjust_scores_for_values(scores, ["discipline"])
    assert adjusted[ArchetypeId.MACHINE] == 95.0
    assert adjusted[ArchetypeId.STOIC] == 95.0
    assert adjusted[ArchetypeId.ARTIST] == 90.0

    capped = adjust_scores_for_values({aid: 98.0 for aid in ArchetypeId}, ["discipline", "excellence"])
    assert capped[ArchetypeId.MACHINE] == 100.0

def test_average_inspiration_vector_fills_unknown_traits_with_50():
    """Test partial inspiration profiles average with 50 for missing traits."""
    a = Inspiration(id="a", name="A", category="thinker", tagline="", traits={TraitKey.INTROVERT_EXTROVERT: 100})
    b = Inspiration(id="b", name="B", category="thinker", tagline="", traits={TraitKey.INTROVERT_EXTROVERT: 0})
    empty = Inspiration(id="c", name="C", category="thinker", tagline="")

    vector = average_inspiration_vector([a, b, empty])
    assert vector.shape == (len(ALL_TRAIT_KEYS),)
    assert np.allclose(vector, 50.0)
    assert average_inspiration_vector([empty]) is None

def test_blend_with_inspirations_weights_user_scores():
    """Test inspiration scores contribute 30 percent."""
    machine = get_archetype_definition(ArchetypeId.MACHINE)
    twin = Inspiration(id="twin", name="Twin", category="thinker", tagline="", traits=dict(machine.target))
    scores = {aid: 50.0 for aid in ArchetypeId}
    blended = blend_with_inspirations(scores, [twin])
    assert blended[ArchetypeId.MACHINE] == pytest.approx(65.0)
    assert blend_with_inspirations(scores, []) == scores

def test_generate_blend_name_fallback():
    """Test pairs without a curated name get a generic one."""
    assert generate_blend_name(ArchetypeId.ARTIST, ArchetypeId.WARRIOR) == "The Fearless Maker"
    catalog = DEFAULT_CATALOG.model_copy(update={"blend_names": {}})
    assert generate_blend_name(ArchetypeId.ARTIST, ArchetypeId.WARRIOR, catalog) == "The Artist blended with Warrior"

def test_every_ordered_pair_has_a_curated_name():
    """Test the built-in table names all 30 ordered pairs."""
    for primary in ArchetypeId:
        for secondary in ArchetypeId:
            if primary != secondary:
                assert f"{primary.value}_{secondary.value}" in BLEND_NAMES

def test_closest_traits_prefers_core_traits_on_ties():
    """Test the nearest traits, with core traits first when gaps are equal."""
    machine = get_archetype_definition(ArchetypeId.MACHINE)
    closest = closest_traits(traits_matching(ArchetypeId.MACHINE), machine)
    assert closest == [TraitKey.SPONTANEOUS_STRUCTURED, TraitKey.PATIENT_URGENT, TraitKey.REACTIVE_PROACTIVE]
