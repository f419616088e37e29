# services/prototype_engine/blend.py
# Scores a trait vector against every archetype and ranks the result.

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .archetypes import DEFAULT_CATALOG, generate_blend_name
from .models import (
    ALL_TRAIT_KEYS,
    ArchetypeBlend,
    ArchetypeCatalog,
    ArchetypeDefinition,
    ArchetypeId,
    Inspiration,
    TraitKey,
    UserTraits,
)

logger = logging.getLogger(__name__)

CORE_TRAIT_WEIGHT = 3.0
BASE_TRAIT_WEIGHT = 1.0
VALUE_BONUS = 5.0
USER_BLEND_WEIGHT = 0.7
INSPIRATION_BLEND_WEIGHT = 0.3
SCORE_PRECISION = 2


def trait_weights(archetype: ArchetypeDefinition) -> np.ndarray:
    core = set(archetype.core_traits)
    return np.array(
        [CORE_TRAIT_WEIGHT if key in core else BASE_TRAIT_WEIGHT for key in ALL_TRAIT_KEYS],
        dtype=float,
    )


def target_vector(archetype: ArchetypeDefinition) -> np.ndarray:
    return np.array([archetype.target[key] for key in ALL_TRAIT_KEYS], dtype=float)


def similarity(user_vector: np.ndarray, archetype: ArchetypeDefinition) -> float:
    """
    Weighted inverse Manhattan distance on the 0-100 scale:
    100 * (1 - sum(w * |u - t|) / (100 * sum(w))). An exact match scores 100.
    """
    weights = trait_weights(archetype)
    distance = float(np.sum(weights * np.abs(user_vector - target_vector(archetype))))
    return 100.0 * (1.0 - distance / (100.0 * float(np.sum(weights))))


def calculate_archetype_scores(
    vector: Sequence[float], catalog: ArchetypeCatalog = DEFAULT_CATALOG
) -> Dict[ArchetypeId, float]:
    user_vector = np.asarray(vector, dtype=float)
    if user_vector.shape != (len(ALL_TRAIT_KEYS),):
        raise ValueError(f"Trait vector must have {len(ALL_TRAIT_KEYS)} entries, got {user_vector.shape}")
    return {a.id: similarity(user_vector, a) for a in catalog.archetypes}


def adjust_scores_for_values(
    scores: Dict[ArchetypeId, float],
    selected_value_ids: Sequence[str],
    catalog: ArchetypeCatalog = DEFAULT_CATALOG,
) -> Dict[ArchetypeId, float]:
    """+5 per selected value the archetype is associated with, capped at 100."""
    selected = set(selected_value_ids)
    adjusted = dict(scores)
    for archetype in catalog.archetypes:
        bonus = VALUE_BONUS * len(selected.intersection(archetype.values))
        adjusted[archetype.id] = min(100.0, adjusted[archetype.id] + bonus)
    return adjusted


def average_inspiration_vector(inspirations: Sequence[Inspiration]) -> Optional[np.ndarray]:
    """Mean trait vector of the inspirations that carry a profile; unknown traits count as 50."""
    profiled = [i for i in inspirations if i.traits]
    if not profiled:
        return None
    matrix = np.array(
        [[i.traits.get(key, 50.0) for key in ALL_TRAIT_KEYS] for i in profiled],
        dtype=float,
    )
    return matrix.mean(axis=0)


def blend_with_inspirations(
    scores: Dict[ArchetypeId, float],
    inspirations: Sequence[Inspiration],
    catalog: ArchetypeCatalog = DEFAULT_CATALOG,
) -> Dict[ArchetypeId, float]:
    avg = average_inspiration_vector(inspirations)
    if avg is None:
        return scores
    inspiration_scores = calculate_archetype_scores(avg, catalog)
    return {
        aid: USER_BLEND_WEIGHT * score + INSPIRATION_BLEND_WEIGHT * inspiration_scores[aid]
        for aid, score in scores.items()
    }


def rank_archetypes(
    scores: Dict[ArchetypeId, float], catalog: ArchetypeCatalog = DEFAULT_CATALOG
) -> List[Tuple[ArchetypeId, float]]:
    """Descending by score. sorted() is stable, so ties keep definition order."""
    ordered = [(a.id, scores[a.id]) for a in catalog.archetypes]
    return sorted(ordered, key=lambda item: -item[1])


def calculate_archetype_blend(
    traits: UserTraits,
    selected_value_ids: Optional[Sequence[str]] = None,
    inspirations: Optional[Sequence[Inspiration]] = None,
    catalog: ArchetypeCatalog = DEFAULT_CATALOG,
) -> ArchetypeBlend:
    """
    Pure function of its inputs. Value bonuses and inspiration blending are
    applied only when those inputs are given.
    """
    scores = calculate_archetype_scores(traits.as_vector(), catalog)
    if selected_value_ids:
        scores = adjust_scores_for_values(scores, selected_value_ids, catalog)
    if inspirations:
        scores = blend_with_inspirations(scores, inspirations, catalog)

    scores = {aid: round(score, SCORE_PRECISION) for aid, score in scores.items()}
    ranked = rank_archetypes(scores, catalog)
    primary, secondary, tertiary = ranked[0][0], ranked[1][0], ranked[2][0]
    name = generate_blend_name(primary, secondary, catalog)
    logger.debug(f"Archetype ranking: {[(a.value, s) for a, s in ranked]}")
    return ArchetypeBlend(
        scores=scores,
        primary=primary,
        secondary=secondary,
        tertiary=tertiary,
        name=name,
    )


def closest_traits(traits: UserTraits, archetype: ArchetypeDefinition, top_n: int = 3) -> List[TraitKey]:
    """Traits where the user sits nearest the archetype's target, core traits first on ties."""
    core = set(archetype.core_traits)
    gaps = [
        (abs(traits[key] - archetype.target[key]), 0 if key in core else 1, i, key)
        for i, key in enumerate(ALL_TRAIT_KEYS)
    ]
    return [key for *_, key in sorted(gaps)[:top_n]]
