# services/prototype_engine/scorer.py
# Reconciles paired agree/disagree ratings into 0-100 trait scores.

import logging
import math
from typing import Dict, Mapping, Optional

from pydantic import ValidationError

from .models import (
    ALL_TRAIT_KEYS,
    AssessmentResolution,
    ClarificationRequiredError,
    IncompleteAssessmentError,
    InvalidResponseError,
    RawResponse,
    TraitKey,
    TraitResolution,
    UnknownTraitError,
    UserTraits,
)

logger = logging.getLogger(__name__)

# --- Constants ---

MIN_RATING = 1
MAX_RATING = 5
AMBIGUITY_THRESHOLD = 2   # |right - left| below this needs clarification
POINTS_PER_STEP = 12.5    # one rating step of difference, on the 0-100 scale
NEUTRAL_SCORE = 50.0
CLARIFICATION_DEFAULT = 50


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    # round() is banker's rounding; 52.5 must become 53
    return int(math.floor(value + 0.5))


def to_trait_key(key) -> TraitKey:
    try:
        return TraitKey(key)
    except ValueError:
        raise UnknownTraitError(f"Unknown trait key: '{key}'")


def validate_rating(rating) -> int:
    """Ratings are integers 1-5. Booleans and floats are rejected, not coerced."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidResponseError(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidResponseError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")
    return rating


def validate_override(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidResponseError(f"Fallback override must be an integer between 0 and 100, got {value!r}")
    if not 0 <= value <= 100:
        raise InvalidResponseError(f"Fallback override must be between 0 and 100, got {value}")
    return value


def normalize_responses(responses: Mapping) -> Dict[TraitKey, RawResponse]:
    """
    Accepts RawResponse objects or plain {"left_rating", "right_rating"} dicts keyed
    by trait key or its string value.
    """
    normalized: Dict[TraitKey, RawResponse] = {}
    for key, response in responses.items():
        trait_key = to_trait_key(key)
        if isinstance(response, RawResponse):
            normalized[trait_key] = response
            continue
        try:
            normalized[trait_key] = RawResponse.model_validate(response)
        except ValidationError as e:
            raise InvalidResponseError(f"Invalid response for trait '{trait_key.value}': {e}") from e
    return normalized


def normalize_overrides(overrides: Optional[Mapping]) -> Dict[TraitKey, int]:
    return {to_trait_key(k): validate_override(v) for k, v in (overrides or {}).items()}


def rating_difference(response: RawResponse) -> int:
    return response.right_rating - response.left_rating


def is_ambiguous(response: RawResponse) -> bool:
    return abs(rating_difference(response)) < AMBIGUITY_THRESHOLD


def calculate_trait_score(response: RawResponse) -> float:
    """50 + 12.5 per point the right rating exceeds the left, clamped to 0-100."""
    return clamp(NEUTRAL_SCORE + POINTS_PER_STEP * rating_difference(response))


def ambiguity_flag(response: RawResponse) -> str:
    if response.left_rating >= 4 and response.right_rating >= 4:
        return "double_agree"
    if response.left_rating <= 2 and response.right_rating <= 2:
        return "double_disagree"
    return "neutral"


def calculate_confidence(response: RawResponse) -> int:
    """
    How decisive the pair of ratings is, 0-100. A wide gap raises confidence;
    a sum far from the 6-point midpoint (agreeing or disagreeing with both) lowers it.
    """
    diff = abs(rating_difference(response))
    total = response.left_rating + response.right_rating
    diff_bonus = (diff / 4) * 40
    sum_penalty = (abs(total - 6) / 4) * 30
    return round_half_up(clamp(50 + diff_bonus - sum_penalty))


def resolve_trait(trait_key: TraitKey, response: Optional[RawResponse], override: Optional[int] = None) -> TraitResolution:
    if response is None or not response.is_complete:
        return TraitResolution(trait_key=trait_key, complete=False)

    confidence = calculate_confidence(response)
    if not is_ambiguous(response):
        if override is not None:
            logger.debug(f"Ignoring fallback override for unambiguous trait '{trait_key.value}'")
        return TraitResolution(
            trait_key=trait_key,
            complete=True,
            score=calculate_trait_score(response),
            confidence=confidence,
        )

    flag = ambiguity_flag(response)
    if override is None:
        logger.debug(f"Trait '{trait_key.value}' is ambiguous ({flag}); awaiting clarification")
        return TraitResolution(trait_key=trait_key, complete=True, ambiguous=True, flag=flag, confidence=confidence)
    return TraitResolution(
        trait_key=trait_key,
        complete=True,
        ambiguous=True,
        flag=flag,
        score=float(override),
        confidence=confidence,
        overridden=True,
    )


def assessment_progress(responses: Mapping[TraitKey, RawResponse]) -> int:
    completed = sum(1 for k in ALL_TRAIT_KEYS if k in responses and responses[k].is_complete)
    return round_half_up(completed / len(ALL_TRAIT_KEYS) * 100)


def resolve_assessment(responses: Mapping, overrides: Optional[Mapping] = None) -> AssessmentResolution:
    """
    Resolves every trait. Never raises for ambiguity or missing ratings; those are
    reported in the result so the caller can route to clarification.
    """
    normalized = normalize_responses(responses)
    valid_overrides = normalize_overrides(overrides)

    traits: Dict[TraitKey, TraitResolution] = {}
    for key in ALL_TRAIT_KEYS:
        traits[key] = resolve_trait(key, normalized.get(key), valid_overrides.get(key))

    ambiguous = [k for k in ALL_TRAIT_KEYS if traits[k].ambiguous]
    return AssessmentResolution(
        traits=traits,
        ambiguous=ambiguous,
        pending_clarification=[k for k in ambiguous if traits[k].score is None],
        incomplete=[k for k in ALL_TRAIT_KEYS if not traits[k].complete],
        progress=assessment_progress(normalized),
    )


def finalize_user_traits(responses: Mapping, overrides: Optional[Mapping] = None) -> UserTraits:
    resolution = resolve_assessment(responses, overrides)
    if resolution.incomplete:
        keys = ", ".join(k.value for k in resolution.incomplete)
        raise IncompleteAssessmentError(f"Missing ratings for traits: {keys}")
    if resolution.pending_clarification:
        raise ClarificationRequiredError(resolution.pending_clarification)
    logger.info(f"Resolved {len(ALL_TRAIT_KEYS)} traits ({len(resolution.ambiguous)} via clarification)")
    return UserTraits(scores=resolution.resolved_scores())


def assessment_summary(responses: Mapping) -> Dict[str, float]:
    """Completed count, how many need clarification, and mean confidence of completed traits."""
    normalized = normalize_responses(responses)
    completed = [r for r in normalized.values() if r.is_complete]
    if not completed:
        return {"completed": 0, "needs_clarification": 0, "average_confidence": 0}
    return {
        "completed": len(completed),
        "needs_clarification": sum(1 for r in completed if is_ambiguous(r)),
        "average_confidence": round_half_up(sum(calculate_confidence(r) for r in completed) / len(completed)),
    }
