# tests/prototype/test_trait_resolver.py
import pytest

from services.prototype_engine.models import (
    ALL_TRAIT_KEYS,
    ClarificationRequiredError,
    IncompleteAssessmentError,
    InvalidResponseError,
    RawResponse,
    TraitKey,
    UnknownTraitError,
)
from services.prototype_engine.scorer import (
    ambiguity_flag,
    assessment_summary,
    calculate_confidence,
    calculate_trait_score,
    finalize_user_traits,
    is_ambiguous,
    normalize_responses,
    resolve_assessment,
    resolve_trait,
    round_half_up,
    validate_override,
    validate_rating,
)

IE = TraitKey.INTROVERT_EXTROVERT


def pair(left, right) -> RawResponse:
    return RawResponse(left_rating=left, right_rating=right)

# --- Test Cases ---

@pytest.mark.parametrize("left, right, expected", [
    (5, 1, 0.0),
    (1, 5, 100.0),
    (2, 4, 75.0),
    (4, 2, 25.0),
    (4, 1, 12.5),
    (1, 4, 87.5),
])
def test_calculate_trait_score(left, right, expected):
    """Test the 12.5-points-per-step conversion."""
    assert calculate_trait_score(pair(left, right)) == expected

@pytest.mark.parametrize("left, right, ambiguous", [
    (3, 3, True),
    (4, 5, True),
    (2, 1, True),
    (2, 4, False),
    (5, 3, False),
])
def test_is_ambiguous(left, right, ambiguous):
    """Test pairs less than two points apart need clarification."""
    assert is_ambiguous(pair(left, right)) is ambiguous

@pytest.mark.parametrize("left, right, flag", [
    (4, 5, "double_agree"),
    (5, 5, "double_agree"),
    (1, 2, "double_disagree"),
    (3, 3, "neutral"),
    (2, 3, "neutral"),
])
def test_ambiguity_flag(left, right, flag):
    """Test ambiguous pairs are labelled by where both ratings sit."""
    assert ambiguity_flag(pair(left, right)) == flag

@pytest.mark.parametrize("left, right, expected", [
    (5, 1, 90),
    (1, 5, 90),
    (3, 3, 50),
    (2, 4, 70),
    (5, 5, 20),
    (1, 1, 20),
    (2, 3, 53),
    (3, 2, 53),
    (4, 5, 38),
])
def test_calculate_confidence(left, right, expected):
    """Test confidence rises with the gap and drops when both ratings lean the same way."""
    assert calculate_confidence(pair(left, right)) == expected

def test_validate_rating_rejects_out_of_range_and_non_integers():
    """Test ratings outside 1-5 are rejected rather than clamped."""
    assert validate_rating(1) == 1
    assert validate_rating(5) == 5
    for bad in (0, 6, -1, 3.0, True, "3", None):
        with pytest.raises(InvalidResponseError):
            validate_rating(bad)

def test_validate_override_bounds():
    """Test fallback overrides must be integers within 0-100."""
    assert validate_override(0) == 0
    assert validate_override(100) == 100
    for bad in (-1, 101, 50.5, False):
        with pytest.raises(InvalidResponseError):
            validate_override(bad)

def test_normalize_responses_accepts_dicts_and_models():
    """Test plain dicts and RawResponse objects are both accepted."""
    normalized = normalize_responses({
        "introvert_extrovert": {"left_rating": 2, "right_rating": 5},
        TraitKey.PATIENT_URGENT: pair(3, 3),
    })
    assert normalized[IE] == pair(2, 5)
    assert normalized[TraitKey.PATIENT_URGENT] == pair(3, 3)

def test_normalize_responses_unknown_key():
    """Test an unknown trait key raises UnknownTraitError."""
    with pytest.raises(UnknownTraitError, match="not_a_trait"):
        normalize_responses({"not_a_trait": {"left_rating": 1, "right_rating": 5}})

def test_normalize_responses_out_of_range_rating():
    """Test a rating of 6 is rejected with InvalidResponseError."""
    with pytest.raises(InvalidResponseError, match="introvert_extrovert"):
        normalize_responses({"introvert_extrovert": {"left_rating": 6, "right_rating": 1}})

def test_resolve_trait_unanswered():
    """Test missing or half-answered traits are incomplete with no score."""
    assert resolve_trait(IE, None).complete is False
    half = resolve_trait(IE, pair(4, 0))
    assert half.complete is False
    assert half.score is None

def test_resolve_trait_ambiguous_without_override():
    """Test an ambiguous pair is flagged and left unscored."""
    resolution = resolve_trait(IE, pair(3, 3))
    assert resolution.complete is True
    assert resolution.ambiguous is True
    assert resolution.flag == "neutral"
    assert resolution.score is None

def test_resolve_trait_ambiguous_with_override():
    """Test a 3/3 pair with a fallback of 70 resolves to 70."""
    resolution = resolve_trait(IE, pair(3, 3), override=70)
    assert resolution.score == 70.0
    assert resolution.overridden is True

def test_resolve_trait_ignores_override_for_clear_answers():
    """Test an override cannot replace the score of an unambiguous pair."""
    resolution = resolve_trait(IE, pair(5, 1), override=90)
    assert resolution.score == 0.0
    assert resolution.overridden is False
    assert resolution.ambiguous is False

def test_resolve_assessment_reports_progress_and_pending(uniform_responses):
    """Test the assessment-level result lists ambiguous and incomplete traits."""
    responses = uniform_responses(3, 3)
    for key in ALL_TRAIT_KEYS[7:]:
        del responses[key.value]

    resolution = resolve_assessment(responses)
    assert resolution.progress == 47
    assert resolution.ambiguous == ALL_TRAIT_KEYS[:7]
    assert resolution.pending_clarification == ALL_TRAIT_KEYS[:7]
    assert resolution.incomplete == ALL_TRAIT_KEYS[7:]
    assert resolution.is_ready is False
    assert resolution.resolved_scores() == {}

def test_resolve_assessment_does_not_raise_for_ambiguity(uniform_responses):
    """Test ambiguity is reported, not raised."""
    resolution = resolve_assessment(uniform_responses(4, 4))
    assert len(resolution.pending_clarification) == len(ALL_TRAIT_KEYS)
    assert all(r.flag == "double_agree" for r in resolution.traits.values())

def test_finalize_user_traits_clear_answers(uniform_responses):
    """Test a full set of clear answers yields complete UserTraits."""
    traits = finalize_user_traits(uniform_responses(5, 1))
    assert traits.to_dict() == {key.value: 0.0 for key in ALL_TRAIT_KEYS}

def test_finalize_user_traits_missing_ratings(uniform_responses):
    """Test missing ratings raise IncompleteAssessmentError."""
    responses = uniform_responses(1, 5)
    del responses["reactive_proactive"]
    with pytest.raises(IncompleteAssessmentError, match="reactive_proactive"):
        finalize_user_traits(responses)

def test_finalize_user_traits_requires_clarification(uniform_responses):
    """Test unresolved ambiguous traits raise ClarificationRequiredError naming them."""
    responses = uniform_responses(1, 5)
    responses["introvert_extrovert"] = {"left_rating": 3, "right_rating": 3}
    with pytest.raises(ClarificationRequiredError) as exc_info:
        finalize_user_traits(responses)
    assert exc_info.value.trait_keys == [IE]

    traits = finalize_user_traits(responses, {"introvert_extrovert": 70})
    assert traits[IE] == 70.0
    assert traits[TraitKey.REACTIVE_PROACTIVE] == 100.0

def test_assessment_summary(uniform_responses):
    """Test summary counts and mean confidence."""
    assert assessment_summary({}) == {"completed": 0, "needs_clarification": 0, "average_confidence": 0}

    responses = uniform_responses(5, 1)
    responses["introvert_extrovert"] = {"left_rating": 3, "right_rating": 3}
    summary = assessment_summary(responses)
    assert summary["completed"] == 15
    assert summary["needs_clarification"] == 1
    # 14 * 90 + 50 over 15
    assert summary["average_confidence"] == 87

@pytest.mark.parametrize("response", [
    {"left_rating": 3.0, "right_rating": 1},
    {"left_rating": "3", "right_rating": 1},
    {"left_rating": True, "right_rating": 1},
    {"left": 5, "right": 1},
    {"left_rating": 5, "right_rating": 1, "note": "sure"},
])
def test_normalize_responses_rejects_coercible_and_misspelled(response):
    """Test floats, strings, booleans and unknown keys are rejected instead of coerced or dropped."""
    with pytest.raises(InvalidResponseError, match="introvert_extrovert"):
        normalize_responses({"introvert_extrovert": response})
    with pytest.raises(InvalidResponseError):
        resolve_assessment({"introvert_extrovert": response})

@pytest.mark.parametrize("value, expected", [
    (52.5, 53),
    (37.5, 38),
    (46.5, 47),
    (52.4, 52),
    (0.0, 0),
    (100.0, 100),
])
def test_round_half_up(value, expected):
    """Test halves always round up, unlike round()."""
    assert round_half_up(value) == expected

def test_resolution_is_idempotent(uniform_responses):
    """Test resolving the same mixed input twice gives identical results."""
    responses = uniform_responses(5, 1)
    responses["introvert_extrovert"] = {"left_rating": 3, "right_rating": 3}
    responses["reactive_proactive"] = {"left_rating": 4, "right_rating": 5}
    responses["patient_urgent"] = {"left_rating": 1, "right_rating": 5}
    overrides = {"introvert_extrovert": 70, "reactive_proactive": 60, "patient_urgent": 10}

    first = resolve_assessment(responses, overrides)
    second = resolve_assessment(responses, overrides)
    assert first.model_dump_json() == second.model_dump_json()
    assert first.ambiguous == [IE, TraitKey.REACTIVE_PROACTIVE]

    traits = finalize_user_traits(responses, overrides)
    assert traits.model_dump_json() == finalize_user_traits(responses, overrides).model_dump_json()
    assert traits[IE] == 70.0
    assert traits[TraitKey.REACTIVE_PROACTIVE] == 60.0
    # clear answer; the override is ignored
    assert traits[TraitKey.PATIENT_URGENT] == 100.0
    assert responses["introvert_extrovert"] == {"left_rating": 3, "right_rating": 3}
    assert overrides == {"introvert_extrovert": 70, "reactive_proactive": 60, "patient_urgent": 10}
