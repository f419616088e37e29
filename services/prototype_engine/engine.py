import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from .archetypes import DEFAULT_CATALOG
from .blend import calculate_archetype_blend
from .collector import AssessmentCollector, AssessmentWizard
from .definitions import STATEMENT_GROUPS, STATEMENTS_BY_KEY, TRAIT_DEFINITIONS
from .loader import load_archetype_catalog_from_file, validate_archetype_catalog
from .models import (
    ArchetypeBlend,
    ArchetypeCatalog,
    AssessmentResolution,
    InvalidResponseError,
    UserPrototype,
    UserTraits,
)
from .scorer import assessment_summary, finalize_user_traits, resolve_assessment
from .values import CORE_VALUES, INSPIRATIONS, VALUE_CATEGORIES, get_inspirations_by_ids
from .voice import (
    BREAKDOWN_STRATEGIES,
    VOICE_BLEND_THRESHOLD,
    generate_voice_profile,
    validate_inspiration_selection,
    validate_value_selection,
)

logger = logging.getLogger(__name__)


class PrototypeEngine:
    """
    Sequences trait resolution, archetype blending and voice generation into a
    UserPrototype. Performs no I/O beyond the optional catalog file at startup;
    persisting the result is the caller's job.
    """

    def __init__(
        self,
        catalog: Optional[ArchetypeCatalog] = None,
        catalog_path: Optional[str] = None,
        voice_blend_threshold: float = VOICE_BLEND_THRESHOLD,
        apply_value_bonus: bool = False,
        blend_inspirations: bool = False,
    ):
        """
        Args:
            catalog: Archetype catalog to score against. Defaults to the built-in one.
            catalog_path: YAML file to load the catalog from; ignored if `catalog` is given.
            voice_blend_threshold: Max primary/secondary score gap that still blends the voice.
            apply_value_bonus: Add +5 per selected value an archetype is associated with.
            blend_inspirations: Mix in 30% of the score earned by the selected inspirations' profiles.
        """
        if catalog is None and catalog_path:
            catalog = load_archetype_catalog_from_file(catalog_path)
        self.catalog = validate_archetype_catalog(catalog or DEFAULT_CATALOG)
        self.voice_blend_threshold = voice_blend_threshold
        self.apply_value_bonus = apply_value_bonus
        self.blend_inspirations = blend_inspirations
        logger.info(
            f"PrototypeEngine ready with catalog {self.catalog.version} "
            f"(value_bonus={apply_value_bonus}, inspiration_blend={blend_inspirations})"
        )

    # --- Assessment ---

    def new_collector(self) -> AssessmentCollector:
        return AssessmentCollector(STATEMENT_GROUPS)

    def new_wizard(self) -> AssessmentWizard:
        return AssessmentWizard(self.new_collector())

    def score_traits(self, responses: Mapping, overrides: Optional[Mapping] = None) -> AssessmentResolution:
        return resolve_assessment(responses, overrides)

    def summarize(self, responses: Mapping) -> Dict[str, float]:
        return assessment_summary(responses)

    def finalize_traits(self, responses: Mapping, overrides: Optional[Mapping] = None) -> UserTraits:
        return finalize_user_traits(responses, overrides)

    @staticmethod
    def coerce_user_traits(traits: Any) -> UserTraits:
        if isinstance(traits, UserTraits):
            return traits
        try:
            return UserTraits(scores=traits)
        except ValidationError as e:
            raise InvalidResponseError(f"Invalid trait scores: {e}") from e

    # --- Blend and voice ---

    def blend(
        self,
        traits: UserTraits,
        selected_value_ids: Sequence[str] = (),
        selected_inspiration_ids: Sequence[str] = (),
    ) -> ArchetypeBlend:
        value_ids = list(selected_value_ids) if self.apply_value_bonus else None
        inspirations = (
            get_inspirations_by_ids(list(selected_inspiration_ids)) if self.blend_inspirations else None
        )
        return calculate_archetype_blend(traits, value_ids, inspirations, self.catalog)

    def generate_prototype(
        self,
        user_id: str,
        user_traits: Any,
        selected_value_ids: Sequence[str],
        selected_inspiration_ids: Sequence[str],
        future_self: Optional[str] = None,
        name: Optional[str] = None,
    ) -> UserPrototype:
        """
        Validates selections, blends archetypes and derives the voice. Raises
        InvalidSubmissionError subclasses for bad input; the result is immutable.
        """
        if not user_id or not str(user_id).strip():
            raise InvalidResponseError("user_id must be a non-empty string")
        traits = self.coerce_user_traits(user_traits)
        value_ids = validate_value_selection(selected_value_ids)
        inspiration_ids = validate_inspiration_selection(selected_inspiration_ids)

        blend = self.blend(traits, value_ids, inspiration_ids)
        voice = generate_voice_profile(
            blend,
            value_ids,
            inspiration_ids,
            future_self=future_self,
            name=name,
            catalog=self.catalog,
            blend_threshold=self.voice_blend_threshold,
        )
        logger.info(f"Generated prototype for user {user_id}: {blend.name} ({blend.primary.value}/{blend.secondary.value})")
        return UserPrototype(
            user_id=str(user_id),
            traits=traits,
            archetype_blend=blend,
            voice_profile=voice,
            selected_value_ids=value_ids,
            selected_inspiration_ids=inspiration_ids,
            future_self=future_self.strip() if future_self and future_self.strip() else None,
        )

    def build_from_responses(
        self,
        user_id: str,
        responses: Mapping,
        overrides: Optional[Mapping],
        selected_value_ids: Sequence[str],
        selected_inspiration_ids: Sequence[str],
        future_self: Optional[str] = None,
        name: Optional[str] = None,
    ) -> UserPrototype:
        traits = self.finalize_traits(responses, overrides)
        return self.generate_prototype(
            user_id, traits, selected_value_ids, selected_inspiration_ids, future_self, name
        )

    # --- Catalog ---

    def get_catalog(self) -> Dict[str, Any]:
        """Everything a client needs to render the onboarding screens."""
        return {
            "traits": [t.model_dump(mode="json") for t in TRAIT_DEFINITIONS],
            "groups": [
                {
                    **g.model_dump(mode="json"),
                    "statements": [STATEMENTS_BY_KEY[k].model_dump(mode="json") for k in g.trait_keys],
                }
                for g in STATEMENT_GROUPS
            ],
            "value_categories": VALUE_CATEGORIES,
            "values": [v.model_dump(mode="json") for v in CORE_VALUES],
            "inspirations": [i.model_dump(mode="json") for i in INSPIRATIONS],
            "archetypes": [self._archetype_summary(a) for a in self.catalog.archetypes],
        }

    @staticmethod
    def _archetype_summary(archetype) -> Dict[str, Any]:
        return {
            "id": archetype.id.value,
            "name": archetype.name,
            "description": archetype.description,
            "core_traits": [k.value for k in archetype.core_traits],
            "values": list(archetype.values),
            "tone": archetype.voice.tone,
            "motivation_style": archetype.voice.motivation_style,
            "approach_name": BREAKDOWN_STRATEGIES[archetype.id]["approach_name"],
        }
