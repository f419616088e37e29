# services/prototype_engine/collector.py
# Accumulates paired statement ratings and drives the multi-screen assessment flow.

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from .definitions import GROUPS_BY_ID, STATEMENT_GROUPS
from .models import (
    ALL_TRAIT_KEYS,
    AssessmentResolution,
    IncompleteAssessmentError,
    InvalidResponseError,
    InvalidTransitionError,
    RawResponse,
    StatementGroup,
    TraitKey,
    UserTraits,
)
from .scorer import (
    CLARIFICATION_DEFAULT,
    assessment_progress,
    finalize_user_traits,
    resolve_assessment,
    to_trait_key,
    validate_override,
    validate_rating,
)

logger = logging.getLogger(__name__)


class AssessmentCollector:
    """
    Holds the raw responses for one user's assessment. Left and right ratings
    are recorded independently and never filled in on the user's behalf.
    """

    def __init__(self, groups: Optional[List[StatementGroup]] = None):
        self.groups = list(groups or STATEMENT_GROUPS)
        self._responses: Dict[TraitKey, RawResponse] = {}
        self._overrides: Dict[TraitKey, int] = {}

    def record_response(self, trait_key, pole: str, rating: int) -> RawResponse:
        key = to_trait_key(trait_key)
        if pole not in ("left", "right"):
            raise InvalidResponseError(f"Pole must be 'left' or 'right', got {pole!r}")
        validate_rating(rating)

        current = self._responses.get(key, RawResponse())
        updated = current.model_copy(update={f"{pole}_rating": rating})
        self._responses[key] = updated
        # An edit invalidates any clarification given for this trait only
        if self._overrides.pop(key, None) is not None:
            logger.debug(f"Discarded fallback override for edited trait '{key.value}'")
        return updated

    def record_override(self, trait_key, value: int) -> None:
        key = to_trait_key(trait_key)
        self._overrides[key] = validate_override(value)

    def clear_override(self, trait_key) -> None:
        self._overrides.pop(to_trait_key(trait_key), None)

    def response_for(self, trait_key) -> RawResponse:
        return self._responses.get(to_trait_key(trait_key), RawResponse())

    def override_for(self, trait_key) -> Optional[int]:
        return self._overrides.get(to_trait_key(trait_key))

    def is_group_complete(self, group: Union[StatementGroup, str]) -> bool:
        if isinstance(group, str):
            if group not in GROUPS_BY_ID:
                raise InvalidResponseError(f"Unknown statement group: '{group}'")
            group = GROUPS_BY_ID[group]
        return all(self.response_for(key).is_complete for key in group.trait_keys)

    def answered_traits(self) -> List[TraitKey]:
        return [k for k in ALL_TRAIT_KEYS if self.response_for(k).is_complete]

    def progress(self) -> int:
        return assessment_progress(self._responses)

    def is_complete(self) -> bool:
        return len(self.answered_traits()) == len(ALL_TRAIT_KEYS)

    def snapshot(self) -> Dict[TraitKey, RawResponse]:
        return dict(self._responses)

    def overrides(self) -> Dict[TraitKey, int]:
        return dict(self._overrides)

    def resolve(self) -> AssessmentResolution:
        return resolve_assessment(self._responses, self._overrides)

    def user_traits(self) -> UserTraits:
        return finalize_user_traits(self._responses, self._overrides)


# --- Assessment wizard ---

class WizardPhase(str, Enum):
    IN_GROUP = "in_group"
    CLARIFICATION = "clarification"
    COMPLETE = "complete"


@dataclass(frozen=True)
class AnswerRecorded:
    trait_key: str
    pole: str
    rating: int


@dataclass(frozen=True)
class FallbackRecorded:
    trait_key: str
    value: int


@dataclass(frozen=True)
class NextRequested:
    pass


@dataclass(frozen=True)
class BackRequested:
    pass


WizardEvent = Union[AnswerRecorded, FallbackRecorded, NextRequested, BackRequested]


class AssessmentWizard:
    """
    Explicit state machine over the statement screens:

        IN_GROUP(0) -> ... -> IN_GROUP(n-1) -> [CLARIFICATION] -> COMPLETE

    Clarification is entered only when at least one trait is ambiguous. Sliders
    there start at 50 and the shown value is what gets recorded.
    """

    def __init__(self, collector: Optional[AssessmentCollector] = None):
        self.collector = collector or AssessmentCollector()
        self.phase = WizardPhase.IN_GROUP
        self.group_index = 0
        self.clarification_traits: List[TraitKey] = []
        self.slider_values: Dict[TraitKey, int] = {}

    @property
    def groups(self) -> List[StatementGroup]:
        return self.collector.groups

    @property
    def current_group(self) -> Optional[StatementGroup]:
        if self.phase != WizardPhase.IN_GROUP:
            return None
        return self.groups[self.group_index]

    @property
    def can_advance(self) -> bool:
        if self.phase == WizardPhase.IN_GROUP:
            return self.collector.is_group_complete(self.groups[self.group_index])
        return self.phase == WizardPhase.CLARIFICATION

    def handle(self, event: WizardEvent) -> WizardPhase:
        if isinstance(event, AnswerRecorded):
            self._on_answer(event)
        elif isinstance(event, FallbackRecorded):
            self._on_fallback(event)
        elif isinstance(event, NextRequested):
            self._on_next()
        elif isinstance(event, BackRequested):
            self._on_back()
        else:
            raise InvalidTransitionError(f"Unsupported wizard event: {event!r}")
        return self.phase

    def user_traits(self) -> UserTraits:
        if self.phase != WizardPhase.COMPLETE:
            raise IncompleteAssessmentError(f"Assessment is not complete (phase: {self.phase.value})")
        return self.collector.user_traits()

    # --- transitions ---

    def _on_answer(self, event: AnswerRecorded) -> None:
        if self.phase != WizardPhase.IN_GROUP:
            raise InvalidTransitionError(f"Answers can only be recorded on a statement screen, not in {self.phase.value}")
        key = to_trait_key(event.trait_key)
        reachable = {k for g in self.groups[: self.group_index + 1] for k in g.trait_keys}
        if key not in reachable:
            raise InvalidTransitionError(f"Trait '{key.value}' is not on the current or an earlier screen")
        self.collector.record_response(key, event.pole, event.rating)
        self.slider_values.pop(key, None)

    def _on_fallback(self, event: FallbackRecorded) -> None:
        if self.phase != WizardPhase.CLARIFICATION:
            raise InvalidTransitionError(f"Fallback values can only be set during clarification, not in {self.phase.value}")
        key = to_trait_key(event.trait_key)
        if key not in self.clarification_traits:
            raise InvalidTransitionError(f"Trait '{key.value}' does not need clarification")
        self.slider_values[key] = validate_override(event.value)

    def _on_next(self) -> None:
        if self.phase == WizardPhase.IN_GROUP:
            group = self.groups[self.group_index]
            if not self.collector.is_group_complete(group):
                raise IncompleteAssessmentError(f"Statement group '{group.id}' has unanswered statements")
            if self.group_index < len(self.groups) - 1:
                self.group_index += 1
                logger.debug(f"Advanced to statement group '{self.groups[self.group_index].id}'")
                return
            self._leave_last_group()
        elif self.phase == WizardPhase.CLARIFICATION:
            for key in self.clarification_traits:
                self.collector.record_override(key, self.slider_values.get(key, CLARIFICATION_DEFAULT))
            self.phase = WizardPhase.COMPLETE
            logger.info(f"Assessment complete after clarifying {len(self.clarification_traits)} traits")
        else:
            raise InvalidTransitionError("Assessment is already complete")

    def _leave_last_group(self) -> None:
        resolution = self.collector.resolve()
        if resolution.incomplete:
            keys = ", ".join(k.value for k in resolution.incomplete)
            raise IncompleteAssessmentError(f"Missing ratings for traits: {keys}")
        self.clarification_traits = list(resolution.ambiguous)
        if not self.clarification_traits:
            self.phase = WizardPhase.COMPLETE
            logger.info("Assessment complete with no ambiguous traits")
            return
        for key in self.clarification_traits:
            existing = self.collector.override_for(key)
            self.slider_values.setdefault(key, existing if existing is not None else CLARIFICATION_DEFAULT)
        self.phase = WizardPhase.CLARIFICATION
        logger.info(f"{len(self.clarification_traits)} ambiguous traits need clarification")

    def _on_back(self) -> None:
        if self.phase == WizardPhase.IN_GROUP:
            self.group_index = max(0, self.group_index - 1)
        elif self.phase == WizardPhase.CLARIFICATION:
            self.phase = WizardPhase.IN_GROUP
            self.group_index = len(self.groups) - 1
        elif self.clarification_traits:
            self.phase = WizardPhase.CLARIFICATION
        else:
            self.phase = WizardPhase.IN_GROUP
            self.group_index = len(self.groups) - 1
