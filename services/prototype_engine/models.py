from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TraitKey(str, Enum):
    INTROVERT_EXTROVERT = "introvert_extrovert"
    INTUITIVE_ANALYTICAL = "intuitive_analytical"
    SPONTANEOUS_STRUCTURED = "spontaneous_structured"
    RISK_AVERSE_SEEKING = "risk_averse_seeking"
    SPECIALIST_GENERALIST = "specialist_generalist"
    INDEPENDENT_COLLABORATIVE = "independent_collaborative"
    PATIENT_URGENT = "patient_urgent"
    PRAGMATIC_IDEALISTIC = "pragmatic_idealistic"
    MINIMALIST_MAXIMALIST = "minimalist_maximalist"
    PRIVATE_PUBLIC = "private_public"
    HARMONIOUS_CONFRONTATIONAL = "harmonious_confrontational"
    PROCESS_OUTCOME = "process_outcome"
    CONSERVATIVE_EXPERIMENTAL = "conservative_experimental"
    HUMBLE_CONFIDENT = "humble_confident"
    REACTIVE_PROACTIVE = "reactive_proactive"


class ArchetypeId(str, Enum):
    MACHINE = "Machine"
    WARRIOR = "Warrior"
    ARTIST = "Artist"
    SCIENTIST = "Scientist"
    STOIC = "Stoic"
    VISIONARY = "Visionary"


TraitCategory = Literal["energy", "decision", "work", "social", "approach"]
Pole = Literal["left", "right"]
ValueCategory = Literal[
    "achievement", "character", "relationships", "freedom",
    "craft", "stability", "wealth", "meaning",
]
InspirationCategory = Literal["athlete", "entrepreneur", "creator", "thinker", "leader"]
Tone = Literal["direct", "warm", "philosophical", "energetic", "analytical"]
MotivationStyle = Literal["challenge", "support", "logic", "inspiration", "discipline"]
DetailLevel = Literal["sparse", "moderate", "detailed"]
TimeOrientation = Literal["immediate", "balanced", "long-term"]
AmbiguityFlag = Literal["double_agree", "double_disagree", "neutral"]

ALL_TRAIT_KEYS: List[TraitKey] = list(TraitKey)

# --- Catalog entries ---

class TraitDimension(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: TraitKey
    left_label: str
    right_label: str
    left_description: str
    right_description: str
    category: TraitCategory


class StatementPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    trait_key: TraitKey
    left_statement: str   # agreeing pulls the score toward 0
    right_statement: str  # agreeing pulls the score toward 100
    category: TraitCategory


class StatementGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    trait_keys: List[TraitKey]


class CoreValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: ValueCategory


class Inspiration(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: InspirationCategory
    tagline: str
    traits: Dict[TraitKey, float] = Field(default_factory=dict)  # partial profile
    values: List[str] = Field(default_factory=list)
    quotes: List[str] = Field(default_factory=list)


class VoiceTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    tone: Tone
    motivation_style: MotivationStyle
    detail_level: DetailLevel
    time_orientation: TimeOrientation
    phrase_templates: List[str] = Field(..., min_length=2)  # may use {address}, {value} and {Value}
    blend_phrase: str  # used when this archetype is a close secondary; may use {value}


class ArchetypeDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: ArchetypeId
    name: str
    description: str
    target: Dict[TraitKey, float]
    core_traits: List[TraitKey]
    values: List[str]
    voice: VoiceTemplate

    @field_validator("target")
    @classmethod
    def check_target_vector(cls, v: Dict[TraitKey, float]) -> Dict[TraitKey, float]:
        missing = [k.value for k in ALL_TRAIT_KEYS if k not in v]
        if missing:
            raise ValueError(f"Target vector is missing trait keys: {', '.join(missing)}")
        for key, score in v.items():
            if not 0 <= score <= 100:
                raise ValueError(f"Target score for '{key.value}' must be within 0-100, got {score}")
        return v

    @model_validator(mode="after")
    def check_core_traits(self) -> "ArchetypeDefinition":
        if len(set(self.core_traits)) != len(self.core_traits):
            raise ValueError(f"Archetype '{self.id.value}' lists a core trait more than once")
        return self


class ArchetypeCatalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = "1.0.0"
    archetypes: List[ArchetypeDefinition]
    blend_names: Dict[str, str] = Field(default_factory=dict)  # "<Primary>_<Secondary>" -> name


# --- Assessment state ---

class RawResponse(BaseModel):
    """Two independent 1-5 agreement ratings for one trait; 0 means unanswered."""
    # Strict: 3.0, "3" and True are not ratings; misspelled keys are errors
    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    left_rating: int = Field(0, ge=0, le=5)
    right_rating: int = Field(0, ge=0, le=5)

    @property
    def is_complete(self) -> bool:
        return self.left_rating > 0 and self.right_rating > 0


class TraitResolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    trait_key: TraitKey
    complete: bool
    ambiguous: bool = False
    flag: Optional[AmbiguityFlag] = None
    score: Optional[float] = None  # None until resolved
    confidence: int = 0
    overridden: bool = False


class AssessmentResolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    traits: Dict[TraitKey, TraitResolution]
    ambiguous: List[TraitKey]
    pending_clarification: List[TraitKey]
    incomplete: List[TraitKey]
    progress: int

    @property
    def is_ready(self) -> bool:
        return not self.incomplete and not self.pending_clarification

    def resolved_scores(self) -> Dict[TraitKey, float]:
        return {k: r.score for k, r in self.traits.items() if r.score is not None}


class UserTraits(BaseModel):
    """Immutable, complete map of trait key to a 0-100 score."""
    model_config = ConfigDict(frozen=True)

    scores: Dict[TraitKey, float]

    @field_validator("scores")
    @classmethod
    def check_complete(cls, v: Dict[TraitKey, float]) -> Dict[TraitKey, float]:
        missing = [k.value for k in ALL_TRAIT_KEYS if k not in v]
        if missing:
            raise ValueError(f"Missing trait scores: {', '.join(missing)}")
        for key, score in v.items():
            if not 0 <= score <= 100:
                raise ValueError(f"Trait score for '{key.value}' must be within 0-100, got {score}")
        return v

    def __getitem__(self, key: TraitKey) -> float:
        return self.scores[TraitKey(key)]

    def as_vector(self) -> List[float]:
        return [float(self.scores[k]) for k in ALL_TRAIT_KEYS]

    def to_dict(self) -> Dict[str, float]:
        return {k.value: self.scores[k] for k in ALL_TRAIT_KEYS}


# --- Blend / voice / record ---

class ArchetypeBlend(BaseModel):
    model_config = ConfigDict(frozen=True)

    scores: Dict[ArchetypeId, float]
    primary: ArchetypeId
    secondary: ArchetypeId
    tertiary: ArchetypeId
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scores": {a.value: s for a, s in self.scores.items()},
            "primary": self.primary.value,
            "secondary": self.secondary.value,
            "tertiary": self.tertiary.value,
            "name": self.name,
        }


class VoiceProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    tone: str
    motivation_style: str
    detail_level: DetailLevel
    time_orientation: TimeOrientation
    example_phrases: List[str] = Field(..., min_length=3, max_length=5)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tone": self.tone,
            "motivationStyle": self.motivation_style,
            "detailLevel": self.detail_level,
            "timeOrientation": self.time_orientation,
            "examplePhrases": list(self.example_phrases),
        }


class UserPrototype(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    traits: UserTraits
    archetype_blend: ArchetypeBlend
    voice_profile: VoiceProfile
    selected_value_ids: List[str]
    selected_inspiration_ids: List[str]
    future_self: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_record(self) -> Dict[str, Any]:
        """Exported camelCase shape used by persistence and the HTTP layer."""
        record: Dict[str, Any] = {
            "userId": self.user_id,
            "traits": self.traits.to_dict(),
            "archetypeBlend": self.archetype_blend.to_dict(),
            "voiceProfile": self.voice_profile.to_dict(),
            "selectedValueIds": list(self.selected_value_ids),
            "selectedInspirationIds": list(self.selected_inspiration_ids),
        }
        if self.future_self:
            record["futureSelf"] = self.future_self
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any], created_at: Optional[datetime] = None) -> "UserPrototype":
        blend = record["archetypeBlend"]
        voice = record["voiceProfile"]
        data: Dict[str, Any] = {
            "user_id": record["userId"],
            "traits": {"scores": record["traits"]},
            "archetype_blend": blend,
            "voice_profile": {
                "tone": voice["tone"],
                "motivation_style": voice["motivationStyle"],
                "detail_level": voice["detailLevel"],
                "time_orientation": voice["timeOrientation"],
                "example_phrases": voice["examplePhrases"],
            },
            "selected_value_ids": record["selectedValueIds"],
            "selected_inspiration_ids": record["selectedInspirationIds"],
            "future_self": record.get("futureSelf"),
        }
        if created_at is not None:
            data["created_at"] = created_at
        return cls.model_validate(data)


# Custom Error Classes
class PrototypeEngineError(Exception):
    """Base class for errors raised by the prototype engine."""
    pass

class InvalidSubmissionError(PrototypeEngineError, ValueError):
    """Submitted data failed validation (bad rating, unknown key, bad selection)."""
    pass

class InvalidResponseError(InvalidSubmissionError):
    """A rating, pole or fallback override is out of range."""
    pass

class UnknownTraitError(InvalidSubmissionError):
    """A trait key that is not part of the catalog."""
    pass

class InvalidSelectionError(InvalidSubmissionError):
    """Value or inspiration selection has the wrong size or unknown ids."""
    pass

class IncompleteStateError(PrototypeEngineError, ValueError):
    """An operation was requested before its inputs are complete."""
    pass

class IncompleteAssessmentError(IncompleteStateError):
    """Custom exception for incomplete assessment submissions."""
    pass

class ClarificationRequiredError(IncompleteAssessmentError):
    """Ambiguous traits still need a fallback override."""

    def __init__(self, trait_keys: List[TraitKey]):
        self.trait_keys = list(trait_keys)
        keys = ", ".join(k.value for k in self.trait_keys)
        super().__init__(f"Clarification required for ambiguous traits: {keys}")

class InvalidTransitionError(PrototypeEngineError):
    """An assessment wizard event that is not valid in the current phase."""
    pass
