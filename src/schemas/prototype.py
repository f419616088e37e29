from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TraitScoreRequest(BaseModel):
    # Ratings are checked by the engine so bad values surface as 400s
    responses: Dict[str, Dict[str, Any]]  # trait_key -> {"left_rating": 1-5, "right_rating": 1-5}
    overrides: Dict[str, Any] = Field(default_factory=dict)  # trait_key -> 0-100


class TraitScoreResult(BaseModel):
    scores: Dict[str, float]
    ambiguous: List[str]
    pending_clarification: List[str]
    incomplete: List[str]
    flags: Dict[str, str]
    confidence: Dict[str, int]
    progress: int
    is_ready: bool
    summary: Dict[str, Any]


class PrototypeCreateRequest(BaseModel):
    """Either final `traits` or raw `responses` (+ `overrides`) must be given, not both."""
    user_id: str
    traits: Optional[Dict[str, Any]] = None
    responses: Optional[Dict[str, Dict[str, Any]]] = None
    overrides: Dict[str, Any] = Field(default_factory=dict)
    selected_value_ids: List[str]
    selected_inspiration_ids: List[str]
    future_self: Optional[str] = None
    name: Optional[str] = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArchetypeBlendOut(_CamelModel):
    scores: Dict[str, float]
    primary: str
    secondary: str
    tertiary: Optional[str] = None
    name: str


class VoiceProfileOut(_CamelModel):
    tone: str
    motivation_style: str
    detail_level: Optional[str] = None
    time_orientation: Optional[str] = None
    example_phrases: List[str]


class PrototypeRecord(_CamelModel):
    user_id: str
    traits: Dict[str, float]
    archetype_blend: ArchetypeBlendOut
    voice_profile: VoiceProfileOut
    selected_value_ids: List[str]
    selected_inspiration_ids: List[str]
    future_self: Optional[str] = None


class HealthSnapshot(BaseModel):
    steps: Optional[int] = None
    sleep_hours: Optional[float] = None
    sleep_score: Optional[int] = None


class TasksSummary(BaseModel):
    total: int = 0
    due_today: int = 0
    overdue: int = 0


class ContextSnapshot(BaseModel):
    """Day context assembled by the integrations layer; every field is optional."""
    day_types: List[str] = Field(default_factory=list)
    tasks_summary: Optional[TasksSummary] = None
    routines_completed: Optional[int] = None
    routines_total: Optional[int] = None
    local_hour: Optional[int] = Field(None, ge=0, le=23)
    health: Optional[HealthSnapshot] = None


class SystemPromptRequest(BaseModel):
    context: Optional[ContextSnapshot] = None
    push_level: Literal["gentle", "moderate", "intense"] = "moderate"
    formality: Literal["casual", "professional"] = "casual"
    use_emoji: bool = False
    user_name: Optional[str] = None  # used in the suggested greeting


class SystemPromptResult(BaseModel):
    user_id: str
    system_prompt: str
