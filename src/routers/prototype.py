import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from services.prototype_engine.engine import PrototypeEngine
from services.prototype_engine.models import (
    IncompleteStateError,
    InvalidSubmissionError,
    UserPrototype,
)
from services.prototype_engine.scorer import assessment_summary
from src.core.config import Settings, get_settings
from src.db.database import get_db
from src.schemas.prototype import (
    PrototypeCreateRequest,
    PrototypeRecord,
    SystemPromptRequest,
    SystemPromptResult,
    TraitScoreRequest,
    TraitScoreResult,
)
from src.services.storage import PrototypeStore, StorageError
from src.synthesis.narrator import build_system_instruction

router = APIRouter()
logger = logging.getLogger(__name__)


@lru_cache()
def _build_engine(catalog_path: Optional[str], threshold: float, value_bonus: bool, inspiration_blend: bool) -> PrototypeEngine:
    return PrototypeEngine(
        catalog_path=catalog_path,
        voice_blend_threshold=threshold,
        apply_value_bonus=value_bonus,
        blend_inspirations=inspiration_blend,
    )


def get_prototype_engine(settings: Settings = Depends(get_settings)) -> PrototypeEngine:
    return _build_engine(
        settings.archetype_catalog_path,
        settings.voice_blend_threshold,
        settings.apply_value_bonus,
        settings.blend_inspirations,
    )


def get_prototype_store(db: Session = Depends(get_db)) -> PrototypeStore:
    return PrototypeStore(db)


def _to_record(prototype: UserPrototype) -> PrototypeRecord:
    return PrototypeRecord.model_validate(prototype.to_record())


def _load_or_404(store: PrototypeStore, user_id: str) -> UserPrototype:
    prototype = store.get(user_id)
    if prototype is None:
        raise HTTPException(status_code=404, detail=f"No prototype found for user '{user_id}'")
    return prototype


@router.get("/prototype/catalog")
def get_catalog(engine: PrototypeEngine = Depends(get_prototype_engine)) -> Dict[str, Any]:
    """Traits, statement groups, values, inspirations and archetypes for the onboarding screens."""
    return engine.get_catalog()


@router.post("/prototype/traits/score", response_model=TraitScoreResult)
def score_traits(
    request: TraitScoreRequest,
    engine: PrototypeEngine = Depends(get_prototype_engine),
):
    """
    Resolves submitted ratings without storing anything. Ambiguous traits are
    reported so the client can show the clarification sliders.
    """
    try:
        resolution = engine.score_traits(request.responses, request.overrides)
        summary = assessment_summary(request.responses)
    except InvalidSubmissionError as e:
        logger.error(f"Invalid trait submission: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error while scoring traits: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return TraitScoreResult(
        scores={k.value: v for k, v in resolution.resolved_scores().items()},
        ambiguous=[k.value for k in resolution.ambiguous],
        pending_clarification=[k.value for k in resolution.pending_clarification],
        incomplete=[k.value for k in resolution.incomplete],
        flags={k.value: r.flag for k, r in resolution.traits.items() if r.flag},
        confidence={k.value: r.confidence for k, r in resolution.traits.items() if r.complete},
        progress=resolution.progress,
        is_ready=resolution.is_ready,
        summary=summary,
    )


@router.post("/prototype", response_model=PrototypeRecord)
def create_prototype(
    request: PrototypeCreateRequest,
    engine: PrototypeEngine = Depends(get_prototype_engine),
    store: PrototypeStore = Depends(get_prototype_store),
):
    """
    Generates the user's prototype from final trait scores or raw responses,
    stores it and returns the exported record.
    """
    try:
        if (request.traits is None) == (request.responses is None):
            raise InvalidSubmissionError("Provide exactly one of 'traits' or 'responses'")
        if request.responses is not None:
            prototype = engine.build_from_responses(
                request.user_id,
                request.responses,
                request.overrides,
                request.selected_value_ids,
                request.selected_inspiration_ids,
                future_self=request.future_self,
                name=request.name,
            )
        else:
            prototype = engine.generate_prototype(
                request.user_id,
                request.traits,
                request.selected_value_ids,
                request.selected_inspiration_ids,
                future_self=request.future_self,
                name=request.name,
            )
        store.save(prototype)
        logger.info(f"Prototype stored for user {request.user_id}: {prototype.archetype_blend.name}")
        return _to_record(prototype)

    except IncompleteStateError as e:
        logger.error(f"Incomplete assessment: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidSubmissionError as e:
        logger.error(f"Invalid submission: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        logger.error(f"Storage failure: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error during prototype generation: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/prototype/{user_id}", response_model=PrototypeRecord)
def get_prototype(user_id: str, store: PrototypeStore = Depends(get_prototype_store)):
    try:
        return _to_record(_load_or_404(store, user_id))
    except StorageError as e:
        logger.error(f"Storage failure: {e}")
        raise HTTPException(status_code=503, detail=str(e))


@router.delete("/prototype/{user_id}", status_code=204)
def delete_prototype(user_id: str, store: PrototypeStore = Depends(get_prototype_store)):
    try:
        deleted = store.delete(user_id)
    except StorageError as e:
        logger.error(f"Storage failure: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"No prototype found for user '{user_id}'")


@router.get("/prototype/{user_id}/system-prompt", response_model=SystemPromptResult)
def get_system_prompt(
    user_id: str,
    store: PrototypeStore = Depends(get_prototype_store),
    settings: Settings = Depends(get_settings),
):
    """System instruction without a day context."""
    return _system_prompt(user_id, SystemPromptRequest(), store, settings)


@router.post("/prototype/{user_id}/system-prompt", response_model=SystemPromptResult)
def post_system_prompt(
    user_id: str,
    request: SystemPromptRequest,
    store: PrototypeStore = Depends(get_prototype_store),
    settings: Settings = Depends(get_settings),
):
    """System instruction including the caller's context snapshot and voice modifiers."""
    return _system_prompt(user_id, request, store, settings)


def _system_prompt(user_id: str, request: SystemPromptRequest, store: PrototypeStore, settings: Settings) -> SystemPromptResult:
    try:
        prototype = _load_or_404(store, user_id)
    except StorageError as e:
        logger.error(f"Storage failure: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    prompt = build_system_instruction(
        prototype,
        context=request.context,
        assistant_name=settings.assistant_name,
        push_level=request.push_level,
        formality=request.formality,
        use_emoji=request.use_emoji,
        user_name=request.user_name,
    )
    return SystemPromptResult(user_id=user_id, system_prompt=prompt)
