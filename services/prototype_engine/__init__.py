from .engine import PrototypeEngine
from .models import (
    ArchetypeBlend,
    ArchetypeId,
    IncompleteAssessmentError,
    InvalidSubmissionError,
    TraitKey,
    UserPrototype,
    UserTraits,
    VoiceProfile,
)

__all__ = [
    "PrototypeEngine",
    "ArchetypeBlend",
    "ArchetypeId",
    "IncompleteAssessmentError",
    "InvalidSubmissionError",
    "TraitKey",
    "UserPrototype",
    "UserTraits",
    "VoiceProfile",
]
