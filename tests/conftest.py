import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from services.prototype_engine.engine import PrototypeEngine
from services.prototype_engine.models import ALL_TRAIT_KEYS, TraitKey, UserTraits
from src.db.models import Base

SOCIAL_LEFT_KEYS = [
    TraitKey.INTROVERT_EXTROVERT,
    TraitKey.INDEPENDENT_COLLABORATIVE,
    TraitKey.PRIVATE_PUBLIC,
    TraitKey.HARMONIOUS_CONFRONTATIONAL,
    TraitKey.HUMBLE_CONFIDENT,
]


@pytest.fixture(scope="session")
def prototype_engine():
    """Engine with the built-in catalog and default options."""
    return PrototypeEngine()


@pytest.fixture
def db_session():
    """Session bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def uniform_responses():
    """Builds a full response map with the same left/right ratings for every trait."""
    def _build(left, right):
        return {key.value: {"left_rating": left, "right_rating": right} for key in ALL_TRAIT_KEYS}
    return _build


@pytest.fixture
def introvert_social_traits():
    """Social and energy traits at the left pole, everything else balanced."""
    scores = {key: 50.0 for key in ALL_TRAIT_KEYS}
    for key in SOCIAL_LEFT_KEYS:
        scores[key] = 0.0
    return UserTraits(scores=scores)


@pytest.fixture
def introvert_social_responses():
    """Ratings that resolve to the introvert_social_traits fixture once the 50s are clarified."""
    responses = {key.value: {"left_rating": 3, "right_rating": 3} for key in ALL_TRAIT_KEYS}
    for key in SOCIAL_LEFT_KEYS:
        responses[key.value] = {"left_rating": 5, "right_rating": 1}
    overrides = {key.value: 50 for key in ALL_TRAIT_KEYS if key not in SOCIAL_LEFT_KEYS}
    return responses, overrides


@pytest.fixture
def value_ids():
    return ["wisdom", "discipline", "peace", "gratitude", "integrity"]


@pytest.fixture
def inspiration_ids():
    return ["marcus_aurelius", "marie_curie", "eliud_kipchoge", "warren_buffett", "nelson_mandela"]
