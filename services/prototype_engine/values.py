# services/prototype_engine/values.py
# Core value and inspiration catalogs offered during onboarding.

from typing import Dict, List, Optional

from .models import CoreValue, Inspiration, TraitKey

VALUE_CATEGORIES = [
    {"id": "achievement", "name": "Achievement"},
    {"id": "character", "name": "Character"},
    {"id": "relationships", "name": "Relationships"},
    {"id": "freedom", "name": "Freedom"},
    {"id": "craft", "name": "Craft"},
    {"id": "stability", "name": "Stability"},
    {"id": "wealth", "name": "Wealth"},
    {"id": "meaning", "name": "Meaning"},
]

_VALUE_ROWS = [
    # achievement
    ("excellence", "Excellence", "Pursuing mastery and the highest quality in all endeavors", "achievement"),
    ("ambition", "Ambition", "Drive to achieve significant goals and reach full potential", "achievement"),
    ("growth", "Growth", "Continuous learning, improvement, and personal development", "achievement"),
    ("impact", "Impact", "Creating meaningful change and leaving a lasting mark", "achievement"),
    ("success", "Success", "Achieving defined goals and measurable outcomes", "achievement"),
    # character
    ("integrity", "Integrity", "Alignment between values, words, and actions", "character"),
    ("honesty", "Honesty", "Truthfulness in all communications and dealings", "character"),
    ("discipline", "Discipline", "Self-control and consistent execution despite resistance", "character"),
    ("courage", "Courage", "Willingness to face fear and take difficult action", "character"),
    ("humility", "Humility", "Accurate self-assessment and openness to being wrong", "character"),
    # relationships
    ("family", "Family", "Deep commitment to family bonds and responsibilities", "relationships"),
    ("loyalty", "Loyalty", "Faithfulness to people, principles, and commitments", "relationships"),
    ("connection", "Connection", "Building and maintaining meaningful relationships", "relationships"),
    ("service", "Service", "Contributing to others' wellbeing and success", "relationships"),
    ("community", "Community", "Belonging to and contributing to something larger", "relationships"),
    # freedom
    ("independence", "Independence", "Self-reliance and freedom from dependence on others", "freedom"),
    ("autonomy", "Autonomy", "Control over one's own choices and direction", "freedom"),
    ("adventure", "Adventure", "Seeking new experiences, risks, and challenges", "freedom"),
    ("flexibility", "Flexibility", "Ability to adapt and change course as needed", "freedom"),
    ("simplicity", "Simplicity", "Reducing complexity and focusing on essentials", "freedom"),
    # craft
    ("craftsmanship", "Craftsmanship", "Pride in skilled work and attention to detail", "craft"),
    ("creativity", "Creativity", "Original thinking and novel approaches", "craft"),
    ("innovation", "Innovation", "Creating new solutions and pushing boundaries", "craft"),
    ("quality", "Quality", "Prioritizing excellence over speed or quantity", "craft"),
    ("mastery", "Mastery", "Deep expertise and continuous skill development", "craft"),
    # stability
    ("security", "Security", "Safety, stability, and protection from harm", "stability"),
    ("health", "Health", "Physical and mental wellbeing as foundation", "stability"),
    ("balance", "Balance", "Harmony across life domains, avoiding extremes", "stability"),
    ("peace", "Peace", "Inner calm and freedom from conflict", "stability"),
    ("order", "Order", "Structure, organization, and predictability", "stability"),
    # wealth
    ("prosperity", "Prosperity", "Financial abundance and material comfort", "wealth"),
    ("generosity", "Generosity", "Giving freely of resources, time, and knowledge", "wealth"),
    ("resourcefulness", "Resourcefulness", "Making the most of what's available", "wealth"),
    ("legacy", "Legacy", "Building something that outlasts you", "wealth"),
    ("stewardship", "Stewardship", "Responsible management of resources and opportunities", "wealth"),
    # meaning
    ("wisdom", "Wisdom", "Deep understanding and good judgment", "meaning"),
    ("purpose", "Purpose", "Clear sense of why you exist and what you're for", "meaning"),
    ("faith", "Faith", "Trust in something greater than yourself", "meaning"),
    ("gratitude", "Gratitude", "Appreciation for what you have and receive", "meaning"),
    ("presence", "Presence", "Full engagement with the current moment", "meaning"),
]

CORE_VALUES: List[CoreValue] = [
    CoreValue(id=vid, name=name, description=desc, category=cat)
    for vid, name, desc, cat in _VALUE_ROWS
]

T = TraitKey

INSPIRATIONS: List[Inspiration] = [
    # athletes
    Inspiration(
        id="kobe_bryant", name="Kobe Bryant", category="athlete",
        tagline="Obsessive preparation and the Mamba Mentality",
        traits={T.SPONTANEOUS_STRUCTURED: 85, T.HUMBLE_CONFIDENT: 90, T.HARMONIOUS_CONFRONTATIONAL: 80,
                T.PROCESS_OUTCOME: 70, T.REACTIVE_PROACTIVE: 90},
        values=["excellence", "discipline", "mastery", "courage"],
        quotes=["Everything negative, pressure, challenges, is all an opportunity for me to rise."],
    ),
    Inspiration(
        id="serena_williams", name="Serena Williams", category="athlete",
        tagline="Relentless competitor who redefined her sport",
        traits={T.HUMBLE_CONFIDENT: 90, T.HARMONIOUS_CONFRONTATIONAL: 75, T.RISK_AVERSE_SEEKING: 70,
                T.PRIVATE_PUBLIC: 75},
        values=["excellence", "courage", "ambition", "family"],
        quotes=["A champion is defined not by their wins but by how they can recover when they fall."],
    ),
    Inspiration(
        id="eliud_kipchoge", name="Eliud Kipchoge", category="athlete",
        tagline="Calm, humble discipline at the edge of human limits",
        traits={T.PATIENT_URGENT: 25, T.HUMBLE_CONFIDENT: 30, T.SPONTANEOUS_STRUCTURED: 85,
                T.HARMONIOUS_CONFRONTATIONAL: 25, T.PROCESS_OUTCOME: 30},
        values=["discipline", "humility", "peace", "mastery"],
        quotes=["Only the disciplined ones in life are free."],
    ),
    # entrepreneurs
    Inspiration(
        id="steve_jobs", name="Steve Jobs", category="entrepreneur",
        tagline="Product taste and a vision that bent industries",
        traits={T.PRAGMATIC_IDEALISTIC: 80, T.CONSERVATIVE_EXPERIMENTAL: 85, T.MINIMALIST_MAXIMALIST: 10,
                T.HARMONIOUS_CONFRONTATIONAL: 80, T.RISK_AVERSE_SEEKING: 80},
        values=["innovation", "quality", "simplicity", "impact"],
        quotes=["Stay hungry, stay foolish."],
    ),
    Inspiration(
        id="sara_blakely", name="Sara Blakely", category="entrepreneur",
        tagline="Self-funded founder who turned failure into fuel",
        traits={T.RISK_AVERSE_SEEKING: 75, T.INTUITIVE_ANALYTICAL: 35, T.INDEPENDENT_COLLABORATIVE: 40,
                T.CONSERVATIVE_EXPERIMENTAL: 70},
        values=["resourcefulness", "courage", "creativity", "generosity"],
        quotes=["Don't be intimidated by what you don't know."],
    ),
    Inspiration(
        id="warren_buffett", name="Warren Buffett", category="entrepreneur",
        tagline="Patient capital and decades of compounding",
        traits={T.PATIENT_URGENT: 10, T.RISK_AVERSE_SEEKING: 25, T.INTUITIVE_ANALYTICAL: 80,
                T.SPECIALIST_GENERALIST: 25, T.MINIMALIST_MAXIMALIST: 20},
        values=["stewardship", "integrity", "wisdom", "prosperity"],
        quotes=["Price is what you pay. Value is what you get."],
    ),
    # creators
    Inspiration(
        id="leonardo_da_vinci", name="Leonardo da Vinci", category="creator",
        tagline="Boundless curiosity across art and science",
        traits={T.SPECIALIST_GENERALIST: 95, T.CONSERVATIVE_EXPERIMENTAL: 85, T.PROCESS_OUTCOME: 20,
                T.INTUITIVE_ANALYTICAL: 55},
        values=["creativity", "craftsmanship", "innovation", "growth"],
        quotes=["Simplicity is the ultimate sophistication."],
    ),
    Inspiration(
        id="maya_angelou", name="Maya Angelou", category="creator",
        tagline="Voice of resilience, dignity and grace",
        traits={T.INTUITIVE_ANALYTICAL: 25, T.PRAGMATIC_IDEALISTIC: 80, T.PRIVATE_PUBLIC: 65,
                T.HARMONIOUS_CONFRONTATIONAL: 45},
        values=["courage", "creativity", "connection", "gratitude"],
        quotes=["You can't use up creativity. The more you use, the more you have."],
    ),
    Inspiration(
        id="georgia_okeeffe", name="Georgia O'Keeffe", category="creator",
        tagline="Solitary vision and a language of color",
        traits={T.INTROVERT_EXTROVERT: 15, T.INDEPENDENT_COLLABORATIVE: 10, T.PRIVATE_PUBLIC: 15,
                T.CONSERVATIVE_EXPERIMENTAL: 75, T.PROCESS_OUTCOME: 25},
        values=["independence", "creativity", "presence", "simplicity"],
        quotes=["I found I could say things with color and shapes that I couldn't say any other way."],
    ),
    # thinkers
    Inspiration(
        id="marcus_aurelius", name="Marcus Aurelius", category="thinker",
        tagline="Emperor who practiced philosophy as a daily discipline",
        traits={T.PATIENT_URGENT: 20, T.HARMONIOUS_CONFRONTATIONAL: 30, T.HUMBLE_CONFIDENT: 25,
                T.PRIVATE_PUBLIC: 20, T.PRAGMATIC_IDEALISTIC: 70},
        values=["wisdom", "discipline", "integrity", "gratitude"],
        quotes=["You have power over your mind, not outside events. Realize this, and you will find strength."],
    ),
    Inspiration(
        id="marie_curie", name="Marie Curie", category="thinker",
        tagline="Patient, rigorous pursuit of discovery",
        traits={T.INTUITIVE_ANALYTICAL: 90, T.SPECIALIST_GENERALIST: 20, T.PATIENT_URGENT: 20,
                T.INTROVERT_EXTROVERT: 20, T.HUMBLE_CONFIDENT: 30},
        values=["wisdom", "mastery", "courage", "humility"],
        quotes=["Nothing in life is to be feared, it is only to be understood."],
    ),
    Inspiration(
        id="richard_feynman", name="Richard Feynman", category="thinker",
        tagline="Playful curiosity backed by ruthless honesty",
        traits={T.INTUITIVE_ANALYTICAL: 85, T.CONSERVATIVE_EXPERIMENTAL: 85, T.PROCESS_OUTCOME: 25,
                T.SPONTANEOUS_STRUCTURED: 30, T.PRIVATE_PUBLIC: 70},
        values=["honesty", "growth", "creativity", "wisdom"],
        quotes=["The first principle is that you must not fool yourself, and you are the easiest person to fool."],
    ),
    # leaders
    Inspiration(
        id="nelson_mandela", name="Nelson Mandela", category="leader",
        tagline="Patience and reconciliation in the service of freedom",
        traits={T.PATIENT_URGENT: 10, T.PRAGMATIC_IDEALISTIC: 85, T.INDEPENDENT_COLLABORATIVE: 80,
                T.HARMONIOUS_CONFRONTATIONAL: 40},
        values=["courage", "service", "integrity", "community"],
        quotes=["It always seems impossible until it's done."],
    ),
    Inspiration(
        id="jocko_willink", name="Jocko Willink", category="leader",
        tagline="Extreme ownership and disciplined execution",
        traits={T.SPONTANEOUS_STRUCTURED: 90, T.REACTIVE_PROACTIVE: 90, T.HARMONIOUS_CONFRONTATIONAL: 70,
                T.PATIENT_URGENT: 70, T.HUMBLE_CONFIDENT: 70},
        values=["discipline", "courage", "loyalty", "order"],
        quotes=["Discipline equals freedom."],
    ),
    Inspiration(
        id="eleanor_roosevelt", name="Eleanor Roosevelt", category="leader",
        tagline="Quiet courage turned into public service",
        traits={T.INTROVERT_EXTROVERT: 40, T.PRAGMATIC_IDEALISTIC: 80, T.INDEPENDENT_COLLABORATIVE: 75,
                T.RISK_AVERSE_SEEKING: 60},
        values=["service", "courage", "connection", "growth"],
        quotes=["Do one thing every day that scares you."],
    ),
]

del T

VALUES_BY_ID: Dict[str, CoreValue] = {v.id: v for v in CORE_VALUES}
INSPIRATIONS_BY_ID: Dict[str, Inspiration] = {i.id: i for i in INSPIRATIONS}


def get_value_by_id(value_id: str) -> Optional[CoreValue]:
    return VALUES_BY_ID.get(value_id)


def get_values_by_category(category: str) -> List[CoreValue]:
    return [v for v in CORE_VALUES if v.category == category]


def get_values_by_ids(value_ids: List[str]) -> List[CoreValue]:
    """Known values in selection order; unknown ids are skipped."""
    return [VALUES_BY_ID[vid] for vid in value_ids if vid in VALUES_BY_ID]


def get_inspiration_by_id(inspiration_id: str) -> Optional[Inspiration]:
    return INSPIRATIONS_BY_ID.get(inspiration_id)


def get_inspirations_by_category(category: str) -> List[Inspiration]:
    return [i for i in INSPIRATIONS if i.category == category]


def get_inspirations_by_ids(inspiration_ids: List[str]) -> List[Inspiration]:
    """Known inspirations in selection order; unknown ids are skipped."""
    return [INSPIRATIONS_BY_ID[iid] for iid in inspiration_ids if iid in INSPIRATIONS_BY_ID]
