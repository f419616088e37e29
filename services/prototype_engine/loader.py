import logging
from string import Formatter
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from services.prototype_engine.models import (
    ALL_TRAIT_KEYS,
    ArchetypeCatalog,
    ArchetypeId,
    PrototypeEngineError,
)
from services.prototype_engine.values import VALUES_BY_ID

logger = logging.getLogger(__name__)


class CatalogValidationError(PrototypeEngineError, ValueError):
    """Custom exception for archetype catalog errors not covered by Pydantic."""
    pass


# Placeholders the voice generator fills in when rendering phrases
TEMPLATE_FIELDS = {"address", "value", "Value"}


def _check_template(template: str, archetype_id: str) -> None:
    try:
        fields = [field for _, field, _, _ in Formatter().parse(template) if field is not None]
    except ValueError as e:
        raise CatalogValidationError(f"Malformed phrase template in archetype '{archetype_id}': {template!r} ({e})")
    unknown = [field for field in fields if field not in TEMPLATE_FIELDS]
    if unknown:
        raise CatalogValidationError(
            f"Unknown placeholder(s) {', '.join('{' + f + '}' for f in unknown)} in phrase template "
            f"of archetype '{archetype_id}'. Allowed: {{address}}, {{value}}, {{Value}}"
        )


def validate_archetype_catalog(catalog: ArchetypeCatalog) -> ArchetypeCatalog:
    """
    Checks rules the pydantic schema cannot express: every ArchetypeId defined
    exactly once, core traits present in the target vector, known value ids,
    and blend-name keys that name real archetype pairs.
    """
    seen = set()
    for archetype in catalog.archetypes:
        if archetype.id in seen:
            raise CatalogValidationError(f"Duplicate archetype ID found: {archetype.id.value}")
        seen.add(archetype.id)

        if not archetype.core_traits:
            raise CatalogValidationError(f"Archetype '{archetype.id.value}' has no core traits")
        for key in archetype.core_traits:
            if key not in archetype.target:
                raise CatalogValidationError(
                    f"Core trait '{key.value}' of archetype '{archetype.id.value}' is missing from its target vector"
                )
        for template in [*archetype.voice.phrase_templates, archetype.voice.blend_phrase]:
            _check_template(template, archetype.id.value)
        for value_id in archetype.values:
            if value_id not in VALUES_BY_ID:
                raise CatalogValidationError(
                    f"Unknown value ID '{value_id}' in archetype '{archetype.id.value}'"
                )

    missing = [a.value for a in ArchetypeId if a not in seen]
    if missing:
        raise CatalogValidationError(f"Archetype catalog is missing definitions for: {', '.join(missing)}")

    known = {a.value for a in ArchetypeId}
    for key in catalog.blend_names:
        parts = key.split("_")
        if len(parts) != 2 or parts[0] not in known or parts[1] not in known or parts[0] == parts[1]:
            raise CatalogValidationError(f"Invalid blend name key: '{key}'")

    logger.debug(
        f"Archetype catalog {catalog.version} validated: "
        f"{len(catalog.archetypes)} archetypes over {len(ALL_TRAIT_KEYS)} traits"
    )
    return catalog


def load_archetype_catalog_data(data: Dict[str, Any]) -> ArchetypeCatalog:
    """
    Validates the raw dictionary data against the ArchetypeCatalog model
    and performs the additional catalog checks.
    """
    try:
        catalog = ArchetypeCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogValidationError(f"Archetype catalog failed schema validation: {e}") from e
    return validate_archetype_catalog(catalog)


def load_archetype_catalog_from_file(file_path: str) -> ArchetypeCatalog:
    """
    Loads an archetype catalog from a YAML file, validates it,
    and returns an ArchetypeCatalog object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise CatalogValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise CatalogValidationError(f"YAML file is empty or invalid: {file_path}")

    logger.info(f"Loading archetype catalog from {file_path}")
    return load_archetype_catalog_data(data)
