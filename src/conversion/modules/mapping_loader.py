import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from conversion.modules.translation_registry import TranslationRegistry
from pydantic_models.mapping.mapping_spec import MappingSpec
from shared_modules.errors import MalformedMappingError, UnknownTranslationMethodError


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(loc) for loc in err["loc"]) or "<root>"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def load_mapping(data: Any, registry: Optional[TranslationRegistry] = None) -> MappingSpec:
    """
    Erzeugt aus der geparsten Mapping-Datei ein vollständiges MappingSpec.
    Entweder kommt ein gültiges Modell zurück oder es wird ein Fehler ausgelöst.

    Args:
        data: Geparste Mapping-Datei (dict mit 'root' und 'objects').
        registry (TranslationRegistry): Optional; wenn gesetzt, müssen alle
            translationMethod-Namen dort registriert sein.

    Raises:
        MalformedMappingError: Pflichtstruktur fehlt oder hat die falsche Form.
        UnknownObjectTypeError: Der Root-Typ ist unter 'objects' nicht definiert.
        UnknownTranslationMethodError: Eine translationMethod ist nicht registriert.
    """
    if not isinstance(data, dict):
        logger.error(f"Mapping muss ein Objekt sein, nicht {type(data).__name__}")
        raise MalformedMappingError(f"Mapping muss ein Objekt sein, nicht {type(data).__name__}")

    try:
        mapping = MappingSpec.model_validate(data)
    except ValidationError as e:
        details = _format_validation_error(e)
        logger.error(f"Ungültiges Mapping: {details}")
        raise MalformedMappingError(f"Ungültiges Mapping: {details}") from e

    mapping.object_mapping(mapping.root_type)

    if registry is not None:
        unknown = sorted(name for name in mapping.translation_methods() if name not in registry)
        if unknown:
            logger.error(f"Nicht registrierte Übersetzungsfunktionen im Mapping: {unknown}")
            raise UnknownTranslationMethodError(
                f"Nicht registrierte Übersetzungsfunktionen im Mapping: {', '.join(unknown)}"
            )

    logger.debug(
        f"Mapping geladen: {mapping.root_structure.value} '{mapping.root_type}', "
        f"{len(mapping.objects)} Objekttyp(en)"
    )
    return mapping


def read_mapping_file(path: Path) -> Dict[str, Any]:
    """
    Liest eine Mapping-Datei als JSON (.json) oder YAML (.yaml/.yml).
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(text)
        return json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error(f"Mapping-Datei {path} kann nicht gelesen werden: {e}")
        raise MalformedMappingError(f"Mapping-Datei {path} kann nicht gelesen werden: {e}") from e


def load_mapping_file(path: Path, registry: Optional[TranslationRegistry] = None) -> MappingSpec:
    logger.debug(f"Lade Mapping-Datei {path}")
    return load_mapping(read_mapping_file(path), registry)
