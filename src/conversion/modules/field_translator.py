import re
from typing import Any, Callable, Dict

from loguru import logger

from conversion.modules.translation_registry import TranslationRegistry
from pydantic_models.mapping.mapping_spec import FieldMapping, TargetType
from shared_modules.errors import ConversionError, TypeCoercionError, ValueParseError

# nur ASCII-Ziffern, kein "1_234", "0x1F", "nan" oder "inf"
_INTEGER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_FLOAT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


def _to_integer(text: str) -> int:
    s = text.strip()
    if not _INTEGER_RE.match(s):
        raise ValueError(f"keine Ganzzahl: '{text}'")
    return int(s, 10)


def _to_float(text: str) -> float:
    s = text.strip()
    if not _FLOAT_RE.match(s):
        raise ValueError(f"keine Dezimalzahl: '{text}'")
    return float(s)


_BOOLEAN_WORDS: Dict[str, bool] = {"true": True, "false": False}


def _to_boolean(text: str) -> bool:
    try:
        return _BOOLEAN_WORDS[text.strip().lower()]
    except KeyError:
        raise ValueError(f"kein Wahrheitswert: '{text}'") from None


# Eine Regel pro TargetType. STRING gibt den Text unverändert zurück.
_COERCIONS: Dict[TargetType, Callable[[str], Any]] = {
    TargetType.STRING: lambda text: text,
    TargetType.INTEGER: _to_integer,
    TargetType.FLOAT: _to_float,
    TargetType.BOOLEAN: _to_boolean,
}


def coerce(text: str, target_type: TargetType) -> Any:
    """
    Wandelt den Text in den Zieltyp um.

    Raises:
        TypeCoercionError: Wenn der Text nicht zum Zieltyp passt.
    """
    try:
        return _COERCIONS[target_type](text)
    except ValueError as e:
        logger.error(f"'{text}' ist kein gültiger Wert für {target_type.name}: {e}")
        raise TypeCoercionError(f"'{text}' ist kein gültiger Wert für {target_type.name}") from e


def translate_field(raw_value: str, field: FieldMapping, registry: TranslationRegistry) -> Any:
    """
    Liefert den Ausgabewert eines Feldes:
    1. translation_method gesetzt -> registrierte Funktion, ihr Ergebnis wird unverändert übernommen
    2. sonst Umwandlung in target_type (STRING = Text unverändert)
    """
    if field.translation_method:
        func = registry.resolve(field.translation_method)
        try:
            return func(raw_value)
        except ConversionError:
            raise
        except ValueError as e:
            # fremde Funktionen melden Lesefehler meist als ValueError
            logger.error(f"{field.translation_method}('{raw_value}') fehlgeschlagen: {e}")
            raise ValueParseError(f"{field.translation_method}('{raw_value}') fehlgeschlagen: {e}") from e
    return coerce(raw_value, field.target_type)
