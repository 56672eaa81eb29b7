"""
Registry der benannten Übersetzungsfunktionen ('translationMethod' im Mapping).

Jede registrierte Funktion nimmt genau einen Wert (den Text aus dem XML) und gibt einen Wert zurück.
Funktionen müssen zustandslos sein, da eine Registry von mehreren Konvertierungen
gleichzeitig genutzt werden darf.
"""
from datetime import date
from functools import partial
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from loguru import logger

from pydantic_models.config.conversion_config import ConversionConfig
from shared_modules.errors import UnknownTranslationMethodError, ValueParseError
from shared_modules.utils import completed_years, parse_date_str

TranslationFunction = Callable[[str], Any]


def date_to_age(date_string: str, date_format: str = "%d/%m/%Y", today: Callable[[], date] = date.today) -> int:
    """
    Berechnet das Alter in vollendeten Jahren relativ zum heutigen Datum.

    Args:
        date_string (str): Geburtsdatum, z.B. "01/01/2000".
        date_format (str): strptime-Format des Geburtsdatums.
        today (Callable): Liefert das aktuelle Datum (für Tests austauschbar).

    Raises:
        ValueParseError: Wenn das Datum nicht gelesen werden kann.
    """
    birth_date = parse_date_str(date_string, date_format)
    if birth_date is None:
        logger.error(f"Ungültiges Datum '{date_string}' (Format {date_format})")
        raise ValueParseError(f"Ungültiges Datum '{date_string}' (erwartet {date_format})")
    return completed_years(birth_date, today())


def char_to_gender_word(gender_char: str) -> str:
    # alles ausser "m" ergibt "female", auch Leerstring
    return "male" if gender_char.lower() == "m" else "female"


def full_state_to_abbreviation(full_state: str, abbreviations: Mapping[str, str]) -> Optional[str]:
    """Kürzel zum Bundesstaat, None wenn der Staat nicht in der Tabelle steht."""
    return abbreviations.get(full_state.lower())


class TranslationRegistry:
    """
    Geschlossene Tabelle Name -> Funktion.
    Wird beim Start befüllt und danach nur noch gelesen.
    """

    def __init__(self) -> None:
        self._functions: Dict[str, TranslationFunction] = {}

    @classmethod
    def with_defaults(
        cls,
        conversion_config: Optional[ConversionConfig] = None,
        today: Callable[[], date] = date.today,
    ) -> "TranslationRegistry":
        """
        Registry mit den eingebauten Funktionen dateToAge, charToGenderWord und fullStateToAbbreviation.

        Args:
            conversion_config (ConversionConfig): Datumsformat und Staaten-Tabelle, sonst Defaultwerte.
            today (Callable): Uhr für dateToAge.
        """
        conversion_config = conversion_config or ConversionConfig()
        states = MappingProxyType(dict(conversion_config.state_abbreviations))

        registry = cls()
        registry.register("dateToAge", partial(date_to_age, date_format=conversion_config.date_format, today=today))
        registry.register("charToGenderWord", char_to_gender_word)
        registry.register("fullStateToAbbreviation", partial(full_state_to_abbreviation, abbreviations=states))
        return registry

    def register(self, name: str, func: TranslationFunction) -> None:
        if not name:
            raise ValueError("Name der Übersetzungsfunktion darf nicht leer sein.")
        if name in self._functions:
            raise ValueError(f"Übersetzungsfunktion '{name}' ist bereits registriert.")
        logger.debug(f"Registriere Übersetzungsfunktion '{name}'")
        self._functions[name] = func

    def resolve(self, name: str) -> TranslationFunction:
        """
        Raises:
            UnknownTranslationMethodError: Wenn keine Funktion unter dem Namen registriert ist.
        """
        func = self._functions.get(name)
        if func is None:
            logger.error(f"Unbekannte Übersetzungsfunktion '{name}'")
            raise UnknownTranslationMethodError(f"Unbekannte Übersetzungsfunktion '{name}'")
        return func

    def translate(self, name: str, value: str) -> Any:
        return self.resolve(name)(value)

    @property
    def functions(self) -> Mapping[str, TranslationFunction]:
        """Schreibgeschützte Sicht auf alle registrierten Funktionen."""
        return MappingProxyType(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions
