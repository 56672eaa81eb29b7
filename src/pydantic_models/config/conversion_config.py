from typing import Dict

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_STATE_ABBREVIATIONS: Dict[str, str] = {
    "michigan": "MI",
    "ohio": "OH",
}


class ConversionConfig(BaseModel):
    """
    Einstellungen für die eingebauten Übersetzungsfunktionen.

    Attribute:
        date_format (str): strptime-Format für Geburtsdaten (entspricht dd/MM/yyyy).
        state_abbreviations (Dict[str, str]): Bundesstaat (klein geschrieben) -> Kürzel.
    """
    model_config = ConfigDict(frozen=True)

    date_format: str = "%d/%m/%Y"
    state_abbreviations: Dict[str, str] = dict(DEFAULT_STATE_ABBREVIATIONS)

    @field_validator("state_abbreviations")
    @classmethod
    def lower_state_keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        """
        Schlüssel werden klein geschrieben, da die Suche case-insensitive ist.
        """
        return {key.strip().lower(): value for key, value in v.items()}
