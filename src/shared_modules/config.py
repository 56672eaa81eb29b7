import sys
from pathlib import Path
from typing import Any, Dict, Optional, Type

import yaml
from loguru import logger
from pydantic import BaseModel, ValidationError

from pydantic_models.config.conversion_config import ConversionConfig
from pydantic_models.config.logging_config import LoggingConfig


class Config:
    """
    Lädt und prüft die Konfiguration des Konverters.
    Nutzt statische Pydantic-Modelle für alle Abschnitte.
    Ohne Config-Datei gelten die Defaultwerte der Modelle.

    Kein Singleton: Registry und Tests bekommen ihre Konfiguration injiziert.
    """

    def __init__(self, config_path: Optional[Path] = None, setup_logging: bool = True):
        self.config_path = Path(config_path) if config_path else None
        try:
            self.raw_config: Dict[str, Any] = self._load_config()
            self.logging = self._parse_section(self.raw_config, "logging", LoggingConfig)
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
            logger.error(f"Fehler beim Laden der Konfiguration: {e}")
            raise
        if setup_logging:
            self._setup_logging()
        logger.debug(f"Lade Konfiguration von {self.config_path or '<Defaultwerte>'}")

        try:
            self.conversion = self._parse_section(self.raw_config, "conversion", ConversionConfig)
        except ValidationError as e:
            logger.error(f"Ungültiger Abschnitt 'conversion': {e}")
            raise
        logger.debug("Konfiguration erfolgreich geladen und validiert.")

    def _setup_logging(self) -> None:
        """
        Initialisiert loguru mit den Einstellungen aus der Config-Datei.
        """
        logger.remove()
        log_file = self.logging.log_file
        log_level = self.logging.log_level or "INFO"
        if log_file:
            logger.add(log_file, level=log_level)
        logger.add(sys.stderr, level=log_level)

    def _load_config(self) -> Dict[str, Any]:
        """
        Lädt die YAML-Konfigurationsdatei. Eine leere Datei ergibt eine leere Konfiguration.
        """
        if self.config_path is None:
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Konfiguration muss ein Mapping sein: {self.config_path}")
        return data

    def _parse_section(self, config: Dict[str, Any], section: str, model: Type[BaseModel]) -> Any:
        """
        Parst einen Abschnitt der Config mit dem passenden Pydantic-Modell.
        """
        data = config.get(section) or {}
        logger.debug(f"Parsiere Abschnitt '{section}': {data}")
        return model(**data)
