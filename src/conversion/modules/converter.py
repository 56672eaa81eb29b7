import json
from pathlib import Path
from typing import Optional

from loguru import logger

from conversion.modules.mapping_loader import load_mapping_file
from conversion.modules.translation_registry import TranslationRegistry
from conversion.modules.tree_builder import Document, OutputTree, TreeBuilder
from conversion.modules.xml_loader import load_xml
from pydantic_models.mapping.mapping_spec import MappingSpec


class XmlToJsonConverter:
    """
    Konvertiert XML nach JSON und wendet dabei Feldnamen, Werte und Typen
    gemäss Mapping-Datei an.

    Fehler werden nicht verschluckt: jede Ausnahme kommt als typisierter
    ConversionError beim Aufrufer an.
    """

    def __init__(self, registry: Optional[TranslationRegistry] = None) -> None:
        self.registry: TranslationRegistry = registry or TranslationRegistry.with_defaults()

    def convert(self, document: Document, mapping: MappingSpec) -> OutputTree:
        """
        Baut die Ausgabestruktur (dict oder Liste von dicts) aus einem geparsten Dokument.
        """
        return TreeBuilder(mapping, self.registry).build(document)

    def to_json(self, document: Document, mapping: MappingSpec, indent: Optional[int] = None) -> str:
        """
        Wie convert, aber als JSON-String. Ohne indent kompakt, z.B. [{"patientId":1234,...}].
        """
        output = self.convert(document, mapping)
        if indent is None:
            return json.dumps(output, ensure_ascii=False, separators=(",", ":"))
        return json.dumps(output, ensure_ascii=False, indent=indent)

    def convert_files(self, input_file: Path, mapping_file: Path, indent: Optional[int] = None) -> str:
        """
        Liest XML- und Mapping-Datei von der Platte und gibt das JSON als String zurück.

        Args:
            input_file (Path): Pfad zur XML-Datei.
            mapping_file (Path): Pfad zur Mapping-Datei (JSON oder YAML).
            indent (Optional[int]): Einrückung für die Ausgabe, None = kompakt.
        """
        logger.info(f"Konvertiere {input_file} mit Mapping {mapping_file}")
        mapping = load_mapping_file(mapping_file, self.registry)
        document = load_xml(input_file)
        return self.to_json(document, mapping, indent=indent)
