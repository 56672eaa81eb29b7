from __future__ import annotations

from typing import Any, Dict, List, Union

from loguru import logger
from lxml import etree

from conversion.modules.field_translator import translate_field
from conversion.modules.translation_registry import TranslationRegistry
from conversion.modules.value_resolver import iter_named, resolve_value
from pydantic_models.mapping.mapping_spec import MappingSpec, RootStructure
from shared_modules.errors import ConversionError

Document = Union[etree._ElementTree, etree._Element]
OutputObject = Dict[str, Any]
OutputTree = Union[OutputObject, List[OutputObject]]


def document_root(document: Document) -> etree._Element:
    """Wurzelelement eines geparsten Dokuments (oder das Element selbst)."""
    if isinstance(document, etree._ElementTree):
        return document.getroot()
    return document


class TreeBuilder:
    """
    Baut die Ausgabestruktur aus einem XML-Dokument anhand eines MappingSpec.
    Hält keinen veränderlichen Zustand, ein Builder darf von mehreren Threads genutzt werden.
    """

    def __init__(self, mapping: MappingSpec, registry: TranslationRegistry) -> None:
        self.mapping = mapping
        self.registry = registry

    def build(self, document: Document) -> OutputTree:
        """
        Einstieg: je nach root.structure ein Array oder ein einzelnes Objekt.
        """
        if self.mapping.root_structure is RootStructure.ARRAY:
            return self.build_array(document)
        return self.build_object(document_root(document), self.mapping.root_tag)

    def build_array(self, document: Document) -> List[OutputObject]:
        """
        Ein Ausgabeobjekt pro Element mit dem Tag collectionType, in Dokumentreihenfolge.
        Das Wurzelelement zählt mit, falls es selbst passt.
        """
        collection_type = self.mapping.collection_type
        # Feldliste vorab prüfen, damit ein unbekannter Typ auch bei leerer Treffermenge auffällt
        self.mapping.object_mapping(collection_type)

        elements = list(iter_named(document_root(document), collection_type, include_self=True))
        logger.debug(f"{len(elements)} Elemente <{collection_type}> gefunden")
        return [self.build_object(element, collection_type) for element in elements]

    def build_object(self, node: etree._Element, type_name: str) -> OutputObject:
        """
        Baut ein Ausgabeobjekt: Felder in der Reihenfolge der Mapping-Datei.
        Ein Fehler in einem Feld bricht das ganze Objekt ab.

        Raises:
            ConversionError: mit Objekttyp und Feldname im Kontext.
        """
        object_mapping = self.mapping.object_mapping(type_name)
        output: OutputObject = {}
        for field in object_mapping.fields:
            try:
                raw_value = resolve_value(node, field.source_name)
                output[field.target_name] = translate_field(raw_value, field, self.registry)
            except ConversionError as e:
                raise e.with_context(object_type=type_name, field_name=field.source_name)
        return output
