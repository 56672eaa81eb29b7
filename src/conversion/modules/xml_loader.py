from pathlib import Path
from typing import Union

from loguru import logger
from lxml import etree

from shared_modules.errors import SourceDocumentError


def _parser() -> etree.XMLParser:
    # keine externen Entities, kein Netzwerk; Leerraum zwischen Elementen wird verworfen
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def parse_xml(source: Union[str, bytes]) -> etree._ElementTree:
    """
    Parst ein XML-Dokument aus einem String oder Bytes.

    Raises:
        SourceDocumentError: Wenn das Dokument kein wohlgeformtes XML ist.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    try:
        root = etree.fromstring(source, parser=_parser())
    except etree.XMLSyntaxError as e:
        logger.error(f"Ungültiges XML: {e}")
        raise SourceDocumentError(f"Ungültiges XML: {e}") from e
    return etree.ElementTree(root)


def load_xml(path: Path) -> etree._ElementTree:
    """
    Lädt ein XML-Dokument vollständig in den Speicher.
    """
    path = Path(path)
    logger.debug(f"Lade XML-Datei {path}")
    try:
        return etree.parse(str(path), parser=_parser())
    except OSError as e:
        logger.error(f"XML-Datei {path} kann nicht gelesen werden: {e}")
        raise SourceDocumentError(f"XML-Datei {path} kann nicht gelesen werden: {e}") from e
    except etree.XMLSyntaxError as e:
        logger.error(f"Ungültiges XML in {path}: {e}")
        raise SourceDocumentError(f"Ungültiges XML in {path}: {e}") from e
