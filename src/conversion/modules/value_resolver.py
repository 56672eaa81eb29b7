from typing import Iterator, Optional, Tuple

from lxml import etree
from loguru import logger

from shared_modules.errors import FieldNotFoundError


def _split_name(name: str) -> Tuple[Optional[str], str]:
    prefix, sep, local = name.partition(":")
    if sep:
        return prefix, local
    return None, name


def iter_named(node: etree._Element, name: str, include_self: bool = False) -> Iterator[etree._Element]:
    """
    Elemente mit dem Tag-Namen name in Dokumentreihenfolge, Namespaces wie bei DOM
    getElementsByTagName: "patient" trifft <patient> auch unter einem Default-xmlns,
    "x:patient" nur Elemente mit dem Präfix x.

    Args:
        node: Startknoten.
        name: Tag-Name, optional mit Präfix.
        include_self: Ob node selbst mitgezählt wird.
    """
    prefix, local = _split_name(name)
    candidates = node.iter("{*}" + local) if include_self else node.iterdescendants("{*}" + local)
    for element in candidates:
        if element.prefix == prefix:
            yield element


def resolve_value(node: etree._Element, source_name: str) -> str:
    """
    Sucht unterhalb von node (alle Ebenen, nicht nur direkte Kinder) das erste Element
    mit dem Tag source_name und gibt dessen gesamten Textinhalt zurück.

    Achtung: Gleichnamige Felder in verschiedenen Unterobjekten kollidieren, es gewinnt
    das erste Element in Dokumentreihenfolge. Eindeutige Namen sind Sache der Mapping-Datei.

    Raises:
        FieldNotFoundError: Wenn kein passendes Element existiert.
    """
    for element in iter_named(node, source_name):
        return "".join(element.itertext())
    logger.error(f"Feld '{source_name}' nicht gefunden unter <{etree.QName(node).localname}>")
    raise FieldNotFoundError("Quellfeld nicht gefunden", field_name=source_name)
