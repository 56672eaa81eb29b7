from typing import Optional


class ConversionError(Exception):
    """
    Basisklasse für alle Fehler der XML-nach-JSON-Konvertierung.
    Trägt optional den Objekttyp und den Feldnamen, in dem der Fehler aufgetreten ist,
    damit der Aufrufer (und die Tests) den Fehler genau zuordnen können.
    """

    def __init__(
        self,
        message: str,
        object_type: Optional[str] = None,
        field_name: Optional[str] = None,
    ) -> None:
        self.message = message
        self.object_type = object_type
        self.field_name = field_name
        super().__init__(self._format())

    def _format(self) -> str:
        context = []
        if self.object_type:
            context.append(f"Objekttyp '{self.object_type}'")
        if self.field_name:
            context.append(f"Feld '{self.field_name}'")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"

    def with_context(self, object_type: Optional[str] = None, field_name: Optional[str] = None) -> "ConversionError":
        """
        Ergänzt fehlenden Kontext, ohne bereits gesetzte Angaben zu überschreiben.
        """
        self.object_type = self.object_type or object_type
        self.field_name = self.field_name or field_name
        self.args = (self._format(),)
        return self


class MalformedMappingError(ConversionError):
    """Mapping-Datei fehlt eine Pflichtstruktur oder hat die falsche Form."""


class UnknownObjectTypeError(ConversionError):
    """Root verweist auf einen Objekttyp, der unter 'objects' nicht definiert ist."""


class FieldNotFoundError(ConversionError):
    """Ein deklariertes Quellfeld fehlt im Quellknoten."""


class UnknownTranslationMethodError(ConversionError):
    """Für den Namen der translationMethod ist keine Funktion registriert."""


class ValueParseError(ConversionError, ValueError):
    """Ein Wert kann nicht im erwarteten Format gelesen werden."""


class TypeCoercionError(ValueParseError):
    """Ein Wert kann nicht in den deklarierten Zieltyp umgewandelt werden."""


class SourceDocumentError(ConversionError):
    """Das XML-Quelldokument kann nicht gelesen oder geparst werden."""
