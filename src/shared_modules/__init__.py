from .config import Config
from .errors import (
    ConversionError,
    FieldNotFoundError,
    MalformedMappingError,
    SourceDocumentError,
    TypeCoercionError,
    UnknownObjectTypeError,
    UnknownTranslationMethodError,
    ValueParseError,
)
