from .converter import XmlToJsonConverter
from .mapping_loader import load_mapping, load_mapping_file
from .translation_registry import TranslationRegistry
from .tree_builder import TreeBuilder
from .xml_loader import load_xml, parse_xml
