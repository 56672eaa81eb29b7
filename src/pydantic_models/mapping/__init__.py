from .mapping_spec import FieldMapping, MappingRoot, MappingSpec, ObjectMapping, RootStructure, TargetType
