import copy

import pytest

from conversion.modules.mapping_loader import load_mapping
from conversion.modules.tree_builder import TreeBuilder
from conversion.modules.xml_loader import parse_xml
from pydantic_models.mapping.mapping_spec import MappingSpec
from shared_modules.errors import FieldNotFoundError, TypeCoercionError, UnknownObjectTypeError

PATIENTS_XML = """
<patients>
    <patient>
        <id>1234</id><gender>m</gender><state>Michigan</state><birthDate>01/01/2000</birthDate>
    </patient>
    <!-- Kommentar zwischen den Elementen -->
    <patient>
        <id>5678</id><gender>f</gender><state>Ohio</state><birthDate>15/03/2010</birthDate>
    </patient>
</patients>
"""


@pytest.fixture
def builder(patient_mapping_data, registry) -> TreeBuilder:
    return TreeBuilder(load_mapping(patient_mapping_data), registry)


def test_array_root(builder):
    output = builder.build(parse_xml(PATIENTS_XML))
    assert output == [
        {"patientId": 1234, "sex": "male", "state": "MI", "age": 58},
        {"patientId": 5678, "sex": "female", "state": "OH", "age": 48},
    ]


def test_key_order_follows_field_declaration(patient_mapping_data, registry):
    data = copy.deepcopy(patient_mapping_data)
    data["objects"]["patient"]["fields"].reverse()
    output = TreeBuilder(load_mapping(data), registry).build(parse_xml(PATIENTS_XML))
    for obj in output:
        assert list(obj) == ["age", "state", "sex", "patientId"]


def test_array_cardinality_includes_nested_matches(builder):
    xml = """
    <clinic>
        <patient><id>1</id><gender>m</gender><state>Ohio</state><birthDate>01/01/2000</birthDate></patient>
        <ward>
            <patient><id>2</id><gender>f</gender><state>Ohio</state><birthDate>01/01/2000</birthDate></patient>
            <patient><id>3</id><gender>m</gender><state>Ohio</state><birthDate>01/01/2000</birthDate></patient>
        </ward>
    </clinic>
    """
    output = builder.build(parse_xml(xml))
    assert [obj["patientId"] for obj in output] == [1, 2, 3]


def test_array_without_matches(builder):
    assert builder.build(parse_xml("<patients/>")) == []


def test_root_element_itself_matches_collection_type(builder):
    xml = "<patient><id>9</id><gender>m</gender><state>Ohio</state><birthDate>01/01/2000</birthDate></patient>"
    assert builder.build(parse_xml(xml)) == [{"patientId": 9, "sex": "male", "state": "OH", "age": 58}]


def test_single_object_root(registry):
    mapping = load_mapping({
        "root": {"structure": "object", "tagName": "patient"},
        "objects": {
            "patient": {
                "fields": [
                    {"sourceName": "id", "targetName": "patientId", "targetType": "Integer"},
                    {"sourceName": "name", "targetName": "fullName"},
                ]
            }
        },
    })
    output = TreeBuilder(mapping, registry).build(parse_xml("<patient><name>John</name><id>42</id></patient>"))
    assert output == {"patientId": 42, "fullName": "John"}


def test_missing_field_fails_whole_build(builder):
    xml = PATIENTS_XML.replace("<state>Ohio</state>", "")
    with pytest.raises(FieldNotFoundError) as exc_info:
        builder.build(parse_xml(xml))
    assert exc_info.value.object_type == "patient"
    assert exc_info.value.field_name == "state"
    assert "patient" in str(exc_info.value)


def test_coercion_error_has_context(builder):
    xml = PATIENTS_XML.replace("<id>5678</id>", "<id>n/a</id>")
    with pytest.raises(TypeCoercionError) as exc_info:
        builder.build(parse_xml(xml))
    assert exc_info.value.object_type == "patient"
    assert exc_info.value.field_name == "id"


def test_unknown_object_type(registry):
    mapping = MappingSpec.model_validate({
        "root": {"structure": "object", "tagName": "doctor"},
        "objects": {"patient": {"fields": []}},
    })
    with pytest.raises(UnknownObjectTypeError):
        TreeBuilder(mapping, registry).build(parse_xml("<doctor/>"))


def test_builder_accepts_element(builder):
    root = parse_xml(PATIENTS_XML).getroot()
    assert len(builder.build(root)) == 2


def test_array_root_with_default_namespace(builder):
    xml = PATIENTS_XML.replace("<patients>", '<patients xmlns="urn:example:patients">')
    output = builder.build(parse_xml(xml))
    assert [obj["patientId"] for obj in output] == [1234, 5678]


def test_single_object_root_with_default_namespace(registry):
    mapping = load_mapping({
        "root": {"structure": "object", "tagName": "patient"},
        "objects": {"patient": {"fields": [{"sourceName": "id", "targetName": "patientId", "targetType": "Integer"}]}},
    })
    xml = '<patient xmlns="urn:example:patients"><id>42</id></patient>'
    assert TreeBuilder(mapping, registry).build(parse_xml(xml)) == {"patientId": 42}
