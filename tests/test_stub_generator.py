"""Tests for TypedDict stub generation."""

from jet_schema_builder import SchemaBuilder
from jet_schema_builder.file_io import generate_stub

PERSON = {
    "type": "object",
    "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
    "required": ["name"],
}


def test_simple_object():
    stub = generate_stub(PERSON, "Person")
    assert stub.startswith("# Generated by jet-schema-builder. Do not edit.\n")
    assert "# Person: { name: string; age?: number; [key: string]: unknown }" in stub
    assert "from typing import NotRequired, Required, TypedDict\n" in stub
    assert "class Person(TypedDict):\n    name: Required[str]\n    age: NotRequired[float]\n" in stub
    compile(stub, "<stub>", "exec")


def test_source_is_mentioned():
    stub = generate_stub(PERSON, "Person", source="person.json")
    assert stub.startswith("# Generated by jet-schema-builder from person.json. Do not edit.")


def test_nested_objects_get_named_classes():
    schema = (
        SchemaBuilder()
        .object()
        .properties({"address": SchemaBuilder().object().properties({"city": {"type": "string"}}).required(["city"])})
        .required(["address"])
        .build()
    )
    stub = generate_stub(schema, "Person")
    assert "class PersonAddress(TypedDict):\n    city: Required[str]\n" in stub
    assert "    address: Required[PersonAddress]\n" in stub
    assert stub.index("class PersonAddress") < stub.index("class Person(")
    compile(stub, "<stub>", "exec")


def test_one_of_becomes_variants():
    schema = {
        "type": "object",
        "oneOf": [
            {"properties": {"a": {"type": "string"}}, "required": ["a"]},
            {"properties": {"b": {"enum": ["x", "y"]}}, "required": ["b"]},
        ],
    }
    stub = generate_stub(schema, "Choice")
    assert "class Choice1(TypedDict):\n    a: Required[str]\n" in stub
    assert "class Choice2(TypedDict):\n    b: Required[Union[Literal['x'], Literal['y']]]\n" in stub
    assert "Choice = Union[Choice1, Choice2]\n" in stub
    # absent keys cannot be expressed and are left out
    assert "NoReturn" not in stub
    compile(stub, "<stub>", "exec")


def test_keys_that_are_not_identifiers():
    schema = {"properties": {"content-type": {"type": "string"}, "class": {"type": "null"}}}
    stub = generate_stub(schema, "Headers")
    assert 'Headers = TypedDict("Headers", {\n' in stub
    assert '    "content-type": NotRequired[str],\n' in stub
    assert '    "class": NotRequired[None],\n' in stub
    compile(stub, "<stub>", "exec")


def test_closed_object_is_noted():
    schema = {"type": "object", "properties": {"a": {"type": "boolean"}}, "additionalProperties": False}
    stub = generate_stub(schema, "Flags")
    assert '    """Closed: no keys besides the ones below."""\n    a: NotRequired[bool]\n' in stub


def test_non_object_top_level_is_an_alias():
    stub = generate_stub({"type": "array", "items": {"type": ["string", "null"]}}, "Names")
    assert "Names = List[Union[str, None]]\n" in stub
    compile(stub, "<stub>", "exec")


def test_tuple_and_unknown():
    stub = generate_stub({"prefixItems": [{"type": "string"}, True], "items": False}, "Pair")
    assert "Pair = Tuple[str, Any]\n" in stub
    assert "Any" in stub.split("from typing import ")[1].splitlines()[0]


def test_name_is_made_an_identifier():
    stub = generate_stub(PERSON, "person record")
    assert "class PersonRecord(TypedDict):" in stub


def test_generated_stub_imports_and_runs():
    schema = dict(PERSON, properties=dict(PERSON["properties"], tags={"type": "array", "items": {"type": "string"}}))
    namespace = {}
    exec(generate_stub(schema, "Person"), namespace)
    person = namespace["Person"]
    assert person.__required_keys__ == frozenset({"name"})
    assert person.__optional_keys__ == frozenset({"age", "tags"})
