"""Tests for SchemaBuilder and its capability views."""

import re

import pytest

from jet_schema_builder import (
    BuilderConfig,
    InvalidArgumentError,
    ObjectSchemaBuilder,
    ParseError,
    RefBuilder,
    SchemaBuilder,
    StringSchemaBuilder,
    data,
)
from jet_schema_builder.models import ObjectShape, Presence, PrimitiveShape


class TestTypeSelectors:
    def test_selector_is_idempotent(self):
        builder = SchemaBuilder()
        builder.string()
        builder.string()
        assert builder.build() == {"type": "string"}

    def test_selectors_accumulate_in_order(self):
        builder = SchemaBuilder()
        builder.string()
        builder.null()
        builder.string()
        assert builder.build()["type"] == ["string", "null"]

    def test_view_selectors_share_the_node(self):
        node = SchemaBuilder().string().min_length(2).null().build()
        assert node == {"type": ["string", "null"], "minLength": 2}

    def test_view_type(self):
        view = SchemaBuilder().string()
        assert isinstance(view, StringSchemaBuilder)
        assert view.min_length(1) is view

    def test_view_shared_method_returns_builder(self):
        builder = SchemaBuilder()
        view = builder.object()
        assert view.title("T") is builder
        assert view.end() is builder

    def test_view_hides_other_facets(self):
        with pytest.raises(AttributeError):
            SchemaBuilder().string().minimum(3)

    def test_option_rejects_unknown_type(self):
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().option("type", "text")


class TestBuildIsolation:
    def test_mutating_result_does_not_leak(self):
        builder = SchemaBuilder().object().properties({"a": {"type": "string"}}).end()
        first = builder.build()
        first["properties"]["a"]["type"] = "number"
        first["extra"] = True
        assert builder.build() == {"type": "object", "properties": {"a": {"type": "string"}}}

    def test_nested_builder_is_copied(self):
        child = SchemaBuilder().string()
        parent = SchemaBuilder().object().properties({"a": child}).end()
        child.min_length(3)
        assert parent.build()["properties"]["a"] == {"type": "string"}

    def test_initial_node_is_copied(self):
        initial = {"type": "object", "properties": {}}
        builder = SchemaBuilder(initial)
        builder.object().properties({"a": True})
        assert initial == {"type": "object", "properties": {}}


class TestMeta:
    def test_annotations(self):
        node = (
            SchemaBuilder()
            .schema("https://json-schema.org/draft/2020-12/schema")
            .id("urn:example")
            .anchor("root")
            .dynamic_anchor("meta")
            .title("Title")
            .description("Desc")
            .default({"a": 1})
            .examples([1, 2])
            .read_only()
            .write_only(False)
            .error_message("bad")
            .option("x-custom", 1)
            .build()
        )
        assert node == {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "$id": "urn:example",
            "$anchor": "root",
            "$dynamicAnchor": "meta",
            "title": "Title",
            "description": "Desc",
            "default": {"a": 1},
            "examples": [1, 2],
            "readOnly": True,
            "writeOnly": False,
            "errorMessage": "bad",
            "x-custom": 1,
        }

    def test_ref_forms(self):
        assert SchemaBuilder().ref("#/$defs/a").build() == {"$ref": "#/$defs/a"}
        assert SchemaBuilder().ref(RefBuilder().defs("a")).build() == {"$ref": "#/$defs/a"}
        assert SchemaBuilder().ref(lambda r: r.defs("a")).build() == {"$ref": "#/$defs/a"}
        assert SchemaBuilder().dynamic_ref(lambda r: r.anchor("meta")).build() == {"$dynamicRef": "#meta"}

    def test_ref_rejects_other_values(self):
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().ref(42)
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().ref(lambda r: 42)

    def test_defs_are_additive(self):
        node = SchemaBuilder().defs({"a": True}).defs({"b": SchemaBuilder().null()}).build()
        assert node == {"$defs": {"a": True, "b": {"type": "null"}}}


class TestComposition:
    def test_all_of_replaces(self):
        builder = SchemaBuilder().all_of({"type": "string"}, True)
        builder.all_of(False)
        assert builder.build() == {"allOf": [False]}

    def test_mixed_arguments(self):
        node = SchemaBuilder().any_of(
            {"type": "string"},
            SchemaBuilder().number(),
            lambda s: s.null(),
            False,
        ).build()
        assert node == {"anyOf": [{"type": "string"}, {"type": "number"}, {"type": "null"}, False]}

    def test_one_of_and_not(self):
        node = SchemaBuilder().one_of(True).not_({"const": 1}).build()
        assert node == {"oneOf": [True], "not": {"const": 1}}

    def test_rejects_non_schema(self):
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().all_of(3)

    def test_enum_and_const(self):
        assert SchemaBuilder().enum(["a", "b"]).build() == {"enum": ["a", "b"]}
        assert SchemaBuilder().const(None).build() == {"const": None}


class TestStringAndNumberFacets:
    def test_string_facets(self):
        node = SchemaBuilder().string().min_length(1).max_length(5).pattern(re.compile("^a")).format("email").build()
        assert node == {"type": "string", "minLength": 1, "maxLength": 5, "pattern": "^a", "format": "email"}

    def test_negative_length_rejected(self):
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().string().min_length(-1)

    def test_non_integer_count_rejected(self):
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().array().max_items(1.5)

    def test_number_facets(self):
        node = SchemaBuilder().number().exclusive_minimum(0).exclusive_maximum(10).multiple_of(0.5).build()
        assert node == {"type": "number", "exclusiveMinimum": 0, "exclusiveMaximum": 10, "multipleOf": 0.5}

    def test_range_positive_negative(self):
        assert SchemaBuilder().integer().range(1, 9).build() == {"type": "integer", "minimum": 1, "maximum": 9}
        assert SchemaBuilder().number().positive().build()["minimum"] == 0
        assert SchemaBuilder().number().negative().build()["maximum"] == 0

    @pytest.mark.parametrize("value", [0, -2, True, "3"])
    def test_multiple_of_must_be_positive(self, value):
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().number().multiple_of(value)

    def test_deferred_values_written_as_data(self):
        node = SchemaBuilder().number().minimum(data("1/floor")).multiple_of(data("1/step")).build()
        assert node["minimum"] == {"$data": "1/floor"}
        assert node["multipleOf"] == {"$data": "1/step"}

    def test_deferred_count(self):
        node = SchemaBuilder().string().max_length(data("1/limit")).build()
        assert node["maxLength"] == {"$data": "1/limit"}


class TestObjectFacets:
    def test_properties_are_additive(self):
        builder = SchemaBuilder().object()
        builder.properties({"a": {"type": "string"}})
        builder.properties({"b": {"type": "number"}})
        assert set(builder.build()["properties"]) == {"a", "b"}
        builder.properties({"a": {"type": "null"}})
        node = builder.build()
        assert node["properties"] == {"a": {"type": "null"}, "b": {"type": "number"}}

    def test_required_appends(self):
        node = SchemaBuilder().object().required(["a"]).required(["b"]).build()
        assert node["required"] == ["a", "b"]

    def test_required_accepts_a_single_name(self):
        node = SchemaBuilder().object().properties({"name": {"type": "string"}}).required("name").build()
        assert node["required"] == ["name"]
        node = SchemaBuilder().object().required(["a"]).required("name").build()
        assert node["required"] == ["a", "name"]

    def test_required_replaces_deferred(self):
        builder = SchemaBuilder().object().required(data("1/fields"))
        assert builder.build()["required"] == {"$data": "1/fields"}
        builder.required(["a"])
        assert builder.build()["required"] == ["a"]

    def test_optional_drops_required(self):
        node = SchemaBuilder().object().required(["a"]).optional().build()
        assert "required" not in node

    def test_remove_properties_and_required(self):
        builder = SchemaBuilder().object().properties({"x": True, "y": True}).required(["x", "y"])
        builder.remove(["x"], ["properties", "required"])
        node = builder.build()
        assert node["properties"] == {"y": True}
        assert node["required"] == ["y"]

    def test_remove_accepts_a_single_name(self):
        builder = SchemaBuilder().object().properties({"name": {}, "n": {}, "a": {}}).required(["name", "n"])
        builder.remove("name", "required")
        builder.remove("name")
        node = builder.build()
        assert node["properties"] == {"n": {}, "a": {}}
        assert node["required"] == ["n"]

    def test_dependent_required_single_name(self):
        node = SchemaBuilder().object().dependent_required({"card": "billing"}).build()
        assert node["dependentRequired"] == {"card": ["billing"]}

    def test_remove_defaults_to_properties(self):
        builder = SchemaBuilder().object().properties({"x": True}).required(["x"]).remove(["x"])
        node = builder.build()
        assert node["properties"] == {}
        assert node["required"] == ["x"]

    def test_remove_default_targets_from_config(self):
        config = BuilderConfig(remove_targets=("properties", "required"))
        builder = SchemaBuilder(config=config).object().properties({"x": True}).required(["x"]).remove(["x"])
        assert builder.build() == {"type": "object", "properties": {}, "required": []}

    def test_remove_from_required_is_positional(self):
        builder = SchemaBuilder(config=BuilderConfig()).option("required", ["a", "b", "a"])
        builder.remove(["a", "missing"], ["required"])
        assert builder.build()["required"] == ["b", "a"]

    def test_remove_dependencies_includes_dependent_schemas(self):
        builder = (
            SchemaBuilder()
            .object()
            .dependencies({"a": ["b"]})
            .dependent_schemas({"a": True, "c": True})
            .dependent_required({"a": ["b"]})
        )
        builder.remove(["a"], ["dependencies", "dependentRequired"])
        node = builder.build()
        assert node["dependencies"] == {}
        assert node["dependentSchemas"] == {"c": True}
        assert node["dependentRequired"] == {}

    def test_remove_rejects_unknown_target(self):
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().remove(["a"], ["items"])

    def test_dependencies_dispatch(self):
        node = SchemaBuilder().object().dependencies({"a": ["b", "c"], "d": SchemaBuilder().object()}).build()
        assert node["dependencies"] == {"a": ["b", "c"], "d": {"type": "object"}}

    def test_pattern_and_extra_keys(self):
        node = (
            SchemaBuilder()
            .object()
            .pattern_properties({"^x-": {"type": "string"}})
            .property_names({"maxLength": 10})
            .unevaluated_properties(False)
            .min_properties(1)
            .max_properties(3)
            .build()
        )
        assert node == {
            "type": "object",
            "patternProperties": {"^x-": {"type": "string"}},
            "propertyNames": {"maxLength": 10},
            "unevaluatedProperties": False,
            "minProperties": 1,
            "maxProperties": 3,
        }


class TestArrayFacets:
    def test_single_items_is_homogeneous(self):
        node = SchemaBuilder().array().items({"type": "string"}).build()
        assert node["items"] == {"type": "string"}

    def test_two_items_is_tuple(self):
        node = SchemaBuilder().array().items({"type": "string"}, SchemaBuilder().number()).build()
        assert node["items"] == [{"type": "string"}, {"type": "number"}]

    def test_items_needs_an_argument(self):
        with pytest.raises(InvalidArgumentError):
            SchemaBuilder().array().items()

    def test_other_array_facets(self):
        node = (
            SchemaBuilder()
            .array()
            .prefix_items({"type": "string"}, True)
            .additional_items(False)
            .unevaluated_items(False)
            .contains({"const": 1})
            .min_contains(1)
            .max_contains(2)
            .min_items(1)
            .max_items(4)
            .unique_items()
            .build()
        )
        assert node == {
            "type": "array",
            "prefixItems": [{"type": "string"}, True],
            "additionalItems": False,
            "unevaluatedItems": False,
            "contains": {"const": 1},
            "minContains": 1,
            "maxContains": 2,
            "minItems": 1,
            "maxItems": 4,
            "uniqueItems": True,
        }


class TestLoading:
    def test_extend_overwrites_top_level_keys(self):
        builder = SchemaBuilder().title("old").object().properties({"a": True}).end()
        builder.extend({"title": "new", "properties": {"b": True}})
        assert builder.build() == {"title": "new", "type": "object", "properties": {"b": True}}

    def test_json_text_replaces_node(self):
        builder = SchemaBuilder().title("old").json('{"type": "string"}')
        assert builder.build() == {"type": "string"}

    def test_json_mapping(self):
        assert SchemaBuilder().json({"const": 1}).build() == {"const": 1}

    @pytest.mark.parametrize("value", ["{not json", "[1, 2]", 5])
    def test_json_rejects_bad_input(self, value):
        with pytest.raises(ParseError):
            SchemaBuilder().json(value)


def test_end_to_end_object():
    builder = (
        SchemaBuilder()
        .object()
        .properties({"name": SchemaBuilder().string().min_length(1)})
        .required(["name"])
        .additional_properties(False)
    )
    assert isinstance(builder, ObjectSchemaBuilder)
    node = builder.build()
    assert node == {
        "type": "object",
        "properties": {"name": {"type": "string", "minLength": 1}},
        "required": ["name"],
        "additionalProperties": False,
    }

    shape = builder.shape()
    assert isinstance(shape, ObjectShape)
    assert list(shape.fields) == ["name"]
    assert shape.fields["name"].presence is Presence.REQUIRED
    assert shape.fields["name"].shape == PrimitiveShape("string")
    assert shape.closed
    assert shape.describe() == "{ name: string }"


def test_validate_uses_built_schema():
    builder = SchemaBuilder().object().properties({"n": {"type": "number"}}).required(["n"])
    assert builder.validate({"n": 1}) == []
    issues = builder.validate({"n": "x"})
    assert len(issues) == 1
    assert issues[0].path == "/n"
