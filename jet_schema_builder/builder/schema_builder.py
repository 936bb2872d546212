# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Fluent construction of JSON Schema documents.

Every mutating method returns a builder so calls chain::

    schema = (
        SchemaBuilder()
        .object()
        .properties({"name": SchemaBuilder().string().min_length(1)})
        .required(["name"])
        .additional_properties(False)
        .build()
    )

A builder owns exactly one node. Nested schema arguments are resolved to
plain mappings before they are attached, and :meth:`SchemaBuilder.build`
returns a deep copy.
"""

from __future__ import annotations

import asyncio
import copy
import json as _json
import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..config import REMOVE_TARGETS, BuilderConfig, builder_config
from ..exceptions import InvalidArgumentError, ParseError
from ..file_io.schema_loader import fetch_schema, load_schema_file
from ..models.deferred import Deferred, to_wire
from ..models.jetter import derive
from ..models.shapes import Shape
from ..models.validation import SchemaIssue, validate_instance
from .condition_builder import ConditionBuilder
from .ref_builder import RefBuilder
from .views import (
    ArraySchemaBuilder,
    BooleanSchemaBuilder,
    NullSchemaBuilder,
    NumberSchemaBuilder,
    ObjectSchemaBuilder,
    SchemaView,
    StringSchemaBuilder,
)

logger = logging.getLogger(__name__)

TYPE_TAGS = ("string", "number", "integer", "boolean", "null", "object", "array")

SchemaLike = Union[Mapping[str, Any], bool, "SchemaBuilder", SchemaView, Callable[["SchemaBuilder"], Any]]
RefLike = Union[str, RefBuilder, Callable[[RefBuilder], Any]]


def resolve_schema(value: Any) -> Union[Dict[str, Any], bool]:
    """Turn a schema-like argument into a plain node.

    Accepts a mapping (deep-copied), a boolean schema, a builder or view
    (built), or a callable that receives a fresh builder.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (SchemaBuilder, SchemaView)):
        return value.build()
    if isinstance(value, Mapping):
        return copy.deepcopy(dict(value))
    if callable(value):
        return resolve_schema(value(SchemaBuilder()))
    raise InvalidArgumentError(f"Not a schema: {value!r}")


def _resolve_mapping(schemas: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: resolve_schema(value) for key, value in schemas.items()}


def _resolve_ref(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, RefBuilder):
        return value.build()
    if callable(value):
        result = value(RefBuilder())
        if isinstance(result, (str, RefBuilder)):
            return str(result)
        raise InvalidArgumentError(f"Reference callable returned {result!r}, expected a RefBuilder")
    raise InvalidArgumentError(f"Not a reference: {value!r}")


def _names(value: Union[str, Iterable[str]]) -> List[str]:
    # a bare string is one name, not a sequence of characters
    if isinstance(value, str):
        return [value]
    return list(value)


def _check_count(keyword: str, value: Any) -> Any:
    if isinstance(value, Deferred):
        return value.to_json()
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(f"{keyword} must be a non-negative integer, got {value!r}")
    return value


class SchemaBuilder:
    """Mutable holder of one schema node."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None, *, config: Optional[BuilderConfig] = None):
        self._node: Dict[str, Any] = copy.deepcopy(dict(initial)) if initial else {}
        self._config = config or builder_config

    def __repr__(self) -> str:
        return f"SchemaBuilder({self._node!r})"

    def _set(self, keyword: str, value: Any) -> "SchemaBuilder":
        self._node[keyword] = to_wire(value)
        return self

    def _merge(self, keyword: str, entries: Dict[str, Any]) -> "SchemaBuilder":
        existing = self._node.get(keyword)
        if isinstance(existing, dict):
            existing.update(entries)
        else:
            self._node[keyword] = entries
        return self

    def _add_type(self, tag: str) -> None:
        if tag not in TYPE_TAGS:
            raise InvalidArgumentError(f"Unknown type tag: {tag!r}")
        current = self._node.get("type")
        if current is None:
            self._node["type"] = tag
            return
        tags = list(current) if isinstance(current, list) else [current]
        if tag not in tags:
            tags.append(tag)
        self._node["type"] = tags[0] if len(tags) == 1 else tags

    # ---- meta ---------------------------------------------------------------

    def schema(self, uri: str) -> "SchemaBuilder":
        return self._set("$schema", uri)

    def id(self, uri: str) -> "SchemaBuilder":
        return self._set("$id", uri)

    def anchor(self, name: str) -> "SchemaBuilder":
        return self._set("$anchor", name)

    def dynamic_anchor(self, name: str) -> "SchemaBuilder":
        return self._set("$dynamicAnchor", name)

    def ref(self, reference: RefLike) -> "SchemaBuilder":
        return self._set("$ref", _resolve_ref(reference))

    def dynamic_ref(self, reference: RefLike) -> "SchemaBuilder":
        return self._set("$dynamicRef", _resolve_ref(reference))

    def defs(self, schemas: Mapping[str, Any]) -> "SchemaBuilder":
        return self._merge("$defs", _resolve_mapping(schemas))

    def definitions(self, schemas: Mapping[str, Any]) -> "SchemaBuilder":
        return self._merge("definitions", _resolve_mapping(schemas))

    def title(self, text: str) -> "SchemaBuilder":
        return self._set("title", text)

    def description(self, text: str) -> "SchemaBuilder":
        return self._set("description", text)

    def default(self, value: Any) -> "SchemaBuilder":
        return self._set("default", copy.deepcopy(value))

    def examples(self, values: Sequence[Any]) -> "SchemaBuilder":
        return self._set("examples", copy.deepcopy(list(values)))

    def read_only(self, value: Union[bool, Deferred] = True) -> "SchemaBuilder":
        return self._set("readOnly", value)

    def write_only(self, value: Union[bool, Deferred] = True) -> "SchemaBuilder":
        return self._set("writeOnly", value)

    def error_message(self, message: Any) -> "SchemaBuilder":
        return self._set("errorMessage", copy.deepcopy(message))

    def option(self, key: str, value: Any) -> "SchemaBuilder":
        """Set any keyword verbatim. ``type`` values are checked against the known tags."""
        if key == "type":
            tags = value if isinstance(value, list) else [value]
            for tag in tags:
                if tag not in TYPE_TAGS:
                    raise InvalidArgumentError(f"Unknown type tag: {tag!r}")
        return self._set(key, copy.deepcopy(value))

    # ---- type selectors -----------------------------------------------------

    def string(self) -> StringSchemaBuilder:
        self._add_type("string")
        return StringSchemaBuilder(self)

    def number(self) -> NumberSchemaBuilder:
        self._add_type("number")
        return NumberSchemaBuilder(self)

    def integer(self) -> NumberSchemaBuilder:
        self._add_type("integer")
        return NumberSchemaBuilder(self)

    def boolean(self) -> BooleanSchemaBuilder:
        self._add_type("boolean")
        return BooleanSchemaBuilder(self)

    def null(self) -> NullSchemaBuilder:
        self._add_type("null")
        return NullSchemaBuilder(self)

    def object(self) -> ObjectSchemaBuilder:
        self._add_type("object")
        return ObjectSchemaBuilder(self)

    def array(self) -> ArraySchemaBuilder:
        self._add_type("array")
        return ArraySchemaBuilder(self)

    # ---- composition --------------------------------------------------------

    def all_of(self, *schemas: SchemaLike) -> "SchemaBuilder":
        return self._set("allOf", [resolve_schema(s) for s in schemas])

    def any_of(self, *schemas: SchemaLike) -> "SchemaBuilder":
        return self._set("anyOf", [resolve_schema(s) for s in schemas])

    def one_of(self, *schemas: SchemaLike) -> "SchemaBuilder":
        return self._set("oneOf", [resolve_schema(s) for s in schemas])

    def not_(self, schema: SchemaLike) -> "SchemaBuilder":
        return self._set("not", resolve_schema(schema))

    def if_(self, condition: SchemaLike) -> ConditionBuilder:
        """Open a conditional chain; nothing is written until it is closed."""
        return ConditionBuilder(self, resolve_schema(condition), resolver=resolve_schema)

    def enum(self, values: Union[Sequence[Any], Deferred]) -> "SchemaBuilder":
        if isinstance(values, Deferred):
            return self._set("enum", values)
        return self._set("enum", copy.deepcopy(list(values)))

    def const(self, value: Any) -> "SchemaBuilder":
        return self._set("const", copy.deepcopy(value) if not isinstance(value, Deferred) else value)

    # ---- string facets ------------------------------------------------------

    def min_length(self, value: Union[int, Deferred]) -> "SchemaBuilder":
        return self._set("minLength", _check_count("minLength", value))

    def max_length(self, value: Union[int, Deferred]) -> "SchemaBuilder":
        return self._set("maxLength", _check_count("maxLength", value))

    def pattern(self, regex: Union[str, "re.Pattern[str]", Deferred]) -> "SchemaBuilder":
        if isinstance(regex, re.Pattern):
            regex = regex.pattern
        return self._set("pattern", regex)

    def format(self, name: Union[str, Deferred]) -> "SchemaBuilder":
        return self._set("format", name)

    # ---- number facets ------------------------------------------------------

    def minimum(self, value: Union[float, Deferred]) -> "SchemaBuilder":
        return self._set("minimum", value)

    def maximum(self, value: Union[float, Deferred]) -> "SchemaBuilder":
        return self._set("maximum", value)

    def exclusive_minimum(self, value: Union[float, Deferred]) -> "SchemaBuilder":
        return self._set("exclusiveMinimum", value)

    def exclusive_maximum(self, value: Union[float, Deferred]) -> "SchemaBuilder":
        return self._set("exclusiveMaximum", value)

    def multiple_of(self, value: Union[float, Deferred]) -> "SchemaBuilder":
        if not isinstance(value, Deferred):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise InvalidArgumentError(f"multipleOf must be greater than 0, got {value!r}")
        return self._set("multipleOf", value)

    def positive(self) -> "SchemaBuilder":
        return self.minimum(0)

    def negative(self) -> "SchemaBuilder":
        return self.maximum(0)

    def range(self, minimum: Union[float, Deferred], maximum: Union[float, Deferred]) -> "SchemaBuilder":
        return self.minimum(minimum).maximum(maximum)

    # ---- object facets ------------------------------------------------------

    def properties(self, schemas: Mapping[str, Any]) -> "SchemaBuilder":
        return self._merge("properties", _resolve_mapping(schemas))

    def pattern_properties(self, schemas: Mapping[str, Any]) -> "SchemaBuilder":
        return self._merge("patternProperties", _resolve_mapping(schemas))

    def dependent_schemas(self, schemas: Mapping[str, Any]) -> "SchemaBuilder":
        return self._merge("dependentSchemas", _resolve_mapping(schemas))

    def dependencies(self, entries: Mapping[str, Any]) -> "SchemaBuilder":
        """Legacy ``dependencies``: a list of names is kept, anything else is a schema."""
        resolved: Dict[str, Any] = {}
        for name, value in entries.items():
            if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
                resolved[name] = list(value)
            else:
                resolved[name] = resolve_schema(value)
        return self._merge("dependencies", resolved)

    def dependent_required(self, entries: Union[Mapping[str, Sequence[str]], Deferred]) -> "SchemaBuilder":
        if isinstance(entries, Deferred):
            return self._set("dependentRequired", entries)
        return self._set("dependentRequired", {k: _names(v) for k, v in entries.items()})

    def required(self, fields: Union[str, Iterable[str], Deferred]) -> "SchemaBuilder":
        if isinstance(fields, Deferred):
            return self._set("required", fields)
        existing = self._node.get("required")
        if isinstance(existing, list):
            existing.extend(_names(fields))
        else:
            # no list yet, or a deferred marker to replace
            self._node["required"] = _names(fields)
        return self

    def optional(self) -> "SchemaBuilder":
        self._node.pop("required", None)
        return self

    def remove(self, fields: Union[str, Iterable[str]], targets: Union[str, Iterable[str], None] = None) -> "SchemaBuilder":
        """Delete ``fields`` from each facet in ``targets``.

        ``targets`` defaults to the configured ``remove_targets``. Removal from
        ``required`` drops the first matching entry only.
        """
        fields = _names(fields)
        targets = _names(targets) if targets is not None else list(self._config.remove_targets)
        for target in targets:
            if target not in REMOVE_TARGETS:
                raise InvalidArgumentError(
                    f"Cannot remove from {target!r}; expected one of {', '.join(REMOVE_TARGETS)}"
                )

        for target in targets:
            if target == "required":
                required = self._node.get("required")
                if isinstance(required, list):
                    for name in fields:
                        if name in required:
                            required.remove(name)
                continue
            facets = [target, "dependentSchemas"] if target == "dependencies" else [target]
            for facet in facets:
                mapping = self._node.get(facet)
                if isinstance(mapping, dict):
                    for name in fields:
                        mapping.pop(name, None)
        return self

    def min_properties(self, value: Union[int, Deferred]) -> "SchemaBuilder":
        return self._set("minProperties", _check_count("minProperties", value))

    def max_properties(self, value: Union[int, Deferred]) -> "SchemaBuilder":
        return self._set("maxProperties", _check_count("maxProperties", value))

    def property_names(self, schema: SchemaLike) -> "SchemaBuilder":
        return self._set("propertyNames", resolve_schema(schema))

    def additional_properties(self, schema: SchemaLike) -> "SchemaBuilder":
        return self._set("additionalProperties", resolve_schema(schema))

    def unevaluated_properties(self, schema: SchemaLike) -> "SchemaBuilder":
        return self._set("unevaluatedProperties", resolve_schema(schema))

    # ---- array facets -------------------------------------------------------

    def items(self, *schemas: SchemaLike) -> "SchemaBuilder":
        """One argument: every element; two or more: positional tuple items."""
        if not schemas:
            raise InvalidArgumentError("items() needs at least one schema")
        if len(schemas) == 1:
            return self._set("items", resolve_schema(schemas[0]))
        return self._set("items", [resolve_schema(s) for s in schemas])

    def prefix_items(self, *schemas: SchemaLike) -> "SchemaBuilder":
        return self._set("prefixItems", [resolve_schema(s) for s in schemas])

    def additional_items(self, schema: SchemaLike) -> "SchemaBuilder":
        return self._set("additionalItems", resolve_schema(schema))

    def unevaluated_items(self, schema: SchemaLike) -> "SchemaBuilder":
        return self._set("unevaluatedItems", resolve_schema(schema))

    def contains(self, schema: SchemaLike) -> "SchemaBuilder":
        return self._set("contains", resolve_schema(schema))

    def min_contains(self, value: Union[int, Deferred]) -> "SchemaBuilder":
        return self._set("minContains", _check_count("minContains", value))

    def max_contains(self, value: Union[int, Deferred]) -> "SchemaBuilder":
        return self._set("maxContains", _check_count("maxContains", value))

    def min_items(self, value: Union[int, Deferred]) -> "SchemaBuilder":
        return self._set("minItems", _check_count("minItems", value))

    def max_items(self, value: Union[int, Deferred]) -> "SchemaBuilder":
        return self._set("maxItems", _check_count("maxItems", value))

    def unique_items(self, value: Union[bool, Deferred] = True) -> "SchemaBuilder":
        return self._set("uniqueItems", value)

    # ---- loading ------------------------------------------------------------

    def extend(self, schema: SchemaLike) -> "SchemaBuilder":
        """Overwrite top-level keys with those of ``schema``."""
        resolved = resolve_schema(schema)
        if isinstance(resolved, dict):
            self._node.update(resolved)
        else:
            logger.debug(f"extend() with boolean schema {resolved!r} leaves the node unchanged")
        return self

    def json(self, value: Union[str, Mapping[str, Any]]) -> "SchemaBuilder":
        """Replace the node with a JSON object given as text or a mapping."""
        if isinstance(value, str):
            try:
                value = _json.loads(value)
            except _json.JSONDecodeError as e:
                raise ParseError(f"Invalid JSON schema text: {e}") from e
        if not isinstance(value, Mapping):
            raise ParseError(f"Schema must be a JSON object, got {type(value).__name__}")
        self._node = copy.deepcopy(dict(value))
        return self

    async def file(self, path: str) -> "SchemaBuilder":
        """Replace the node with the JSON or YAML document at ``path``."""
        self._node = await asyncio.to_thread(load_schema_file, path)
        return self

    async def url(self, address: str) -> "SchemaBuilder":
        """Replace the node with the JSON document served at ``address``."""
        self._node = await asyncio.to_thread(fetch_schema, address, self._config.http_timeout)
        return self

    # ---- results ------------------------------------------------------------

    def build(self) -> Dict[str, Any]:
        return copy.deepcopy(self._node)

    def shape(self) -> Shape:
        return derive(self._node)

    def validate(self, instance: Any) -> List[SchemaIssue]:
        return validate_instance(instance, self._node, default_dialect=self._config.default_dialect)
