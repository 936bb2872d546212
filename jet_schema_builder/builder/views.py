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

"""Capability views over a :class:`SchemaBuilder`.

``SchemaBuilder().string()`` returns a :class:`StringSchemaBuilder` wrapping
the same builder: its string facets return the view so chains stay narrow,
while shared methods (``title``, ``all_of``, ``ref`` ...) are forwarded to
the builder and return it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet

if TYPE_CHECKING:
    from .schema_builder import SchemaBuilder

SHARED_METHODS: FrozenSet[str] = frozenset({
    "schema", "id", "anchor", "dynamic_anchor", "ref", "dynamic_ref", "defs", "definitions",
    "title", "description", "default", "examples", "read_only", "write_only", "error_message",
    "option", "all_of", "any_of", "one_of", "not_", "if_", "enum", "const",
    "extend", "json", "file", "url", "validate", "shape",
})


def _facet(name: str) -> Callable[..., "SchemaView"]:
    def method(self: "SchemaView", *args: Any, **kwargs: Any) -> "SchemaView":
        getattr(self._builder, name)(*args, **kwargs)
        return self

    method.__name__ = name
    method.__doc__ = f"Forward to ``SchemaBuilder.{name}`` and stay on this view."
    return method


class SchemaView:
    """Base view: type selectors, shared methods, ``end()`` and ``build()``."""

    def __init__(self, builder: "SchemaBuilder"):
        self._builder = builder

    def __getattr__(self, name: str) -> Any:
        if name in SHARED_METHODS:
            return getattr(self._builder, name)
        raise AttributeError(f"'{type(self).__name__}' has no method '{name}'")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._builder.build()!r})"

    def string(self) -> "StringSchemaBuilder":
        return self._builder.string()

    def number(self) -> "NumberSchemaBuilder":
        return self._builder.number()

    def integer(self) -> "NumberSchemaBuilder":
        return self._builder.integer()

    def boolean(self) -> "BooleanSchemaBuilder":
        return self._builder.boolean()

    def null(self) -> "NullSchemaBuilder":
        return self._builder.null()

    def object(self) -> "ObjectSchemaBuilder":
        return self._builder.object()

    def array(self) -> "ArraySchemaBuilder":
        return self._builder.array()

    def end(self) -> "SchemaBuilder":
        """Leave the view and continue on the full builder."""
        return self._builder

    def build(self) -> Dict[str, Any]:
        return self._builder.build()


class StringSchemaBuilder(SchemaView):
    min_length = _facet("min_length")
    max_length = _facet("max_length")
    pattern = _facet("pattern")
    format = _facet("format")


class NumberSchemaBuilder(SchemaView):
    minimum = _facet("minimum")
    maximum = _facet("maximum")
    exclusive_minimum = _facet("exclusive_minimum")
    exclusive_maximum = _facet("exclusive_maximum")
    multiple_of = _facet("multiple_of")
    positive = _facet("positive")
    negative = _facet("negative")
    range = _facet("range")


class ObjectSchemaBuilder(SchemaView):
    properties = _facet("properties")
    required = _facet("required")
    optional = _facet("optional")
    remove = _facet("remove")
    min_properties = _facet("min_properties")
    max_properties = _facet("max_properties")
    pattern_properties = _facet("pattern_properties")
    property_names = _facet("property_names")
    dependent_required = _facet("dependent_required")
    dependent_schemas = _facet("dependent_schemas")
    dependencies = _facet("dependencies")
    additional_properties = _facet("additional_properties")
    unevaluated_properties = _facet("unevaluated_properties")


class ArraySchemaBuilder(SchemaView):
    min_items = _facet("min_items")
    max_items = _facet("max_items")
    unique_items = _facet("unique_items")
    items = _facet("items")
    prefix_items = _facet("prefix_items")
    contains = _facet("contains")
    min_contains = _facet("min_contains")
    max_contains = _facet("max_contains")
    additional_items = _facet("additional_items")
    unevaluated_items = _facet("unevaluated_items")


class BooleanSchemaBuilder(SchemaView):
    pass


class NullSchemaBuilder(SchemaView):
    pass
