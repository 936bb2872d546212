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

"""Derive the structural shape a JSON Schema document describes.

:func:`derive` is a pure function of a finished document. It never raises on
a well-formed node: keywords it cannot interpret make the affected part
``unknown`` instead.

Internally a derivation step may return None, meaning "this schema says
nothing about structure" (``{}``, ``{"minLength": 3}``). None is the identity
for every combination below and only turns into ``unknown`` at the surface.

Three ways of combining shapes are used:

* :func:`intersect` - both shapes hold at once (``allOf`` members).
* :func:`merge_union` - non-object members are kept side by side while object
  members are merged field by field (base shape with ``anyOf``/``oneOf``
  members and conditional branches).
* :func:`exclusive_union` - a union whose object members mark the keys of
  the other side as absent (``if``/``then``/``else`` branches).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .deferred import Deferred
from .key_patterns import key_pattern_for
from .shapes import (
    NEVER,
    UNKNOWN,
    ArrayShape,
    FieldShape,
    LiteralShape,
    NeverShape,
    ObjectShape,
    PatternField,
    Presence,
    PrimitiveShape,
    Shape,
    UnionShape,
    UnknownShape,
    options_of,
    same_shape,
    union_of,
)

logger = logging.getLogger(__name__)

OBJECT_KEYWORDS = ("properties", "required", "additionalProperties", "unevaluatedProperties")
ARRAY_KEYWORDS = ("items", "prefixItems", "additionalItems", "unevaluatedItems")
CONDITION_KEYWORDS = ("then", "elseIf", "else")

_PRIMITIVE_TYPES = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "null": "null",
}

_ABSENT_FIELD = FieldShape(NEVER, Presence.ABSENT)


def derive(schema: Any) -> Shape:
    """Return the shape of the values ``schema`` accepts.

    Args:
        schema: A finished schema document (mapping or boolean schema).

    Returns:
        The derived :data:`~jet_schema_builder.models.shapes.Shape`.
    """
    return _or_unknown(_jet(schema))


def _or_unknown(shape: Optional[Shape]) -> Shape:
    return UNKNOWN if shape is None else shape


def _jet(schema: Any) -> Optional[Shape]:
    if schema is False:
        return NEVER
    if schema is True:
        return UNKNOWN
    if not isinstance(schema, Mapping):
        logger.debug(f"Schema node of type {type(schema).__name__} is not a mapping; treating as unknown")
        return UNKNOWN

    if "const" in schema:
        value = schema["const"]
        if Deferred.from_value(value) is not None:
            return UNKNOWN
        return LiteralShape(value)

    if "enum" in schema:
        values = schema["enum"]
        if not isinstance(values, list):
            # $data reference or malformed enum
            return UNKNOWN
        return union_of(LiteralShape(v) for v in values)

    base = _resolve_type(schema)

    all_of = schema.get("allOf")
    if isinstance(all_of, list) and all_of:
        combined: Optional[Shape] = None
        for member in all_of:
            combined = intersect(combined, _jet(member))
        if isinstance(combined, NeverShape):
            return NEVER
        base = merge_union(base, combined, deep=True)

    final = _combine_alternatives(schema, base)
    return _apply_conditions(schema, base, final)


# ---- base shape from "type" and duck typing -------------------------------


def _resolve_type(schema: Mapping[str, Any]) -> Optional[Shape]:
    declared = schema.get("type")
    if isinstance(declared, list):
        if not declared:
            return UNKNOWN
        return union_of(_shape_for_type(tag, schema) for tag in declared)
    if isinstance(declared, str):
        return _shape_for_type(declared, schema)
    if declared is not None:
        logger.debug(f"Unrecognised 'type' value {declared!r}; treating as unknown")
        return UNKNOWN

    looks_like_object = any(k in schema for k in OBJECT_KEYWORDS)
    looks_like_array = any(k in schema for k in ARRAY_KEYWORDS)
    if looks_like_object and looks_like_array:
        return union_of([_object_shape(schema), _array_shape(schema)])
    if looks_like_object:
        return _object_shape(schema)
    if looks_like_array:
        return _array_shape(schema)
    if "$ref" in schema or "$dynamicRef" in schema:
        # references are not resolved here
        return UNKNOWN
    return None


def _shape_for_type(tag: Any, schema: Mapping[str, Any]) -> Shape:
    if tag in _PRIMITIVE_TYPES:
        return PrimitiveShape(_PRIMITIVE_TYPES[tag])
    if tag == "object":
        return _object_shape(schema)
    if tag == "array":
        return _array_shape(schema)
    logger.debug(f"Unknown type tag {tag!r}; treating as unknown")
    return UNKNOWN


def _required_names(schema: Mapping[str, Any]) -> List[str]:
    required = schema.get("required")
    if not isinstance(required, list):
        return []
    return [name for name in required if isinstance(name, str)]


def _object_shape(schema: Mapping[str, Any]) -> ObjectShape:
    required = _required_names(schema)
    fields: Dict[str, FieldShape] = {}

    properties = schema.get("properties")
    if isinstance(properties, Mapping):
        for name, sub_schema in properties.items():
            presence = Presence.REQUIRED if name in required else Presence.OPTIONAL
            fields[name] = FieldShape(derive(sub_schema), presence)

    for name in required:
        if name not in fields:
            fields[name] = FieldShape(UNKNOWN, Presence.REQUIRED)

    patterns: Tuple[PatternField, ...] = ()
    pattern_properties = schema.get("patternProperties")
    if isinstance(pattern_properties, Mapping):
        patterns = tuple(
            PatternField(key_pattern_for(regex), derive(sub_schema))
            for regex, sub_schema in pattern_properties.items()
        )

    return ObjectShape(fields=fields, patterns=patterns, extra=_extra_keys(schema))


def _extra_keys(schema: Mapping[str, Any]) -> Optional[Shape]:
    for keyword in ("additionalProperties", "unevaluatedProperties"):
        if keyword in schema:
            value = schema[keyword]
            if value is False:
                return None
            return derive(value)
    return UNKNOWN


def _tail(value: Any) -> Optional[Shape]:
    if value is False:
        return None
    if isinstance(value, (Mapping, bool)):
        return derive(value)
    return UNKNOWN


def _first_tail(schema: Mapping[str, Any], keywords: Sequence[str]) -> Optional[Shape]:
    for keyword in keywords:
        if keyword in schema:
            return _tail(schema[keyword])
    return UNKNOWN


def _array_shape(schema: Mapping[str, Any]) -> ArrayShape:
    prefix_items = schema.get("prefixItems")
    items = schema.get("items")

    if isinstance(prefix_items, list):
        prefix = tuple(derive(s) for s in prefix_items)
        return ArrayShape(prefix, _first_tail(schema, ("items", "additionalItems", "unevaluatedItems")))

    if isinstance(items, list):
        # legacy tuple validation
        prefix = tuple(derive(s) for s in items)
        return ArrayShape(prefix, _first_tail(schema, ("additionalItems", "unevaluatedItems")))

    return ArrayShape((), _first_tail(schema, ("items", "additionalItems", "unevaluatedItems")))


# ---- anyOf / oneOf ----------------------------------------------------------


def _combine_alternatives(schema: Mapping[str, Any], base: Optional[Shape]) -> Optional[Shape]:
    any_union: Optional[Shape] = None
    any_of = schema.get("anyOf")
    if isinstance(any_of, list) and any_of:
        options = []
        for member in any_of:
            shape = _jet(member)
            if isinstance(shape, NeverShape):
                continue
            options.append(_or_unknown(merge_union(base, shape, deep=True)))
        any_union = union_of(options)

    one_union: Optional[Shape] = None
    one_of = schema.get("oneOf")
    if isinstance(one_of, list) and one_of:
        members = [_jet(member) for member in one_of]
        sibling_keys = _object_keys(members)
        options = []
        for shape in members:
            if isinstance(shape, NeverShape):
                continue
            merged = _or_unknown(merge_union(base, shape, deep=False))
            options.extend(_mark_absent(merged, sibling_keys))
        one_union = union_of(options)

    return merge_union(any_union, one_union, deep=False)


# ---- if / then / elseIf / else ---------------------------------------------


def _apply_conditions(
    schema: Mapping[str, Any], base: Optional[Shape], final: Optional[Shape]
) -> Optional[Shape]:
    fallback = final if final is not None else base
    if "if" not in schema or not any(k in schema for k in CONDITION_KEYWORDS):
        return fallback

    def branch(shape: Optional[Shape]) -> Shape:
        if isinstance(shape, NeverShape):
            return NEVER
        return _or_unknown(merge_union(final, merge_union(base, shape, deep=True), deep=False))

    def guarded(condition: Any, consequence: Any, has_consequence: bool) -> Optional[Shape]:
        condition_shape = _jet(condition)
        if not has_consequence:
            return condition_shape
        consequence_shape = _jet(consequence)
        if isinstance(consequence_shape, NeverShape):
            return NEVER
        return merge_union(condition_shape, consequence_shape, deep=True)

    first = branch(guarded(schema["if"], schema.get("then"), "then" in schema))

    if "else" in schema:
        otherwise = branch(_jet(schema["else"]))
    else:
        otherwise = _or_unknown(fallback)

    else_ifs = schema.get("elseIf")
    if isinstance(else_ifs, list) and else_ifs:
        branches = []
        for entry in else_ifs:
            if not isinstance(entry, Mapping) or "if" not in entry:
                logger.debug(f"Ignoring malformed elseIf entry {entry!r}")
                continue
            has_then = entry.get("then") is not None
            branches.append(branch(guarded(entry["if"], entry.get("then"), has_then)))
        if branches:
            otherwise = exclusive_union(union_of(branches), otherwise)

    return exclusive_union(first, otherwise)


# ---- combinators ------------------------------------------------------------


def _split(shape: Optional[Shape]) -> Tuple[List[ObjectShape], List[Shape]]:
    objects: List[ObjectShape] = []
    others: List[Shape] = []
    for option in options_of(shape):
        if isinstance(option, ObjectShape):
            objects.append(option)
        else:
            others.append(option)
    return objects, others


def merge_union(a: Optional[Shape], b: Optional[Shape], *, deep: bool) -> Optional[Shape]:
    """Combine a base shape ``a`` with a refinement ``b``.

    Object members are merged pairwise. With ``deep`` they are always merged
    and an absent marker in ``b`` never hides a field of ``a``; otherwise
    objects whose shared fields contradict each other stay separate union
    members.
    """
    if a is None:
        return b
    if b is None:
        return a
    if isinstance(a, (NeverShape, UnknownShape)) and not isinstance(b, NeverShape):
        return b
    if isinstance(b, (NeverShape, UnknownShape)):
        return a

    a_objects, a_others = _split(a)
    b_objects, b_others = _split(b)
    if a_objects and b_objects:
        merged: List[Shape] = []
        for left in a_objects:
            for right in b_objects:
                if deep:
                    merged.append(_merge_objects(left, right, intrusive=True))
                elif _conflicts(left, right):
                    merged.extend((left, right))
                else:
                    merged.append(_merge_objects(left, right, intrusive=False))
    else:
        merged = list(a_objects or b_objects)
    return union_of(a_others + b_others + merged)


def intersect(a: Optional[Shape], b: Optional[Shape]) -> Optional[Shape]:
    """Shape of values satisfying both ``a`` and ``b``."""
    if a is None:
        return b
    if b is None:
        return a
    if isinstance(a, NeverShape) or isinstance(b, NeverShape):
        return NEVER
    if isinstance(a, UnknownShape):
        return b
    if isinstance(b, UnknownShape):
        return a
    if isinstance(a, UnionShape) or isinstance(b, UnionShape):
        return union_of(intersect(x, y) for x in options_of(a) for y in options_of(b))

    if isinstance(a, PrimitiveShape) and isinstance(b, PrimitiveShape):
        return a if a.kind == b.kind else NEVER
    if isinstance(a, LiteralShape) and isinstance(b, LiteralShape):
        return a if same_shape(a, b) else NEVER
    if isinstance(a, LiteralShape):
        return a if _literal_fits(a, b) else NEVER
    if isinstance(b, LiteralShape):
        return b if _literal_fits(b, a) else NEVER

    if isinstance(a, ObjectShape) and isinstance(b, ObjectShape):
        if _conflicts(a, b):
            return union_of([a, b])
        return _merge_objects(a, b, intrusive=True)
    if isinstance(a, ArrayShape) and isinstance(b, ArrayShape):
        return _intersect_arrays(a, b)
    return NEVER


def exclusive_union(a: Optional[Shape], b: Optional[Shape]) -> Shape:
    """Union where each side's objects mark the other side's keys absent."""
    a, b = _or_unknown(a), _or_unknown(b)
    options = _mark_absent(a, _object_keys([b])) + _mark_absent(b, _object_keys([a]))
    return union_of(options)


def _literal_fits(literal: LiteralShape, other: Shape) -> bool:
    if isinstance(other, PrimitiveShape):
        return literal.primitive_kind == other.kind
    if isinstance(other, ObjectShape):
        return isinstance(literal.value, dict)
    if isinstance(other, ArrayShape):
        return isinstance(literal.value, list)
    return False


def _object_keys(shapes: Iterable[Optional[Shape]]) -> List[str]:
    keys: List[str] = []
    for shape in shapes:
        for option in options_of(shape):
            if isinstance(option, ObjectShape):
                keys.extend(k for k in option.fields if k not in keys)
    return keys


def _mark_absent(shape: Shape, keys: Sequence[str]) -> List[Shape]:
    marked: List[Shape] = []
    for option in options_of(shape) or (shape,):
        if isinstance(option, ObjectShape):
            missing = [k for k in keys if k not in option.fields]
            if missing:
                fields = dict(option.fields)
                fields.update((k, _ABSENT_FIELD) for k in missing)
                option = ObjectShape(fields=fields, patterns=option.patterns, extra=option.extra)
        marked.append(option)
    return marked


def _conflicts(a: ObjectShape, b: ObjectShape) -> bool:
    for name in a.fields.keys() & b.fields.keys():
        left, right = a.fields[name], b.fields[name]
        if left.absent or right.absent:
            # an absent key only clashes with a key that must be present
            if left.required or right.required:
                return True
            continue
        if isinstance(left.shape, UnknownShape) or isinstance(right.shape, UnknownShape):
            continue
        if isinstance(intersect(left.shape, right.shape), NeverShape):
            return True
    return False


def _merge_field(base: FieldShape, new: FieldShape, intrusive: bool) -> FieldShape:
    if new.absent:
        if intrusive:
            return base
        if base.required:
            return FieldShape(NEVER, Presence.REQUIRED)
        return _ABSENT_FIELD
    if base.absent:
        return new

    if isinstance(new.shape, UnknownShape):
        shape = base.shape
    else:
        shape = intersect(base.shape, new.shape)
        if isinstance(shape, NeverShape) and not isinstance(base.shape, NeverShape):
            # contradictory refinement: the refining side wins
            shape = new.shape
    presence = Presence.REQUIRED if base.required or new.required else Presence.OPTIONAL
    return FieldShape(_or_unknown(shape), presence)


def _merge_extra(a: Optional[Shape], b: Optional[Shape]) -> Optional[Shape]:
    if a is None or b is None:
        return None
    return _or_unknown(intersect(a, b))


def _merge_objects(base: ObjectShape, new: ObjectShape, *, intrusive: bool) -> ObjectShape:
    fields: Dict[str, FieldShape] = {}
    for name, entry in base.fields.items():
        other = new.fields.get(name)
        fields[name] = entry if other is None else _merge_field(entry, other, intrusive)
    for name, entry in new.fields.items():
        if name not in fields:
            fields[name] = entry

    seen = {p.key.regex for p in base.patterns}
    patterns = base.patterns + tuple(p for p in new.patterns if p.key.regex not in seen)
    return ObjectShape(fields=fields, patterns=patterns, extra=_merge_extra(base.extra, new.extra))


def _position(shape: ArrayShape, index: int) -> Optional[Shape]:
    if index < len(shape.prefix):
        return shape.prefix[index]
    return shape.rest


def _intersect_arrays(a: ArrayShape, b: ArrayShape) -> ArrayShape:
    prefix: List[Shape] = []
    for index in range(max(len(a.prefix), len(b.prefix))):
        left, right = _position(a, index), _position(b, index)
        if left is None or right is None:
            return ArrayShape(tuple(prefix), None)
        prefix.append(_or_unknown(intersect(left, right)))
    rest = None if a.rest is None or b.rest is None else _or_unknown(intersect(a.rest, b.rest))
    return ArrayShape(tuple(prefix), rest)

