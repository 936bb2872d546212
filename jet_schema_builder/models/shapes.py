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

"""Structural shapes derived from schema documents.

Shapes are read-only results: every class here is a frozen dataclass and
no operation mutates one in place.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .key_patterns import KeyPattern

PRIMITIVE_KINDS = ("string", "number", "boolean", "null")


class Presence(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    # Present in a sibling oneOf / conditional branch, so it must not appear here.
    ABSENT = "absent"


@dataclass(frozen=True)
class NeverShape:
    """No value satisfies the schema."""

    def describe(self) -> str:
        return "never"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "never"}


@dataclass(frozen=True)
class UnknownShape:
    """Any value satisfies the schema, as far as structure is concerned."""

    def describe(self) -> str:
        return "unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "unknown"}


NEVER = NeverShape()
UNKNOWN = UnknownShape()


@dataclass(frozen=True)
class PrimitiveShape:
    kind: str

    def describe(self) -> str:
        return self.kind

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class LiteralShape:
    """Exactly one value, from ``const`` or an ``enum`` member."""

    value: Any

    @property
    def primitive_kind(self) -> Optional[str]:
        value = self.value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "boolean"
        if isinstance(value, (int, float)):
            return "number"
        if isinstance(value, str):
            return "string"
        return None

    def describe(self) -> str:
        return json.dumps(self.value, sort_keys=True)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "literal", "value": self.value}


@dataclass(frozen=True)
class FieldShape:
    shape: "Shape"
    presence: Presence = Presence.OPTIONAL

    @property
    def required(self) -> bool:
        return self.presence is Presence.REQUIRED

    @property
    def absent(self) -> bool:
        return self.presence is Presence.ABSENT

    def to_dict(self) -> Dict[str, Any]:
        return {"presence": self.presence.value, "shape": self.shape.to_dict()}


@dataclass(frozen=True)
class PatternField:
    key: KeyPattern
    shape: "Shape"

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key.to_dict(), "shape": self.shape.to_dict()}


@dataclass(frozen=True)
class ObjectShape:
    """An object with named fields, pattern-keyed fields and an extra-keys policy.

    ``extra`` is None when the object is closed to keys outside ``fields``
    and ``patterns``; otherwise it is the shape of such extra values.
    """

    fields: Dict[str, FieldShape] = field(default_factory=dict)
    patterns: Tuple[PatternField, ...] = ()
    extra: Optional["Shape"] = UNKNOWN

    @property
    def closed(self) -> bool:
        return self.extra is None

    @property
    def required_fields(self) -> List[str]:
        return [name for name, f in self.fields.items() if f.presence is Presence.REQUIRED]

    @property
    def optional_fields(self) -> List[str]:
        return [name for name, f in self.fields.items() if f.presence is Presence.OPTIONAL]

    @property
    def absent_fields(self) -> List[str]:
        return [name for name, f in self.fields.items() if f.presence is Presence.ABSENT]

    def field_shape(self, name: str) -> Optional["Shape"]:
        entry = self.fields.get(name)
        return entry.shape if entry is not None else None

    def describe(self) -> str:
        parts = []
        for name, entry in self.fields.items():
            if entry.presence is Presence.REQUIRED:
                parts.append(f"{name}: {entry.shape.describe()}")
            elif entry.presence is Presence.OPTIONAL:
                parts.append(f"{name}?: {entry.shape.describe()}")
            else:
                parts.append(f"{name}?: never")
        for pattern in self.patterns:
            parts.append(f"[{pattern.key.describe()}]?: {pattern.shape.describe()}")
        if self.extra is not None:
            parts.append(f"[key: string]: {self.extra.describe()}")
        if not parts:
            return "{}"
        return "{ " + "; ".join(parts) + " }"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "object",
            "fields": {name: entry.to_dict() for name, entry in self.fields.items()},
            "patterns": [p.to_dict() for p in self.patterns],
            "extra": self.extra.to_dict() if self.extra is not None else None,
        }


@dataclass(frozen=True)
class ArrayShape:
    """Fixed leading positions followed by a variadic tail.

    ``rest`` is None for a fixed-length array.
    """

    prefix: Tuple["Shape", ...] = ()
    rest: Optional["Shape"] = UNKNOWN

    @property
    def fixed_length(self) -> bool:
        return self.rest is None

    def describe(self) -> str:
        if not self.prefix:
            if self.rest is None:
                return "[]"
            inner = self.rest.describe()
            if isinstance(self.rest, UnionShape):
                inner = f"({inner})"
            return f"{inner}[]"
        items = [s.describe() for s in self.prefix]
        if self.rest is not None:
            items.append(f"...{self.rest.describe()}[]")
        return "[" + ", ".join(items) + "]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "array",
            "prefix": [s.to_dict() for s in self.prefix],
            "rest": self.rest.to_dict() if self.rest is not None else None,
        }


@dataclass(frozen=True)
class UnionShape:
    options: Tuple["Shape", ...]

    def describe(self) -> str:
        return " | ".join(option.describe() for option in self.options)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "union", "options": [o.to_dict() for o in self.options]}


Shape = Union[NeverShape, UnknownShape, PrimitiveShape, LiteralShape, ObjectShape, ArrayShape, UnionShape]


def same_json_value(a: Any, b: Any) -> bool:
    """JSON equality at any depth: booleans never equal numbers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(same_json_value(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(same_json_value(x, y) for x, y in zip(a, b))
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    return type(a) is type(b) and a == b


def same_shape(a: Shape, b: Shape) -> bool:
    if type(a) is not type(b) or a != b:
        return False
    if isinstance(a, LiteralShape):
        # 1 == True in Python, but they are different JSON values
        return same_json_value(a.value, b.value)
    return True


def options_of(shape: Optional[Shape]) -> Tuple[Shape, ...]:
    """Flatten ``shape`` into its union members; never and None have none."""
    if shape is None or isinstance(shape, NeverShape):
        return ()
    if isinstance(shape, UnionShape):
        return shape.options
    return (shape,)


def union_of(shapes: Iterable[Optional[Shape]]) -> Shape:
    """Build a normalised union.

    Nested unions are flattened, never members dropped and duplicates
    removed; an unknown member swallows the whole union.
    """
    collected: List[Shape] = []
    for shape in shapes:
        for option in options_of(shape):
            if isinstance(option, UnknownShape):
                return UNKNOWN
            if not any(same_shape(option, seen) for seen in collected):
                collected.append(option)
    if not collected:
        return NEVER
    if len(collected) == 1:
        return collected[0]
    return UnionShape(tuple(collected))
