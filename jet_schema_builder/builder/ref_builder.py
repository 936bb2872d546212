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

"""Fluent construction of ``$ref`` strings.

>>> str(RefBuilder().defs("address").properties("street"))
'#/$defs/address/properties/street'
"""

from __future__ import annotations

from typing import List, Optional


class RefBuilder:
    """Accumulates a JSON-pointer style path below a base ending in ``#``."""

    def __init__(self, base: str = "#"):
        self._path: List[str] = [""]
        self._set_base(base)

    def _set_base(self, base: str) -> None:
        if base.startswith("#") or base.endswith("#"):
            self._path[0] = base
        else:
            self._path[0] = base + "#"

    def _push(self, *segments: str) -> "RefBuilder":
        self._path.extend(segments)
        return self

    @property
    def path(self) -> List[str]:
        return list(self._path)

    def base(self, base: str) -> "RefBuilder":
        self._set_base(base)
        return self

    def reset(self) -> "RefBuilder":
        """Drop every segment appended after the base."""
        self._path = self._path[:1]
        return self

    def extend(self) -> "RefBuilder":
        """Return an independent copy of this builder."""
        clone = RefBuilder()
        clone._path = list(self._path)
        return clone

    # -- object keywords --

    def properties(self, name: str) -> "RefBuilder":
        return self._push("properties", name)

    def pattern_properties(self, pattern: str) -> "RefBuilder":
        return self._push("patternProperties", pattern)

    def additional_properties(self) -> "RefBuilder":
        return self._push("additionalProperties")

    def unevaluated_properties(self) -> "RefBuilder":
        return self._push("unevaluatedProperties")

    def property_names(self) -> "RefBuilder":
        return self._push("propertyNames")

    def dependent_schemas(self, name: str) -> "RefBuilder":
        return self._push("dependentSchemas", name)

    def dependencies(self, name: str) -> "RefBuilder":
        return self._push("dependencies", name)

    # -- array keywords --

    def items(self, index: Optional[int] = None) -> "RefBuilder":
        self._push("items")
        if index is not None:
            self._push(str(index))
        return self

    def prefix_items(self, index: int) -> "RefBuilder":
        return self._push("prefixItems", str(index))

    def additional_items(self) -> "RefBuilder":
        return self._push("additionalItems")

    def unevaluated_items(self) -> "RefBuilder":
        return self._push("unevaluatedItems")

    def contains(self) -> "RefBuilder":
        return self._push("contains")

    # -- composition --

    def all_of(self, index: int) -> "RefBuilder":
        return self._push("allOf", str(index))

    def any_of(self, index: int) -> "RefBuilder":
        return self._push("anyOf", str(index))

    def one_of(self, index: int) -> "RefBuilder":
        return self._push("oneOf", str(index))

    def not_(self) -> "RefBuilder":
        return self._push("not")

    def if_(self) -> "RefBuilder":
        return self._push("if")

    def then(self) -> "RefBuilder":
        return self._push("then")

    def else_(self) -> "RefBuilder":
        return self._push("else")

    def else_if(self, index: int) -> "RefBuilder":
        return self._push("elseIf", str(index))

    # -- definitions and anchors --

    def defs(self, name: str) -> "RefBuilder":
        return self._push("$defs", name)

    def definitions(self, name: str) -> "RefBuilder":
        return self._push("definitions", name)

    def anchor(self, name: str) -> "RefBuilder":
        """Replace the whole path with ``base + name``."""
        self._path = [self._path[0] + (name[1:] if name.startswith("#") else name)]
        return self

    def dynamic_anchor(self, name: str) -> "RefBuilder":
        return self.anchor(name)

    def segment(self, segment: str) -> "RefBuilder":
        return self._push(segment)

    def chain(self) -> "RefBuilder":
        return self

    def build(self) -> str:
        return "/".join(self._path)

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"RefBuilder({self.build()!r})"
