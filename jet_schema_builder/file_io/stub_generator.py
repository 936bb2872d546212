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

"""Render derived shapes as Python ``TypedDict`` declarations.

Objects become named TypedDicts (nested objects get a name derived from
their parent and field), a union of objects becomes numbered variants
joined with ``Union``. Absent fields are left out, since a TypedDict
cannot forbid a key.
"""

import keyword
import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Set

from ..models.jetter import derive
from ..models.shapes import (
    ArrayShape,
    LiteralShape,
    NeverShape,
    ObjectShape,
    Presence,
    PrimitiveShape,
    Shape,
    UnionShape,
    UnknownShape,
)
from .template_renderer import TemplateRenderer

logger = logging.getLogger(__name__)

STUB_TEMPLATE = "typed_dict.py.jinja2"

_PRIMITIVES = {"string": "str", "number": "float", "boolean": "bool", "null": "None"}


@dataclass
class StubField:
    key: str
    annotation: str
    required: bool


@dataclass
class StubClass:
    name: str
    fields: List[StubField] = field(default_factory=list)
    closed: bool = False

    @property
    def class_syntax(self) -> bool:
        """Whether every key is usable as a class attribute name."""
        return all(f.key.isidentifier() and not keyword.iskeyword(f.key) for f in self.fields)


@dataclass
class StubAlias:
    name: str
    annotation: str


def _camel(text: str) -> str:
    parts = [p for p in re.split(r"[^0-9A-Za-z]+", text) if p]
    name = "".join(p[:1].upper() + p[1:] for p in parts)
    if not name or name[0].isdigit():
        name = "Field" + name
    return name


class _StubCollector:
    def __init__(self):
        self.declarations: List[Any] = []
        self.typing_names: Set[str] = {"TypedDict"}
        self._taken: Set[str] = set()

    def _unique(self, name: str) -> str:
        candidate, index = name, 2
        while candidate in self._taken:
            candidate = f"{name}{index}"
            index += 1
        self._taken.add(candidate)
        return candidate

    def _use(self, *names: str) -> None:
        self.typing_names.update(names)

    def annotation(self, shape: Optional[Shape], hint: str) -> str:
        if shape is None or isinstance(shape, UnknownShape):
            self._use("Any")
            return "Any"
        if isinstance(shape, NeverShape):
            self._use("NoReturn")
            return "NoReturn"
        if isinstance(shape, PrimitiveShape):
            return _PRIMITIVES.get(shape.kind, "Any")
        if isinstance(shape, LiteralShape):
            return self._literal(shape)
        if isinstance(shape, ObjectShape):
            return self.object_class(shape, hint)
        if isinstance(shape, ArrayShape):
            return self._array(shape, hint)
        if isinstance(shape, UnionShape):
            return self._union(shape, hint)
        self._use("Any")
        return "Any"

    def _literal(self, shape: LiteralShape) -> str:
        value = shape.value
        if value is None:
            return "None"
        if isinstance(value, float):
            return "float"
        if isinstance(value, (bool, int, str)):
            self._use("Literal")
            return f"Literal[{value!r}]"
        self._use("Any")
        return "Any"

    def _array(self, shape: ArrayShape, hint: str) -> str:
        item_hint = hint + "Item"
        if not shape.prefix:
            if shape.rest is None:
                self._use("Tuple")
                return "Tuple[()]"
            self._use("List")
            return f"List[{self.annotation(shape.rest, item_hint)}]"
        prefix = [self.annotation(s, f"{item_hint}{i}") for i, s in enumerate(shape.prefix)]
        if shape.rest is None:
            self._use("Tuple")
            return f"Tuple[{', '.join(prefix)}]"
        # a typed prefix followed by a tail has no exact spelling
        members = prefix + [self.annotation(shape.rest, item_hint)]
        self._use("List")
        return f"List[{self._join_union(members)}]"

    def _union(self, shape: UnionShape, hint: str) -> str:
        objects = [o for o in shape.options if isinstance(o, ObjectShape)]
        members: List[str] = []
        variant = 0
        for option in shape.options:
            if isinstance(option, ObjectShape) and len(objects) > 1:
                variant += 1
                members.append(self.object_class(option, f"{hint}{variant}"))
            else:
                members.append(self.annotation(option, hint))
        return self._join_union(members)

    def _join_union(self, members: List[str]) -> str:
        unique: List[str] = []
        for member in members:
            if member not in unique:
                unique.append(member)
        if len(unique) == 1:
            return unique[0]
        self._use("Union")
        return f"Union[{', '.join(unique)}]"

    def object_class(self, shape: ObjectShape, name: str) -> str:
        stub = StubClass(name=self._unique(name), closed=shape.closed)
        for key, entry in shape.fields.items():
            if entry.presence is Presence.ABSENT:
                continue
            annotation = self.annotation(entry.shape, stub.name + _camel(key))
            required = entry.presence is Presence.REQUIRED
            self._use("Required" if required else "NotRequired")
            stub.fields.append(StubField(key=key, annotation=annotation, required=required))
        if shape.patterns:
            logger.debug(f"{stub.name}: pattern-keyed fields cannot be expressed and are omitted")
        # nested classes are appended first so they precede their users
        self.declarations.append(stub)
        return stub.name


def collect_stub(shape: Shape, name: str) -> _StubCollector:
    """Walk ``shape`` and collect the declarations needed to name it."""
    collector = _StubCollector()
    if isinstance(shape, ObjectShape):
        collector.object_class(shape, name)
        return collector

    annotation = collector.annotation(shape, name)
    if annotation != name:
        collector.declarations.append(StubAlias(name=collector._unique(name), annotation=annotation))
    return collector


def generate_stub(
    schema: Any,
    name: str = "Schema",
    *,
    renderer: Optional[TemplateRenderer] = None,
    source: Optional[str] = None,
) -> str:
    """Return Python source declaring ``name`` as the type ``schema`` describes."""
    if not name.isidentifier():
        name = _camel(name)
    shape = derive(schema)
    collector = collect_stub(shape, name)
    renderer = renderer or TemplateRenderer()
    return renderer.render_template(
        STUB_TEMPLATE,
        name=name,
        source=source,
        description=shape.describe(),
        typing_names=sorted(collector.typing_names),
        declarations=collector.declarations,
    )
