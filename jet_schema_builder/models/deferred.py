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

"""Values that are only known when an instance is validated.

A keyword such as ``minimum`` may point at another part of the instance
instead of carrying a literal (``{"minimum": {"$data": "1/floor"}}``).
On the wire that is a ``{"$data": pointer}`` mapping; in Python it is a
:class:`Deferred`, so callers never compare against a sentinel object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, TypeVar, Union

DATA_KEY = "$data"

T = TypeVar("T")


@dataclass(frozen=True)
class Deferred:
    """A relative JSON pointer into the instance under validation."""

    pointer: str

    def to_json(self) -> Dict[str, str]:
        return {DATA_KEY: self.pointer}

    @classmethod
    def from_value(cls, value: Any) -> Optional["Deferred"]:
        """Return the Deferred encoded by ``value``, or None for a literal."""
        if isinstance(value, cls):
            return value
        if isinstance(value, dict) and len(value) == 1 and isinstance(value.get(DATA_KEY), str):
            return cls(value[DATA_KEY])
        return None

    def __str__(self) -> str:
        return f"$data({self.pointer})"


MaybeDeferred = Union[T, Deferred]


def data(pointer: str) -> Deferred:
    """Shorthand for ``Deferred(pointer)``."""
    return Deferred(pointer)


def is_deferred(value: Any) -> bool:
    return Deferred.from_value(value) is not None


def to_wire(value: Any) -> Any:
    """Encode a possibly-deferred keyword value for the schema document."""
    if isinstance(value, Deferred):
        return value.to_json()
    return value
