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

"""``if`` / ``then`` / ``elseIf`` / ``else`` chains.

Nothing is written to the parent until the chain is closed with
:meth:`ConditionBuilder.end` or :meth:`ConditionBuilder.else_`::

    builder.if_(cond).then(a).else_if(cond2).then(b).else_(c)
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

if TYPE_CHECKING:
    from .schema_builder import SchemaBuilder

logger = logging.getLogger(__name__)

Resolver = Callable[[Any], Any]


class ConditionBuilder:
    """Accumulates one conditional chain for a parent builder."""

    def __init__(self, parent: "SchemaBuilder", condition: Any, resolver: Resolver):
        self._parent = parent
        self._resolve = resolver
        self._if = condition
        self._then: Optional[Any] = None
        self._else_ifs: List[Dict[str, Any]] = []
        self._else: Optional[Any] = None

    def then(self, schema: Any) -> "ConditionBuilder":
        """Fill the ``then`` of the most recently opened branch.

        Before any ``else_if`` this is the top-level ``then``; afterwards it
        is the latest ``elseIf`` entry, provided that entry has none yet.
        """
        resolved = self._resolve(schema)
        if not self._else_ifs:
            self._then = resolved
            return self

        latest = self._else_ifs[-1]
        if "then" in latest:
            logger.debug("then() ignored: the latest elseIf branch already has a 'then'")
        else:
            latest["then"] = resolved
        return self

    def else_if(self, condition: Any) -> "ConditionBuilder":
        self._else_ifs.append({"if": self._resolve(condition)})
        return self

    def else_(self, schema: Any) -> "SchemaBuilder":
        """Set ``else`` and close the chain."""
        self._else = self._resolve(schema)
        return self.end()

    def end(self) -> "SchemaBuilder":
        """Write the chain onto the parent and return the parent."""
        parent = self._parent
        parent.option("if", self._if)
        if self._then is not None:
            parent.option("then", self._then)
        if self._else_ifs:
            parent.option("elseIf", copy.deepcopy(self._else_ifs))
        if self._else is not None:
            parent.option("else", self._else)
        return parent
