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

"""Validate instances against built schemas with the jsonschema library.

Only the call into jsonschema lives here; keywords it does not know
(``elseIf``, ``errorMessage``) are ignored by it.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

from jsonschema import validators
from jsonschema.exceptions import SchemaError

from ..config import builder_config
from ..exceptions import ParseError

JsonPointer = str


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    path: JsonPointer = ""

    def __str__(self) -> str:
        return f"{self.path or '/'}: {self.message}"


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _pointer(parts) -> JsonPointer:
    return "".join(f"/{_jp_escape(str(p))}" for p in parts)


def validate_instance(
    instance: Any,
    schema: Union[Mapping[str, Any], bool],
    *,
    default_dialect: Optional[str] = None,
) -> List[SchemaIssue]:
    """Validate ``instance`` against ``schema``.

    The validator class follows the document's ``$schema``, or
    ``default_dialect`` when it has none.

    Returns:
        One SchemaIssue per validation error, ordered by instance path

    Raises:
        ParseError: If the schema itself is invalid for its dialect
    """
    if default_dialect is None:
        default_dialect = builder_config.default_dialect

    default_cls = validators.validator_for({"$schema": default_dialect})
    validator_cls = validators.validator_for(schema, default=default_cls)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise ParseError(f"Invalid schema: {e.message}") from e

    validator = validator_cls(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(map(str, e.absolute_path)))
    return [SchemaIssue(message=e.message, path=_pointer(e.absolute_path)) for e in errors]
