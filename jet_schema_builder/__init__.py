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

"""Fluent JSON Schema construction and structural shape derivation."""

from .builder import (
    ArraySchemaBuilder,
    BooleanSchemaBuilder,
    ConditionBuilder,
    NullSchemaBuilder,
    NumberSchemaBuilder,
    ObjectSchemaBuilder,
    RefBuilder,
    SchemaBuilder,
    StringSchemaBuilder,
)
from .config import BuilderConfig, builder_config
from .exceptions import (
    InvalidArgumentError,
    NetworkError,
    ParseError,
    SchemaBuilderError,
    SchemaNotFoundError,
)
from .models import Deferred, data, derive

__version__ = "0.1.0"

__all__ = [
    "ArraySchemaBuilder",
    "BooleanSchemaBuilder",
    "BuilderConfig",
    "ConditionBuilder",
    "Deferred",
    "InvalidArgumentError",
    "NetworkError",
    "NullSchemaBuilder",
    "NumberSchemaBuilder",
    "ObjectSchemaBuilder",
    "ParseError",
    "RefBuilder",
    "SchemaBuilder",
    "SchemaBuilderError",
    "SchemaNotFoundError",
    "StringSchemaBuilder",
    "builder_config",
    "data",
    "derive",
]
