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

"""Custom exceptions for the schema builder."""


class SchemaBuilderError(Exception):
    """Base exception for schema-builder related errors."""
    pass


class ParseError(SchemaBuilderError):
    """Exception raised when schema text or a loaded document is not a valid JSON object."""
    pass


class SchemaNotFoundError(SchemaBuilderError):
    """Exception raised when a schema file does not exist."""
    pass


class NetworkError(SchemaBuilderError):
    """Exception raised when fetching a remote schema fails."""
    pass


class InvalidArgumentError(SchemaBuilderError, ValueError):
    """Exception raised when a builder method receives a value it cannot store."""
    pass
