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

"""Load schema documents from files and URLs."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests
import yaml

from ..config import builder_config
from ..exceptions import NetworkError, ParseError, SchemaNotFoundError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _as_object(data: Any, source: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ParseError(f"Schema in {source} must be an object, got {type(data).__name__}")
    return data


def load_schema_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a schema document from a JSON or YAML file.

    Args:
        file_path: Path to the file. ``.yaml`` / ``.yml`` files are read with
            PyYAML, anything else as JSON.

    Returns:
        The parsed document

    Raises:
        SchemaNotFoundError: If the path does not name a file
        ParseError: If the content is malformed or not an object
    """
    path = Path(file_path)

    if not path.exists():
        raise SchemaNotFoundError(f"Schema file not found: {path}")

    if not path.is_file():
        raise SchemaNotFoundError(f"Path is not a file: {path}")

    logger.debug(f"Loading schema file: {path}")
    content = path.read_text(encoding="utf-8")

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ParseError(f"Failed to parse YAML schema {path}: {exc}") from exc
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Failed to parse JSON schema {path}: {exc}") from exc

    return _as_object(data, str(path))


def fetch_schema(url: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """GET a JSON schema document from ``url``.

    Raises:
        NetworkError: On transport failures and non-success responses
        ParseError: If the body is not a JSON object
    """
    if timeout is None:
        timeout = builder_config.http_timeout

    logger.debug(f"Fetching schema: {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise NetworkError(f"Failed to fetch schema from {url}: {exc}") from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise ParseError(f"Response from {url} is not valid JSON: {exc}") from exc

    return _as_object(data, url)


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_schema(location: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """Load from a URL or a file path, whichever ``location`` is."""
    if is_url(location):
        return fetch_schema(location, timeout)
    return load_schema_file(location)
