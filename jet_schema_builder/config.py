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

"""Configuration management for the schema builder."""

import os
import logging
from dataclasses import dataclass
from typing import Tuple

from .utils.logging_utils import DEFAULT_LOG_FORMAT, configure_split_stream_logging

ENV_PREFIX = "JET_SCHEMA_BUILDER_"

REMOVE_TARGETS = (
    "properties",
    "required",
    "patternProperties",
    "dependencies",
    "dependentRequired",
)

DRAFT_2020_12 = "https://json-schema.org/draft/2020-12/schema"


@dataclass
class BuilderConfig:
    """Configuration for builders, loaders and the command line."""
    remove_targets: Tuple[str, ...] = ("properties",)
    http_timeout: float = 10.0
    log_level: str = "INFO"
    print_level: str = "WARNING"
    default_dialect: str = DRAFT_2020_12

    @classmethod
    def from_env(cls) -> 'BuilderConfig':
        """Create configuration from environment variables.

        ``JET_SCHEMA_BUILDER_REMOVE_TARGETS`` is a comma separated list of
        facets, e.g. ``properties,required``.
        """
        raw_targets = os.getenv(f'{ENV_PREFIX}REMOVE_TARGETS', 'properties')
        targets = tuple(t.strip() for t in raw_targets.split(',') if t.strip())
        return cls(
            remove_targets=targets or ("properties",),
            http_timeout=float(os.getenv(f'{ENV_PREFIX}HTTP_TIMEOUT', '10')),
            log_level=os.getenv(f'{ENV_PREFIX}LOG_LEVEL', 'INFO'),
            print_level=os.getenv(f'{ENV_PREFIX}PRINT_LEVEL', 'WARNING'),
            default_dialect=os.getenv(f'{ENV_PREFIX}DEFAULT_DIALECT', DRAFT_2020_12),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter(DEFAULT_LOG_FORMAT)
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('jet_schema_builder')


# Global configuration instance
builder_config = BuilderConfig.from_env()
