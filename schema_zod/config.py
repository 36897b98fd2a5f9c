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

"""Configuration management for the schema-zod generator."""

import os
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError
from .models.naming_policy import NamingPolicy, get_naming_policy
from .utils.logging_utils import configure_split_stream_logging


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


@dataclass
class GeneratorConfig:
    """Configuration class for one code generation run."""
    log_level: str = "INFO"
    print_level: str = "ERROR"
    cache_enabled: bool = True

    # output
    zod_identifier: str = "z"
    zod_module: str = "zod"
    include_import: bool = True
    banner: Optional[str] = None
    naming_policy: str = "identity"
    indent: int = 2

    @classmethod
    def from_env(cls) -> 'GeneratorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('SCHEMA_ZOD_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('SCHEMA_ZOD_PRINT_LEVEL', 'ERROR'),
            cache_enabled=_env_flag('SCHEMA_ZOD_CACHE_ENABLED', 'true'),
            zod_identifier=os.getenv('SCHEMA_ZOD_IDENTIFIER', 'z'),
            zod_module=os.getenv('SCHEMA_ZOD_MODULE', 'zod'),
            include_import=_env_flag('SCHEMA_ZOD_INCLUDE_IMPORT', 'true'),
            banner=os.getenv('SCHEMA_ZOD_BANNER') or None,
            naming_policy=os.getenv('SCHEMA_ZOD_NAMING_POLICY', 'identity'),
            indent=int(os.getenv('SCHEMA_ZOD_INDENT', '2')),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional['GeneratorConfig'] = None) -> 'GeneratorConfig':
        """Create configuration from a mapping, starting from ``base`` (or defaults)."""
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}. Valid keys: {sorted(known)}")

        values = {f.name: getattr(base, f.name) for f in fields(cls)} if base else {}
        values.update(data)
        config = cls(**values)
        config.validate()
        return config

    @classmethod
    def load(cls, file_path: Union[str, Path], base: Optional['GeneratorConfig'] = None) -> 'GeneratorConfig':
        """Load configuration from a YAML file."""
        path = Path(file_path)
        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e
        return cls.from_dict(data, base=base)

    def validate(self) -> None:
        get_naming_policy(self.naming_policy)
        if not isinstance(self.indent, int) or self.indent < 0:
            raise ConfigurationError(f"Indent must be a non-negative integer, got: {self.indent!r}")
        if not self.zod_identifier:
            raise ConfigurationError("zod_identifier must not be empty")

    def get_naming_policy(self) -> NamingPolicy:
        return get_naming_policy(self.naming_policy)

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('schema_zod')


# Global configuration instance
generator_config = GeneratorConfig.from_env()
