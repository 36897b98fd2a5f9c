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

"""Schema document reader for JSON and YAML files, with caching support."""

import yaml
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...config import generator_config
from ...exceptions import SchemaParseError

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = ('.json', '.yaml', '.yml')


class DocumentParser:
    """Loads schema documents; one file holds a single document or a list of them."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize the document parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else generator_config.cache_enabled
        self._cache: Dict[Path, List[Dict[str, Any]]] = {}

    def load_documents(self, file_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """Load every schema document contained in a file.

        Raises:
            SchemaParseError: If the file is missing or does not hold mappings
        """
        path = Path(file_path)

        if not path.exists():
            raise SchemaParseError(f"Schema file not found: {path}")

        if not path.is_file():
            raise SchemaParseError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading schema documents from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading schema file: {path}")
        try:
            # JSON documents are valid YAML
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise SchemaParseError(f"Failed to parse {path}: {e}") from e
        except Exception as e:
            raise SchemaParseError(f"Failed to read {path}: {e}") from e

        if data is None:
            documents = []
        elif isinstance(data, list):
            documents = data
        else:
            documents = [data]

        for idx, document in enumerate(documents):
            if not isinstance(document, dict):
                raise SchemaParseError(
                    f"Schema document {idx} in {path} must be a mapping, got {type(document).__name__}"
                )

        if self.cache_enabled:
            self._cache[path] = documents

        return documents

    def clear_cache(self) -> None:
        """Clear the document cache. Useful for testing."""
        self._cache.clear()


def find_schema_files(paths: List[Union[str, Path]]) -> List[Path]:
    """Find schema files in the given files and directories, sorted."""
    found = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            logger.warning(f"Path does not exist: {path}")
            continue

        if path.is_file():
            found.append(path)
        elif path.is_dir():
            for ext in DOCUMENT_EXTENSIONS:
                found.extend(path.rglob(f'*{ext}'))
        else:
            logger.warning(f"Path is neither file nor directory: {path}")

    return sorted(set(found))


# Global parser instance
document_parser = DocumentParser()
