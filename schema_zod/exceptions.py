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

"""Custom exceptions for the schema-zod code generator."""


class SchemaZodError(Exception):
    """Base exception for schema-zod related errors."""
    pass


class NameConflictError(SchemaZodError):
    """Exception raised when two definitions share a name but differ in content."""

    def __init__(self, name, first, second):
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Conflicting definitions for '{name}':\n"
            f"  First: {first}\n"
            f"  Second: {second}"
        )


class UnresolvedReferenceError(SchemaZodError):
    """Exception raised when a reference names a definition that does not exist."""

    def __init__(self, name, referenced_from=None):
        self.name = name
        self.referenced_from = referenced_from
        location = f" (referenced from '{referenced_from}')" if referenced_from else ""
        super().__init__(f"Unresolved reference to '{name}'{location}")


class FieldNameCollisionError(SchemaZodError):
    """Exception raised when two properties map to the same emitted field name."""
    pass


class InvalidIdentifierError(SchemaZodError):
    """Exception raised when a definition name is not a valid TypeScript identifier."""
    pass


class SchemaParseError(SchemaZodError):
    """Exception raised for input documents that cannot be turned into schema nodes."""

    def __init__(self, message, path=""):
        self.path = path
        if path:
            message = f"{message} (at '{path}')"
        super().__init__(message)


class ConfigurationError(SchemaZodError):
    """Exception raised for generator configuration errors."""
    pass


class DefinitionsTableFrozenError(SchemaZodError):
    """Exception raised when inserting into a frozen definitions table."""
    pass
