"""Custom exceptions for the type generator."""

from __future__ import annotations


class TypegenError(Exception):
    """Base exception for type generation errors."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        full_message = f"{message}" if not path else f"[{path}] {message}"
        super().__init__(full_message)


class ConfigError(TypegenError):
    """Raised when the generator configuration is unreadable or invalid."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        key: str | None = None,
    ) -> None:
        self.key = key
        if key:
            message = f"Key '{key}': {message}"
        super().__init__(message, path)


class CatalogError(TypegenError):
    """Raised when the database catalog cannot be reached or queried."""

    def __init__(self, message: str, query: str | None = None) -> None:
        self.query = query
        if query:
            message = f"Query '{query}': {message}"
        super().__init__(message)


class MergeError(TypegenError):
    """Raised when generated text cannot be merged into the target file."""

    def __init__(self, anchor: str, path: str | None = None) -> None:
        self.anchor = anchor
        super().__init__(f"Anchor line '{anchor}' not found", path)
