"""Custom exceptions for the FilmForge API."""

from typing import Any


class FilmForgeException(Exception):
    """Base exception for FilmForge API."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(FilmForgeException):
    """Raised when request validation fails."""

    pass


class FormattingException(FilmForgeException):
    """Raised when the formatter is called with invalid parameters."""

    pass


class PromptException(FilmForgeException):
    """Raised when a prompt template is missing or cannot be rendered."""

    pass


class LLMException(FilmForgeException):
    """Raised when LLM provider interaction fails."""

    pass


class ServiceUnavailableException(FilmForgeException):
    """Raised when a required service is unavailable."""

    pass
