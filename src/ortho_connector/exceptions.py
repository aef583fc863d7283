"""
Custom exception hierarchy for ortho-connector.

The routing engine itself never raises for an unroutable connector; it
logs a warning and returns a direct line. These exceptions cover the outer
surfaces: configuration files and endpoint descriptions given on the
command line.

Example::

    from ortho_connector.exceptions import ValidationError

    raise ValidationError(
        ["start: expected 'X,Y', got '10'"],
        suggestions=["Pass points as two comma-separated numbers"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class OrthoConnectorError(Exception):
    """
    Base exception for all ortho-connector errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ValidationError(OrthoConnectorError):
    """
    Input validation failed with one or more errors.

    Collects all errors instead of failing on the first one.

    Attributes:
        errors: List of individual validation error messages
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.errors = errors
        message = f"Validation failed with {len(errors)} error(s):\n"
        message += "\n".join(f"  {i + 1}. {e}" for i, e in enumerate(errors))
        super().__init__(message, context, suggestions)


class ConfigurationError(OrthoConnectorError):
    """
    Configuration or settings error.

    Raised when a configuration value is present but unusable, e.g. a
    negative clearance distance.

    Example::

        raise ConfigurationError(
            "Invalid clearance distance",
            context={"route.min_dist": -5},
            suggestions=["Use a non-negative min_dist"],
        )
    """

    pass


__all__ = [
    "OrthoConnectorError",
    "ValidationError",
    "ConfigurationError",
]
