#!/usr/bin/env python3
"""
Generator Errors
================
All errors raised by namegen derive from NameGenError:

- InvalidParameter: an enumeration value, theme identifier or seed outside
  the accepted set. Raised before any random draw.
- NamePoolExhausted: no unseen name after the fixed retry budget.
- ThemeDataError: theme data could not be loaded or is incomplete.
- SettingsError: the application settings file is unreadable or invalid.
"""

from typing import Any, Iterable, List, Optional


class NameGenError(Exception):
    """Base class for namegen errors."""


class InvalidParameter(NameGenError, ValueError):
    """A caller-supplied value is not one of the accepted options."""

    def __init__(self, parameter: str, value: Any, valid_options: Iterable[str] = (),
                 message: Optional[str] = None):
        self.parameter = parameter
        self.value = value
        self.valid_options = list(valid_options)
        if message is None:
            message = f"Invalid {parameter} value: {value!r}."
            if self.valid_options:
                message += f" Expected values are: {', '.join(self.valid_options)}."
        super().__init__(message)


class NamePoolExhausted(NameGenError):
    """Raised when every attempt in the retry budget produced a known name."""

    def __init__(self, entity_type, theme: str, attempts: int):
        self.entity_type = entity_type
        self.theme = theme
        self.attempts = attempts
        label = getattr(entity_type, 'label', entity_type)
        super().__init__(
            f"Unable to generate unique {label} name for {theme} theme after "
            f"{attempts} attempts. Consider resetting the session or using a different seed."
        )


class ThemeDataError(NameGenError, ValueError):
    """Theme data is missing, malformed or incomplete."""

    def __init__(self, theme: str, errors: List[str]):
        self.theme = theme
        self.errors = list(errors)
        details = '\n- '.join(self.errors)
        super().__init__(
            f"Theme data validation failed for '{theme}' theme. "
            f"The following issues were found:\n- {details}"
        )


class SettingsError(NameGenError, ValueError):
    """The application settings file is unreadable or holds a bad value."""


__all__ = ['NameGenError', 'InvalidParameter', 'NamePoolExhausted', 'ThemeDataError', 'SettingsError']
