"""Exceptions for tui-panels.

Configuration errors are raised by the setter or constructor that received
the bad value. ``TilingError`` signals a bug in the engine itself and is
never caught internally.
"""


class TuiError(Exception):
    """Base exception for tui-panels errors."""

    pass


class ConfigurationError(TuiError, ValueError):
    """Raised when a component receives an invalid option value."""

    def __init__(self, message, value=None):
        self.value = value
        super().__init__(message)


class InvalidColorError(ConfigurationError):
    """Raised when a color value cannot be parsed."""

    def __init__(self, value, reason=None):
        super().__init__(reason or f"Invalid color: {value!r}", value)


class BorderStyleError(ConfigurationError):
    """Raised for unknown named border styles or malformed glyph sets."""

    def __init__(self, value, reason=None):
        super().__init__(reason or f"No such border style: {value!r}", value)


class PositionError(ConfigurationError):
    """Raised for negative or fractional cursor positions."""

    pass


class CursorStyleError(ConfigurationError):
    """Raised for an unknown cursor style."""

    def __init__(self, value):
        super().__init__(f"Invalid cursor style: {value!r}", value)


class TilingError(TuiError, RuntimeError):
    """Raised when the border tiler reaches an impossible state."""

    pass
