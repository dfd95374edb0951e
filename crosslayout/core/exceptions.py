"""Custom exception hierarchy for crossword layout generation."""


class CrosswordError(Exception):
    """Base exception for layout failures."""


class InvalidCharacterError(CrosswordError):
    """Raised when a letter write or lookup is not exactly one character."""

    def __init__(self, char: object) -> None:
        super().__init__(f"Invalid character {char!r}")
        self.char = char


class ConflictError(CrosswordError):
    """Raised when a grid write collides with a different existing value."""


class InternalConsistencyError(CrosswordError):
    """Raised when an occupied cell cannot be attributed to any placed word."""


class ValidationError(CrosswordError):
    """Raised when the final layout integrity checks fail."""
