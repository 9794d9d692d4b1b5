"""Domain errors."""


class BildvalError(Exception):
    """Base class for Bildval errors."""


class InsufficientCatalogError(BildvalError):
    """The catalog cannot satisfy a round or word request."""


class CatalogLoadError(BildvalError):
    """The catalog corpus is missing or malformed."""


class InvalidModeError(BildvalError):
    """An unknown difficulty was requested."""


class SessionNotFoundError(BildvalError):
    """No session exists for the given id."""


class InvalidSelectionError(BildvalError):
    """The selected option is not one of the current round's guesses."""
