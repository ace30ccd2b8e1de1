"""
Exceptions raised by the DOM tree builder.
"""


class DOMError(Exception):
    """Base class for all DOM tree errors."""

    def __init__(self, message: str, *args):
        """
        Initialize the error.

        Args:
            message: Message, optionally with %-style placeholders
            *args: Values substituted into the message
        """
        if args:
            message = message % args
        super().__init__(message)


class PropertyAccessError(DOMError, AttributeError):
    """Raised when writing a field that cannot be set from outside."""


class InvalidTagNameError(DOMError, ValueError):
    """Raised when an element tag name is not made of word characters and dashes."""


class StructuralViolationError(DOMError):
    """Raised when a tree mutation would break the node hierarchy rules."""


class IndexNotFoundError(DOMError, KeyError):
    """Raised when a collection index does not exist."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0] if self.args else ""


class IndexExistsError(DOMError):
    """Raised when inserting at a collection index that is already taken."""


class MissingCollectionError(DOMError, TypeError):
    """Raised when a class/style attribute does not hold its collection."""
