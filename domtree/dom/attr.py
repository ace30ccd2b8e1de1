"""
Attribute and style properties of an element.
"""

import weakref
from typing import Any, Optional

from .collection import ClassCollection, StyleCollection
from .errors import PropertyAccessError

# Attribute names whose value is a collection rather than text
ATTRIBUTE_NAME_CLASS = 'class'
ATTRIBUTE_NAME_STYLE = 'style'


class Property:
    """
    Name/value pair owned by an element.

    Name and value are fixed at construction; to change them, create a new
    property and replace it in the owning collection.
    """

    def __init__(self, name: str, value: Any, owner_element: Optional['Element'] = None):
        """
        Initialize a new property.

        Args:
            name: The property name
            value: The property value, kept as-is for class/style and
                converted to text otherwise
            owner_element: The element that owns this property
        """
        if name not in (ATTRIBUTE_NAME_CLASS, ATTRIBUTE_NAME_STYLE):
            value = '' if value is None else str(value)

        self._name = name
        self._value = value
        self._owner_element = None

        if owner_element is not None:
            self.set_owner_element(owner_element)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        raise PropertyAccessError("You cannot set the name of a %s!", type(self).__name__)

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        raise PropertyAccessError("You cannot set the value of a %s!", type(self).__name__)

    @property
    def owner_element(self) -> Optional['Element']:
        """The owning element, or None if unowned or collected."""
        return self._owner_element() if self._owner_element is not None else None

    def set_owner_element(self, owner_element: Optional['Element']) -> None:
        self._owner_element = weakref.ref(owner_element) if owner_element is not None else None

    def to_string(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._name == other._name and self._value == other._value

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {self._value!r})"


class Attribute(Property):
    """An element attribute, rendered as name="value"."""

    def to_string(self) -> str:
        value = self._value
        if isinstance(value, (ClassCollection, StyleCollection)):
            value = value.to_string()
        return '%s="%s"' % (self._name, str(value).replace('"', '&quot;'))

    def is_id(self) -> bool:
        """Check whether this is an id attribute (case-insensitive)."""
        return self._name.lower() == 'id'


class Style(Property):
    """An inline style declaration, rendered as name:value;"""

    def to_string(self) -> str:
        return '%s:%s;' % (self._name, self._value)
