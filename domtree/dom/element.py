"""
Element implementation for the DOM tree.
This module implements elements with their class list and inline styles.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union
import logging
import re

import cssutils

from .attr import ATTRIBUTE_NAME_CLASS, ATTRIBUTE_NAME_STYLE, Attribute, Style
from .collection import ClassCollection, StyleCollection
from .errors import InvalidTagNameError, MissingCollectionError
from .node import Node, NodeType

logger = logging.getLogger(__name__)

# Keep cssutils from logging every unknown property
cssutils.log.setLevel(logging.CRITICAL)

TAG_NAME_PATTERN = re.compile(r'[\w-]+')


def parse_style_text(text: str) -> List[Tuple[str, str]]:
    """
    Parse an inline style string such as "color: red; width: 10px".

    Args:
        text: CSS declarations

    Returns:
        (name, value) pairs in order, values keeping any !important flag
    """
    declaration = cssutils.parseStyle(text)
    return [(prop.name, prop.value + (' !' + prop.priority if prop.priority else ''))
            for prop in declaration.getProperties()]


class Element(Node):
    """
    Element node implementation for the DOM tree.

    Every element carries a class list and an inline style list next to its
    plain attributes. They render as the class and style attributes, and are
    left out of the markup while empty.
    """

    def __init__(self,
                 tag: str,
                 value: Optional[str] = None,
                 attributes: Optional[Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]] = None,
                 self_closing: Optional[bool] = None):
        """
        Initialize a new Element.

        Args:
            tag: Name of the element tag (e.g., "div", "span")
            value: Optional node value
            attributes: Attributes to apply, as a mapping or (name, value) pairs
            self_closing: Overrides the void element table when given

        Raises:
            InvalidTagNameError: If tag contains anything but word characters and dashes
        """
        if not isinstance(tag, str) or not TAG_NAME_PATTERN.fullmatch(tag):
            raise InvalidTagNameError("Not proper tag name! tag: %r", tag)

        self.tag = tag
        super().__init__(tag, value, NodeType.ELEMENT_NODE)

        # Generally used for XML nodes that have no body
        if isinstance(self_closing, bool):
            self.self_closing = self_closing

        self._id: Optional[str] = None
        self._classes = ClassCollection()
        self._styles = StyleCollection()

        if attributes:
            pairs = attributes.items() if isinstance(attributes, Mapping) else attributes
            for name, val in pairs:
                # The first id is kept for good, later changes do not update it
                if self._id is None and name == 'id':
                    self._id = val
                self.set_attribute(name, val)

    @property
    def id(self) -> Optional[str]:
        """The id given at construction."""
        return self._id

    @property
    def classes(self) -> ClassCollection:
        return self.get_class_collection()

    @property
    def styles(self) -> StyleCollection:
        return self.get_style_collection()

    def _equality_key(self) -> Tuple[Any, ...]:
        return super()._equality_key() + (self.tag, self._id, self._classes, self._styles)

    # Classes

    def get_class_collection(self) -> ClassCollection:
        if not isinstance(self._classes, ClassCollection):
            raise MissingCollectionError("Class attribute must hold a ClassCollection!")
        return self._classes

    def has_class(self, name: str) -> bool:
        return name in self.get_class_collection().to_list()

    def add_class(self, value: Union[str, Iterable[str]]) -> 'Element':
        """
        Add one or more classes.

        Args:
            value: A class name, a space separated string of names, or a list of either

        Returns:
            This element
        """
        if not isinstance(value, str):
            for val in value:
                self.add_class(val)
            return self

        tokens = value.split()
        if len(tokens) > 1:
            return self.add_class(tokens)

        if tokens:
            self.get_class_collection().append(tokens[0]).unique()
        return self

    def remove_class(self, name: str) -> 'Element':
        self.get_class_collection().filter(lambda cls: cls != name)
        return self

    def get_class_text(self) -> str:
        return self.get_class_collection().to_string()

    # Styles

    def get_style_collection(self) -> StyleCollection:
        if not isinstance(self._styles, StyleCollection):
            raise MissingCollectionError("Style attribute must hold a StyleCollection!")
        return self._styles

    def set_style(self, name: Union[str, Mapping[str, Any]], value: Any = None) -> 'Element':
        """
        Set one or more inline styles.

        An existing style with the same name is dropped and the new one is
        added at the end.

        Args:
            name: Style name, a mapping of names to values, or inline
                declarations when value is omitted
            value: Style value

        Returns:
            This element
        """
        if isinstance(name, Mapping):
            for key, val in name.items():
                self.set_style(key, val)
            return self

        if value is None and ':' in name:
            for key, val in parse_style_text(name):
                self.set_style(key, val)
            return self

        styles = self.get_style_collection()
        i = styles.find(name)
        if i is not None:
            styles.delete(i)
        styles.append(Style(name, '' if value is None else value, self))
        return self

    def get_style(self, name: str) -> Optional[str]:
        return self.get_style_collection().get(name)

    def remove_style(self, name: str) -> 'Element':
        """
        Remove a style.

        Args:
            name: Style name, or "*" to remove every style
        """
        self.get_style_collection().remove(name)
        return self

    def get_style_text(self) -> str:
        return self.get_style_collection().to_string()

    # Attributes

    def has_attributes(self) -> bool:
        return (self.get_class_collection().length > 0
                or self.get_style_collection().length > 0
                or super().has_attributes())

    def set_attribute(self, name: Union[str, Mapping[str, Any]], value: Any = None) -> 'Element':
        """
        Set an attribute value.

        Class values are added to the class list and style values are set
        as inline styles.
        """
        if name in (ATTRIBUTE_NAME_CLASS, ATTRIBUTE_NAME_STYLE) and value is None:
            return self
        if name == ATTRIBUTE_NAME_CLASS and not isinstance(value, ClassCollection):
            return self.add_class(value)
        if name == ATTRIBUTE_NAME_STYLE and not isinstance(value, StyleCollection):
            return self.set_style(value)
        return super().set_attribute(name, value)

    def set_attribute_object(self, attribute: Attribute) -> 'Element':
        """
        Add an attribute object.

        A class or style attribute replaces the element's collection and
        must hold one.

        Raises:
            MissingCollectionError: If a class/style attribute holds anything else
        """
        if attribute.name == ATTRIBUTE_NAME_CLASS:
            if not isinstance(attribute.value, ClassCollection):
                raise MissingCollectionError("Class attribute must hold a ClassCollection!")
            attribute.set_owner_element(self)
            self._classes = attribute.value
            return self

        if attribute.name == ATTRIBUTE_NAME_STYLE:
            if not isinstance(attribute.value, StyleCollection):
                raise MissingCollectionError("Style attribute must hold a StyleCollection!")
            attribute.set_owner_element(self)
            self._styles = attribute.value
            return self

        return super().set_attribute_object(attribute)

    def get_attribute_object(self, name: str) -> Optional[Attribute]:
        if name == ATTRIBUTE_NAME_CLASS:
            return Attribute(name, self.get_class_collection(), self)
        if name == ATTRIBUTE_NAME_STYLE:
            return Attribute(name, self.get_style_collection(), self)
        return super().get_attribute_object(name)

    def remove_attribute(self, name: str) -> 'Element':
        """Remove an attribute. Removing class or style empties its collection."""
        if name == ATTRIBUTE_NAME_CLASS:
            self.get_class_collection().delete_all()
        elif name == ATTRIBUTE_NAME_STYLE:
            self.get_style_collection().delete_all()
        else:
            super().remove_attribute(name)
        return self

    # Rendering

    def _format_attributes(self) -> str:
        parts = []

        if self.get_class_collection().length:
            parts.append(Attribute(ATTRIBUTE_NAME_CLASS, self._classes).to_string())
        if self.get_style_collection().length:
            parts.append(Attribute(ATTRIBUTE_NAME_STYLE, self._styles).to_string())

        parts.extend(attribute.to_string() for attribute in self.attributes)

        return ' ' + ' '.join(parts) if parts else ''

    @property
    def outer_html(self) -> str:
        """Get the markup of the element itself, including its children."""
        if self.self_closing:
            return f"<{self.name}{self._format_attributes()} />"
        return f"<{self.name}{self._format_attributes()}>{self.to_string()}</{self.name}>"

    def _clone(self, deep: bool) -> 'Element':
        clone = Element(self.tag, self.value, self_closing=self.self_closing)
        clone._id = self._id

        for attribute in self.attributes:
            if attribute.is_id():
                logger.warning("do_clone() may lead to duplicate element IDs in a document.")
            clone.set_attribute_object(Attribute(attribute.name, attribute.value, clone))

        clone.add_class(self._classes.to_list())
        for style in self._styles:
            clone.set_style(style.name, style.value)

        # Children are moved under the clone, not copied
        if deep and self.has_children():
            for child in self.children:
                clone.append(child)

        return clone
