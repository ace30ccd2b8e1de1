"""
DOM tree implementation.
This package provides an in-memory document tree that renders to HTML or XML markup.
"""

from typing import Optional

from .errors import (
    DOMError, PropertyAccessError, InvalidTagNameError, StructuralViolationError,
    IndexNotFoundError, IndexExistsError, MissingCollectionError
)
from .collection import (
    OrderedCollection, NodeCollection, AttributeCollection, ClassCollection, StyleCollection
)
from .attr import Property, Attribute, Style
from .node import Node, NodeType, CloneRegistry, PathCounter, SELF_CLOSING_TAGS
from .element import Element
from .text import Text, CData
from .comment import Comment
from .document import Document, DocumentType, DOCTYPE_HTML, DOCTYPE_XML
from ..utils.config import Config


class Dom:
    """Creates documents with defaults taken from the configuration."""

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the factory.

        Args:
            config: Configuration holding the document.* defaults
        """
        self.config = config or Config()

    def document(self,
                 doctype: Optional[str] = None,
                 encoding: Optional[str] = None,
                 version: Optional[str] = None) -> Document:
        """
        Create a new Document.

        Args:
            doctype: "html" or "xml", defaults to document.doctype
            encoding: XML encoding, defaults to document.encoding
            version: XML version, defaults to document.version

        Returns:
            The new Document
        """
        return Document(
            doctype or self.config.get('document.doctype', DOCTYPE_HTML),
            encoding or self.config.get('document.encoding'),
            version or self.config.get('document.version'),
        )


__all__ = [
    'DOMError', 'PropertyAccessError', 'InvalidTagNameError', 'StructuralViolationError',
    'IndexNotFoundError', 'IndexExistsError', 'MissingCollectionError',
    'OrderedCollection', 'NodeCollection', 'AttributeCollection', 'ClassCollection',
    'StyleCollection', 'Property', 'Attribute', 'Style', 'Node', 'NodeType',
    'CloneRegistry', 'PathCounter', 'SELF_CLOSING_TAGS', 'Element', 'Text', 'CData',
    'Comment', 'Document', 'DocumentType', 'DOCTYPE_HTML', 'DOCTYPE_XML', 'Dom'
]
