"""
Document implementation for the DOM tree.
This module implements the Document root, which also creates every other node.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .comment import Comment
from .element import Element
from .errors import StructuralViolationError
from .node import Node, NodeType
from .text import CData, Text

logger = logging.getLogger(__name__)

DOCTYPE_HTML = 'html'
DOCTYPE_XML = 'xml'

DEFAULT_ENCODING = 'utf-8'
DEFAULT_VERSION = '1.0'


class DocumentType(Node):
    """
    Doctype declaration of a document.

    Extra identifiers (e.g. PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN") can be
    added and are rendered after the doctype name.
    """

    def __init__(self, name: str = DOCTYPE_HTML):
        super().__init__(name, None, NodeType.DOCUMENT_TYPE_NODE)
        self.options: List[str] = []

    def add_doctype_string(self, option: str) -> None:
        self.options.append(option)

    def _equality_key(self) -> Tuple[Any, ...]:
        return super()._equality_key() + (tuple(self.options),)

    def to_string(self) -> str:
        return '<!DOCTYPE %s>' % ' '.join([self.name] + self.options)


class Document(Node):
    """
    Document node implementation for the DOM tree.

    The document is the root of a tree and the factory for its nodes.
    Encoding and version are only set for XML documents.
    """

    def __init__(self,
                 doctype: str = DOCTYPE_HTML,
                 encoding: Optional[str] = DEFAULT_ENCODING,
                 version: Optional[str] = None):
        """
        Initialize a new Document.

        Args:
            doctype: "html" or "xml"
            encoding: XML encoding, defaults to utf-8
            version: XML version, defaults to 1.0
        """
        super().__init__('#document', None, NodeType.DOCUMENT_NODE)

        self.doctype = DocumentType(doctype)
        self.doctype.set_owner_document(self)

        self.encoding: Optional[str] = None
        self.version: Optional[str] = None
        if doctype == DOCTYPE_XML:
            self.encoding = encoding or DEFAULT_ENCODING
            self.version = version or DEFAULT_VERSION

        logger.debug(f"Document initialized (doctype: {doctype})")

    def _equality_key(self) -> Tuple[Any, ...]:
        return super()._equality_key() + (self.doctype, self.encoding, self.version)

    def add_doctype_string(self, option: str) -> None:
        self.doctype.add_doctype_string(option)

    def create_element(self,
                       tag: str,
                       attributes: Optional[Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]] = None,
                       text: Optional[str] = '',
                       self_closing: Optional[bool] = None) -> Element:
        """
        Create a new element.

        Args:
            tag: The tag name of the element
            attributes: Attributes to apply
            text: Text appended as a child text node when not empty
            self_closing: Overrides the void element table when given; XML
                documents only self-close when it is True

        Returns:
            The new element
        """
        if self_closing is None and self.doctype.name == DOCTYPE_XML:
            self_closing = False

        element = Element(tag, None, attributes, self_closing)
        element.set_owner_document(self)
        if text:
            element.append_text(text)
        return element

    def create(self, node_type: NodeType, contents: str) -> Node:
        """
        Create a text-like node of the given type.

        Raises:
            StructuralViolationError: For elements (use create_element) and unknown types
        """
        if node_type == NodeType.ELEMENT_NODE:
            raise StructuralViolationError("Not implemented! Use Document.create_element instead.")
        if node_type == NodeType.TEXT_NODE:
            return self.create_text(contents)
        if node_type == NodeType.CDATA_SECTION_NODE:
            return self.create_cdata(contents)
        if node_type == NodeType.COMMENT_NODE:
            return self.create_comment(contents)

        raise StructuralViolationError("Unknown node type! type: %s", node_type)

    def create_text(self, contents: str) -> Text:
        text = Text(contents)
        text.set_owner_document(self)
        return text

    def create_cdata(self, contents: str) -> CData:
        cdata = CData(contents)
        cdata.set_owner_document(self)
        return cdata

    def create_comment(self, contents: str) -> Comment:
        comment = Comment(contents)
        comment.set_owner_document(self)
        return comment

    def _iter_elements(self):
        for node in self.iter_descendants():
            if node.node_type == NodeType.ELEMENT_NODE:
                yield node

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        """
        Get the first element with the given id.

        Args:
            element_id: The element ID

        Returns:
            The element, or None if not found
        """
        for element in self._iter_elements():
            if element.id == element_id or element.get_attribute('id') == element_id:
                return element
        return None

    def get_elements_by_tag_name(self, tag_name: str) -> List[Element]:
        """
        Get all elements with the given tag name.

        Args:
            tag_name: The tag name to match (case-insensitive), or "*" for all

        Returns:
            Matching elements in document order
        """
        tag_name = tag_name.lower()
        return [element for element in self._iter_elements()
                if tag_name == '*' or element.name == tag_name]

    def get_elements_by_class_name(self, class_name: str) -> List[Element]:
        """Get all elements carrying the given class."""
        return [element for element in self._iter_elements() if element.has_class(class_name)]

    def get_declaration(self) -> str:
        """Return the doctype or XML declaration line, without line break."""
        if self.doctype.name == DOCTYPE_HTML:
            return self.doctype.to_string()
        if self.doctype.name == DOCTYPE_XML:
            return '<?xml version="%s" encoding="%s"?>' % (self.version, self.encoding)
        return ''

    def to_string(self) -> str:
        """
        Render the whole document, declaration first.

        Returns:
            The markup string
        """
        declaration = self.get_declaration()
        header = declaration + "\r\n" if declaration else ''
        return header + super().to_string()
