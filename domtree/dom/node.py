"""
Node implementation for the DOM tree.
This module implements the base Node: tree mutation, traversal and markup rendering.
"""

from enum import IntEnum
from typing import Any, Iterator, Mapping, Optional, Tuple, Union
import itertools
import logging
import threading
import weakref

from bs4 import BeautifulSoup, NavigableString

from .attr import Attribute
from .collection import AttributeCollection, NodeCollection
from .errors import StructuralViolationError

logger = logging.getLogger(__name__)


class NodeType(IntEnum):
    """Node types as numbered by the W3C DOM."""
    ELEMENT_NODE = 1
    ATTRIBUTE_NODE = 2  # Legacy
    TEXT_NODE = 3
    CDATA_SECTION_NODE = 4
    ENTITY_REFERENCE_NODE = 5  # Legacy
    ENTITY_NODE = 6  # Legacy
    PROCESSING_INSTRUCTION_NODE = 7
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10
    DOCUMENT_FRAGMENT_NODE = 11
    NOTATION_NODE = 12  # Legacy


# Node types that own children and attributes
CONTAINER_TYPES = (NodeType.ELEMENT_NODE, NodeType.DOCUMENT_NODE)

# Node types rendered from their literal content
TRIVIAL_TYPES = (NodeType.TEXT_NODE, NodeType.CDATA_SECTION_NODE, NodeType.COMMENT_NODE)

# Void elements, rendered as a single tag
SELF_CLOSING_TAGS = frozenset({
    'area', 'base', 'br', 'col', 'command', 'embed', 'hr', 'img',
    'input', 'keygen', 'link', 'meta', 'param', 'source', 'track', 'wbr'
})


class CloneRegistry:
    """
    Identity tokens of every node produced by a clone.

    Append-only: tokens are never removed.
    """

    def __init__(self):
        self._tokens = set()
        self._lock = threading.Lock()

    def record(self, node: 'Node') -> None:
        with self._lock:
            self._tokens.add(node.token)

    def contains(self, node: 'Node') -> bool:
        with self._lock:
            return node.token in self._tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)


class PathCounter:
    """
    Counter for the [k] suffix of node paths.

    Shared by every get_path() call and never reset, so the same node
    may get a different suffix each time its path is computed.
    """

    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Return the current value and advance the counter."""
        with self._lock:
            value = self._value
            self._value += 1
            return value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


# Process-wide state shared by all trees
clone_registry = CloneRegistry()
path_counter = PathCounter()

_node_tokens = itertools.count(1)


class Node:
    """
    Base Node implementation for the DOM tree.

    Node equality is structural: two distinct nodes with the same name, type,
    value, attributes and children compare equal. Identity is only used by
    the clone registry.
    """

    clone_registry = clone_registry
    path_counter = path_counter

    def __init__(self, name: str, value: Optional[str] = None,
                 node_type: NodeType = NodeType.ELEMENT_NODE):
        """
        Initialize a new Node.

        Args:
            name: The node name, stored lower-cased
            value: Literal content for text-like nodes
            node_type: The type of this node
        """
        self.name = name.lower()
        self.value = value
        self.node_type = node_type
        self.token = next(_node_tokens)
        self.self_closing = False

        self.children: Optional[NodeCollection] = None
        self.attributes: Optional[AttributeCollection] = None

        # Back-references, never owning
        self._parent = None
        self._owner_document = None

        if node_type in CONTAINER_TYPES:
            self.self_closing = self.name in SELF_CLOSING_TAGS
            self.children = NodeCollection()
            self.attributes = AttributeCollection()

    @property
    def parent(self) -> Optional['Node']:
        """The parent node, or None if detached or collected."""
        return self._parent() if self._parent is not None else None

    def set_parent(self, parent: Optional['Node']) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def owner_document(self) -> Optional['Document']:
        """The document that created this node, if still alive."""
        return self._owner_document() if self._owner_document is not None else None

    def set_owner_document(self, owner_document: Optional['Document']) -> None:
        self._owner_document = weakref.ref(owner_document) if owner_document is not None else None

    # Equality

    def _equality_key(self) -> Tuple[Any, ...]:
        return (self.name, self.value, self.node_type, self.self_closing,
                self.attributes, self.children)

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self._equality_key() == other._equality_key()

    __hash__ = None

    def is_same_node(self, target: 'Node') -> bool:
        """Check structural equality with target."""
        return self == target

    def is_child_of(self, target: 'Node') -> bool:
        """Check whether this node's parent equals target."""
        parent = self.parent
        return parent is not None and parent == target

    def is_parent_of(self, target: 'Node') -> bool:
        """Check whether target is among this node's children."""
        return self.children is not None and self.children.index(target) is not None

    def is_clone_of(self, target: 'Node') -> bool:
        """
        Check whether this node is a clone of target.

        The nodes must be structurally equal, distinct objects, and this node
        must have been produced by do_clone().
        """
        return (self == target and self is not target
                and self.clone_registry.contains(self))

    def is_self_closing(self) -> bool:
        return bool(self.self_closing)

    # Insertion

    def can_insert(self, node: 'Node') -> bool:
        """
        Check that node may be inserted into this node.

        Raises:
            StructuralViolationError: If the insertion breaks a hierarchy rule
        """
        if node.node_type == NodeType.ELEMENT_NODE and self.node_type in (
                NodeType.TEXT_NODE, NodeType.COMMENT_NODE, NodeType.DOCUMENT_TYPE_NODE):
            raise StructuralViolationError(
                "No insert operations into #text, #comment and #documenttype nodes!")

        if self.is_same_node(node):
            raise StructuralViolationError("No insert operations into same node!")

        # Only the direct parent is checked, not the whole ancestor chain
        if self.is_child_of(node):
            raise StructuralViolationError("No insert operations into child node!")

        if self.is_self_closing():
            raise StructuralViolationError(
                "No insert operations into self closing node! node: `%s`", self.name)

        if self.children is None:
            raise StructuralViolationError(
                "Node has no children collection! node: `%s`", self.name)

        return True

    def _adopt(self, child: 'Node') -> None:
        child.set_parent(self)
        if child.owner_document is None:
            owner = self if self.node_type == NodeType.DOCUMENT_NODE else self.owner_document
            child.set_owner_document(owner)

    def append(self, child: 'Node') -> 'Node':
        """
        Append a child node to this node.

        Args:
            child: The node to append

        Returns:
            This node
        """
        self.can_insert(child)
        self._adopt(child)
        self.children.append(child)

        logger.debug(f"Appended {child.name} to {self.name}")
        return self

    def prepend(self, child: 'Node') -> 'Node':
        """
        Insert a child node before the existing children.

        Args:
            child: The node to prepend

        Returns:
            This node
        """
        self.can_insert(child)
        self._adopt(child)
        self.children.prepend(child)

        logger.debug(f"Prepended {child.name} to {self.name}")
        return self

    def append_to(self, parent: 'Node') -> 'Node':
        """Append this node to parent and return this node."""
        parent.append(self)
        return self

    def prepend_to(self, parent: 'Node') -> 'Node':
        """Prepend this node to parent and return this node."""
        parent.prepend(self)
        return self

    def _position_in_parent(self, message: str) -> Tuple['Node', int]:
        parent = self.parent
        if parent is None:
            raise StructuralViolationError("%s Node has no parent! node: `%s`", message, self.name)

        i = parent.children.index(self) if parent.has_children() else None
        if i is None:
            raise StructuralViolationError(
                "%s Parent has no child such as this node! node: `%s`", message, self.name)

        return parent, i

    def replace(self, new: 'Node') -> 'Node':
        """
        Replace this node with new in its parent's children.

        Returns:
            The new node

        Raises:
            StructuralViolationError: If both nodes are the same or this
                node is not attached to a parent
        """
        if self.is_same_node(new):
            raise StructuralViolationError("These are same nodes!")

        parent, i = self._position_in_parent("Cannot replace.")
        parent.can_insert(new)
        parent._adopt(new)
        parent.children.replace(i, new)

        logger.debug(f"Replaced {self.name} with {new.name}")
        return new

    def replace_child(self, old: 'Node', new: 'Node') -> 'Node':
        """
        Replace the child old with new.

        Returns:
            This node
        """
        i = self.children.index(old) if self.has_children() else None
        if i is None:
            raise StructuralViolationError(
                "Parent has no child such as old node! node: `%s`", old.name)

        self.can_insert(new)
        self._adopt(new)
        self.children.replace(i, new)
        return self

    def before(self, sibling: 'Node') -> 'Node':
        """
        Insert sibling right before this node.

        Returns:
            This node
        """
        parent, i = self._position_in_parent(
            "`%s` node cannot be inserted before `%s`." % (sibling.name, self.name))
        parent.can_insert(sibling)
        parent._adopt(sibling)
        parent.children.put(parent.children.position(i), sibling)
        return self

    def after(self, sibling: 'Node') -> 'Node':
        """
        Insert sibling right after this node.

        Returns:
            This node
        """
        parent, i = self._position_in_parent(
            "`%s` node cannot be inserted after `%s`." % (sibling.name, self.name))
        parent.can_insert(sibling)
        parent._adopt(sibling)
        parent.children.put(parent.children.position(i) + 1, sibling)
        return self

    def append_after(self, target: 'Node') -> 'Node':
        """Insert this node right after target and return this node."""
        target.after(self)
        return self

    def append_before(self, target: 'Node') -> 'Node':
        """Insert this node right before target and return this node."""
        target.before(self)
        return self

    def remove(self, child: 'Node') -> 'Node':
        """
        Remove a child node.

        The removed node keeps its parent reference.

        Returns:
            This node
        """
        i = self.children.index(child) if self.children is not None else None
        if i is None:
            raise StructuralViolationError(
                "The node to be removed is not a child of this node! node: `%s`", child.name)

        self.children.delete(i)

        logger.debug(f"Removed {child.name} from {self.name}")
        return self

    def do_empty(self) -> 'Node':
        """Remove all children."""
        if self.has_children():
            self.children.delete_all()
        return self

    def append_text(self, contents: str) -> 'Node':
        """Append a new text node holding contents."""
        from .text import Text
        text = Text(contents)
        text.set_owner_document(self.owner_document)
        return self.append(text)

    def append_comment(self, contents: str) -> 'Node':
        """Append a new comment node holding contents."""
        from .comment import Comment
        comment = Comment(contents)
        comment.set_owner_document(self.owner_document)
        return self.append(comment)

    def append_cdata(self, contents: str) -> 'Node':
        """Append a new CDATA section holding contents."""
        from .text import CData
        cdata = CData(contents)
        cdata.set_owner_document(self.owner_document)
        return self.append(cdata)

    def has_children(self) -> bool:
        return self.children is not None and self.children.length > 0

    # Attributes

    def has_attributes(self) -> bool:
        return self.attributes is not None and self.attributes.length > 0

    def set_attribute_object(self, attribute: Attribute) -> 'Node':
        """
        Add an attribute, replacing any attribute with the same name in place.

        Returns:
            This node
        """
        if self.attributes is None:
            raise StructuralViolationError("Node cannot hold attributes! node: `%s`", self.name)

        attribute.set_owner_element(self)
        i = self.attributes.find(attribute.name)
        if i is None:
            self.attributes.append(attribute)
        else:
            self.attributes.replace(i, attribute)
        return self

    def get_attribute_object(self, name: str) -> Optional[Attribute]:
        if self.attributes is None:
            return None
        i = self.attributes.find(name)
        return None if i is None else self.attributes.item(i)

    def set_attribute(self, name: Union[str, Mapping[str, Any]], value: Any = None) -> 'Node':
        """
        Set an attribute value.

        Args:
            name: The attribute name, or a mapping of names to values
            value: The attribute value

        Returns:
            This node
        """
        if isinstance(name, Mapping):
            for key, val in name.items():
                self.set_attribute(key, val)
            return self

        return self.set_attribute_object(Attribute(name, value, self))

    def get_attribute(self, name: str) -> Optional[Any]:
        """
        Get the value of an attribute.

        Returns:
            The attribute value, or None if the attribute doesn't exist
        """
        attribute = self.get_attribute_object(name)
        return attribute.value if attribute is not None else None

    def remove_attribute(self, name: str) -> 'Node':
        """Remove an attribute. Does nothing if it doesn't exist."""
        i = self.attributes.find(name) if self.attributes is not None else None
        if i is not None:
            self.attributes.delete(i)
        return self

    def has_attribute(self, name: str) -> bool:
        return self.get_attribute_object(name) is not None

    # Traversal

    def item(self, i: int) -> 'Node':
        """
        Return the child at index i.

        Raises:
            StructuralViolationError: If this node has no children collection
                or the index does not exist
        """
        if self.node_type not in CONTAINER_TYPES:
            raise StructuralViolationError("Not supported node to select! node: `%s`", self.name)

        if not self.children.has(i):
            raise StructuralViolationError("Item index not found! item: %s", i)

        return self.children.item(i)

    def first(self) -> 'Node':
        """Return the first child in order."""
        if not self.has_children():
            raise StructuralViolationError("Node has no children! node: `%s`", self.name)
        return next(iter(self.children))

    def last(self) -> 'Node':
        """Return the last child in order."""
        if not self.has_children():
            raise StructuralViolationError("Node has no children! node: `%s`", self.name)
        return self.children.to_list()[-1]

    def _sibling_list(self) -> list:
        parent = self.parent
        if parent is None or not parent.has_children():
            return []
        return parent.children.to_list()

    def prev(self) -> Optional['Node']:
        """Return the previous sibling, or None if this is the first child."""
        siblings = self._sibling_list()
        for i, child in enumerate(siblings):
            if child == self and i > 0:
                return siblings[i - 1]
        return None

    def next(self) -> Optional['Node']:
        """Return the next sibling, or None if this is the last child."""
        siblings = self._sibling_list()
        for i, child in enumerate(siblings):
            if child == self and i + 1 < len(siblings):
                return siblings[i + 1]
        return None

    def prev_all(self) -> NodeCollection:
        """Collect the siblings before this node."""
        collection = NodeCollection()
        for child in self._sibling_list():
            if child == self:
                break
            collection.add(child)
        return collection

    def next_all(self) -> NodeCollection:
        """Collect the siblings after this node."""
        collection = NodeCollection()
        found = False
        for child in self._sibling_list():
            if not found and child == self:
                found = True
            if found and child != self:
                collection.add(child)
        return collection

    def siblings(self) -> NodeCollection:
        """Collect every sibling that is not equal to this node."""
        collection = NodeCollection()
        for child in self._sibling_list():
            if child != self:
                collection.add(child)
        return collection

    def iter_descendants(self) -> Iterator['Node']:
        """Traverse the subtree depth-first, not including this node."""
        if self.children is None:
            return
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def get_path(self) -> str:
        """
        Build a slash separated path from the root to this node.

        When a sibling shares this node's name, the last path segment gets a
        [k] suffix taken from the process-wide path counter.
        """
        label = self.name
        for sibling in self.siblings():
            if sibling.name == self.name:
                label = '%s[%d]' % (self.name, self.path_counter.next())

        path = [label]
        parent = self.parent
        while parent is not None:
            path.append(parent.name)
            parent = parent.parent

        return '/'.join(reversed(path))

    # Cloning

    def _clone(self, deep: bool) -> 'Node':
        raise StructuralViolationError("Not supported node to clone! node: `%s`", self.name)

    def do_clone(self, deep: bool = False) -> 'Node':
        """
        Clone this node.

        Args:
            deep: Whether to carry the children over to the clone

        Returns:
            The cloned node
        """
        clone = self._clone(deep)
        clone.set_owner_document(self.owner_document)
        self.clone_registry.record(clone)
        return clone

    # Rendering

    def set_inner_text(self, contents: str) -> 'Node':
        """Replace all children with a single text node."""
        return self.do_empty().append_text(contents)

    def get_inner_text(self) -> str:
        """
        Return the text of the rendered content.

        Only plain text is kept: tags, comments and CDATA sections are
        dropped and character references are decoded.
        """
        return BeautifulSoup(self.to_string(), 'html.parser').get_text(types=(NavigableString,))

    def to_string(self) -> str:
        """
        Render the children of this node as markup.

        Returns:
            The markup string
        """
        parts = []
        if self.children is None:
            return ''

        for node in self.children:
            if node.node_type in TRIVIAL_TYPES:
                parts.append(node.get_content())
            elif node.node_type == NodeType.ELEMENT_NODE:
                parts.append(node.outer_html)

        return ''.join(parts)

    @property
    def inner_html(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
