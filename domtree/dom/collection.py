"""
Ordered collections backing node children, attributes, classes and styles.

Items live under integer indices. Indices keep their insertion order but may
become sparse after a deletion or a filter; only the operations that splice
(put, append, prepend, shift) renumber them.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from .errors import IndexExistsError, IndexNotFoundError, PropertyAccessError


class OrderedCollection:
    """
    Integer-indexed, insertion-ordered container.

    Every mutating method returns the collection itself so calls can be
    chained, except pop() and shift() which return the removed item.
    """

    def __init__(self, items: Optional[Iterable[Any]] = None):
        """
        Initialize the collection.

        Args:
            items: Optional items to add in order
        """
        object.__setattr__(self, '_items', {})
        object.__setattr__(self, '_length', 0)

        if items:
            for item in items:
                self.add(item)

    def __setattr__(self, name: str, value: Any) -> None:
        raise PropertyAccessError(
            "You cannot set attributes on this collection! class: %s, name: %s",
            type(self).__name__, name)

    @property
    def items(self) -> Mapping[int, Any]:
        """Read-only view of the index to item mapping."""
        return MappingProxyType(self._items)

    @property
    def length(self) -> int:
        """Number of live entries."""
        return self._length

    def _update_length(self) -> None:
        object.__setattr__(self, '_length', len(self._items))

    def _renumber(self, values: List[Any]) -> None:
        object.__setattr__(self, '_items', dict(enumerate(values)))
        self._update_length()

    def add(self, item: Any) -> 'OrderedCollection':
        """
        Add an item at the index equal to the current length.

        Raises:
            IndexExistsError: If that index is already taken
        """
        return self._set(self._length, item)

    def put(self, i: int, item: Any) -> 'OrderedCollection':
        """
        Insert an item at position i, shifting the following items up.

        Indices are renumbered contiguously afterwards.
        """
        values = list(self._items.values())
        values.insert(abs(i), item)
        self._renumber(values)
        return self

    def append(self, item: Any) -> 'OrderedCollection':
        """Add an item onto the end, renumbering indices."""
        self._renumber(list(self._items.values()) + [item])
        return self

    def prepend(self, item: Any) -> 'OrderedCollection':
        """Add an item to the beginning, renumbering indices."""
        self._renumber([item] + list(self._items.values()))
        return self

    def replace(self, i: int, item: Any) -> 'OrderedCollection':
        """
        Overwrite the item at an existing index.

        Raises:
            IndexNotFoundError: If the index does not exist
        """
        if not self.has(i):
            raise IndexNotFoundError("Item index does not exist! index: %d", i)
        self._items[i] = item
        return self

    def delete(self, i: int) -> 'OrderedCollection':
        """
        Remove the item at index i.

        Raises:
            IndexNotFoundError: If the index does not exist
        """
        if not self.has(i):
            raise IndexNotFoundError("Item index does not exist! index: %d", i)
        del self._items[i]
        self._update_length()
        return self

    def delete_all(self) -> 'OrderedCollection':
        """Remove every item."""
        self._items.clear()
        self._update_length()
        return self

    def has(self, i: int) -> bool:
        """Check whether index i holds an item."""
        return i in self._items

    def item(self, i: int) -> Any:
        """
        Return the item at index i.

        Raises:
            IndexNotFoundError: If the index does not exist
        """
        if not self.has(i):
            raise IndexNotFoundError("Item index does not exist! index: %d", i)
        return self._items[i]

    def position(self, i: int) -> int:
        """
        Return the zero-based position of index i in iteration order.

        Raises:
            IndexNotFoundError: If the index does not exist
        """
        for position, key in enumerate(self._items):
            if key == i:
                return position
        raise IndexNotFoundError("Item index does not exist! index: %d", i)

    def index(self, value: Any) -> Optional[int]:
        """
        Find the first index whose item equals value and has the same type.

        Returns:
            The index, or None if no such item exists
        """
        for i, item in self._items.items():
            if type(item) is type(value) and item == value:
                return i
        return None

    def unique(self) -> 'OrderedCollection':
        """Remove duplicate items, keeping the first occurrence."""
        seen: List[Any] = []
        for i, item in list(self._items.items()):
            if item in seen:
                del self._items[i]
            else:
                seen.append(item)
        self._update_length()
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> 'OrderedCollection':
        """Keep only the items satisfying predicate. Indices are kept as they are."""
        object.__setattr__(self, '_items', {
            i: item for i, item in self._items.items() if predicate(item)
        })
        self._update_length()
        return self

    def pop(self) -> Any:
        """Remove and return the last item, or None if empty."""
        if not self._items:
            return None
        i = next(reversed(self._items))
        item = self._items.pop(i)
        self._update_length()
        return item

    def shift(self) -> Any:
        """Remove and return the first item, or None if empty. Renumbers indices."""
        if not self._items:
            return None
        values = list(self._items.values())
        item = values.pop(0)
        self._renumber(values)
        return item

    def to_list(self) -> List[Any]:
        """Return the items in order."""
        return list(self._items.values())

    def to_dict(self) -> Dict[int, Any]:
        """Return a copy of the index to item mapping."""
        return dict(self._items)

    def _set(self, i: int, item: Any) -> 'OrderedCollection':
        if self.has(i):
            raise IndexExistsError("Item index already exists! index: %d", i)
        self._items[i] = item
        self._update_length()
        return self

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items.values()))

    def __getitem__(self, i: int) -> Any:
        return self.item(i)

    def __setitem__(self, i: int, item: Any) -> None:
        self._set(i, item)

    def __delitem__(self, i: int) -> None:
        self.delete(i)

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"


class NodeCollection(OrderedCollection):
    """Children of a node."""


class AttributeCollection(OrderedCollection):
    """Plain attributes of a node."""

    def find(self, name: str) -> Optional[int]:
        """Return the index of the first attribute called name, or None."""
        for i, attribute in self._items.items():
            if attribute.name == name:
                return i
        return None


class ClassCollection(OrderedCollection):
    """Class tokens of an element."""

    def to_string(self) -> str:
        """Space-joined class tokens in insertion order."""
        return " ".join(self._items.values())


class StyleCollection(OrderedCollection):
    """Inline style declarations of an element."""

    def find(self, name: str) -> Optional[int]:
        """Return the index of the first style called name, or None."""
        for i, style in self._items.items():
            if style.name == name:
                return i
        return None

    def get(self, name: str) -> Optional[str]:
        """Return the value of the first style called name, or None."""
        i = self.find(name)
        return None if i is None else self._items[i].value

    def remove(self, name: str) -> 'StyleCollection':
        """
        Remove the first style called name.

        Args:
            name: Style name, or "*" to remove every style
        """
        if name == '*':
            return self.delete_all()

        i = self.find(name)
        if i is not None:
            self.delete(i)
        return self

    def to_string(self) -> str:
        """Space-joined name:value; declarations."""
        return " ".join(style.to_string() for style in self._items.values())
