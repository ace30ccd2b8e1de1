"""
Text and CDATA nodes for the DOM tree.
"""

from typing import Any, Optional, Tuple

from .node import Node, NodeType


class CharacterData(Node):
    """
    Base class for leaf nodes rendered from literal content.

    The rendered content is computed once when the data is set.
    """

    NODE_NAME = '#text'
    NODE_TYPE = NodeType.TEXT_NODE

    def __init__(self, data: Optional[str]):
        """
        Initialize the node.

        Args:
            data: The node data
        """
        if data is None:
            data = ""

        super().__init__(self.NODE_NAME, data, self.NODE_TYPE)
        self.set_content(data)

    @property
    def data(self) -> str:
        return self.value

    @property
    def length(self) -> int:
        return len(self.value)

    def _wrap(self, data: str) -> str:
        return data

    def set_content(self, data: str) -> None:
        self.value = str(data)
        self._content = self._wrap(self.value)

    def get_content(self) -> str:
        return self._content

    def _equality_key(self) -> Tuple[Any, ...]:
        return super()._equality_key() + (self._content,)

    def _clone(self, deep: bool) -> 'CharacterData':
        return type(self)(self.value)

    def to_string(self) -> str:
        return self._content


class Text(CharacterData):
    """Text node, rendered as-is."""


class CData(CharacterData):
    """CDATA section, rendered as <![CDATA[...]]>."""

    NODE_NAME = '#cdata'
    NODE_TYPE = NodeType.CDATA_SECTION_NODE

    def _wrap(self, data: str) -> str:
        return '<![CDATA[%s]]>' % data
