"""
Comment node implementation for the DOM tree.
"""

from .node import NodeType
from .text import CharacterData


class Comment(CharacterData):
    """
    Comment node implementation for the DOM tree.

    The content is kept pre-rendered as <!--...-->.
    """

    NODE_NAME = '#comment'
    NODE_TYPE = NodeType.COMMENT_NODE

    def _wrap(self, data: str) -> str:
        return '<!--%s-->' % data
