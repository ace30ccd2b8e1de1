"""
domtree - an in-memory document tree builder.
Build element trees with attributes, classes and inline styles, and render them as HTML or XML.
"""

from .dom import Dom, Document, Element

__version__ = '1.0.0'
__author__ = 'domtree developers'
__description__ = 'In-memory DOM tree builder rendering HTML and XML markup.'

__all__ = ['Dom', 'Document', 'Element']
