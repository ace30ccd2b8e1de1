"""
Shared fixtures for the DOM tree tests.
"""

import logging

import pytest

from domtree.dom import Document, DOCTYPE_XML
from domtree.utils.logging import ROOT_LOGGER_NAME


@pytest.fixture
def html_doc():
    return Document()


@pytest.fixture
def xml_doc():
    return Document(DOCTYPE_XML)


@pytest.fixture
def page(html_doc):
    """<body><div id="theDiv" ...>text<pre><br /><i>i0</i><i>i1</i></pre></div></body>"""
    body = html_doc.create_element('body').append_to(html_doc)
    div = html_doc.create_element('div', {
        'id': 'theDiv',
        'class': 'cls1 cls2',
        'style': {'color': '#ff0'}
    }, 'The DIV text...').append_to(body)
    pre = html_doc.create_element('pre', {'class': 'pre-class'}) \
        .append(html_doc.create_element('br')) \
        .append(html_doc.create_element('i', None, 'i0')) \
        .append(html_doc.create_element('i', None, 'i1')) \
        .append_to(div)
    return html_doc, body, div, pre


@pytest.fixture
def reset_logging():
    """Drop handlers added by setup_logging() so later tests start clean."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
