#!/usr/bin/env python3
"""
domtree - Main Entry Point

Builds a sample document and prints its markup.
"""

import argparse
import logging
import sys

from domtree.dom import Dom, Document, DOMError, DOCTYPE_HTML, DOCTYPE_XML
from domtree.utils.config import Config
from domtree.utils.logging import setup_logging, log_exception

# Version info
__version__ = '1.0.0'


def build_sample(document: Document) -> Document:
    """
    Fill a document with sample content.

    XML documents get a list of fruits, HTML documents a small page body.
    """
    if document.doctype.name == DOCTYPE_XML:
        document.create_element('fruits') \
            .append(document.create_element('apple', {'color': 'yellow'}, None, True)) \
            .append(document.create_element('apple', {'color': 'green'}, None, True)) \
            .append_to(document)
        return document

    body = document.create_element('body').append_to(document)
    div = document.create_element('div', {
        'id': 'theDiv',
        'class': 'cls1 cls2',
        'style': {'color': '#ff0'}
    }, 'The DIV text...').append_to(body)

    document.create_element('pre', {'class': 'pre-class'}) \
        .append(document.create_element('br')) \
        .append(document.create_element('i', None, 'i0')) \
        .append(document.create_element('i', None, 'i1')) \
        .append_to(div)

    return document


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="domtree - build a sample document and print it")

    parser.add_argument("--doctype", choices=[DOCTYPE_HTML, DOCTYPE_XML], default=None,
                        help="Document type (default from configuration)")
    parser.add_argument("--encoding", default=None, help="XML encoding")
    parser.add_argument("--xml-version", default=None, help="XML version")
    parser.add_argument("--config", default=None, help="Path to a JSON configuration file")
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"domtree {__version__}")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = Config(args.config)

    logger = setup_logging(
        log_file=args.log_file or config.get('logging.log_file'),
        console_level="DEBUG" if args.debug else config.get('logging.console_level', "WARNING"),
        file_level=config.get('logging.file_level', "DEBUG"),
    )

    try:
        document = Dom(config).document(args.doctype, args.encoding, args.xml_version)
        print(build_sample(document).to_string())
    except DOMError as e:
        log_exception(logger, e, "Error building document")
        return 1

    logging.getLogger(__name__).debug("Sample document rendered")
    return 0


if __name__ == "__main__":
    sys.exit(main())
