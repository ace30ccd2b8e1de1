"""
Tests for the logging setup.
"""

import logging

import pytest

from domtree.dom import Element
from domtree.utils.logging import ROOT_LOGGER_NAME, LogFormatter, log_exception, setup_logging


@pytest.mark.usefixtures('reset_logging')
class TestSetupLogging:
    def test_configures_package_logger(self):
        logger = setup_logging(console_level="INFO")
        assert logger.name == ROOT_LOGGER_NAME
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        setup_logging(str(tmp_path / 'one.log'))
        logger = setup_logging(console_level="ERROR")
        assert len(logger.handlers) == 1
        assert logger.level == logging.ERROR

    def test_unknown_level_falls_back(self):
        logger = setup_logging(console_level="LOUD")
        assert logger.level == logging.WARNING

    def test_module_records_reach_file(self, tmp_path):
        log_file = tmp_path / 'logs' / 'domtree.log'
        setup_logging(str(log_file), console_level="CRITICAL", file_level="DEBUG")

        Element('div').append(Element('p'))
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()

        text = log_file.read_text(encoding='utf-8')
        assert 'domtree.dom.node' in text
        assert 'Appended p to div' in text

    def test_log_exception_includes_traceback(self, tmp_path):
        log_file = tmp_path / 'error.log'
        logger = setup_logging(str(log_file), console_level="CRITICAL")
        try:
            Element('bad tag')
        except ValueError as e:
            log_exception(logger, e, "Error building document")
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text(encoding='utf-8')
        assert 'Error building document: Not proper tag name!' in text
        assert 'Traceback' in text


class TestLogFormatter:
    def _record(self, level):
        return logging.LogRecord('domtree', level, __file__, 1, 'message', None, None)

    def test_colors_level_name(self):
        formatter = LogFormatter(fmt="[%(levelname)s] %(message)s")
        assert formatter.format(self._record(logging.ERROR)) == '[\033[31mERROR\033[0m] message'

    def test_plain_output(self):
        formatter = LogFormatter(colored=False, fmt="[%(levelname)s] %(message)s")
        assert formatter.format(self._record(logging.WARNING)) == '[WARNING] message'
