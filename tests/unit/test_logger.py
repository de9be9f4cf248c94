from unittest import TestCase
import logging

from nftregistry.logger import get_logger, overwrite_logger_level, MockLogger, CUSTOM_LEVELS


class TestLogger(TestCase):
    def test_custom_levels_are_attached(self):
        log = get_logger('TestLogger')

        for name in CUSTOM_LEVELS:
            self.assertTrue(callable(getattr(log, name.lower())))

    def test_handlers_added_once(self):
        log = get_logger('TestLoggerOnce')
        count = len(log.handlers)

        get_logger('TestLoggerOnce')

        self.assertEqual(len(log.handlers), count)

    def test_overwrite_level(self):
        log = get_logger('TestLoggerLevel')
        overwrite_logger_level(logging.ERROR)
        try:
            self.assertEqual(log.level, logging.ERROR)
        finally:
            overwrite_logger_level(logging.WARNING)

    def test_mock_logger_swallows_calls(self):
        MockLogger().error('nothing happens')
