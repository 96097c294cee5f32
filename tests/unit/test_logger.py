from unittest import TestCase
from tokenledger import logger
import logging


class TestLogger(TestCase):
    def tearDown(self):
        logger.overwrite_logger_level(logging.WARNING)

    def test_get_logger_has_colored_handler(self):
        log = logger.get_logger('TEST_LEDGER_LOG')

        self.assertIsInstance(log, logging.Logger)
        self.assertTrue(any(isinstance(h, logger.ColoredStreamHandler) for h in log.handlers))

    def test_handler_not_duplicated(self):
        log = logger.get_logger('TEST_LEDGER_DUP')
        logger.get_logger('TEST_LEDGER_DUP')

        self.assertEqual(len([h for h in log.handlers if isinstance(h, logger.ColoredStreamHandler)]), 1)

    def test_negative_level_gives_mock_logger(self):
        logger.overwrite_logger_level(-1)

        log = logger.get_logger('TEST_LEDGER_MOCK')
        self.assertIsInstance(log, logger.MockLogger)
        log.info('ignored')

    def test_overwrite_level(self):
        log = logger.get_logger('TEST_LEDGER_LEVEL')
        logger.overwrite_logger_level(logging.DEBUG)

        self.assertEqual(log.level, logging.DEBUG)
