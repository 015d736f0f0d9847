"""
Shared test utilities and fixtures for tag search tests.

Provides a base test case that silences logging and a factory for the
sample record collections used across test files.
"""

import logging
import os
import sys
import unittest

# Make the python/ source root importable when tests run from the repo root
_SOURCE_ROOT = os.path.join(os.path.dirname(__file__), "..")
if _SOURCE_ROOT not in sys.path:
    sys.path.insert(0, _SOURCE_ROOT)

from tag_search.records import TaggedRecord  # noqa: E402


class BaseTestCase(unittest.TestCase):
    """Base test case that handles common setup and teardown operations."""

    def setUp(self):
        """Disable logging during tests to reduce noise."""
        logging.disable(logging.CRITICAL)

    def tearDown(self):
        """Re-enable logging."""
        logging.disable(logging.NOTSET)


class RecordFactory:
    """Factory for sample tagged records."""

    @staticmethod
    def create_trades():
        """Five trades with overlapping session and strategy tags."""
        return [
            TaggedRecord("1", ["#scalping", "#morning", "#trend"], "2024-01-01"),
            TaggedRecord("2", ["#scalping", "#afternoon", "#reversal"], "2024-01-02"),
            TaggedRecord("3", ["#swing", "#morning", "#trend"], "2024-01-03"),
            TaggedRecord("4", ["#swing", "#afternoon"], "2024-01-04"),
            TaggedRecord("5", ["#breakout", "#evening"], "2024-01-05"),
        ]

    @staticmethod
    def create_record(record_id, *tags, date=None):
        return TaggedRecord(record_id, list(tags), date)

    @staticmethod
    def ids(records):
        return [record.id for record in records]
