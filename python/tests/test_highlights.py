import unittest

from tag_search.highlights import (
    SearchHighlight,
    extract_query_tags,
    get_search_highlights,
)
from tag_search.query_nodes import MATCH_ALL, NotNode, TagNode
from tag_search.query_parser import parse_query
from .test_utils import BaseTestCase, RecordFactory


class TestExtractQueryTags(BaseTestCase):
    """Test cases for collecting the tags a query references."""

    def test_collects_every_leaf_once_in_order(self):
        node = parse_query("#b AND (NOT #a OR #b) AND #c")

        self.assertEqual(extract_query_tags(node), ["#b", "#a", "#c"])

    def test_includes_negated_tags(self):
        self.assertEqual(extract_query_tags(NotNode(TagNode("#x"))), ["#x"])

    def test_match_all_has_no_tags(self):
        self.assertEqual(extract_query_tags(MATCH_ALL), [])

    def test_skips_empty_tag(self):
        self.assertEqual(extract_query_tags(TagNode("")), [])


class TestSearchHighlights(BaseTestCase):
    """Test cases for per-record highlight extraction."""

    def setUp(self):
        super().setUp()
        self.trades = RecordFactory.create_trades()

    def test_returns_matching_tags_per_record(self):
        highlights = get_search_highlights(
            self.trades[:2], ["#scalping", "#morning"]
        )

        self.assertEqual(
            highlights,
            [
                SearchHighlight("1", ["#scalping", "#morning"]),
                SearchHighlight("2", ["#scalping"]),
            ],
        )

    def test_record_without_matching_tags(self):
        highlights = get_search_highlights([self.trades[4]], ["#scalping"])

        self.assertEqual(highlights, [SearchHighlight("5", [])])

    def test_uses_record_tag_order_and_normalization(self):
        record = {"id": 9, "tags": ["Morning", "#TREND", "#morning"]}

        highlights = get_search_highlights([record], ["#trend", "#morning"])

        self.assertEqual(highlights[0].record_id, 9)
        self.assertEqual(highlights[0].matching_tags, ["#morning", "#trend"])


if __name__ == "__main__":
    unittest.main()
