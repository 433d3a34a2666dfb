"""
Tests for bulk linking and single-item match detection.

Tests cover:
- Exact, fuzzy and unmatched classification
- Skipping blank and already-linked items
- Placeholder items
- Threshold and suggestion limits
- The four single-item classification states
"""

import pytest

from multilan_helper.config import MatchConfig
from multilan_helper.linking import bulk_auto_link, detect_match, select_unlinked
from multilan_helper.models import Close, Exact, LinkCandidate, Linked, NoMatch


def candidate(node_id, text, multilan_id=None, is_placeholder=False):
    return LinkCandidate(
        node_id=node_id,
        node_name=f"Text {node_id}",
        text=text,
        multilan_id=multilan_id,
        is_placeholder=is_placeholder,
    )


class TestBulkAutoLink:
    """Test classifying a batch of free-text items."""

    def test_three_buckets(self, translations):
        """Exact wording, near wording and unrelated text land in separate buckets."""
        items = [
            candidate("1", "Submit"),
            candidate("2", "Submit Now"),
            candidate("3", "xyz123"),
        ]
        result = bulk_auto_link(translations, items)

        assert [m.multilan_id for m in result.exact_matches] == ["10001"]
        assert len(result.fuzzy_matches) == 1
        assert result.fuzzy_matches[0].suggestions[0].multilan_id == "10001"
        assert [u.node_id for u in result.unmatched] == ["3"]
        assert result.total_found == 2

    def test_exact_in_any_language(self, translations):
        result = bulk_auto_link(translations, [candidate("1", "Abbrechen")])
        assert result.exact_matches[0].multilan_id == "10002"

    def test_text_is_trimmed(self, translations):
        result = bulk_auto_link(translations, [candidate("1", "  Submit \n")])
        assert result.exact_matches[0].text == "Submit"

    def test_exact_match_is_case_sensitive(self, translations):
        """Lowercase text misses the exact pass but is a top fuzzy suggestion."""
        result = bulk_auto_link(translations, [candidate("1", "submit")])

        assert result.exact_matches == []
        assert result.fuzzy_matches[0].suggestions[0].score == 1.0

    def test_blank_items_ignored(self, translations):
        """Blank items appear in no bucket."""
        result = bulk_auto_link(translations, [candidate("1", ""), candidate("2", "   ")])
        assert result.to_dict() == {"exactMatches": [], "fuzzyMatches": [], "unmatched": []}

    def test_linked_items_skipped(self, translations):
        result = bulk_auto_link(translations, [candidate("1", "Submit", multilan_id="10001")])
        assert result.total_found == 0
        assert result.unmatched == []

    def test_placeholders_are_matched(self, translations):
        """A placeholder link does not stop the item from being matched."""
        item = candidate("1", "Cancel", multilan_id="99999", is_placeholder=True)
        result = bulk_auto_link(translations, [item])
        assert result.exact_matches[0].multilan_id == "10002"

    def test_suggestion_limit(self):
        translations = {str(i): {"en": f"Save item {i}"} for i in range(10)}
        result = bulk_auto_link(translations, [candidate("1", "Save")])
        assert len(result.fuzzy_matches[0].suggestions) == 3

    def test_threshold(self, translations):
        """Raising the threshold turns a weak fuzzy match into unmatched."""
        items = [candidate("1", "welcome home")]

        loose = bulk_auto_link(translations, items)
        strict = bulk_auto_link(translations, items, MatchConfig(fuzzy_threshold=0.5))

        assert loose.fuzzy_matches[0].suggestions[0].score == 0.3
        assert strict.fuzzy_matches == []
        assert len(strict.unmatched) == 1

    def test_empty_catalog(self):
        result = bulk_auto_link({}, [candidate("1", "Submit")])
        assert len(result.unmatched) == 1

    def test_result_to_dict(self, translations):
        result = bulk_auto_link(translations, [candidate("1", "Submit")])
        assert result.to_dict()["exactMatches"] == [
            {"nodeId": "1", "nodeName": "Text 1", "text": "Submit", "multilanId": "10001"}
        ]

    def test_select_unlinked(self):
        items = [
            candidate("1", "a"),
            candidate("2", "b", multilan_id="10001"),
            candidate("3", "c", multilan_id="10001", is_placeholder=True),
        ]
        assert [c.node_id for c in select_unlinked(items)] == ["1", "3"]


class TestDetectMatch:
    """Test classifying a single item."""

    def test_linked(self, store):
        result = detect_match(store.translations, candidate("1", "anything", multilan_id="10001"), store.metadata)

        assert isinstance(result, Linked)
        assert result.kind == "linked"
        assert result.translations["en"] == "Submit"
        assert result.metadata is store.metadata["10001"]

    def test_linked_to_unknown_id(self, store):
        result = detect_match(store.translations, candidate("1", "x", multilan_id="424242"))
        assert isinstance(result, Linked)
        assert result.translations is None

    def test_exact(self, translations):
        result = detect_match(translations, candidate("1", "Welkom terug"))

        assert isinstance(result, Exact)
        assert result.kind == "exact"
        assert result.multilan_id == "10004"

    def test_close(self, translations):
        result = detect_match(translations, candidate("1", "Welcome"))

        assert isinstance(result, Close)
        assert result.kind == "close"
        assert result.suggestions[0].multilan_id == "10004"

    @pytest.mark.parametrize("text", ["xyz123", "", "   "])
    def test_none(self, translations, text):
        result = detect_match(translations, candidate("1", text))
        assert isinstance(result, NoMatch)
        assert result.kind == "none"


class TestMatchConfig:
    """Test the tunable matching constants."""

    def test_defaults(self):
        config = MatchConfig()
        assert config.to_dict() == {
            "fuzzy_threshold": 0.3,
            "max_suggestions": 3,
            "fuzzy_search_limit": 10,
            "search_limit": 20,
            "global_search_limit": 30,
            "overflow_multiplier": 1.2,
        }

    def test_max_suggestions_override(self):
        translations = {str(i): {"en": f"Save item {i}"} for i in range(10)}
        result = bulk_auto_link(
            translations,
            [candidate("1", "Save")],
            MatchConfig(max_suggestions=5),
        )
        assert len(result.fuzzy_matches[0].suggestions) == 5
