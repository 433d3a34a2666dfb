"""
Tests for the ###variable### template engine.

Tests cover:
- Name and occurrence extraction
- Per-occurrence and fallback replacement
- Missing and empty values
- Occurrence merging across language variants
"""

import pytest

from multilan_helper.variables import (
    extract_variable_occurrences,
    extract_variables,
    has_variables,
    merge_variable_occurrences,
    replace_variables,
    unresolved_keys,
)


class TestExtraction:
    """Test variable name and occurrence extraction."""

    def test_unique_names_in_order(self):
        """Repeated names are reported once, in first-seen order."""
        text = "###b### then ###a### then ###b###"
        assert extract_variables(text) == ["b", "a"]

    def test_no_variables(self):
        assert extract_variables("Plain text") == []
        assert extract_variables("") == []
        assert not has_variables("Plain text")
        assert has_variables("Hi ###name###")

    def test_malformed_tokens_ignored(self):
        """Only ###word### counts as a variable."""
        assert extract_variables("## name ## and ###first name### and ######") == []

    def test_single_occurrence_not_indexed(self):
        occurrences = extract_variable_occurrences("Hello ###name###")

        assert len(occurrences) == 1
        assert occurrences[0].key == "name"
        assert occurrences[0].index == 1
        assert not occurrences[0].is_indexed

    def test_repeated_occurrences_indexed(self):
        """A repeated name gets name_1, name_2... keys."""
        text = "###amount### of ###currency### plus ###amount###"
        keys = [o.key for o in extract_variable_occurrences(text)]
        assert keys == ["amount_1", "currency", "amount_2"]

    def test_occurrence_to_dict(self):
        occurrence = extract_variable_occurrences("###x### ###x###")[1]
        assert occurrence.to_dict() == {"name": "x", "key": "x_2", "index": 2, "isIndexed": True}

    def test_unresolved_keys(self):
        """Keys are reported per occurrence, not per name."""
        text = "###a### ###b### ###a###"
        assert unresolved_keys(text, {}) == ["a_1", "b", "a_2"]
        assert unresolved_keys(text, {"a_1": "5", "b": "x"}) == ["a_2"]
        assert unresolved_keys(text, {"a": "5", "b": "x"}) == []


class TestReplacement:
    """Test substituting values into a wording."""

    def test_simple_replacement(self):
        assert replace_variables("Hello ###name###", {"name": "John"}) == "Hello John"

    def test_indexed_values(self):
        """Each occurrence takes its own indexed value."""
        text = "###amount### and ###amount###"
        values = {"amount_1": "5", "amount_2": "10"}
        assert replace_variables(text, values) == "5 and 10"

    def test_indexed_falls_back_to_plain_name(self):
        text = "###amount### and ###amount###"
        values = {"amount_1": "5", "amount": "7"}
        assert replace_variables(text, values) == "5 and 7"

    def test_missing_value_keeps_token(self):
        """Unresolved tokens stay visible in the output."""
        text = "Hello ###name###, you have ###count### messages"
        assert replace_variables(text, {"name": "Ana"}) == "Hello Ana, you have ###count### messages"

    def test_empty_value_counts_as_missing(self):
        assert replace_variables("Hi ###name###", {"name": ""}) == "Hi ###name###"

    def test_no_values(self):
        assert replace_variables("Hi ###name###", {}) == "Hi ###name###"

    def test_empty_text(self):
        assert replace_variables("", {"name": "x"}) == ""

    def test_value_containing_token_syntax_not_reexpanded(self):
        result = replace_variables("###a### ###b###", {"a": "###b###", "b": "B"})
        assert result == "###b### B"

    def test_numeric_values(self):
        """Non-string values are rendered with str()."""
        assert replace_variables("Pay ###a###", {"a": 5}) == "Pay 5"
        assert replace_variables("###n### left", {"n": 0}) == "0 left"
        assert replace_variables("###x###", {"x": 1.5}) == "1.5"

    def test_none_value_counts_as_missing(self):
        assert replace_variables("Hi ###name###", {"name": None}) == "Hi ###name###"

    @pytest.mark.parametrize("value", ["$1", "\\1", "\\g<0>"])
    def test_values_inserted_literally(self, value):
        assert replace_variables("###v###", {"v": value}) == value


class TestMerging:
    """Test occurrence reconciliation across languages."""

    def test_max_count_per_name(self):
        """A name repeated in only one language is still indexed."""
        entry = {
            "en": "###n### items",
            "fr": "###n### articles (###n###)",
            "nl": "###n### items",
        }
        keys = [o.key for o in merge_variable_occurrences(entry)]
        assert keys == ["n_1", "n_2"]

    def test_union_of_names(self):
        entry = {"en": "###a###", "fr": "###b### ###a###"}
        names = [o.name for o in merge_variable_occurrences(entry)]
        assert names == ["a", "b"]

    def test_no_variables(self):
        assert merge_variable_occurrences({"en": "Submit", "fr": "Soumettre"}) == []


class TestOccurrenceRoundTrip:
    """Values keyed by extracted occurrence keys fill every token."""

    @pytest.mark.parametrize("text", [
        "Hello ###name###",
        "###a### and ###a### and ###b###",
        "###x######y### ###x###",
        "No variables here",
    ])
    def test_every_occurrence_substituted(self, text):
        occurrences = extract_variable_occurrences(text)
        values = {o.key: f"<{o.key}>" for o in occurrences}

        rendered = replace_variables(text, values)

        assert not has_variables(rendered)
        for o in occurrences:
            assert f"<{o.key}>" in rendered
        assert unresolved_keys(text, values) == []

    @pytest.mark.parametrize("text", [
        "Hello ###name###",
        "###a### and ###a### and ###b###",
    ])
    def test_reapplying_values_is_idempotent(self, text):
        values = {o.key: o.key.upper() for o in extract_variable_occurrences(text)}
        once = replace_variables(text, values)
        assert replace_variables(once, values) == once
