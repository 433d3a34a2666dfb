"""
Adapter for the flat catalog export.

Shape::

    [
      {"id": 10001,
       "status": "FINAL", "createdAt": "...", "modifiedAt": "...", "modifiedBy": "...",
       "multilanTextList": [
         {"id": 1, "languageId": "en", "wording": "Submit", "sourceLanguageId": "en"},
         ...
       ]},
      ...
    ]
"""

from __future__ import annotations

from typing import Any

from multilan_helper.adapters.base import TranslationDataPort, add_wording, require_id
from multilan_helper.errors import InvalidFormatError
from multilan_helper.models import (
    Language,
    MultilanId,
    MultilanMetadata,
    parse_language,
    parse_status,
)


def _is_record(item: Any) -> bool:
    return (
        isinstance(item, dict)
        and isinstance(item.get("id"), int)
        and not isinstance(item.get("id"), bool)
        and isinstance(item.get("multilanTextList"), list)
    )


def is_current_api_format(data: Any) -> bool:
    """Check the payload is a list whose first record looks like a multilan.

    An empty list is a valid (empty) catalog.
    """
    if not isinstance(data, list):
        return False
    if not data:
        return True
    return _is_record(data[0])


def is_valid_current_api_entry(entry: Any) -> bool:
    """Full check of one record, including each text entry."""
    if not _is_record(entry):
        return False
    return all(
        isinstance(text, dict)
        and isinstance(text.get("languageId"), str)
        and isinstance(text.get("wording"), str)
        for text in entry["multilanTextList"]
    )


class CurrentApiAdapter(TranslationDataPort):
    """Converts the flat record array into the canonical maps."""

    source_identifier = "current-api"
    expected_shape = "list of {id, multilanTextList} records"

    @staticmethod
    def matches(data: Any) -> bool:
        return is_current_api_format(data)

    def _records(self, data: list) -> list[tuple[MultilanId, dict]]:
        records = []
        for position, item in enumerate(data):
            if not _is_record(item):
                raise InvalidFormatError(
                    f"Invalid data format: record {position} is not an {{id, multilanTextList}} object"
                )
            records.append((require_id(item["id"], f"record {position}"), item))
        return records

    def _build_translation_map(self, data: list) -> dict[MultilanId, dict[Language, str]]:
        translation_map: dict[MultilanId, dict[Language, str]] = {}
        for multilan_id, item in self._records(data):
            entry = translation_map.setdefault(multilan_id, {})
            for text in item["multilanTextList"]:
                if not isinstance(text, dict):
                    continue
                add_wording(entry, multilan_id, parse_language(text.get("languageId")), text.get("wording"))
        return translation_map

    def _build_metadata_map(self, data: list) -> dict[MultilanId, MultilanMetadata]:
        metadata_map = {}
        for multilan_id, item in self._records(data):
            # All texts of a record share the source language, take the first
            texts = item["multilanTextList"]
            first = texts[0] if texts and isinstance(texts[0], dict) else {}
            metadata_map[multilan_id] = MultilanMetadata(
                status=parse_status(item.get("status")),
                created_at=item.get("createdAt"),
                modified_at=item.get("modifiedAt"),
                modified_by=item.get("modifiedBy"),
                source_language=parse_language(first.get("sourceLanguageId")),
            )
        return metadata_map
