"""
Adapter for the paginated ``multilans:search`` response.

Shape::

    {
      "resultList": [
        {"multilan": {"id": 10001, "createdAt": "...", "multilanTextList": [
            {"id": 7, "languageId": 3, "wording": "Submit", "status": "FINAL",
             "sourceLanguageId": 3, "modifiedAt": "...", "modifiedBy": "..."}]},
         "mostRelevantTextId": 7},
        ...
      ],
      "isLastPage": false, "numberOfElements": 1000,
      "totalElements": 25000, "totalPages": 25
    }

Languages are numeric foreign keys resolved through LANGUAGE_ID_MAP.
Fetching pages is the caller's job; ``merge_search_api_responses``
combines whatever pages it was given.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from multilan_helper.adapters.base import TranslationDataPort, add_wording, require_id
from multilan_helper.errors import InvalidFormatError
from multilan_helper.models import (
    Language,
    MultilanId,
    MultilanMetadata,
    parse_status,
)

logger = logging.getLogger(__name__)

LANGUAGE_ID_MAP: dict[int, Language] = {
    1: Language.NL,
    2: Language.FR,
    3: Language.EN,
    4: Language.DE,
}


def language_id_to_code(language_id: Any) -> Optional[Language]:
    """Resolve a numeric language id, or None if it is unknown."""
    if isinstance(language_id, bool) or not isinstance(language_id, int):
        return None
    return LANGUAGE_ID_MAP.get(language_id)


def is_search_api_format(data: Any) -> bool:
    """Check the payload is a search response with a result list and a total."""
    return (
        isinstance(data, dict)
        and isinstance(data.get("resultList"), list)
        and isinstance(data.get("totalElements"), int)
        and not isinstance(data.get("totalElements"), bool)
    )


def merge_search_api_responses(responses: list[dict]) -> dict:
    """Merge fetched pages into one response.

    Result lists are concatenated and ``numberOfElements`` summed.
    ``totalElements`` and ``totalPages`` come from the first page, which
    is authoritative even if later pages are missing.
    """
    if not responses:
        return {
            "resultList": [],
            "isLastPage": True,
            "numberOfElements": 0,
            "totalElements": 0,
            "totalPages": 0,
        }

    merged = {
        "resultList": [],
        "isLastPage": True,
        "numberOfElements": 0,
        "totalElements": responses[0].get("totalElements", 0),
        "totalPages": responses[0].get("totalPages", 0),
    }
    for response in responses:
        merged["resultList"].extend(response.get("resultList", []))
        merged["numberOfElements"] += response.get("numberOfElements", 0)

    logger.debug(
        "Merged %d pages: %d results of %d total",
        len(responses), len(merged["resultList"]), merged["totalElements"],
    )
    return merged


def _relevant_text(multilan: dict, hint: Any) -> Optional[dict]:
    texts = [t for t in multilan["multilanTextList"] if isinstance(t, dict)]
    if hint:
        return next((t for t in texts if t.get("id") == hint), None)
    return texts[0] if texts else None


class SearchApiAdapter(TranslationDataPort):
    """Converts a (merged) search response into the canonical maps."""

    source_identifier = "search-api"
    expected_shape = "search response object with resultList and totalElements"

    @staticmethod
    def matches(data: Any) -> bool:
        return is_search_api_format(data)

    def _items(self, data: dict) -> list[tuple[MultilanId, dict, Any]]:
        items = []
        for position, item in enumerate(data["resultList"]):
            multilan = item.get("multilan") if isinstance(item, dict) else None
            if not isinstance(multilan, dict) or not isinstance(multilan.get("multilanTextList"), list):
                raise InvalidFormatError(
                    f"Invalid data format: resultList[{position}] has no multilan with a multilanTextList"
                )
            multilan_id = require_id(multilan.get("id"), f"resultList[{position}]")
            items.append((multilan_id, multilan, item.get("mostRelevantTextId")))
        return items

    def _build_translation_map(self, data: dict) -> dict[MultilanId, dict[Language, str]]:
        translation_map: dict[MultilanId, dict[Language, str]] = {}
        for multilan_id, multilan, _ in self._items(data):
            entry = translation_map.setdefault(multilan_id, {})
            for text in multilan["multilanTextList"]:
                if not isinstance(text, dict):
                    continue
                add_wording(entry, multilan_id, language_id_to_code(text.get("languageId")), text.get("wording"))
        return translation_map

    def _build_metadata_map(self, data: dict) -> dict[MultilanId, MultilanMetadata]:
        metadata_map = {}
        for multilan_id, multilan, hint in self._items(data):
            relevant = _relevant_text(multilan, hint) or {}
            metadata_map[multilan_id] = MultilanMetadata(
                status=parse_status(relevant.get("status")),
                created_at=multilan.get("createdAt"),
                modified_at=multilan.get("modifiedAt") or relevant.get("modifiedAt"),
                modified_by=multilan.get("modifiedBy") or relevant.get("modifiedBy"),
                source_language=language_id_to_code(relevant.get("sourceLanguageId")),
            )
        return metadata_map
