"""
Matching and search over a translation catalog.

This module handles:
- Scoring free text against a wording (case-insensitive, 0..1)
- Ranked search by text and by multilan ID
- The reverse wording -> ID index used for exact matching
- Plain lookups of one entry or one wording

Design Philosophy:
- Every function is pure over the mappings it receives
- Functions are total: blank or unmatchable queries give empty results
- Ranking is a stable sort, so equal scores keep catalog order
"""

from __future__ import annotations

import logging
from typing import Optional

from multilan_helper.config import DEFAULT_MATCH_CONFIG
from multilan_helper.models import (
    Language,
    MetadataMap,
    MultilanId,
    SearchResult,
    TranslationEntry,
    TranslationMap,
)
from multilan_helper.variables import merge_variable_occurrences

logger = logging.getLogger(__name__)

EXACT_SCORE = 1.0
CONTAINS_SCORE = 0.7
CONTAINED_SCORE = 0.5
TOKEN_SCORE = 0.3
MIN_TOKEN_LENGTH = 3

ID_CONTAINS_SCORE = 0.8
GLOBAL_ID_EXACT_SCORE = 1.0
GLOBAL_ID_CONTAINS_SCORE = 0.9


def calculate_match_score(query: str, text: str) -> float:
    """Score how well ``text`` matches ``query``.

    Returns:
        1.0 for equality, 0.7 if text contains the query, 0.5 if the
        query contains the text, 0.3 if any query word of three or more
        characters occurs in the text, else 0.0
    """
    if not query or not text:
        return 0.0
    lower_query = query.lower()
    lower_text = text.lower()

    if lower_text == lower_query:
        return EXACT_SCORE
    if lower_query in lower_text:
        return CONTAINS_SCORE
    if lower_text in lower_query:
        return CONTAINED_SCORE
    if any(len(word) >= MIN_TOKEN_LENGTH and word in lower_text for word in lower_query.split()):
        return TOKEN_SCORE
    return 0.0


def _best_text_score(query: str, entry: TranslationEntry) -> float:
    best = 0.0
    for text in entry.values():
        best = max(best, calculate_match_score(query, text))
        if best == EXACT_SCORE:
            break
    return best


def _rank(results: list[SearchResult], limit: int) -> list[SearchResult]:
    results.sort(key=lambda r: r.score, reverse=True)
    return results[:max(limit, 0)]


def search_translations(
    translations: TranslationMap,
    query: str,
    limit: int = DEFAULT_MATCH_CONFIG.search_limit,
) -> list[SearchResult]:
    """Search entries by wording in any language or by partial ID.

    An ID containing the query scores 0.8; the entry keeps the best of
    its ID score and its wording scores.
    """
    if not query or not query.strip():
        return []
    lower_query = query.lower()
    results = []

    for multilan_id, entry in translations.items():
        best = ID_CONTAINS_SCORE if lower_query in multilan_id.lower() else 0.0
        best = max(best, _best_text_score(query, entry))
        if best > 0:
            results.append(SearchResult(multilan_id=multilan_id, translations=entry, score=best))

    return _rank(results, limit)


def search_translations_with_score(
    translations: TranslationMap,
    query: str,
    limit: int = DEFAULT_MATCH_CONFIG.fuzzy_search_limit,
) -> list[SearchResult]:
    """Scored search used for fuzzy link suggestions (every result has a score)."""
    return search_translations(translations, query, limit=limit)


def global_search_translations(
    translations: TranslationMap,
    query: str,
    limit: int = DEFAULT_MATCH_CONFIG.global_search_limit,
    metadata: Optional[MetadataMap] = None,
) -> list[SearchResult]:
    """Search by exact or partial multilan ID as well as by wording.

    An exact ID scores 1.0 and a partial ID 0.9, so typing an ID puts
    that entry first. Each hit carries the variable occurrences of all
    its language variants, and its metadata when ``metadata`` is given.
    """
    if not query or not query.strip():
        return []
    results = []

    for multilan_id, entry in translations.items():
        best = 0.0
        if multilan_id == query:
            best = GLOBAL_ID_EXACT_SCORE
        elif query in multilan_id:
            best = GLOBAL_ID_CONTAINS_SCORE
        best = max(best, _best_text_score(query, entry))
        if best > 0:
            results.append(SearchResult(
                multilan_id=multilan_id,
                translations=entry,
                score=best,
                variable_occurrences=merge_variable_occurrences(entry),
                metadata=metadata.get(multilan_id) if metadata is not None else None,
            ))

    ranked = _rank(results, limit)
    logger.debug("Global search %r: %d hits, returning %d", query, len(results), len(ranked))
    return ranked


def build_text_to_id_map(translations: TranslationMap) -> dict[str, MultilanId]:
    """Build the reverse wording -> ID index for exact matching.

    When the same wording belongs to several IDs the first one in catalog
    order wins; later ones are not reachable through this index.
    """
    text_to_id: dict[str, MultilanId] = {}
    for multilan_id, entry in translations.items():
        for text in entry.values():
            if text not in text_to_id:
                text_to_id[text] = multilan_id
    return text_to_id


def get_translation(
    translations: TranslationMap,
    multilan_id: str,
    language: Language | str,
) -> Optional[str]:
    """Wording of one entry in one language, or None."""
    entry = translations.get(multilan_id)
    if not entry:
        return None
    return entry.get(language) or None


def get_all_translations(
    translations: TranslationMap,
    multilan_id: str,
) -> Optional[TranslationEntry]:
    """All language variants of one entry, or None if the ID is unknown."""
    return translations.get(multilan_id)


def lookup(
    translations: TranslationMap,
    multilan_id: str,
    metadata: Optional[MetadataMap] = None,
) -> Optional[SearchResult]:
    """Resolve one ID into a result with its variables and metadata."""
    entry = get_all_translations(translations, multilan_id)
    if entry is None:
        return None
    return SearchResult(
        multilan_id=MultilanId(multilan_id),
        translations=entry,
        variable_occurrences=merge_variable_occurrences(entry),
        metadata=metadata.get(multilan_id) if metadata is not None else None,
    )
