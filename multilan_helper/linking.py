"""
Bulk linking of free-text items to catalog entries.

Each unlinked item goes through two passes:
1. Exact pass: its trimmed text is looked up in the reverse wording index
2. Fuzzy pass (exact miss only): scored search over the whole catalog;
   a top score at or above the fuzzy threshold yields suggestions

Items with blank text are ignored. Items already linked to an ID (and
not flagged as placeholders) are left alone.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from multilan_helper.config import DEFAULT_MATCH_CONFIG, MatchConfig
from multilan_helper.models import (
    BulkMatchResult,
    Close,
    Exact,
    ExactMatch,
    FuzzyMatch,
    LinkCandidate,
    Linked,
    MatchClassification,
    MetadataMap,
    MultilanId,
    NoMatch,
    SearchResult,
    TranslationMap,
    UnmatchedItem,
)
from multilan_helper.search import build_text_to_id_map, search_translations_with_score

logger = logging.getLogger(__name__)


def select_unlinked(candidates: Iterable[LinkCandidate]) -> list[LinkCandidate]:
    """Drop candidates that are already linked (placeholders stay)."""
    return [c for c in candidates if not c.is_linked]


def _fuzzy_suggestions(
    translations: TranslationMap,
    text: str,
    config: MatchConfig,
) -> list[SearchResult]:
    results = search_translations_with_score(translations, text, limit=config.fuzzy_search_limit)
    if results and results[0].score >= config.fuzzy_threshold:
        return results[:config.max_suggestions]
    return []


def _classify(
    translations: TranslationMap,
    text_to_id: dict[str, MultilanId],
    text: str,
    config: MatchConfig,
) -> MatchClassification:
    multilan_id = text_to_id.get(text)
    if multilan_id:
        return Exact(multilan_id=multilan_id, translations=translations.get(multilan_id))
    suggestions = _fuzzy_suggestions(translations, text, config)
    if suggestions:
        return Close(suggestions=tuple(suggestions))
    return NoMatch()


def bulk_auto_link(
    translations: TranslationMap,
    candidates: Iterable[LinkCandidate],
    config: Optional[MatchConfig] = None,
) -> BulkMatchResult:
    """Classify items as exact matches, fuzzy matches or unmatched.

    Args:
        translations: Catalog to match against
        candidates: Items from the host; linked ones are skipped
        config: Thresholds and limits (defaults to MatchConfig())

    Returns:
        BulkMatchResult with at most ``max_suggestions`` per fuzzy match
    """
    config = config or DEFAULT_MATCH_CONFIG
    result = BulkMatchResult()
    text_to_id = build_text_to_id_map(translations)

    for candidate in select_unlinked(candidates):
        text = candidate.text.strip()
        if not text:
            continue

        match = _classify(translations, text_to_id, text, config)
        if isinstance(match, Exact):
            result.exact_matches.append(ExactMatch(
                node_id=candidate.node_id,
                node_name=candidate.node_name,
                text=text,
                multilan_id=match.multilan_id,
            ))
        elif isinstance(match, Close):
            result.fuzzy_matches.append(FuzzyMatch(
                node_id=candidate.node_id,
                node_name=candidate.node_name,
                text=text,
                suggestions=list(match.suggestions),
            ))
        else:
            result.unmatched.append(UnmatchedItem(
                node_id=candidate.node_id,
                node_name=candidate.node_name,
                text=text,
            ))

    logger.info(
        "Bulk auto-link: %d exact, %d fuzzy, %d unmatched",
        len(result.exact_matches), len(result.fuzzy_matches), len(result.unmatched),
    )
    return result


def detect_match(
    translations: TranslationMap,
    candidate: LinkCandidate,
    metadata: Optional[MetadataMap] = None,
    config: Optional[MatchConfig] = None,
) -> MatchClassification:
    """Classify a single item.

    An item already linked to an ID is reported as Linked with that ID's
    current translations and metadata (None if the ID is not in the
    catalog); otherwise the exact and fuzzy passes run as in
    ``bulk_auto_link``.
    """
    config = config or DEFAULT_MATCH_CONFIG
    if candidate.is_linked:
        return Linked(
            multilan_id=candidate.multilan_id,
            translations=translations.get(candidate.multilan_id),
            metadata=metadata.get(candidate.multilan_id) if metadata is not None else None,
        )

    text = candidate.text.strip()
    if not text:
        return NoMatch()
    return _classify(translations, build_text_to_id_map(translations), text, config)
