"""
Multilan Helper: translation resolution engine.

Resolves on-screen text and IDs against a multilingual translation
catalog so text can be swapped between languages.

Core components:
1. Format adapters normalizing upstream payloads into a CatalogStore
2. Matching and search with scored ranking
3. ###variable### templates with per-occurrence values
4. Bulk linking and majority-vote language detection
"""

__version__ = "0.1.0"

from multilan_helper.adapters import create_adapter, merge_search_api_responses
from multilan_helper.catalog import CatalogHolder, load_catalog
from multilan_helper.config import MatchConfig
from multilan_helper.language import detect_language, plan_language_switch
from multilan_helper.linking import bulk_auto_link, detect_match
from multilan_helper.models import CatalogStore, Language, LinkCandidate
from multilan_helper.search import (
    build_text_to_id_map,
    calculate_match_score,
    global_search_translations,
    search_translations,
)
from multilan_helper.variables import (
    extract_variable_occurrences,
    extract_variables,
    replace_variables,
)

__all__ = [
    "CatalogHolder",
    "CatalogStore",
    "Language",
    "LinkCandidate",
    "MatchConfig",
    "build_text_to_id_map",
    "bulk_auto_link",
    "calculate_match_score",
    "create_adapter",
    "detect_language",
    "detect_match",
    "extract_variable_occurrences",
    "extract_variables",
    "global_search_translations",
    "load_catalog",
    "merge_search_api_responses",
    "plan_language_switch",
    "replace_variables",
    "search_translations",
]
