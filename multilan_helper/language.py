"""
Language detection and language-switch planning.

Detection is a majority vote: every linked item whose current text equals
one stored wording votes for that wording's language. Planning a switch
computes the new text of each linked node; applying it and measuring the
rendered width is left to the host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from multilan_helper.config import DEFAULT_MATCH_CONFIG
from multilan_helper.models import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    Language,
    LanguageSwitchResult,
    TextUpdate,
    TranslationMap,
)
from multilan_helper.search import get_translation
from multilan_helper.variables import replace_variables

logger = logging.getLogger(__name__)


def detect_language(
    translations: TranslationMap,
    linked_items: Iterable[tuple[str, str]],
) -> Language:
    """Detect which language the linked items are currently shown in.

    Args:
        translations: Catalog snapshot
        linked_items: ``(multilan_id, current_text)`` pairs

    Returns:
        The language with strictly the most votes. Ties, no votes and
        no items all give the default language.
    """
    counts = {lang: 0 for lang in SUPPORTED_LANGUAGES}

    for multilan_id, current_text in linked_items:
        entry = translations.get(multilan_id)
        if not entry:
            continue
        # Priority order decides items whose text is identical in two languages
        for lang in SUPPORTED_LANGUAGES:
            if entry.get(lang) == current_text:
                counts[lang] += 1
                break

    best_lang = DEFAULT_LANGUAGE
    best_count = 0
    for lang in SUPPORTED_LANGUAGES:
        if counts[lang] > best_count:
            best_lang, best_count = lang, counts[lang]
        elif counts[lang] == best_count and best_count > 0:
            best_lang = DEFAULT_LANGUAGE
    return best_lang


@dataclass
class LanguageSwitchPlan:
    """Text updates computed for a switch to ``language``."""
    language: Language
    updates: list[TextUpdate] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def result(self, overflow: Iterable[str] = ()) -> LanguageSwitchResult:
        """Result for the UI once the host has applied the updates."""
        return LanguageSwitchResult(
            success=len(self.updates),
            missing=list(self.missing),
            overflow=list(overflow),
        )


def plan_language_switch(
    translations: TranslationMap,
    linked_nodes: Iterable[tuple[str, str]],
    language: Language,
    variable_values: Optional[Mapping[str, Mapping[str, str]]] = None,
    fallback: Language = Language.EN,
) -> LanguageSwitchPlan:
    """Compute the new text of every linked node.

    Args:
        translations: Catalog snapshot
        linked_nodes: ``(node_id, multilan_id)`` pairs
        language: Target language
        variable_values: Optional per-node variable values
        fallback: Language used when the target wording is missing; such
            nodes are also listed in ``missing``

    Returns:
        LanguageSwitchPlan; nodes with neither wording end up in ``skipped``
    """
    plan = LanguageSwitchPlan(language=language)
    variable_values = variable_values or {}

    for node_id, multilan_id in linked_nodes:
        text = get_translation(translations, multilan_id, language)
        used_fallback = False
        if text is None:
            text = get_translation(translations, multilan_id, fallback)
            if text is None:
                plan.skipped.append(node_id)
                continue
            used_fallback = True
            plan.missing.append(node_id)

        values = variable_values.get(node_id)
        if values:
            text = replace_variables(text, values)
        plan.updates.append(TextUpdate(node_id, multilan_id, text, used_fallback))

    logger.info(
        "Switch to %s: %d updates, %d missing, %d skipped",
        language, len(plan.updates), len(plan.missing), len(plan.skipped),
    )
    return plan


def detect_overflow(
    widths: Mapping[str, tuple[float, float]],
    multiplier: float = DEFAULT_MATCH_CONFIG.overflow_multiplier,
) -> list[str]:
    """Nodes whose measured width grew beyond ``multiplier`` times the original.

    Args:
        widths: ``{node_id: (width_before, width_after)}`` measured by the host
    """
    return [
        node_id for node_id, (before, after) in widths.items()
        if after > before * multiplier
    ]
