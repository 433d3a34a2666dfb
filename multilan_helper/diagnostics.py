"""Health checks for a loaded catalog.

These checks surface data problems that the engine tolerates silently,
so users get actionable guidance instead of puzzling search results.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List

from multilan_helper.models import SUPPORTED_LANGUAGES, CatalogStore
from multilan_helper.variables import extract_variables


@dataclass
class CheckResult:
    """Represents a diagnostic check with status and human-readable detail."""

    name: str
    status: str  # ok | warn | error
    detail: str


def _preview(ids: List[str], limit: int = 5) -> str:
    shown = ", ".join(ids[:limit])
    return shown + (f" (+{len(ids) - limit} more)" if len(ids) > limit else "")


def _check_not_empty(store: CatalogStore) -> CheckResult:
    if len(store) == 0:
        return CheckResult("Catalog", "error", f"No translations loaded from {store.source}")
    return CheckResult("Catalog", "ok", f"{len(store)} entries from {store.source}")


def _check_language_coverage(store: CatalogStore) -> CheckResult:
    incomplete = [
        mid for mid, entry in store.translations.items()
        if any(lang not in entry for lang in SUPPORTED_LANGUAGES)
    ]
    if incomplete:
        return CheckResult(
            "Language coverage",
            "warn",
            f"{len(incomplete)} entries miss at least one language: {_preview(incomplete)}",
        )
    return CheckResult("Language coverage", "ok", "Every entry has all languages")


def _check_duplicate_wordings(store: CatalogStore) -> CheckResult:
    owners: Dict[str, List[str]] = defaultdict(list)
    for mid, entry in store.translations.items():
        for wording in set(entry.values()):
            owners[wording].append(mid)
    shadowed = {w: ids for w, ids in owners.items() if len(ids) > 1}
    if shadowed:
        sample = next(iter(shadowed.items()))
        return CheckResult(
            "Duplicate wordings",
            "warn",
            f"{len(shadowed)} wordings belong to several IDs; exact matching uses the first "
            f"(e.g. {sample[0]!r}: {_preview(sample[1])})",
        )
    return CheckResult("Duplicate wordings", "ok", "Every wording maps to a single ID")


def _check_variables(store: CatalogStore) -> CheckResult:
    mismatched = []
    for mid, entry in store.translations.items():
        name_sets = {frozenset(extract_variables(w)) for w in entry.values()}
        if len(name_sets) > 1:
            mismatched.append(mid)
    if mismatched:
        return CheckResult(
            "Variables",
            "warn",
            f"{len(mismatched)} entries use different variables per language: {_preview(mismatched)}",
        )
    return CheckResult("Variables", "ok", "Variables agree across languages")


def _check_metadata(store: CatalogStore) -> CheckResult:
    if not store.metadata:
        return CheckResult("Metadata", "warn", f"{store.source} provides no metadata")
    covered = sum(1 for mid in store.translations if mid in store.metadata)
    return CheckResult("Metadata", "ok", f"{covered}/{len(store)} entries have metadata")


def collect_diagnostics(store: CatalogStore) -> List[CheckResult]:
    """Run a series of lightweight checks and return their results."""

    checks: List[CheckResult] = [_check_not_empty(store)]
    if len(store) == 0:
        return checks

    checks.append(_check_language_coverage(store))
    checks.append(_check_duplicate_wordings(store))
    checks.append(_check_variables(store))
    checks.append(_check_metadata(store))
    return checks


def summarize_checks(checks: List[CheckResult]) -> Dict[str, int]:
    summary = {"ok": 0, "warn": 0, "error": 0}
    for c in checks:
        if c.status in summary:
            summary[c.status] += 1
    return summary
