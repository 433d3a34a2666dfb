"""
Variable template engine for ``###name###`` tokens in wordings.

Wordings in the catalog may contain variables such as
``Hello ###name###, you owe ###amount###``. This module:
- Extracts variable names and individual occurrences
- Replaces occurrences with caller-supplied values
- Reconciles occurrences across the language variants of one entry

Design:
- A name that repeats inside one wording gets per-occurrence keys
  (``amount_1``, ``amount_2``) so each repeat can receive its own value
- Replacement never raises; a token without a value stays in the text
  so missing data is visible to the end user
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any, Mapping, Optional

from multilan_helper.models import VariableOccurrence

# ###identifier###
VARIABLE_PATTERN = re.compile(r'###(\w+)###')


def extract_variables(text: str) -> list[str]:
    """Return unique variable names in first-seen order."""
    names: list[str] = []
    for match in VARIABLE_PATTERN.finditer(text or ""):
        name = match.group(1)
        if name not in names:
            names.append(name)
    return names


def has_variables(text: str) -> bool:
    return bool(text) and VARIABLE_PATTERN.search(text) is not None


def _occurrence_key(name: str, index: int, total: int) -> str:
    return f"{name}_{index}" if total > 1 else name


def extract_variable_occurrences(text: str) -> list[VariableOccurrence]:
    """Return every variable occurrence with its per-name index.

    Example:
        >>> [o.key for o in extract_variable_occurrences("###a### and ###a###")]
        ['a_1', 'a_2']
    """
    names = VARIABLE_PATTERN.findall(text or "")
    totals = Counter(names)
    seen: dict[str, int] = {}
    occurrences = []
    for name in names:
        seen[name] = seen.get(name, 0) + 1
        index = seen[name]
        occurrences.append(VariableOccurrence(
            name=name,
            key=_occurrence_key(name, index, totals[name]),
            index=index,
            is_indexed=totals[name] > 1,
        ))
    return occurrences


def _resolve_value(values: Mapping[str, Any], name: str, index: int) -> Optional[str]:
    for key in (f"{name}_{index}", name):
        value = values.get(key)
        if value is not None and value != "":
            return str(value)
    return None


def replace_variables(text: str, values: Mapping[str, Any]) -> str:
    """Substitute variable tokens with values.

    The nth occurrence of ``name`` takes ``values["name_n"]`` if present,
    otherwise ``values["name"]``. Non-string values are converted with
    ``str()``. Empty values count as missing and the token is left unchanged.

    Args:
        text: Wording containing ``###name###`` tokens
        values: Values keyed by occurrence key or plain name

    Returns:
        Text with every resolvable token replaced
    """
    if not text:
        return text
    counters: dict[str, int] = {}

    def replacer(match: re.Match) -> str:
        name = match.group(1)
        counters[name] = counters.get(name, 0) + 1
        value = _resolve_value(values, name, counters[name])
        return match.group(0) if value is None else value

    return VARIABLE_PATTERN.sub(replacer, text)


def merge_variable_occurrences(translations: Mapping[object, str]) -> list[VariableOccurrence]:
    """Occurrences covering every language variant of one entry.

    Languages do not always repeat a placeholder the same number of times,
    so each name gets the maximum count seen in any single variant.
    Names keep their first-seen order across variants.
    """
    max_counts: dict[str, int] = {}
    for wording in translations.values():
        for name, count in Counter(VARIABLE_PATTERN.findall(wording or "")).items():
            if count > max_counts.get(name, 0):
                max_counts[name] = count

    occurrences = []
    for name, total in max_counts.items():
        for index in range(1, total + 1):
            occurrences.append(VariableOccurrence(
                name=name,
                key=_occurrence_key(name, index, total),
                index=index,
                is_indexed=total > 1,
            ))
    return occurrences


def unresolved_keys(text: str, values: Mapping[str, Any]) -> list[str]:
    """Occurrence keys of ``text`` that ``values`` leaves unfilled."""
    return [
        o.key for o in extract_variable_occurrences(text)
        if _resolve_value(values, o.name, o.index) is None
    ]
