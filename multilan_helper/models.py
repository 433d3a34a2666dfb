"""
Canonical data model for translation catalogs.

This module defines the types every other component works with:
- Language and MultilanStatus: closed enums, unknown upstream values are dropped
- MultilanId: the canonical string key of one translatable unit
- CatalogStore: the immutable (translations, metadata) snapshot built by an adapter
- Search, bulk-link, match-classification and language-switch records

Design:
- Adapters are the only place raw upstream values are interpreted
- A CatalogStore is never mutated; a refresh builds a new one
- Every record has ``to_dict()`` producing the camelCase wire shape
  consumed by the UI layer
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, NewType, Optional, Union

from multilan_helper.errors import InvalidFormatError


class Language(str, Enum):
    """Supported languages, declared in detection priority order."""
    EN = "en"
    FR = "fr"
    NL = "nl"
    DE = "de"

    def __str__(self) -> str:
        return self.value


SUPPORTED_LANGUAGES: tuple[Language, ...] = tuple(Language)
DEFAULT_LANGUAGE = SUPPORTED_LANGUAGES[0]


class MultilanStatus(str, Enum):
    """Workflow status of a catalog entry."""
    TO_TRANSLATE_INTERNALLY = "TO_TRANSLATE_INTERNALLY"
    TO_TRANSLATE_EXTERNALLY = "TO_TRANSLATE_EXTERNALLY"
    IN_TRANSLATION = "IN_TRANSLATION"
    FINAL = "FINAL"
    DRAFT = "DRAFT"
    FOUR_EYES_CHECK = "FOUR_EYES_CHECK"

    def __str__(self) -> str:
        return self.value


MultilanId = NewType("MultilanId", str)

TranslationEntry = Mapping[Language, str]
TranslationMap = Mapping[MultilanId, TranslationEntry]


def parse_language(value: Any) -> Optional[Language]:
    """Resolve a language code string, or None if it is not supported."""
    if isinstance(value, Language):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Language(value.strip().lower())
    except ValueError:
        return None


def is_language(value: Any) -> bool:
    return parse_language(value) is not None


def parse_status(value: Any) -> Optional[MultilanStatus]:
    if isinstance(value, MultilanStatus):
        return value
    if not isinstance(value, str):
        return None
    try:
        return MultilanStatus(value)
    except ValueError:
        return None


def canonical_id(raw: Any) -> MultilanId:
    """Turn an upstream identifier into a MultilanId.

    Integers (and integral floats from loose JSON) are stringified; digit
    strings (ASCII 0-9 only) are kept as they are. Anything else is a
    format error.
    """
    if isinstance(raw, bool):
        raise InvalidFormatError(f"Invalid multilan id: {raw!r}")
    if isinstance(raw, int):
        return MultilanId(str(raw))
    if isinstance(raw, float) and raw.is_integer():
        return MultilanId(str(int(raw)))
    if isinstance(raw, str) and re.fullmatch(r"[0-9]+", raw.strip()):
        return MultilanId(raw.strip())
    raise InvalidFormatError(f"Invalid multilan id: {raw!r}")


def entry_to_dict(entry: Optional[Mapping[Any, str]]) -> Optional[dict[str, str]]:
    """Plain ``{code: wording}`` copy of a translation entry."""
    if entry is None:
        return None
    return {str(lang): wording for lang, wording in entry.items()}


@dataclass(frozen=True)
class MultilanMetadata:
    """Metadata for one catalog entry. Every field is optional.

    Attributes:
        status: Workflow status of the entry
        created_at: Creation timestamp as sent upstream (ISO string)
        modified_at: Last modification timestamp
        modified_by: Author of the last modification
        source_language: Language the entry was originally written in
    """
    status: Optional[MultilanStatus] = None
    created_at: Optional[str] = None
    modified_at: Optional[str] = None
    modified_by: Optional[str] = None
    source_language: Optional[Language] = None

    def to_dict(self) -> dict:
        data = {
            "status": str(self.status) if self.status else None,
            "createdAt": self.created_at,
            "modifiedAt": self.modified_at,
            "modifiedBy": self.modified_by,
            "sourceLanguageId": str(self.source_language) if self.source_language else None,
        }
        return {k: v for k, v in data.items() if v is not None}


MetadataMap = Mapping[MultilanId, MultilanMetadata]


@dataclass(frozen=True)
class CatalogStore:
    """Immutable snapshot of a loaded catalog.

    ``translations`` and ``metadata`` are read-only views. Metadata may be
    sparse: an ID can have translations and no metadata.
    """
    translations: TranslationMap = field(default_factory=lambda: MappingProxyType({}))
    metadata: MetadataMap = field(default_factory=lambda: MappingProxyType({}))
    source: str = "unknown"

    @classmethod
    def build(
        cls,
        translations: Mapping[str, Mapping[Language, str]],
        metadata: Optional[Mapping[str, MultilanMetadata]] = None,
        source: str = "unknown",
    ) -> CatalogStore:
        """Freeze plain dicts into a new store."""
        frozen = {
            MultilanId(mid): MappingProxyType(dict(entry))
            for mid, entry in translations.items()
        }
        return cls(
            translations=MappingProxyType(frozen),
            metadata=MappingProxyType(dict(metadata or {})),
            source=source,
        )

    def __len__(self) -> int:
        return len(self.translations)

    def __contains__(self, multilan_id: object) -> bool:
        return multilan_id in self.translations

    def get(self, multilan_id: str) -> Optional[TranslationEntry]:
        return self.translations.get(multilan_id)

    def get_metadata(self, multilan_id: str) -> Optional[MultilanMetadata]:
        return self.metadata.get(multilan_id)


# ============================================================================
# Variables and search
# ============================================================================

@dataclass(frozen=True)
class VariableOccurrence:
    """One ``###name###`` token occurrence.

    Attributes:
        name: Variable name between the ### markers
        key: ``name`` when the name is unique in the wording, else ``name_index``
        index: 1-based position among occurrences of the same name
        is_indexed: True if the name occurs more than once
    """
    name: str
    key: str
    index: int
    is_indexed: bool

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "key": self.key,
            "index": self.index,
            "isIndexed": self.is_indexed,
        }


@dataclass
class SearchResult:
    """A catalog entry returned by a search."""
    multilan_id: MultilanId
    translations: TranslationEntry
    score: Optional[float] = None
    variable_occurrences: Optional[list[VariableOccurrence]] = None
    metadata: Optional[MultilanMetadata] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "multilanId": self.multilan_id,
            "translations": entry_to_dict(self.translations),
        }
        if self.score is not None:
            data["score"] = self.score
        if self.variable_occurrences is not None:
            data["variableOccurrences"] = [v.to_dict() for v in self.variable_occurrences]
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data


# ============================================================================
# Bulk linking
# ============================================================================

@dataclass(frozen=True)
class LinkCandidate:
    """A free-text item from the canvas that may be linked to the catalog.

    Attributes:
        node_id: Identity of the item in the host (e.g., a text layer id)
        node_name: Display name of the item
        text: Current text content
        multilan_id: ID the item is already linked to, if any
        is_placeholder: Placeholder items are linked but still eligible for matching
    """
    node_id: str
    node_name: str
    text: str
    multilan_id: Optional[str] = None
    is_placeholder: bool = False

    @property
    def is_linked(self) -> bool:
        return bool(self.multilan_id) and not self.is_placeholder


@dataclass
class ExactMatch:
    node_id: str
    node_name: str
    text: str
    multilan_id: MultilanId

    def to_dict(self) -> dict:
        return {
            "nodeId": self.node_id,
            "nodeName": self.node_name,
            "text": self.text,
            "multilanId": self.multilan_id,
        }


@dataclass
class FuzzyMatch:
    node_id: str
    node_name: str
    text: str
    suggestions: list[SearchResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "nodeId": self.node_id,
            "nodeName": self.node_name,
            "text": self.text,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


@dataclass
class UnmatchedItem:
    node_id: str
    node_name: str
    text: str

    def to_dict(self) -> dict:
        return {"nodeId": self.node_id, "nodeName": self.node_name, "text": self.text}


@dataclass
class BulkMatchResult:
    """Outcome of a bulk auto-link scan."""
    exact_matches: list[ExactMatch] = field(default_factory=list)
    fuzzy_matches: list[FuzzyMatch] = field(default_factory=list)
    unmatched: list[UnmatchedItem] = field(default_factory=list)

    @property
    def total_found(self) -> int:
        return len(self.exact_matches) + len(self.fuzzy_matches)

    def to_dict(self) -> dict:
        return {
            "exactMatches": [m.to_dict() for m in self.exact_matches],
            "fuzzyMatches": [m.to_dict() for m in self.fuzzy_matches],
            "unmatched": [m.to_dict() for m in self.unmatched],
        }


# Single-item classification. ``kind`` is the tag shared with the UI.

@dataclass(frozen=True)
class Linked:
    multilan_id: str
    translations: Optional[TranslationEntry] = None
    metadata: Optional[MultilanMetadata] = None
    kind: str = field(default="linked", init=False)


@dataclass(frozen=True)
class Exact:
    multilan_id: MultilanId
    translations: Optional[TranslationEntry] = None
    kind: str = field(default="exact", init=False)


@dataclass(frozen=True)
class Close:
    suggestions: tuple[SearchResult, ...] = ()
    kind: str = field(default="close", init=False)


@dataclass(frozen=True)
class NoMatch:
    kind: str = field(default="none", init=False)


MatchClassification = Union[Linked, Exact, Close, NoMatch]


# ============================================================================
# Language switching
# ============================================================================

@dataclass(frozen=True)
class TextUpdate:
    """New text for one linked node after a language switch."""
    node_id: str
    multilan_id: str
    text: str
    used_fallback: bool = False


@dataclass
class LanguageSwitchResult:
    """Counts reported back to the UI after a switch.

    ``overflow`` is filled by the caller from its own width measurements.
    """
    success: int = 0
    missing: list[str] = field(default_factory=list)
    overflow: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "missing": list(self.missing),
            "overflow": list(self.overflow),
        }
