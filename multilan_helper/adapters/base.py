"""
Port interface for translation data sources.

Every upstream payload shape gets one adapter that validates it and
converts it into the canonical TranslationMap and MetadataMap. The rest
of the engine only ever sees the canonical model.

Design Philosophy:
- Adapters validate eagerly: a payload either converts fully or raises
  InvalidFormatError naming the expected shape
- Entry-level gaps (unknown language, empty wording) are skipped, not errors
- Adapters are built once per load; the maps they return are never mutated
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from multilan_helper.errors import InvalidFormatError
from multilan_helper.models import (
    CatalogStore,
    Language,
    MetadataMap,
    MultilanId,
    TranslationMap,
    canonical_id,
)

logger = logging.getLogger(__name__)


class TranslationDataPort(ABC):
    """Abstract base class for all catalog adapters.

    Subclasses set ``source_identifier`` and ``expected_shape`` and
    implement ``matches`` plus the two build methods. The constructor
    runs validation and builds both maps.
    """

    source_identifier: str = "unknown"
    expected_shape: str = "a supported payload"

    def __init__(self, data: Any):
        if not self.matches(data):
            raise InvalidFormatError(f"Invalid data format: expected {self.expected_shape}")
        self._store = CatalogStore.build(
            self._build_translation_map(data),
            self._build_metadata_map(data),
            source=self.source_identifier,
        )
        logger.info(
            "Loaded %d translations from %s (%d with metadata)",
            len(self._store.translations), self.source_identifier, len(self._store.metadata),
        )

    @staticmethod
    @abstractmethod
    def matches(data: Any) -> bool:
        """Structural predicate used for validation and auto-detection."""
        pass

    @abstractmethod
    def _build_translation_map(self, data: Any) -> dict[MultilanId, dict[Language, str]]:
        pass

    def _build_metadata_map(self, data: Any) -> dict:
        return {}

    def get_translation_map(self) -> TranslationMap:
        """Translations keyed by multilan ID, then by language."""
        return self._store.translations

    def get_metadata_map(self) -> MetadataMap:
        """Metadata keyed by multilan ID (may be empty for some sources)."""
        return self._store.metadata

    def get_translation_count(self) -> int:
        return len(self._store.translations)

    def get_source_identifier(self) -> str:
        """Identifier of the data source (e.g., "current-api", "tra-files")."""
        return self.source_identifier

    def to_store(self) -> CatalogStore:
        return self._store


def add_wording(
    entry: dict[Language, str],
    multilan_id: str,
    language: Optional[Language],
    wording: Any,
) -> None:
    """Store one wording, silently dropping unresolved languages and empty text."""
    if language is None:
        logger.debug("Skipping text of %s: unsupported language", multilan_id)
        return
    if not isinstance(wording, str) or not wording:
        logger.debug("Skipping empty %s wording of %s", language, multilan_id)
        return
    entry[language] = wording


def require_id(raw: Any, where: str) -> MultilanId:
    try:
        return canonical_id(raw)
    except InvalidFormatError as e:
        raise InvalidFormatError(f"Invalid data format at {where}: {e}") from e
