"""
Loading catalogs from disk and holding the current snapshot.

The engine never keeps a global "current catalog". A host that needs one
owns a CatalogHolder; refreshing builds a new CatalogStore and swaps the
holder's single reference, so readers never see a half-built catalog.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from multilan_helper.adapters import (
    TraFileAdapter,
    create_adapter,
    decode_tra_bytes,
    merge_search_api_responses,
)
from multilan_helper.errors import CatalogNotLoadedError, InvalidFormatError
from multilan_helper.models import SUPPORTED_LANGUAGES, CatalogStore

logger = logging.getLogger(__name__)

# Per-language file names tried in order inside a .tra directory
TRA_FILE_PATTERNS = ("{lang}-BE.tra", "{lang}.tra")


def read_json(path: str | Path) -> Any:
    path = Path(path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidFormatError(f"Invalid data format: {path} is not valid JSON ({e})") from e


def load_catalog(path: str | Path, adapter_type: Optional[str] = None) -> CatalogStore:
    """Load a JSON catalog export (any registered shape) into a store."""
    path = Path(path)
    if path.is_dir():
        return load_tra_directory(path)
    store = create_adapter(read_json(path), adapter_type).to_store()
    logger.info("Catalog %s: %d entries (%s)", path.name, len(store), store.source)
    return store


def load_pages(paths: Iterable[str | Path]) -> CatalogStore:
    """Load several fetched search-api pages as one catalog."""
    pages = [read_json(p) for p in paths]
    return create_adapter(merge_search_api_responses(pages), "search-api").to_store()


def read_tra_files(directory: str | Path) -> dict[str, str]:
    """Read the per-language .tra files of a directory as text.

    A missing language file yields empty content.
    """
    directory = Path(directory)
    contents = {}
    for lang in SUPPORTED_LANGUAGES:
        for pattern in TRA_FILE_PATTERNS:
            candidate = directory / pattern.format(lang=lang.value)
            if candidate.exists():
                contents[lang.value] = decode_tra_bytes(candidate.read_bytes(), candidate.name)
                break
        else:
            logger.warning("No .tra file for %s in %s", lang, directory)
            contents[lang.value] = ""
    return contents


def load_tra_directory(directory: str | Path) -> CatalogStore:
    return TraFileAdapter(read_tra_files(directory)).to_store()


class CatalogHolder:
    """Owns the catalog snapshot a host is currently working with.

    Usage:
        holder = CatalogHolder()
        holder.load("api-data.json")
        results = search_translations(holder.current.translations, "Submit")
        holder.refresh(fetched_payload)   # swaps in a brand-new store
    """

    def __init__(self, store: Optional[CatalogStore] = None):
        self._store = store
        self.generation = 0 if store is None else 1

    @property
    def is_loaded(self) -> bool:
        return self._store is not None

    @property
    def current(self) -> CatalogStore:
        if self._store is None:
            raise CatalogNotLoadedError("No catalog loaded yet")
        return self._store

    def swap(self, store: CatalogStore) -> CatalogStore:
        """Replace the held store, returning the previous one (or an empty store)."""
        previous = self._store
        self._store = store
        self.generation += 1
        logger.info("Catalog swapped: generation %d, %d entries", self.generation, len(store))
        return previous if previous is not None else CatalogStore()

    def refresh(self, payload: Any, adapter_type: Optional[str] = None) -> CatalogStore:
        """Build a new store from an already-fetched payload and swap it in.

        If the payload is rejected the current store stays in place.
        """
        store = create_adapter(payload, adapter_type).to_store()
        self.swap(store)
        return store

    def load(self, path: str | Path, adapter_type: Optional[str] = None) -> CatalogStore:
        store = load_catalog(path, adapter_type)
        self.swap(store)
        return store
