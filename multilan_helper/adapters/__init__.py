"""
Adapter registry.

Detection walks an ordered list of (predicate, factory) registrations
and takes the first predicate that accepts the payload. If none does,
detection fails with AdapterDetectionError instead of guessing.

Usage:
    adapter = create_adapter(json.loads(raw))
    store = adapter.to_store()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from multilan_helper.adapters.base import TranslationDataPort
from multilan_helper.adapters.current_api import CurrentApiAdapter, is_current_api_format
from multilan_helper.adapters.search_api import (
    LANGUAGE_ID_MAP,
    SearchApiAdapter,
    is_search_api_format,
    language_id_to_code,
    merge_search_api_responses,
)
from multilan_helper.adapters.tra_files import (
    TraFileAdapter,
    decode_tra_bytes,
    is_tra_file_data,
    parse_tra_file,
    parse_tra_line,
)
from multilan_helper.errors import AdapterDetectionError

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[Any], TranslationDataPort]
Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class AdapterRegistration:
    name: str
    predicate: Predicate
    factory: AdapterFactory


_REGISTRY: list[AdapterRegistration] = [
    AdapterRegistration("current-api", is_current_api_format, CurrentApiAdapter),
    AdapterRegistration("search-api", is_search_api_format, SearchApiAdapter),
    AdapterRegistration("tra-files", is_tra_file_data, TraFileAdapter),
]


def detect_adapter_type(data: Any) -> Optional[str]:
    """Name of the first registered adapter whose predicate accepts ``data``."""
    for registration in _REGISTRY:
        if registration.predicate(data):
            return registration.name
    return None


def create_adapter(data: Any, adapter_type: Optional[str] = None) -> TranslationDataPort:
    """Create an adapter for ``data``.

    Args:
        data: Raw, already-decoded payload
        adapter_type: Registered adapter name; auto-detected when omitted

    Raises:
        AdapterDetectionError: No adapter matches, or the type is not registered
        InvalidFormatError: The chosen adapter rejects the payload
    """
    name = adapter_type or detect_adapter_type(data)
    if name is None:
        raise AdapterDetectionError(
            "Unable to detect adapter type for the provided data. "
            "Please specify the adapter type explicitly."
        )
    registration = next((r for r in _REGISTRY if r.name == name), None)
    if registration is None:
        raise AdapterDetectionError(f"No adapter registered for type: {name}")
    logger.debug("Using %s adapter", name)
    return registration.factory(data)


def register_adapter(
    name: str,
    predicate: Predicate,
    factory: AdapterFactory,
    first: bool = False,
) -> None:
    """Register (or replace) an adapter.

    A new registration is tried last unless ``first`` is set. Replacing
    an existing name keeps its position.
    """
    registration = AdapterRegistration(name, predicate, factory)
    for position, existing in enumerate(_REGISTRY):
        if existing.name == name:
            _REGISTRY[position] = registration
            return
    if first:
        _REGISTRY.insert(0, registration)
    else:
        _REGISTRY.append(registration)


def unregister_adapter(name: str) -> bool:
    for position, existing in enumerate(_REGISTRY):
        if existing.name == name:
            del _REGISTRY[position]
            return True
    return False


def has_adapter(name: str) -> bool:
    return any(r.name == name for r in _REGISTRY)


def registered_adapter_types() -> list[str]:
    return [r.name for r in _REGISTRY]


__all__ = [
    "AdapterRegistration",
    "TranslationDataPort",
    "CurrentApiAdapter",
    "SearchApiAdapter",
    "TraFileAdapter",
    "LANGUAGE_ID_MAP",
    "create_adapter",
    "decode_tra_bytes",
    "detect_adapter_type",
    "has_adapter",
    "is_current_api_format",
    "is_search_api_format",
    "is_tra_file_data",
    "language_id_to_code",
    "merge_search_api_responses",
    "parse_tra_file",
    "parse_tra_line",
    "register_adapter",
    "registered_adapter_types",
    "unregister_adapter",
]
