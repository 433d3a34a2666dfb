"""
Adapter for legacy ``.tra`` translation files.

Each language lives in its own file, one entry per line::

    10001,"Submit","All"
    10002,"Say ""Hi"" there","All"
    10003,SimpleText,All

The payload handed to the adapter is ``{"en": <file text>, "fr": ...,
"nl": ..., "de": ...}``. ``.tra`` files carry no metadata.

Older exports are Windows-1252 encoded; ``decode_tra_bytes`` detects
that and converts to text.
"""

from __future__ import annotations

import codecs
import logging
import re
from typing import Any, Optional

from multilan_helper.adapters.base import TranslationDataPort, add_wording
from multilan_helper.models import SUPPORTED_LANGUAGES, Language, MultilanId

logger = logging.getLogger(__name__)

# id,"text"[,anything] with "" as an escaped quote
QUOTED_LINE_PATTERN = re.compile(r'^(\d+),"((?:[^"\\]|\\.|"")*)"')

# id,text[,anything]
SIMPLE_LINE_PATTERN = re.compile(r'^(\d+),([^,]*)')


def parse_tra_line(line: str) -> Optional[tuple[str, str]]:
    """Parse one line into ``(id, text)``, or None for blank/invalid lines."""
    trimmed = line.strip()
    if not trimmed:
        return None

    match = QUOTED_LINE_PATTERN.match(trimmed)
    if match:
        return match.group(1), match.group(2).replace('""', '"')

    match = SIMPLE_LINE_PATTERN.match(trimmed)
    if match:
        return match.group(1), match.group(2)
    return None


def parse_tra_file(content: str) -> dict[str, str]:
    """Parse complete file content into ``{id: text}`` (last line wins)."""
    result: dict[str, str] = {}
    for line in content.split("\n"):
        parsed = parse_tra_line(line)
        if parsed:
            multilan_id, text = parsed
            result[multilan_id] = text
    return result


def is_tra_file_data(data: Any) -> bool:
    """Check the payload has one string of file content per supported language."""
    return isinstance(data, dict) and all(
        isinstance(data.get(lang.value), str) for lang in SUPPORTED_LANGUAGES
    )


def decode_tra_bytes(raw: bytes, name: str = "<bytes>") -> str:
    """Decode file bytes: UTF-8 (with or without BOM), else Windows-1252.

    Bytes undefined in Windows-1252 become U+FFFD.
    """
    if raw.startswith(codecs.BOM_UTF8):
        logger.debug("%s: UTF-8 with BOM", name)
        return raw[len(codecs.BOM_UTF8):].decode("utf-8")
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.info("%s: Windows-1252 -> UTF-8", name)
        return raw.decode("cp1252", errors="replace")
    logger.debug("%s: %s", name, "UTF-8" if any(b > 0x7F for b in raw) else "ASCII")
    return text


class TraFileAdapter(TranslationDataPort):
    """Combines the four per-language files into the canonical map."""

    source_identifier = "tra-files"
    expected_shape = "object with en, fr, nl, de string properties"

    @staticmethod
    def matches(data: Any) -> bool:
        return is_tra_file_data(data)

    def _build_translation_map(self, data: dict) -> dict[MultilanId, dict[Language, str]]:
        per_language = {lang: parse_tra_file(data[lang.value]) for lang in SUPPORTED_LANGUAGES}

        # IDs in first-seen order across en, fr, nl, de
        translation_map: dict[MultilanId, dict[Language, str]] = {}
        for lang_map in per_language.values():
            for multilan_id in lang_map:
                translation_map.setdefault(MultilanId(multilan_id), {})

        for multilan_id, entry in translation_map.items():
            for lang in SUPPORTED_LANGUAGES:
                add_wording(entry, multilan_id, lang, per_language[lang].get(multilan_id))
        return translation_map
