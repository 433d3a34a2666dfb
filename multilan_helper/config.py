"""
Project-wide configuration and tunable matching constants.

Module Contents:
    APP_NAME: Application name for display purposes
    DATA_DIR: Directory holding bundled catalog files
    DEFAULT_CATALOG: Bundled catalog used when no path is given
    MatchConfig: Named, overridable thresholds for matching and overflow

The matching thresholds are empirical values carried over from the
plugin that first used them. They are kept in ``MatchConfig`` so callers
can override them per call instead of patching literals.

Example:
    >>> from multilan_helper.config import MatchConfig
    >>> strict = MatchConfig(fuzzy_threshold=0.5)
    >>> strict.max_suggestions
    3
"""

from __future__ import annotations

import os
from dataclasses import dataclass, asdict
from pathlib import Path

# Application name for display and identification
APP_NAME = "Multilan Helper"

# Bundled data directory (catalog exports, .tra files)
DATA_DIR = Path(__file__).resolve().parent / "data"

# Catalog loaded by the CLI when no --catalog is given
DEFAULT_CATALOG = Path(os.environ.get("MULTILAN_CATALOG", DATA_DIR / "api-data.json"))

# Minimum top score for a fuzzy suggestion to count as a close match
FUZZY_THRESHOLD = 0.3

# Rendered width growth above which a text node is reported as overflowing
OVERFLOW_MULTIPLIER = 1.2


@dataclass(frozen=True)
class MatchConfig:
    """Configuration for search limits and match acceptance."""
    fuzzy_threshold: float = FUZZY_THRESHOLD
    max_suggestions: int = 3
    fuzzy_search_limit: int = 10
    search_limit: int = 20
    global_search_limit: int = 30
    overflow_multiplier: float = OVERFLOW_MULTIPLIER

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return asdict(self)


DEFAULT_MATCH_CONFIG = MatchConfig()
