"""Exception types raised by the resolution engine.

Only structural problems raise. Missing per-entry data (an unknown
language, an absent metadata field, an unknown ID) degrades to ``None``
and is never an error.
"""


class MultilanError(Exception):
    """Base class for all multilan-helper errors."""


class InvalidFormatError(MultilanError, ValueError):
    """Raw payload does not have the structure an adapter expects."""


class AdapterDetectionError(MultilanError, LookupError):
    """No registered adapter accepts the payload, or the type is unknown."""


class CatalogNotLoadedError(MultilanError, RuntimeError):
    """A catalog holder was read before anything was loaded into it."""
