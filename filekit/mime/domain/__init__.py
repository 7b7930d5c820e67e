"""MIME境界文脈のドメイン層."""

from .entities import (
    CapabilityUnavailableError,
    MimeException,
    MimeTable,
    MimeTableLoadError,
    normalize_extension,
)
from .services import FileReference, MimeSniffer, MimeTableLoader, extension_of

__all__ = [
    "CapabilityUnavailableError",
    "FileReference",
    "MimeException",
    "MimeSniffer",
    "MimeTable",
    "MimeTableLoadError",
    "MimeTableLoader",
    "extension_of",
    "normalize_extension",
]
