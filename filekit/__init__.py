"""MIME type resolution and templated storage path building."""

from .mime import CapabilityUnavailableError, MimeResolver, MimeTable, create_mime_resolver
from .paths import PathBuilder, create_path_builder, normalize_path

__all__ = [
    "CapabilityUnavailableError",
    "MimeResolver",
    "MimeTable",
    "PathBuilder",
    "create_mime_resolver",
    "create_path_builder",
    "normalize_path",
]

__version__ = "0.1.0"
