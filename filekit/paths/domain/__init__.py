"""Paths境界文脈のドメイン層."""

from .entities import DirectoryCreationError, PathBuilderException, PathBuilderIncompleteError
from .placeholders import Placeholder, expand_placeholders, placeholder_values, uniqid
from .services import DirectoryCreator, is_absolute_path_name, normalize_path, split_last_segment

__all__ = [
    "DirectoryCreationError",
    "DirectoryCreator",
    "PathBuilderException",
    "PathBuilderIncompleteError",
    "Placeholder",
    "expand_placeholders",
    "is_absolute_path_name",
    "normalize_path",
    "placeholder_values",
    "split_last_segment",
    "uniqid",
]
