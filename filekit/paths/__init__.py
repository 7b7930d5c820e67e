# Paths bounded context root
from .application import PathBuilder, create_path_builder
from .domain import (
    DirectoryCreationError,
    PathBuilderException,
    PathBuilderIncompleteError,
    Placeholder,
    expand_placeholders,
    normalize_path,
)

__all__ = [
    "DirectoryCreationError",
    "PathBuilder",
    "PathBuilderException",
    "PathBuilderIncompleteError",
    "Placeholder",
    "create_path_builder",
    "expand_placeholders",
    "normalize_path",
]
