"""Paths境界文脈のドメイン例外."""

from __future__ import annotations

__all__ = [
    "PathBuilderException",
    "PathBuilderIncompleteError",
    "DirectoryCreationError",
]


class PathBuilderException(Exception):
    """パス構築ドメインの基底例外."""
    pass


class PathBuilderIncompleteError(PathBuilderException):
    """必要なビルド手順（パス名・ファイル名）が未実行."""

    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = missing


class DirectoryCreationError(OSError):
    """ディレクトリ作成に失敗した（OSErrorとして伝播）."""
    pass
