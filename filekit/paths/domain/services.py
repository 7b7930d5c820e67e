"""Paths境界文脈のドメインサービスとプロトコル."""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

__all__ = [
    "DirectoryCreator",
    "normalize_path",
    "is_absolute_path_name",
    "split_last_segment",
]


@runtime_checkable
class DirectoryCreator(Protocol):
    """ディレクトリを作成する外部機能."""

    def create(self, path: str, mode: int, recursive: bool) -> bool:
        """ディレクトリを作成する. 作成した場合True、既存ならFalse.

        その他の失敗は :class:`DirectoryCreationError` を送出する。
        """
        ...


def normalize_path(path: str, separator: str = os.sep) -> str:
    """Normalizes a file/directory path.

    - Convert all directory separators into *separator* (``"\\a/b\\c"`` becomes ``"/a/b/c"``)
    - Remove trailing separators (``"/a/b/c/"`` becomes ``"/a/b/c"``)
    - Turn consecutive separators into one (``"/a///b/c"`` becomes ``"/a/b/c"``)
    - Resolve ``..`` and ``.`` (``"/a/./b/../c"`` becomes ``"/a/c"``)

    A leading separator survives, unresolvable leading ``..`` segments are
    kept and an empty result becomes ``"."``.
    """
    path = path.replace("/", separator).replace("\\", separator).rstrip(separator)
    if path and separator + "." not in separator + path and separator * 2 not in path:
        return path

    # the path may contain ".", ".." or double separators, need to clean them up
    parts: list[str] = []
    for part in path.split(separator):
        if part == ".." and parts and parts[-1] != "..":
            parts.pop()
        elif part == "." or (part == "" and parts):
            continue
        else:
            parts.append(part)

    path = separator.join(parts)
    return path if path else "."


def is_absolute_path_name(path_name: str) -> bool:
    """パス名が絶対パスとして扱われるか（先頭がスラッシュのみで判定）."""
    return path_name.startswith("/")


def split_last_segment(path: str, separator: str = os.sep) -> tuple[str, str]:
    """パスをディレクトリ部分と末尾要素に分割する.

    区切り文字を含まなければディレクトリは ``"."``、ルート直下ならルートを返す。
    """
    head, sep, tail = path.rpartition(separator)
    if not sep:
        return ".", path
    return (head or separator), tail
