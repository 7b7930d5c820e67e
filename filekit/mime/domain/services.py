"""MIME境界文脈のドメインサービスとプロトコル."""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from .entities import MimeTable

__all__ = [
    "MimeSniffer",
    "MimeTableLoader",
    "FileReference",
    "extension_of",
]

FileReference = str | os.PathLike[str]

_SEPARATORS = ("/", "\\")


@runtime_checkable
class MimeSniffer(Protocol):
    """ファイル内容からMIMEタイプを判定する外部機能."""

    def sniff(self, file: FileReference, magic_source: str | None = None) -> str | None:
        """判定結果のMIMEタイプを返す. 判定できなければNone."""
        ...


@runtime_checkable
class MimeTableLoader(Protocol):
    """識別子からMIMEテーブルを読み込む外部機能."""

    def load(self, identifier: str) -> MimeTable:
        """識別子が指すテーブルを読み込む."""
        ...


def extension_of(file: FileReference) -> str:
    """パス末尾要素の最後の ``.`` 以降を拡張子として返す.

    末尾の区切り文字は無視する。拡張子がなければ空文字列。
    ``".bashrc"`` の拡張子は ``"bashrc"`` になる。
    """
    name = os.fspath(file)
    name = name.rstrip("".join(_SEPARATORS))
    for separator in _SEPARATORS:
        name = name.rsplit(separator, 1)[-1]

    _, dot, extension = name.rpartition(".")
    return extension if dot else ""
