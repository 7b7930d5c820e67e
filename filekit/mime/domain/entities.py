"""MIME境界文脈のドメイン層 - 値オブジェクトと例外."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

__all__ = [
    "MimeTable",
    "MimeException",
    "CapabilityUnavailableError",
    "MimeTableLoadError",
    "normalize_extension",
]


def normalize_extension(extension: str) -> str:
    """拡張子を小文字・先頭ドットなしの形式に揃える."""
    return extension.strip().lstrip(".").lower()


@dataclass(frozen=True, slots=True)
class MimeTable:
    """拡張子からMIMEタイプへの不変マッピングを表す値オブジェクト.

    キーは先頭ドットなしの小文字拡張子、値は小文字のMIMEタイプ。
    """

    source: str
    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """エントリを正規化し読み取り専用にする."""
        if not self.source:
            raise ValueError("sourceは空文字列にできません")

        normalized: dict[str, str] = {}
        for extension, mime_type in self.entries.items():
            key = normalize_extension(str(extension))
            if not key or not mime_type:
                continue
            normalized[key] = str(mime_type).strip().lower()

        object.__setattr__(self, "entries", MappingProxyType(normalized))

    @classmethod
    def from_pairs(cls, source: str, pairs: Iterable[tuple[str, str]]) -> MimeTable:
        """(拡張子, MIMEタイプ) の組から生成. 後勝ち."""
        return cls(source=source, entries=dict(pairs))

    def lookup(self, extension: str) -> str | None:
        """拡張子に対応するMIMEタイプを返す. 未登録ならNone."""
        key = normalize_extension(extension)
        if not key:
            return None
        return self.entries.get(key)

    def extensions_for(self, mime_type: str) -> set[str]:
        """指定MIMEタイプに対応する全拡張子を返す."""
        wanted = (mime_type or "").strip().lower()
        if not wanted:
            return set()
        return {ext for ext, value in self.entries.items() if value == wanted}

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, extension: object) -> bool:
        return isinstance(extension, str) and normalize_extension(extension) in self.entries


class MimeException(Exception):
    """MIMEドメインの基底例外."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class CapabilityUnavailableError(MimeException):
    """コンテンツ判定機能が利用できず、拡張子フォールバックも禁止されている."""
    pass


class MimeTableLoadError(MimeException):
    """MIMEテーブルの読み込みに失敗した."""
    pass
