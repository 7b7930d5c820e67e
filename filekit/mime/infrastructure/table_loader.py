"""MIMEテーブルのファイル読み込み実装."""

from __future__ import annotations

import json
import logging
import mimetypes
from importlib import resources
from pathlib import Path
from typing import Callable, Mapping

from ..domain import MimeTable, MimeTableLoadError

__all__ = ["FileMimeTableLoader", "BUNDLED_TABLE", "SYSTEM_TABLE"]

logger = logging.getLogger(__name__)

BUNDLED_TABLE = "default"
SYSTEM_TABLE = "system"

_BUNDLED_RESOURCE = "mime_types.json"


class FileMimeTableLoader:
    """識別子からMIMEテーブルを読み込むローダー.

    - ``"default"``: パッケージ同梱のJSONテーブル
    - ``"system"``: 標準ライブラリ ``mimetypes`` が参照するシステムテーブル
    - ``*.json``: ``{拡張子: MIMEタイプ}`` 形式のJSONファイル
    - その他のパス: Apache ``mime.types`` 形式のファイル（``mimetypes`` の既定値に追記される）
    """

    def __init__(self) -> None:
        self._aliases: dict[str, Callable[[], Mapping[str, str]]] = {
            BUNDLED_TABLE: self._read_bundled,
            SYSTEM_TABLE: self._read_system,
        }

    def register_alias(self, alias: str, reader: Callable[[], Mapping[str, str]]) -> None:
        """エイリアス名に対するテーブル読み込み関数を登録."""
        self._aliases[alias] = reader

    def load(self, identifier: str) -> MimeTable:
        """識別子が指すテーブルを読み込む."""
        reader = self._aliases.get(identifier)
        if reader is not None:
            entries = reader()
        else:
            entries = self._read_file(Path(identifier))

        table = MimeTable(source=identifier, entries=entries)
        logger.info(f"MIMEテーブルを読み込み: source={identifier}, entries={len(table)}")
        return table

    # ------------------------------------------------------------------
    # readers
    # ------------------------------------------------------------------
    def _read_file(self, path: Path) -> Mapping[str, str]:
        if not path.is_file():
            raise MimeTableLoadError(f"MIMEテーブルが見つかりません: {path}", str(path))

        if path.suffix.lower() == ".json":
            try:
                with path.open("r", encoding="utf-8") as fh:
                    return self._validate_json(json.load(fh), str(path))
            except (OSError, ValueError) as e:
                raise MimeTableLoadError(f"MIMEテーブル読み込みエラー: {e}", str(path)) from e

        try:
            entries = mimetypes.read_mime_types(str(path))
        except (OSError, UnicodeDecodeError) as e:
            raise MimeTableLoadError(f"MIMEテーブル読み込みエラー: {e}", str(path)) from e
        if entries is None:
            raise MimeTableLoadError(f"MIMEテーブルを読み込めません: {path}", str(path))
        return entries

    def _read_bundled(self) -> Mapping[str, str]:
        resource = resources.files(__package__).joinpath("data").joinpath(_BUNDLED_RESOURCE)
        try:
            raw = json.loads(resource.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise MimeTableLoadError(f"同梱MIMEテーブル読み込みエラー: {e}", BUNDLED_TABLE) from e
        return self._validate_json(raw, BUNDLED_TABLE)

    def _read_system(self) -> Mapping[str, str]:
        db = mimetypes.MimeTypes()
        for known in mimetypes.knownfiles:
            if Path(known).is_file():
                db.read(known)
        return dict(db.types_map[True])

    @staticmethod
    def _validate_json(raw: object, source: str) -> Mapping[str, str]:
        if not isinstance(raw, dict):
            raise MimeTableLoadError(f"MIMEテーブルはJSONオブジェクトである必要があります: {source}", source)
        for key, value in raw.items():
            if not isinstance(value, str):
                raise MimeTableLoadError(
                    f"MIMEタイプは文字列である必要があります: {key}={value!r}", source
                )
        return raw
