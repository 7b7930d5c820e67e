"""MIME境界文脈のアプリケーションサービス."""

from __future__ import annotations

import logging
import threading

from ...core.settings import ApplicationSettings, settings as default_settings
from ..domain import (
    CapabilityUnavailableError,
    FileReference,
    MimeSniffer,
    MimeTable,
    MimeTableLoader,
    extension_of,
)
from ..infrastructure import BUNDLED_TABLE, FileMimeTableLoader, load_magic_sniffer

__all__ = ["MimeResolver", "MimeTableCache", "create_mime_resolver"]

logger = logging.getLogger(__name__)


class MimeTableCache:
    """識別子ごとに読み込み済みMIMEテーブルを保持するキャッシュ.

    同一識別子のテーブルは一度だけ読み込まれる。確認・読み込み・格納は
    ロックで保護する。エントリは :meth:`clear` しない限り破棄されない。
    """

    def __init__(self) -> None:
        self._tables: dict[str, MimeTable] = {}
        self._lock = threading.Lock()

    def get_or_load(self, identifier: str, loader: MimeTableLoader) -> MimeTable:
        """キャッシュ済みテーブルを返す. 未読み込みならloaderで読み込む."""
        with self._lock:
            table = self._tables.get(identifier)
            if table is not None:
                logger.debug(f"MIMEテーブルキャッシュヒット: source={identifier}")
                return table
            table = loader.load(identifier)
            self._tables[identifier] = table
            return table

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._tables

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)


class MimeResolver:
    """ファイルのMIMEタイプを解決するアプリケーションサービス.

    コンテンツ判定（スニファー）を優先し、判定できない場合は拡張子テーブルに
    フォールバックする。逆引き（MIMEタイプ→拡張子）も提供する。
    """

    def __init__(
        self,
        sniffer: MimeSniffer | None = None,
        loader: MimeTableLoader | None = None,
        cache: MimeTableCache | None = None,
        default_table: str = BUNDLED_TABLE,
    ) -> None:
        self._sniffer = sniffer
        self._loader = loader or FileMimeTableLoader()
        self._cache = cache if cache is not None else MimeTableCache()
        self._default_table = default_table

    @property
    def sniffing_available(self) -> bool:
        return self._sniffer is not None

    @property
    def cache(self) -> MimeTableCache:
        return self._cache

    def resolve(
        self,
        file: FileReference,
        magic_source: str | None = None,
        allow_extension_fallback: bool = True,
    ) -> str | None:
        """ファイルのMIMEタイプを判定する.

        Args:
            file: 対象ファイルのパス
            magic_source: スニファーに渡すmagicデータベース兼拡張子テーブルの識別子
            allow_extension_fallback: コンテンツ判定できない場合に拡張子で判定するか

        Returns:
            MIMEタイプ。判定できなければNone。

        Raises:
            CapabilityUnavailableError: スニファーがなくフォールバックも禁止されている場合
        """
        if self._sniffer is None:
            if not allow_extension_fallback:
                raise CapabilityUnavailableError(
                    "コンテンツ判定機能が利用できません（拡張子フォールバック無効）",
                    magic_source,
                )
            return self.resolve_by_extension(file, magic_source)

        result: str | None = None
        try:
            result = self._sniffer.sniff(file, magic_source)
        except Exception as e:
            logger.warning(f"コンテンツ判定に失敗: file={file}, error={e}")

        if result:
            return result

        if not allow_extension_fallback:
            return None

        logger.debug(f"拡張子によるMIME判定にフォールバック: file={file}")
        return self.resolve_by_extension(file, magic_source)

    def resolve_by_extension(
        self,
        file: FileReference,
        magic_source: str | None = None,
    ) -> str | None:
        """拡張子からMIMEタイプを判定する. 拡張子なし・未登録はNone."""
        table = self.load_table(magic_source)
        extension = extension_of(file)
        if not extension:
            return None
        return table.lookup(extension)

    def extensions_for(
        self,
        mime_type: str,
        magic_source: str | None = None,
    ) -> set[str]:
        """MIMEタイプに対応する拡張子の集合を返す（大文字小文字は区別しない）."""
        return self.load_table(magic_source).extensions_for(mime_type)

    def load_table(self, magic_source: str | None = None) -> MimeTable:
        """テーブルを識別子ごとに一度だけ読み込みキャッシュする."""
        identifier = magic_source if magic_source is not None else self._default_table
        return self._cache.get_or_load(identifier, self._loader)


def create_mime_resolver(
    settings: ApplicationSettings | None = None,
    cache: MimeTableCache | None = None,
) -> MimeResolver:
    """設定に基づいてMimeResolverを構築する."""
    settings = settings or default_settings

    sniffer = None
    if settings.mime_sniffing_enabled:
        sniffer = load_magic_sniffer(settings.magic_file)
        if sniffer is None:
            logger.info("コンテンツ判定機能なし: 拡張子テーブルのみで判定します")

    return MimeResolver(
        sniffer=sniffer,
        cache=cache,
        default_table=settings.mime_table,
    )
