"""Paths境界文脈のアプリケーションサービス."""

from __future__ import annotations

import logging
import os

from ...core.settings import ApplicationSettings, settings as default_settings
from ...core.time import Clock, clock_for_timezone, local_now
from ..domain import (
    DirectoryCreator,
    PathBuilderIncompleteError,
    expand_placeholders,
    is_absolute_path_name,
    normalize_path,
    split_last_segment,
)
from ..infrastructure import LocalDirectoryCreator

__all__ = ["PathBuilder", "create_path_builder"]

logger = logging.getLogger(__name__)


class PathBuilder:
    """テンプレートから保存先パスとファイル名を組み立てるビルダー.

    ``build_path_name`` と ``build_file_name`` を先に呼び出し、その後に
    ``get_file_path`` / ``get_file_url`` などの終端操作を呼び出す。
    ビルド手順は何度でも呼び出せ、前回の結果を上書きする。

    Example::

        builder = PathBuilder("uploads")
        builder.build_path_name("{year}/{month}").build_file_name("{uniqid}", "jpg")
        builder.get_file_path()   # uploads/2024/03/65e6a3c00d4f1a9b3c2e.jpg
    """

    def __init__(
        self,
        base_path: str = "",
        *,
        clock: Clock | None = None,
        separator: str = os.sep,
        directory_creator: DirectoryCreator | None = None,
        base_url: str | None = None,
        directory_mode: int = 0o755,
    ) -> None:
        self._base_path = base_path
        self._clock = clock or local_now
        self._separator = separator
        self._directory_creator = directory_creator or LocalDirectoryCreator()
        self._base_url = base_url
        self._directory_mode = directory_mode
        self._path_name: str | None = None
        self._file_name: str | None = None

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def path_name(self) -> str | None:
        return self._path_name

    @property
    def file_name(self) -> str | None:
        return self._file_name

    # =============================================================
    # ビルド手順
    # =============================================================

    def build_path_name(
        self,
        template: str,
        prefix: str | None = None,
        suffix: str | None = None,
    ) -> PathBuilder:
        """ディレクトリテンプレートを展開し正規化してパス名とする."""
        path_name = expand_placeholders(template, self._clock())

        if prefix:
            path_name = prefix + self._separator + path_name

        if suffix:
            path_name += self._separator + suffix

        self._path_name = normalize_path(path_name, self._separator)
        return self

    def build_file_name(
        self,
        template: str,
        extension: str = "",
        include_dot: bool = False,
    ) -> PathBuilder:
        """ファイル名テンプレートを展開する. 拡張子は ``include_dot`` でなければ ``.`` を補う."""
        file_name = expand_placeholders(template, self._clock())
        if extension:
            file_name += ("" if include_dot else ".") + extension

        self._file_name = file_name
        return self

    # =============================================================
    # 終端操作
    # =============================================================

    def create_directory(self, mode: int | None = None, recursive: bool = True) -> bool:
        """パス名のディレクトリを作成する. modeの既定値は構築時の ``directory_mode``.

        Returns:
            作成した場合True、既に存在した場合False

        Raises:
            PathBuilderIncompleteError: パス名が未構築
            DirectoryCreationError: OSレベルで作成に失敗した場合
        """
        path_name = self._require_path_name()
        path = normalize_path(
            self._base_for(path_name) + self._separator + path_name,
            self._separator,
        )
        if mode is None:
            mode = self._directory_mode
        return self._directory_creator.create(path, mode, recursive)

    def get_file_path(self, separator: str | None = None) -> str:
        """ベースパス・パス名・ファイル名を連結し正規化したファイルパスを返す."""
        path_name, file_name = self._require_complete()
        separator = separator or self._separator
        path = self._base_for(path_name) + separator + path_name + separator + file_name
        return normalize_path(path, separator)

    def get_file_url(self, base_url: str | None = None) -> str:
        """公開URLを返す. URLの区切りは常に ``/``."""
        path_name, file_name = self._require_complete()
        if base_url is None:
            base_url = self._base_url
        base_url = base_url.rstrip("/") if base_url else ""
        path = "/" + self._base_for(path_name) + "/" + path_name + "/"

        return base_url + normalize_path(path, "/") + "/" + file_name

    def directory_of(self) -> str:
        """ファイルパスのディレクトリ部分を返す."""
        return split_last_segment(self.get_file_path(), self._separator)[0]

    def file_name_of(self) -> str:
        """ファイルパスの末尾要素を返す."""
        return split_last_segment(self.get_file_path(), self._separator)[1]

    # =============================================================
    # 内部ヘルパー
    # =============================================================

    def _base_for(self, path_name: str) -> str:
        return "" if is_absolute_path_name(path_name) else self._base_path

    def _require_path_name(self) -> str:
        if self._path_name is None:
            raise PathBuilderIncompleteError(
                "パス名が未構築です: build_path_name() を先に呼び出してください",
                ("path_name",),
            )
        return self._path_name

    def _require_complete(self) -> tuple[str, str]:
        missing = tuple(
            name
            for name, value in (("path_name", self._path_name), ("file_name", self._file_name))
            if value is None
        )
        if missing:
            raise PathBuilderIncompleteError(
                f"ビルド手順が未実行です: {', '.join(missing)}",
                missing,
            )
        return self._path_name, self._file_name  # type: ignore[return-value]


def create_path_builder(
    settings: ApplicationSettings | None = None,
    base_path: str | None = None,
    *,
    clock: Clock | None = None,
) -> PathBuilder:
    """設定に基づいてPathBuilderを構築する."""
    settings = settings or default_settings
    if base_path is None:
        base_path = settings.base_path

    builder = PathBuilder(
        base_path,
        clock=clock or clock_for_timezone(settings.placeholder_timezone),
        base_url=settings.base_url,
        directory_mode=settings.directory_mode,
    )
    logger.debug(f"PathBuilderを作成: base_path={base_path!r}")
    return builder
