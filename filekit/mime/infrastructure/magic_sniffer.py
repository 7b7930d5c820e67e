"""python-magic (libmagic) によるコンテンツ判定実装."""

from __future__ import annotations

import logging
import os
from types import ModuleType

from ..domain import FileReference

__all__ = ["MagicMimeSniffer", "load_magic_sniffer"]

logger = logging.getLogger(__name__)


class MagicMimeSniffer:
    """libmagicでファイル内容からMIMEタイプを判定する."""

    def __init__(self, magic_module: ModuleType, default_magic_file: str | None = None) -> None:
        self._magic = magic_module
        self._default_magic_file = default_magic_file
        self._instances: dict[str | None, object] = {}

    def _detector(self, magic_file: str | None):
        detector = self._instances.get(magic_file)
        if detector is None:
            detector = self._magic.Magic(mime=True, magic_file=magic_file)
            self._instances[magic_file] = detector
        return detector

    def sniff(self, file: FileReference, magic_source: str | None = None) -> str | None:
        """判定結果のMIMEタイプを返す. libmagicが何も返さなければNone."""
        magic_file = magic_source or self._default_magic_file
        result = self._detector(magic_file).from_file(os.fspath(file))
        return result or None


def load_magic_sniffer(default_magic_file: str | None = None) -> MagicMimeSniffer | None:
    """python-magicが利用可能ならスニファーを返す. 利用できなければNone."""
    try:
        import magic
    except ImportError as e:
        logger.debug(f"python-magicが利用できません: {e}")
        return None
    return MagicMimeSniffer(magic, default_magic_file)
