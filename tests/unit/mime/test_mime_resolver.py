"""MimeResolver アプリケーションサービスのテスト."""

import sys
import threading
import time
from types import SimpleNamespace

import pytest

from filekit.mime import (
    CapabilityUnavailableError,
    MimeResolver,
    MimeTable,
    MimeTableCache,
    create_mime_resolver,
)
from filekit.mime.infrastructure import MagicMimeSniffer, load_magic_sniffer

TABLE = {
    "pdf": "application/pdf",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "txt": "text/plain",
}


class CountingLoader:
    def __init__(self, tables: dict[str, dict[str, str]] | None = None, delay: float = 0.0) -> None:
        self.tables = tables or {"default": TABLE}
        self.calls: list[str] = []
        self.delay = delay

    def load(self, identifier: str) -> MimeTable:
        self.calls.append(identifier)
        if self.delay:
            time.sleep(self.delay)
        return MimeTable(identifier, self.tables[identifier])


class StubSniffer:
    def __init__(self, result: str | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    def sniff(self, file, magic_source=None):
        self.calls.append((str(file), magic_source))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def loader():
    return CountingLoader()


class TestResolveByExtension:
    """拡張子によるMIME判定のテスト."""

    def test_case_insensitive_extension(self, loader) -> None:
        resolver = MimeResolver(loader=loader)
        assert resolver.resolve_by_extension("report.PDF") == "application/pdf"

    def test_missing_or_unknown_extension(self, loader) -> None:
        resolver = MimeResolver(loader=loader)

        assert resolver.resolve_by_extension("README") is None
        assert resolver.resolve_by_extension("archive.rar") is None

    def test_named_table(self) -> None:
        loader = CountingLoader({"default": TABLE, "custom": {"pdf": "application/x-pdf"}})
        resolver = MimeResolver(loader=loader)

        assert resolver.resolve_by_extension("a.pdf", "custom") == "application/x-pdf"
        assert resolver.resolve_by_extension("a.pdf") == "application/pdf"

    def test_configured_default_table(self) -> None:
        loader = CountingLoader({"site": {"md": "text/markdown"}})
        resolver = MimeResolver(loader=loader, default_table="site")

        assert resolver.resolve_by_extension("notes.md") == "text/markdown"
        assert loader.calls == ["site"]


class TestExtensionsFor:
    """MIMEタイプから拡張子への逆引きテスト."""

    def test_reverse_lookup_is_case_insensitive(self, loader) -> None:
        resolver = MimeResolver(loader=loader)
        assert resolver.extensions_for("Image/JPEG") == {"jpg", "jpeg"}

    def test_unknown_mime_type(self, loader) -> None:
        assert MimeResolver(loader=loader).extensions_for("video/mp4") == set()

    def test_round_trip_for_every_entry(self) -> None:
        resolver = MimeResolver()
        table = resolver.load_table()

        for extension, mime_type in table.entries.items():
            assert extension in resolver.extensions_for(mime_type)


class TestLoadTable:
    """テーブル読み込みとキャッシュのテスト."""

    def test_table_loaded_once_per_source(self, loader) -> None:
        resolver = MimeResolver(loader=loader)

        first = resolver.load_table()
        resolver.resolve_by_extension("a.txt")
        resolver.extensions_for("text/plain")

        assert resolver.load_table() is first
        assert loader.calls == ["default"]

    def test_sources_are_cached_independently(self) -> None:
        loader = CountingLoader({"default": TABLE, "other": {"x": "application/x"}})
        resolver = MimeResolver(loader=loader)

        resolver.load_table()
        resolver.load_table("other")
        resolver.load_table("other")

        assert loader.calls == ["default", "other"]
        assert len(resolver.cache) == 2

    def test_shared_cache_between_resolvers(self, loader) -> None:
        cache = MimeTableCache()
        MimeResolver(loader=loader, cache=cache).load_table()
        MimeResolver(loader=loader, cache=cache).load_table()

        assert loader.calls == ["default"]
        assert "default" in cache

    def test_separate_resolvers_are_isolated(self, loader) -> None:
        MimeResolver(loader=loader).load_table()
        MimeResolver(loader=loader).load_table()

        assert loader.calls == ["default", "default"]

    def test_clear_forces_reload(self, loader) -> None:
        resolver = MimeResolver(loader=loader)
        resolver.load_table()
        resolver.cache.clear()
        resolver.load_table()

        assert loader.calls == ["default", "default"]

    def test_concurrent_loads_happen_once(self) -> None:
        loader = CountingLoader(delay=0.05)
        cache = MimeTableCache()
        results: list[MimeTable] = []

        def _load() -> None:
            results.append(cache.get_or_load("default", loader))

        threads = [threading.Thread(target=_load) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert loader.calls == ["default"]
        assert all(result is results[0] for result in results)


class TestResolve:
    """コンテンツ判定とフォールバックのテスト."""

    def test_without_sniffer_and_fallback_disabled_raises(self, loader) -> None:
        resolver = MimeResolver(loader=loader)

        with pytest.raises(CapabilityUnavailableError):
            resolver.resolve("a.pdf", allow_extension_fallback=False)

    def test_without_sniffer_uses_extension(self, loader) -> None:
        resolver = MimeResolver(loader=loader)

        assert resolver.sniffing_available is False
        assert resolver.resolve("a.pdf") == "application/pdf"

    def test_sniffer_result_wins(self, loader) -> None:
        sniffer = StubSniffer("text/x-python")
        resolver = MimeResolver(sniffer=sniffer, loader=loader)

        assert resolver.resolve("script.txt") == "text/x-python"
        assert loader.calls == []

    def test_magic_source_is_passed_to_sniffer(self, loader) -> None:
        sniffer = StubSniffer("text/plain")
        resolver = MimeResolver(sniffer=sniffer, loader=loader)

        resolver.resolve("a.txt", "/etc/magic")

        assert sniffer.calls == [("a.txt", "/etc/magic")]

    def test_sniffer_without_result_falls_back(self, loader) -> None:
        resolver = MimeResolver(sniffer=StubSniffer(None), loader=loader)
        assert resolver.resolve("a.jpg") == "image/jpeg"

    def test_sniffer_without_result_and_fallback_disabled(self, loader) -> None:
        resolver = MimeResolver(sniffer=StubSniffer(None), loader=loader)
        assert resolver.resolve("a.jpg", allow_extension_fallback=False) is None

    def test_sniffer_failure_falls_back(self, loader, caplog) -> None:
        sniffer = StubSniffer(error=OSError("cannot open"))
        resolver = MimeResolver(sniffer=sniffer, loader=loader)

        assert resolver.resolve("a.pdf") == "application/pdf"
        assert "cannot open" in caplog.text


class FakeMagic:
    instances: list["FakeMagic"] = []

    def __init__(self, mime: bool = False, magic_file: str | None = None) -> None:
        self.mime = mime
        self.magic_file = magic_file
        FakeMagic.instances.append(self)

    def from_file(self, filename: str) -> str:
        return "" if filename.endswith(".empty") else "image/png"


class TestMagicMimeSniffer:
    """python-magicラッパーのテスト."""

    def setup_method(self) -> None:
        FakeMagic.instances = []

    def test_sniff_uses_mime_mode_and_caches_detector(self) -> None:
        sniffer = MagicMimeSniffer(SimpleNamespace(Magic=FakeMagic), "/usr/share/misc/magic")

        assert sniffer.sniff("a.bin") == "image/png"
        assert sniffer.sniff("b.bin") == "image/png"
        assert len(FakeMagic.instances) == 1
        assert FakeMagic.instances[0].mime is True
        assert FakeMagic.instances[0].magic_file == "/usr/share/misc/magic"

    def test_explicit_magic_source_overrides_default(self) -> None:
        sniffer = MagicMimeSniffer(SimpleNamespace(Magic=FakeMagic))

        sniffer.sniff("a.bin", "/tmp/custom.mgc")

        assert FakeMagic.instances[0].magic_file == "/tmp/custom.mgc"

    def test_empty_result_is_none(self) -> None:
        sniffer = MagicMimeSniffer(SimpleNamespace(Magic=FakeMagic))
        assert sniffer.sniff("a.empty") is None

    def test_load_returns_none_when_library_missing(self, monkeypatch) -> None:
        monkeypatch.setitem(sys.modules, "magic", None)
        assert load_magic_sniffer() is None

    def test_load_wraps_importable_module(self, monkeypatch) -> None:
        monkeypatch.setitem(sys.modules, "magic", SimpleNamespace(Magic=FakeMagic))
        sniffer = load_magic_sniffer("/tmp/db.mgc")

        assert isinstance(sniffer, MagicMimeSniffer)
        assert sniffer.sniff("x") == "image/png"
        assert FakeMagic.instances[0].magic_file == "/tmp/db.mgc"


class TestCreateMimeResolver:
    """設定からのMimeResolver構築テスト."""

    def test_sniffing_disabled(self, make_settings) -> None:
        resolver = create_mime_resolver(
            make_settings(FILEKIT_MIME_SNIFFING="false", FILEKIT_MIME_TABLE="default")
        )

        assert resolver.sniffing_available is False
        with pytest.raises(CapabilityUnavailableError):
            resolver.resolve("a.pdf", allow_extension_fallback=False)
        assert resolver.resolve("a.pdf") == "application/pdf"

    def test_sniffing_enabled_with_library(self, make_settings, monkeypatch) -> None:
        monkeypatch.setitem(sys.modules, "magic", SimpleNamespace(Magic=FakeMagic))
        resolver = create_mime_resolver(make_settings(FILEKIT_MAGIC_FILE="/tmp/db.mgc"))

        assert resolver.sniffing_available is True
        assert resolver.resolve("a.pdf") == "image/png"

    def test_configured_table_path(self, make_settings, tmp_path) -> None:
        source = tmp_path / "site.json"
        source.write_text('{"log": "text/x-log"}')

        resolver = create_mime_resolver(
            make_settings(FILEKIT_MIME_SNIFFING="0", FILEKIT_MIME_TABLE=str(source))
        )

        assert resolver.resolve_by_extension("server.LOG") == "text/x-log"
