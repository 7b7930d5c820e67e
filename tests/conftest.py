import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

os.environ.setdefault("TESTING", "true")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from filekit.core.settings import ApplicationSettings  # noqa: E402
from filekit.core.time import fixed_clock  # noqa: E402


@pytest.fixture
def fixed_moment() -> datetime:
    """2024-03-05 (火) 10:20:30 UTC."""
    return datetime(2024, 3, 5, 10, 20, 30, 123456, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_moment):
    return fixed_clock(fixed_moment)


@pytest.fixture
def make_settings():
    """環境変数から切り離した設定を生成するファクトリ."""

    def _make(**values: str) -> ApplicationSettings:
        return ApplicationSettings(dict(values))

    return _make
