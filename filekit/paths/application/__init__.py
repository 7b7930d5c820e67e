"""Paths境界文脈のアプリケーション層."""

from .services import PathBuilder, create_path_builder

__all__ = ["PathBuilder", "create_path_builder"]
