"""MIME境界文脈のアプリケーション層."""

from .services import MimeResolver, MimeTableCache, create_mime_resolver

__all__ = ["MimeResolver", "MimeTableCache", "create_mime_resolver"]
