# MIME bounded context root
from .application import MimeResolver, MimeTableCache, create_mime_resolver
from .domain import (
    CapabilityUnavailableError,
    MimeException,
    MimeTable,
    MimeTableLoadError,
)

__all__ = [
    "CapabilityUnavailableError",
    "MimeException",
    "MimeResolver",
    "MimeTable",
    "MimeTableCache",
    "MimeTableLoadError",
    "create_mime_resolver",
]
