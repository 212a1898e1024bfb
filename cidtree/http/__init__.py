"""
HTTP Client Module

Session-reusing HTTP client used by remote content stores.
"""

from .client import HttpClient, HttpError, HttpResponse

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
]
