"""Gateway backends: configuration variants and request builders."""

from .builder import RequestBuilder, serialize_body
from .config import BackendConfig, FirebaseBackend, SupabaseBackend
from .firebase import FirebaseRequestBuilder
from .supabase import SupabaseRequestBuilder

__all__ = [
    "BackendConfig",
    "FirebaseBackend",
    "SupabaseBackend",
    "RequestBuilder",
    "FirebaseRequestBuilder",
    "SupabaseRequestBuilder",
    "serialize_body",
]
