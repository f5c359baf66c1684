"""chat_relay.config.defaults
==========================

Central place for small, stable default values used across the relay.

Module Purpose
--------------
- Provide a single import location for constants (no I/O).
- Keep the client, builders and session free of magic literals.

This module intentionally imports nothing from the rest of the package to
prevent circular dependencies.
"""

from __future__ import annotations

# ---- Request defaults ----
# Default per-request timeout applied when a backend config does not set one.
DEFAULT_TIMEOUT_SECONDS = 60.0
# Path appended to a backend base URL for both chat operations.
CHAT_PATH = "/chat"
JSON_CONTENT_TYPE = "application/json"

# ---- Authentication conventions ----
# Firebase functions read the raw App Check token from this header.
APPCHECK_HEADER = "X-Firebase-AppCheck"
AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "
# Body field carrying the secondary identifier for Supabase functions.
USER_ID_FIELD = "user_id"

# ---- Streaming ----
# Terminal data marker used by OpenAI-compatible event streams.
DONE_SENTINEL = "[DONE]"


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "CHAT_PATH",
    "JSON_CONTENT_TYPE",
    "APPCHECK_HEADER",
    "AUTHORIZATION_HEADER",
    "BEARER_PREFIX",
    "USER_ID_FIELD",
    "DONE_SENTINEL",
]
