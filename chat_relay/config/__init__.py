"""Static configuration for the relay.

Backend configuration itself is in-code (see ``chat_relay.backends.config``);
this package only holds the stable defaults shared across modules.
"""

from .defaults import (
    APPCHECK_HEADER,
    AUTHORIZATION_HEADER,
    BEARER_PREFIX,
    CHAT_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    DONE_SENTINEL,
    JSON_CONTENT_TYPE,
    USER_ID_FIELD,
)

__all__ = [
    "APPCHECK_HEADER",
    "AUTHORIZATION_HEADER",
    "BEARER_PREFIX",
    "CHAT_PATH",
    "DEFAULT_TIMEOUT_SECONDS",
    "DONE_SENTINEL",
    "JSON_CONTENT_TYPE",
    "USER_ID_FIELD",
]
