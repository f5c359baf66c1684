"""Models parts package (one class per file).

Prefer importing from `chat_relay.base.models`.
"""
