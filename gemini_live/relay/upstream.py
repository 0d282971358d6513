"""Upstream URL mapping for relayed sessions."""

from __future__ import annotations

from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

from gemini_live.errors import InvalidEndpointError
from gemini_live.config.client import GEMINI_KEY_QUERY_PARAM

REDACTED = "***"


def build_upstream_url(upstream_base: str, path: str, query: str = "", *, api_key: str = "") -> str:
    """Swap scheme and host for the upstream's, keeping path and query as sent.

    When ``api_key`` is set it is added to the query, but only if the peer did
    not send a key of its own.
    """
    base = urlparse(upstream_base)
    if base.scheme not in {"ws", "wss"} or not base.netloc:
        raise InvalidEndpointError(f"upstream URL must be ws:// or wss://, got {upstream_base!r}")

    params = parse_qsl(query, keep_blank_values=True)
    if api_key and not any(k == GEMINI_KEY_QUERY_PARAM for k, _ in params):
        params.append((GEMINI_KEY_QUERY_PARAM, api_key))

    full_path = f"{base.path.rstrip('/')}{path or '/'}"
    return urlunparse((base.scheme, base.netloc, full_path, "", urlencode(params), ""))


def redact_url(url: str) -> str:
    """Return ``url`` with the credential query value masked, for logs."""
    parsed = urlparse(url)
    if not parsed.query:
        return url
    params = [
        (k, REDACTED if k == GEMINI_KEY_QUERY_PARAM else v)
        for k, v in parse_qsl(parsed.query, keep_blank_values=True)
    ]
    return urlunparse(parsed._replace(query=urlencode(params)))


__all__ = ["build_upstream_url", "redact_url"]
