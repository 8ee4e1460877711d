"""Scrub the Make.com API token and other credentials from log records."""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Iterable, Mapping, Optional

REDACTED = "[REDACTED]"

TOKEN_ENV_VAR = "MAKE_API_TOKEN"

_SENSITIVE_KEYS = {"authorization", "api_token"}
_SENSITIVE_SUFFIXES = ("_token", "_api_key")

# "Authorization: Token abc" in free text, quoted or not.
_AUTH_HEADER = re.compile(r"(?i)(\"?authorization\"?\s*[:=]\s*\"?)([^\",}]+)")

# Attributes every LogRecord carries; only extras passed by callers are scrubbed.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _env_secrets() -> Iterable[str]:
    for key, value in os.environ.items():
        if value and (key == TOKEN_ENV_VAR or key.endswith("_API_KEY")):
            yield value


def _is_sensitive_key(key: Any) -> bool:
    name = str(key).lower()
    return name in _SENSITIVE_KEYS or name.endswith(_SENSITIVE_SUFFIXES)


class RedactionFilter(logging.Filter):
    """Replace known secrets and Authorization values with ``[REDACTED]``.

    The message is rendered with its args first, so a token passed as a
    ``%s`` argument is caught too. Extras given through ``extra=`` are
    scrubbed recursively; mapping keys that look like credentials have their
    whole value replaced.
    """

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        values = set(_env_secrets())
        values.update(s for s in secrets if s)
        # longest first, so a secret containing another is replaced whole
        self._secrets = tuple(sorted(values, key=len, reverse=True))

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            message = str(record.msg)
        record.msg = self._scrub_text(message)
        record.args = ()
        for key in set(vars(record)) - _RECORD_ATTRS:
            setattr(record, key, self._scrub(getattr(record, key)))
        return True

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._scrub_text(value)
        if isinstance(value, Mapping):
            return {
                k: REDACTED if _is_sensitive_key(k) else self._scrub(v)
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self._scrub(v) for v in value]
        return value

    def _scrub_text(self, text: str) -> str:
        if "authorization" in text.lower():
            text = _AUTH_HEADER.sub(r"\1" + REDACTED, text)
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text


def install_redaction_filter(
    target: Optional[logging.Logger | logging.Handler] = None,
    secrets: Iterable[str] = (),
) -> None:
    """Attach one :class:`RedactionFilter` to ``target`` (the package logger by default)."""
    target = target or logging.getLogger("make_mcp")
    if not any(isinstance(f, RedactionFilter) for f in target.filters):
        target.addFilter(RedactionFilter(secrets))


__all__ = ["REDACTED", "RedactionFilter", "install_redaction_filter"]
