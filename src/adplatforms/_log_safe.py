"""Helpers for safe logging of user-supplied text.

Uploaded files are arbitrary: a single "line" can be megabytes long or carry
control characters. These helpers keep log records and error messages
bounded and on one line.
"""

from __future__ import annotations


def shorten_for_log(value: str, *, max_string: int = 200) -> str:
    """Return *value* on one line, truncated to *max_string* characters."""
    text = value.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text
