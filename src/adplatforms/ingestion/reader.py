"""Line reading for uploaded files.

Produces the lazily-evaluated, single-pass line sequence the ingestion layer
consumes. Blank and whitespace-only lines are dropped here; line terminators
(``\\n``, ``\\r\\n``, ``\\r``) are removed but other whitespace is kept for
the parser to trim.
"""

from __future__ import annotations

import codecs
import io
import re
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import IO

from adplatforms._constants import UTF8_BOM

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _keep(line: str, *, first: bool) -> str | None:
    if first and line.startswith(UTF8_BOM):
        line = line[len(UTF8_BOM) :]
    return line if line.strip() else None


def _iter_text(lines: Iterable[str]) -> Iterator[str]:
    first = True
    for raw in lines:
        kept = _keep(raw.rstrip("\r\n"), first=first)
        first = False
        if kept is not None:
            yield kept


def _iter_binary(stream: IO[bytes], encoding: str) -> Iterator[str]:
    wrapper = io.TextIOWrapper(stream, encoding=encoding, newline="")  # type: ignore[arg-type]
    try:
        yield from _iter_text(wrapper)
    finally:
        # Leave the caller's stream open.
        wrapper.detach()


def iter_lines(source: str | bytes | IO[str] | IO[bytes], *, encoding: str = "utf-8") -> Iterator[str]:
    """Yield the non-blank lines of *source*.

    *source* may be a ``str``, ``bytes``, a text stream or a binary stream.
    Streams are read incrementally and are not closed.
    """
    if isinstance(source, str):
        return _iter_text(io.StringIO(source, newline=""))
    if isinstance(source, (bytes, bytearray)):
        return _iter_binary(io.BytesIO(bytes(source)), encoding)
    if isinstance(source, io.TextIOBase):
        return _iter_text(source)
    if isinstance(source, (io.RawIOBase, io.BufferedIOBase)):
        return _iter_binary(source, encoding)  # type: ignore[arg-type]
    mode = getattr(source, "mode", "")
    if isinstance(mode, str) and "b" in mode:
        return _iter_binary(source, encoding)  # type: ignore[arg-type]
    return _iter_text(source)  # type: ignore[arg-type]


class _LineSplitter:
    """Incremental line splitter over decoded text pieces.

    Only newly fed text is scanned, and the pieces of an unterminated line
    are joined once its terminator arrives. A piece ending in ``\\r`` emits
    its line right away; a ``\\n`` opening the next piece is then dropped.
    """

    def __init__(self) -> None:
        self._pending: list[str] = []
        self._after_cr = False
        self._first = True

    def feed(self, text: str) -> list[str]:
        if not text:
            return []
        lines: list[str] = []
        start = 1 if self._after_cr and text.startswith("\n") else 0
        for match in _LINE_BREAK.finditer(text, start):
            self._pending.append(text[start : match.start()])
            self._emit("".join(self._pending), lines)
            self._pending = []
            start = match.end()
        if start < len(text):
            self._pending.append(text[start:])
        self._after_cr = text.endswith("\r")
        return lines

    def close(self) -> list[str]:
        lines: list[str] = []
        if self._pending:
            self._emit("".join(self._pending), lines)
            self._pending = []
        return lines

    def _emit(self, raw: str, lines: list[str]) -> None:
        kept = _keep(raw, first=self._first)
        self._first = False
        if kept is not None:
            lines.append(kept)


async def aiter_lines(chunks: AsyncIterable[bytes], *, encoding: str = "utf-8") -> AsyncIterator[str]:
    """Async counterpart of :func:`iter_lines` over a stream of byte chunks.

    Decoding is incremental, so a multi-byte character or a ``\\r\\n`` pair
    split across two chunks is handled.
    """
    decoder = codecs.getincrementaldecoder(encoding)()
    splitter = _LineSplitter()
    async for chunk in chunks:
        for line in splitter.feed(decoder.decode(chunk)):
            yield line

    for line in splitter.feed(decoder.decode(b"", final=True)) + splitter.close():
        yield line
