"""Streaming digests for large column content.

Large binary or character values are never compared by content. They are read
in fixed-size chunks through a hash function once, and afterwards only the
hex digest and the content length take part in equality checks and reports.
"""

from __future__ import annotations

import dataclasses
import hashlib
import io
import typing

from dbdelta.data.error import InternalError, UsageError

__all__ = ("Digester", "DigestKind", "StreamDigest")

DigestKind: typing.TypeAlias = typing.Literal["binary", "text"]


@dataclasses.dataclass(frozen=True, kw_only=True)
class StreamDigest:
    kind: DigestKind
    hexdigest: str
    length: int


@dataclasses.dataclass(frozen=True, kw_only=True)
class Digester:
    algorithm: str = "sha1"
    chunk_size: int = 4096
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.algorithm not in hashlib.algorithms_available:
            raise UsageError.new(
                f"The digest algorithm, {self.algorithm!r}, is not available.",
                algorithm=self.algorithm,
            )

        # shake_* digests need an explicit length
        if hashlib.new(self.algorithm).digest_size == 0:
            raise UsageError.new(
                f"The digest algorithm, {self.algorithm!r}, has a variable length and cannot be used.",
                algorithm=self.algorithm,
            )

        if self.chunk_size < 1:
            raise UsageError.new(
                f"The digest chunk size must be positive, but got {self.chunk_size}.",
                chunk_size=self.chunk_size,
            )

    def digest_bytes(self, /, content: bytes | bytearray | memoryview) -> StreamDigest:
        with io.BytesIO(content) as fh:
            return self.digest_stream(fh)

    def digest_text(self, /, content: str) -> StreamDigest:
        with io.StringIO(content) as fh:
            return self.digest_stream(fh)

    def digest_stream(self, /, fh: typing.IO[typing.Any]) -> StreamDigest:
        """Consume a binary or text stream, returning its digest and length.

        The length is counted in bytes for binary streams and in characters for
        text streams. Text is hashed in its encoded form. An empty stream is
        treated as binary unless it is a ``io.TextIOBase``.
        """
        h = hashlib.new(self.algorithm)
        length = 0
        kind: DigestKind = "text" if isinstance(fh, io.TextIOBase) else "binary"
        try:
            while chunk := fh.read(self.chunk_size):
                if isinstance(chunk, str):
                    kind = "text"
                    length += len(chunk)
                    h.update(chunk.encode(self.encoding))
                else:
                    length += len(chunk)
                    h.update(chunk)
        except (OSError, ValueError) as e:
            raise InternalError.new(
                f"An error occurred while reading a stream to digest it: {e!s}",
                algorithm=self.algorithm,
                bytes_read=length,
            ) from e

        return StreamDigest(kind=kind, hexdigest=h.hexdigest(), length=length)
