import struct
import typing
from typing import BinaryIO

from .exceptions import NcmTruncatedInputError


class ContainerReader:
    """Sequential cursor over a seekable container stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

        pos = stream.tell()
        stream.seek(0, 2)
        self.size = stream.tell()
        stream.seek(pos)

    def tell(self) -> int:
        return self.stream.tell()

    def remaining(self) -> int:
        return max(self.size - self.stream.tell(), 0)

    def read_exact(self, length: int) -> bytes:
        data = self.stream.read(length)
        if len(data) < length:
            raise NcmTruncatedInputError(length, len(data))
        return data

    def read_u32le(self) -> int:
        return struct.unpack("<I", self.read_exact(4))[0]

    def read_length_prefixed(self) -> bytes:
        length = self.read_u32le()
        # Checked up front so a bogus length never allocates a huge buffer
        if length > self.remaining():
            raise NcmTruncatedInputError(length, self.remaining())
        return self.read_exact(length)

    def skip(self, length: int) -> None:
        if length < 0:
            raise ValueError("Only forward skips are supported")
        if length > self.remaining():
            raise NcmTruncatedInputError(length, self.remaining())
        self.stream.seek(length, 1)

    def iter_chunks(self, chunk_size: int) -> typing.Iterator[bytes]:
        while True:
            chunk = self.stream.read(chunk_size)
            if not chunk:
                break
            yield chunk
