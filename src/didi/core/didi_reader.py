"""DidiReader for reading and sniffing DIDI containers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from didi.core.constants import (
    DEFAULT_MAX_PAYLOAD_SIZE,
    FLAG_SIZE,
    FLAG_STRUCT,
    HEADER_PREFIX_SIZE,
    HEADER_PREFIX_STRUCT,
    MAGIC,
)
from didi.core.errors import (
    InvalidEncodingError,
    InvalidFormatError,
    PayloadTooLargeError,
    TruncatedHeaderError,
)
from didi.core.models import DidiHeader, DidiRecord, DidiStats, SniffResult
from didi.core.rle import rle_decode
from didi.monitoring.metrics import READS, track_operation
from didi.utils.logging import get_logger, log_context

logger = get_logger(__name__)


class DidiReader:
    """
    Reader for DIDI containers.

    Only the header is parsed on open; the payload is read on demand, so
    ``header`` and ``get_stats()`` cost O(header size) regardless of how
    large the file is.
    """

    def __init__(
        self,
        path: Union[str, Path],
        max_payload_size: Optional[int] = None,
    ) -> None:
        self.path = os.fspath(path)
        self.max_payload_size = (
            DEFAULT_MAX_PAYLOAD_SIZE if max_payload_size is None else max_payload_size
        )
        self._f: BinaryIO = open(self.path, "rb")
        try:
            self.file_size: int = os.fstat(self._f.fileno()).st_size
            self.header: DidiHeader = self._read_header()
        except BaseException:
            self._f.close()
            raise

    def _read_exact(self, size: int, what: str) -> bytes:
        raw = self._f.read(size)
        if len(raw) < size:
            raise TruncatedHeaderError(
                f"Truncated DIDI header: expected {size} bytes of {what} "
                f"at offset {self._f.tell() - len(raw)}, got {len(raw)}"
            )
        return raw

    def _read_header(self) -> DidiHeader:
        """
        Parse and validate the DIDI header.

        Raises:
            InvalidFormatError: If magic or flag byte is wrong
            UnsupportedVersionError: If the version byte is unknown
            TruncatedHeaderError: If the file ends inside the header
            InvalidEncodingError: If the search string is not UTF-8
        """
        self._f.seek(0)
        prefix = self._f.read(HEADER_PREFIX_SIZE)
        if prefix[: len(MAGIC)] != MAGIC:
            raise InvalidFormatError(
                f"Invalid DIDI magic: {prefix[:len(MAGIC)]!r} (expected {MAGIC!r})"
            )
        if len(prefix) < HEADER_PREFIX_SIZE:
            raise TruncatedHeaderError(
                f"Truncated DIDI header: {len(prefix)} bytes "
                f"(need at least {HEADER_PREFIX_SIZE})"
            )

        magic, version, search_len = HEADER_PREFIX_STRUCT.unpack(prefix)
        header = DidiHeader(
            magic=magic,
            version=version,
            search_string="",
            contains=False,
            header_size=HEADER_PREFIX_SIZE,
        )
        header.validate()

        search_bytes = self._read_exact(search_len, "search string")
        try:
            header.search_string = search_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEncodingError(f"Search string is not valid UTF-8: {exc}") from exc

        (flag,) = FLAG_STRUCT.unpack(self._read_exact(FLAG_SIZE, "contains flag"))
        if flag not in (0, 1):
            raise InvalidFormatError(f"Invalid contains flag: {flag} (expected 0 or 1)")
        header.contains = bool(flag)
        header.header_size = HEADER_PREFIX_SIZE + search_len + FLAG_SIZE
        return header

    @property
    def payload_size(self) -> int:
        return self.file_size - self.header.header_size

    def sniff(self) -> SniffResult:
        return SniffResult(self.header.search_string, self.header.contains)

    def read_payload(self) -> str:
        """
        Read and decode the payload.

        Raises:
            PayloadTooLargeError: If payload exceeds max_payload_size
            InvalidEncodingError: If payload is not valid UTF-8 or RLE
        """
        if self.payload_size > self.max_payload_size:
            raise PayloadTooLargeError(
                f"Payload size {self.payload_size} exceeds maximum "
                f"{self.max_payload_size} bytes. Pass max_payload_size= to override."
            )

        self._f.seek(self.header.header_size)
        raw = self._f.read()
        try:
            encoded = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEncodingError(f"Payload is not valid UTF-8: {exc}") from exc
        return rle_decode(encoded)

    def read(self) -> DidiRecord:
        return DidiRecord(
            data=self.read_payload(),
            search_string=self.header.search_string,
            contains=self.header.contains,
        )

    def get_stats(self) -> DidiStats:
        """Size statistics computed from the header and file size only."""
        return DidiStats(
            file_size=self.file_size,
            header_size=self.header.header_size,
            payload_size=self.payload_size,
        )

    def close(self) -> None:
        if not self._f.closed:
            self._f.close()

    def __enter__(self) -> "DidiReader":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Any,
    ) -> None:
        self.close()


def read_didi(
    path: Union[str, Path],
    max_payload_size: Optional[int] = None,
) -> DidiRecord:
    """Fully read a container: decoded data, search string, contains flag."""
    with log_context(path=os.fspath(path)), track_operation("read"):
        with DidiReader(path, max_payload_size=max_payload_size) as reader:
            record = reader.read()
        READS.labels(mode="full").inc()
        logger.debug(
            "didi_read",
            search_string=record.search_string,
            contains=record.contains,
            data_length=len(record.data),
        )
        return record


def sniff_didi(path: Union[str, Path]) -> SniffResult:
    """Read only the header: search string and contains flag."""
    with log_context(path=os.fspath(path)), track_operation("sniff"):
        with DidiReader(path) as reader:
            result = reader.sniff()
        READS.labels(mode="sniff").inc()
        logger.debug(
            "didi_sniffed",
            search_string=result.search_string,
            contains=result.contains,
        )
        return result


__all__ = ["DidiReader", "read_didi", "sniff_didi"]
