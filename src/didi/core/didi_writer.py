"""
DidiWriter: serializes one record into a DIDI container.
"""
from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Union

from didi.core.constants import (
    FLAG_STRUCT,
    HEADER_PREFIX_STRUCT,
    MAGIC,
    MAX_SEARCH_STRING_LENGTH,
    VERSION,
)
from didi.core.errors import InvalidEncodingError, SearchStringTooLongError
from didi.core.rle import rle_encode
from didi.monitoring.metrics import BYTES_WRITTEN, FILES_WRITTEN, track_operation
from didi.utils.logging import get_logger, log_context

logger = get_logger(__name__)


class DidiWriter:
    """
    Writes a DIDI container to a local path.

    Layout: magic(4) + version(1) + len(1) + search_string(len) + flag(1) + payload.
    An existing file at ``path`` is truncated and overwritten.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: Local file path for the container (e.g. "/tmp/example.didi")
        """
        self.path = os.fspath(path)

    @staticmethod
    def _encode_search_string(search_string: str) -> bytes:
        """
        Validate and encode the search string.

        Raises:
            TypeError: If search_string is not str
            SearchStringTooLongError: If it exceeds the uint8 length field
            InvalidEncodingError: If it holds lone surrogates
        """
        if not isinstance(search_string, str):
            raise TypeError("search_string must be str")

        try:
            raw = search_string.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidEncodingError(f"Search string is not encodable as UTF-8: {exc}") from exc
        if len(raw) > MAX_SEARCH_STRING_LENGTH:
            raise SearchStringTooLongError(
                f"Search string too long: {len(raw)} bytes (max {MAX_SEARCH_STRING_LENGTH})"
            )
        return raw

    @classmethod
    def serialize(cls, data: str, search_string: str) -> bytes:
        """
        Serialize a record to bytes. Pure: touches no files.

        The contains flag is computed over the original data, before encoding.
        """
        if not isinstance(data, str):
            raise TypeError("data must be str")

        search_bytes = cls._encode_search_string(search_string)
        contains = search_string in data
        try:
            payload = rle_encode(data).encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidEncodingError(f"Data is not encodable as UTF-8: {exc}") from exc

        out = io.BytesIO()
        out.write(HEADER_PREFIX_STRUCT.pack(MAGIC, VERSION, len(search_bytes)))
        out.write(search_bytes)
        out.write(FLAG_STRUCT.pack(int(contains)))
        out.write(payload)
        return out.getvalue()

    def write(self, data: str, search_string: str) -> int:
        """
        Write ``data`` with ``search_string`` metadata to the container path.

        Returns:
            Number of bytes written

        Raises:
            TypeError: If data or search_string is not str
            SearchStringTooLongError: Before the file is created or truncated
            InvalidEncodingError: If data or search_string holds lone surrogates
            OSError: If the path cannot be created or written
        """
        with log_context(path=self.path), track_operation("write"):
            # Validate everything before the target file is truncated
            blob = self.serialize(data, search_string)

            dir_path = os.path.dirname(self.path)
            if dir_path and not os.path.exists(dir_path):
                os.makedirs(dir_path, exist_ok=True)

            with open(self.path, "wb") as f:
                f.write(blob)

            FILES_WRITTEN.inc()
            BYTES_WRITTEN.inc(len(blob))
            logger.debug(
                "didi_written",
                search_string=search_string,
                bytes_written=len(blob),
                data_length=len(data),
            )
            return len(blob)


def write_didi(path: Union[str, Path], data: str, search_string: str) -> int:
    """Write a DIDI container. Returns the number of bytes written."""
    return DidiWriter(path).write(data, search_string)


__all__ = ["DidiWriter", "write_didi"]
