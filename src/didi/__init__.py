"""DIDI - run-length-encoded container with a sniffable search header."""

from .core import (
    DidiError,
    DidiReader,
    DidiRecord,
    DidiWriter,
    InvalidEncodingError,
    InvalidFormatError,
    SearchStringTooLongError,
    SniffResult,
    read_didi,
    rle_decode,
    rle_encode,
    sniff_didi,
    write_didi,
)

__all__ = [
    "write_didi",
    "read_didi",
    "sniff_didi",
    "DidiWriter",
    "DidiReader",
    "DidiRecord",
    "SniffResult",
    "rle_encode",
    "rle_decode",
    "DidiError",
    "InvalidFormatError",
    "InvalidEncodingError",
    "SearchStringTooLongError",
]

__version__ = "1.0.0"
