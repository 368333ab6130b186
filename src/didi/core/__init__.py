"""DIDI core functionality."""

from .didi_reader import DidiReader, read_didi, sniff_didi
from .didi_writer import DidiWriter, write_didi
from .errors import (
    DidiError,
    InvalidEncodingError,
    InvalidFormatError,
    PayloadTooLargeError,
    SearchStringTooLongError,
    TruncatedHeaderError,
    UnsupportedVersionError,
)
from .models import DidiHeader, DidiRecord, DidiStats, SniffResult
from .rle import rle_decode, rle_encode

__all__ = [
    "DidiWriter",
    "DidiReader",
    "write_didi",
    "read_didi",
    "sniff_didi",
    "rle_encode",
    "rle_decode",
    "DidiHeader",
    "DidiRecord",
    "DidiStats",
    "SniffResult",
    "DidiError",
    "InvalidFormatError",
    "UnsupportedVersionError",
    "TruncatedHeaderError",
    "InvalidEncodingError",
    "SearchStringTooLongError",
    "PayloadTooLargeError",
]
