"""Exceptions raised by the DIDI codec."""


class DidiError(Exception):
    """Base class for all DIDI library errors."""


class InvalidFormatError(DidiError, ValueError):
    """File is not a well-formed DIDI container (bad magic, bad flag byte)."""


class UnsupportedVersionError(InvalidFormatError):
    """Container declares a format version this reader does not understand."""


class TruncatedHeaderError(InvalidFormatError):
    """File ends before the header it declares."""


class InvalidEncodingError(DidiError, ValueError):
    """Search string or payload bytes cannot be decoded."""


class SearchStringTooLongError(DidiError, ValueError):
    """Search string does not fit the single-byte length field."""


class PayloadTooLargeError(DidiError, ValueError):
    """Payload exceeds the configured limit for a full read."""


__all__ = [
    "DidiError",
    "InvalidFormatError",
    "UnsupportedVersionError",
    "TruncatedHeaderError",
    "InvalidEncodingError",
    "SearchStringTooLongError",
    "PayloadTooLargeError",
]
