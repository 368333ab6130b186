"""
DIDI data models and structures.
"""

from dataclasses import dataclass
from typing import NamedTuple


@dataclass
class DidiHeader:
    """
    Parsed DIDI header.

    Attributes:
        magic: Magic bytes read from offset 0
        version: Format version byte
        search_string: Stored search string
        contains: Whether the search string occurred in the original data
        header_size: Total header length in bytes (payload starts here)
    """

    magic: bytes
    version: int
    search_string: str
    contains: bool
    header_size: int

    def validate(self):
        """Validate magic and version."""
        from didi.core.constants import MAGIC, SUPPORTED_VERSIONS
        from didi.core.errors import InvalidFormatError, UnsupportedVersionError

        if self.magic != MAGIC:
            raise InvalidFormatError(
                f"Invalid DIDI magic: {self.magic!r} (expected {MAGIC!r})"
            )
        if self.version not in SUPPORTED_VERSIONS:
            raise UnsupportedVersionError(
                f"Unsupported DIDI version: {self.version} "
                f"(supported: {sorted(SUPPORTED_VERSIONS)})"
            )

    def __repr__(self) -> str:
        return (
            f"DidiHeader(version={self.version}, "
            f"search_string={self.search_string!r}, "
            f"contains={self.contains}, "
            f"header_size={self.header_size})"
        )


class DidiRecord(NamedTuple):
    """Result of a full read: decoded data plus header metadata."""

    data: str
    search_string: str
    contains: bool


class SniffResult(NamedTuple):
    """Result of a sniff: header metadata only."""

    search_string: str
    contains: bool


@dataclass
class DidiStats:
    """
    Size statistics for a DIDI container.
    """

    file_size: int
    header_size: int
    payload_size: int

    @property
    def header_ratio(self) -> float:
        """Share of the file taken by the header."""
        if self.file_size == 0:
            return 0.0
        return self.header_size / self.file_size

    def __repr__(self) -> str:
        return (
            f"DidiStats(file={self._human_size(self.file_size)}, "
            f"header={self.header_size}B, "
            f"payload={self._human_size(self.payload_size)})"
        )

    @staticmethod
    def _human_size(size_bytes: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ["B", "KB", "MB", "GB", "TB"]:
            if size_bytes < 1024:
                return f"{size_bytes:.1f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.1f}PB"
