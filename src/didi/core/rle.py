"""
Run-length codec for DIDI payloads.

Every run is written as ``<character><digit>``. Runs longer than
MAX_RUN_LENGTH are split into several pairs, so a count is always exactly
one character and the text can be decoded two characters at a time.
Literal digits need no escaping: position decides whether a character is
a literal or a count.

    >>> rle_encode("aaabbcccc")
    'a3b2c4'
    >>> rle_decode("a3b2c4")
    'aaabbcccc'
"""
from __future__ import annotations

from didi.core.constants import MAX_RUN_LENGTH
from didi.core.errors import InvalidEncodingError

_DIGITS = frozenset("0123456789")


def _emit_run(parts: list[str], char: str, count: int) -> None:
    while count > MAX_RUN_LENGTH:
        parts.append(f"{char}{MAX_RUN_LENGTH}")
        count -= MAX_RUN_LENGTH
    parts.append(f"{char}{count}")


def rle_encode(text: str) -> str:
    """
    Encode text as character/count pairs.

    Args:
        text: Original data

    Returns:
        Encoded text, empty for empty input
    """
    if not text:
        return ""

    parts: list[str] = []
    prev = text[0]
    count = 1
    for char in text[1:]:
        if char == prev:
            count += 1
        else:
            _emit_run(parts, prev, count)
            prev = char
            count = 1
    _emit_run(parts, prev, count)
    return "".join(parts)


def rle_decode(encoded: str) -> str:
    """
    Decode character/count pairs back into the original text.

    Raises:
        InvalidEncodingError: If the text has odd length or a count
            position holds something other than an ASCII digit
    """
    if len(encoded) % 2:
        raise InvalidEncodingError(
            f"Invalid RLE payload: odd length {len(encoded)}"
        )

    parts: list[str] = []
    for pos in range(0, len(encoded), 2):
        char = encoded[pos]
        count = encoded[pos + 1]
        if count not in _DIGITS:
            raise InvalidEncodingError(
                f"Invalid RLE count {count!r} at offset {pos + 1}"
            )
        parts.append(char * int(count))
    return "".join(parts)


__all__ = ["rle_encode", "rle_decode"]
