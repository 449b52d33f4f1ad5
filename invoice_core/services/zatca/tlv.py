"""Tag-Length-Value record encoding for ZATCA QR payloads."""

from __future__ import annotations

import logging
import struct
from typing import Callable

logger = logging.getLogger(__name__)

# Length is carried in a single byte
MAX_VALUE_LENGTH = 255


class FieldTooLargeError(ValueError):
    """TLV value does not fit in a 1-byte length field."""

    def __init__(self, tag: int, length: int) -> None:
        self.tag = tag
        self.length = length
        super().__init__(
            f"TLV value too long for tag {tag}: {length} bytes (max {MAX_VALUE_LENGTH})"
        )


def utf8(text: str) -> bytes:
    return text.encode("utf-8")


def encode_tlv(
    tag: int,
    value: bytes | str,
    encode_text: Callable[[str], bytes] = utf8,
) -> bytes:
    """Encode a single TLV record: 1-byte tag, 1-byte length, value bytes.

    Text values are converted with *encode_text* first, so the length byte
    counts bytes rather than characters.
    """
    if not 1 <= tag <= 255:
        raise ValueError(f"TLV tag out of range: {tag} (must be 1-255)")
    data = encode_text(value) if isinstance(value, str) else bytes(value)
    length = len(data)
    if length > MAX_VALUE_LENGTH:
        logger.warning("Rejected TLV tag %d: %d bytes", tag, length)
        raise FieldTooLargeError(tag, length)
    return struct.pack("BB", tag, length) + data
