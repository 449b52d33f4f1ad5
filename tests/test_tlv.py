"""Unit tests for TLV record encoding."""

from __future__ import annotations

import pytest

from invoice_core.services.zatca.tlv import (
    MAX_VALUE_LENGTH,
    FieldTooLargeError,
    encode_tlv,
)


class TestEncodeTlv:
    def test_text_value(self) -> None:
        assert encode_tlv(1, "abc") == b"\x01\x03abc"

    def test_bytes_value(self) -> None:
        assert encode_tlv(8, b"\x30\x00\xff") == b"\x08\x03\x30\x00\xff"

    def test_empty_value(self) -> None:
        assert encode_tlv(5, "") == b"\x05\x00"

    def test_length_counts_utf8_bytes_not_characters(self) -> None:
        name = "تواق للأنشطة الخارجية"
        record = encode_tlv(1, name)
        assert record[1] == len(name.encode("utf-8"))
        assert record[1] > len(name)
        assert record[2:].decode("utf-8") == name

    @pytest.mark.parametrize(
        "text",
        ["", "A", "399999999999993", "é" * 100, "€" * 85, "x" * MAX_VALUE_LENGTH],
    )
    def test_length_byte_matches_byte_length(self, text: str) -> None:
        record = encode_tlv(2, text)
        assert record[0] == 2
        assert record[1] == len(text.encode("utf-8"))
        assert len(record) == 2 + record[1]

    def test_max_length_accepted(self) -> None:
        record = encode_tlv(9, b"\x01" * 255)
        assert record[1] == 255

    def test_too_long_bytes_rejected(self) -> None:
        with pytest.raises(FieldTooLargeError) as exc_info:
            encode_tlv(7, b"\x00" * 256)
        assert exc_info.value.tag == 7
        assert exc_info.value.length == 256

    def test_too_long_multibyte_text_rejected(self) -> None:
        """128 Arabic letters are 256 UTF-8 bytes even though only 128 characters."""
        with pytest.raises(FieldTooLargeError) as exc_info:
            encode_tlv(1, "ش" * 128)
        assert exc_info.value.length == 256

    def test_field_too_large_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            encode_tlv(1, "x" * 300)

    @pytest.mark.parametrize("tag", [0, 256, -1])
    def test_tag_out_of_range(self, tag: int) -> None:
        with pytest.raises(ValueError, match="tag out of range"):
            encode_tlv(tag, "x")

    def test_injected_text_encoder(self) -> None:
        record = encode_tlv(1, "ab", encode_text=lambda s: s.encode("utf-16-be"))
        assert record == b"\x01\x04\x00a\x00b"
