"""ZATCA QR payload: 9 TLV tags, concatenated and Base64-encoded."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Callable

from invoice_core.services.zatca.signing import InvoiceSigner, PlaceholderSigner
from invoice_core.services.zatca.tlv import encode_tlv, utf8

logger = logging.getLogger(__name__)


class InvalidTimestampError(ValueError):
    """Timestamp cannot be parsed into a valid instant."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid ISO-8601 timestamp: {value!r}")


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@dataclass(frozen=True)
class PayloadCodec:
    """Text encoder for tags 1-5 and the wrapper applied to the joined records."""

    encode_text: Callable[[str], bytes] = utf8
    wrap: Callable[[bytes], str] = _b64


DEFAULT_CODEC = PayloadCodec()


@dataclass(frozen=True)
class QrPayloadData:
    seller_name: str
    seller_vat_no: str
    timestamp: str | date
    invoice_total: str
    vat_total: str


def normalize_timestamp(value: str | date) -> str:
    """Render *value* as a full UTC instant, e.g. ``2026-02-12T14:30:00.000Z``.

    Date-only values mean midnight; values without an offset are taken as UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time())
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidTimestampError(value) from exc
    else:
        raise InvalidTimestampError(value)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        dt = dt.astimezone(timezone.utc)
    except OverflowError as exc:
        raise InvalidTimestampError(value) from exc
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_qr_payload(
    meta: QrPayloadData,
    signer: InvoiceSigner | None = None,
    codec: PayloadCodec | None = None,
) -> str:
    """Build the Base64 QR payload for an invoice.

    Tag numbering and order are fixed by ZATCA and read by third-party scanners.

    Tags 1-5 are text (seller name, VAT number, timestamp, total incl. VAT,
    VAT total). Tags 6-9 are raw bytes from *signer*, which receives the
    encoded tags 1-5 as the content to hash and sign.

    Raises:
        InvalidTimestampError: timestamp is not a valid ISO-8601 instant.
        FieldTooLargeError: any field exceeds 255 bytes.
    """
    signer = signer or PlaceholderSigner()
    codec = codec or DEFAULT_CODEC

    timestamp = normalize_timestamp(meta.timestamp)
    content = b"".join([
        encode_tlv(1, meta.seller_name, codec.encode_text),
        encode_tlv(2, meta.seller_vat_no, codec.encode_text),
        encode_tlv(3, timestamp, codec.encode_text),
        encode_tlv(4, meta.invoice_total, codec.encode_text),
        encode_tlv(5, meta.vat_total, codec.encode_text),
    ])
    tlv_data = content + b"".join([
        encode_tlv(6, signer.invoice_hash(content)),
        encode_tlv(7, signer.sign(content)),
        encode_tlv(8, signer.public_key()),
        encode_tlv(9, signer.certificate_signature()),
    ])

    logger.debug("Built QR payload: %d TLV bytes, timestamp %s", len(tlv_data), timestamp)
    return codec.wrap(tlv_data)
