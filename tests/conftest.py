"""Shared test fixtures.

Provides a test-only TLV decoder for inspecting built payloads and a
self-signed EC certificate for exercising the certificate signer.
"""

from __future__ import annotations

import base64
from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from invoice_core.services.zatca.qr_code import QrPayloadData


def _decode_tlv(payload: str) -> list[tuple[int, bytes]]:
    """Split a Base64 payload into (tag, value) pairs, 1-byte tag and 1-byte length."""
    raw = base64.b64decode(payload, validate=True)
    fields: list[tuple[int, bytes]] = []
    pos = 0
    while pos < len(raw):
        tag = raw[pos]
        length = raw[pos + 1]
        value = raw[pos + 2 : pos + 2 + length]
        assert len(value) == length, "truncated TLV record"
        fields.append((tag, value))
        pos += 2 + length
    return fields


@pytest.fixture()
def decode_tlv() -> Callable[[str], list[tuple[int, bytes]]]:
    return _decode_tlv


@pytest.fixture()
def sample_meta() -> QrPayloadData:
    return QrPayloadData(
        seller_name="Tuwaiq Outdoor",
        seller_vat_no="399999999999993",
        timestamp="2026-02-12T14:30:00Z",
        invoice_total="400.00",
        vat_total="52.18",
    )


@pytest.fixture(scope="session")
def ec_key_and_cert() -> tuple[bytes, bytes]:
    """(private_key_pem, certificate_pem) for a self-signed secp256k1 certificate."""
    key = ec.generate_private_key(ec.SECP256K1())
    name = x509.Name([
        x509.NameAttribute(NameOID.COUNTRY_NAME, "SA"),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Tuwaiq Outdoor"),
        x509.NameAttribute(NameOID.COMMON_NAME, "EGS1-886431145"),
    ])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=365))
        .sign(key, hashes.SHA256())
    )
    key_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return key_pem, cert.public_bytes(serialization.Encoding.PEM)
