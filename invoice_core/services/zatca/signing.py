"""Signing material for QR tags 6-9 (hash, signature, public key, cert signature)."""

from __future__ import annotations

import base64
import hashlib
import logging
from pathlib import Path
from typing import Callable, Protocol

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from invoice_core.core.config import Settings

logger = logging.getLogger(__name__)

# Fixed placeholder blocks; not derived from invoice content
PLACEHOLDER_XML_HASH_B64 = (
    "NWU3OThkYTk4YTMzN2Y5ZDU3MTQwM2FkYWFhY2I3MDU3N2ZjMGU2YjM4MDI2YmMwN2Q1Y2E4ODc4ZDZjMjU2NQ=="
)
PLACEHOLDER_SIGNATURE_B64 = (
    "MEQCIE3QRrvp4P8C5eTRbQUK1pS2zBv4NaRaODf2V5c+n4yDAiAhAMuB+I2kYSPVzX2w56tnl5jK1ySFyCD+cjO8Q+c2PA=="
)
PLACEHOLDER_PUBLIC_KEY_B64 = (
    "MFkwEwYHKoZIzj0CAQYIKoZIzj0DAQcDQgAEU6G0iBS4D48AMs7nGY2a6g3vQdFw+3Q+s9lPzVPxRODP"
    "Lv7flz5rDs2Pwb2aeVIzPMNL2dJNv/MflR+7dB41eQ=="
)
PLACEHOLDER_CERTIFICATE_SIGNATURE_B64 = (
    "MEQCIAYga533L53xhED3T5tS4aUn7c5moIM3tT5i+5T0NKT/AiA11jYjB2qK2RoJGzU6bvrslk/3QcZtV2p1w+arBv4zEA=="
)


class InvoiceSigner(Protocol):
    """Source of the cryptographic QR fields.

    *content* is the encoded TLV records of tags 1-5.
    """

    def invoice_hash(self, content: bytes) -> bytes: ...

    def sign(self, content: bytes) -> bytes: ...

    def public_key(self) -> bytes: ...

    def certificate_signature(self) -> bytes: ...


class PlaceholderSigner:
    """Returns the fixed placeholder blocks regardless of content."""

    def __init__(self, decode: Callable[[str], bytes] = base64.b64decode) -> None:
        self._xml_hash = decode(PLACEHOLDER_XML_HASH_B64)
        self._signature = decode(PLACEHOLDER_SIGNATURE_B64)
        self._public_key = decode(PLACEHOLDER_PUBLIC_KEY_B64)
        self._certificate_signature = decode(PLACEHOLDER_CERTIFICATE_SIGNATURE_B64)

    def invoice_hash(self, content: bytes) -> bytes:
        return self._xml_hash

    def sign(self, content: bytes) -> bytes:
        return self._signature

    def public_key(self) -> bytes:
        return self._public_key

    def certificate_signature(self) -> bytes:
        return self._certificate_signature


class CertificateSigner:
    """ECDSA signer backed by a PEM private key and its X.509 certificate."""

    def __init__(self, private_key_pem: bytes, certificate_pem: bytes) -> None:
        key = serialization.load_pem_private_key(private_key_pem, password=None)
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise ValueError("ZATCA signing key must be an EC private key")
        self._private_key = key
        self._certificate = x509.load_pem_x509_certificate(certificate_pem)

    def invoice_hash(self, content: bytes) -> bytes:
        """Hex SHA-256 of the content, as ASCII bytes."""
        return hashlib.sha256(content).hexdigest().encode("ascii")

    def sign(self, content: bytes) -> bytes:
        """DER-encoded ECDSA-SHA256 signature. For QR tag 7."""
        return self._private_key.sign(content, ec.ECDSA(hashes.SHA256()))

    def public_key(self) -> bytes:
        """SubjectPublicKeyInfo DER of the certificate key. For QR tag 8."""
        return self._certificate.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def certificate_signature(self) -> bytes:
        """The CA's own signature on the certificate. For QR tag 9."""
        return self._certificate.signature


def get_signer(settings: Settings) -> InvoiceSigner:
    """Certificate signer when key and certificate are configured, else placeholder."""
    key_path = settings.ZATCA_PRIVATE_KEY_PATH
    cert_path = settings.ZATCA_CERTIFICATE_PATH
    if key_path and cert_path:
        logger.info("Using certificate signer from %s", cert_path)
        return CertificateSigner(
            Path(key_path).read_bytes(),
            Path(cert_path).read_bytes(),
        )
    logger.info("ZATCA signing material not configured, using placeholder signer")
    return PlaceholderSigner()
