"""Invoice totals and footer: grand total in words plus the ZATCA QR payload."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from invoice_core.core.config import settings
from invoice_core.schemas.invoice import (
    InvoiceDocument,
    InvoiceFooterOut,
    InvoiceItem,
    InvoiceTotalsOut,
)
from invoice_core.services.amount_words import amount_in_words_caption
from invoice_core.services.zatca.qr_code import QrPayloadData, build_qr_payload
from invoice_core.services.zatca.signing import InvoiceSigner, get_signer

logger = logging.getLogger(__name__)

Q2 = Decimal("0.01")


def compute_totals(
    items: Iterable[InvoiceItem],
    vat_rate: Decimal | None = None,
) -> InvoiceTotalsOut:
    """Subtotal and VAT rounded half-up to 0.01; grand total is their sum."""
    rate = settings.VAT_RATE if vat_rate is None else vat_rate
    taxable = sum((item.quantity * item.rate for item in items), Decimal("0"))
    taxable = taxable.quantize(Q2, rounding=ROUND_HALF_UP)
    tax = (taxable * rate / Decimal("100")).quantize(Q2, rounding=ROUND_HALF_UP)
    return InvoiceTotalsOut(total_taxable=taxable, total_tax=tax, total_net=taxable + tax)


def build_invoice_footer(
    invoice: InvoiceDocument,
    signer: InvoiceSigner | None = None,
) -> InvoiceFooterOut:
    """Totals, QR payload and amount-in-words caption for *invoice*.

    QR tag 4 carries the grand total including VAT; tag 5 the VAT total.
    """
    totals = compute_totals(invoice.items)
    payload = build_qr_payload(
        QrPayloadData(
            seller_name=invoice.seller_name,
            seller_vat_no=invoice.seller_vat_no,
            timestamp=invoice.invoice_date,
            invoice_total=f"{totals.total_net:.2f}",
            vat_total=f"{totals.total_tax:.2f}",
        ),
        signer=signer or get_signer(settings),
    )
    logger.debug(
        "Footer for invoice %s: net=%s vat=%s",
        invoice.invoice_no, totals.total_net, totals.total_tax,
    )
    return InvoiceFooterOut(
        totals=totals,
        qr_payload=payload,
        amount_in_words=amount_in_words_caption(totals.total_net),
    )
