from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ─── Invoice Document ────────────────────────────────────────────────────────


class InvoiceItem(BaseModel):
    title: str
    description: str = ""
    title_arabic: str | None = None
    description_arabic: str | None = None
    quantity: Decimal = Field(ge=0)
    rate: Decimal = Field(ge=0)


class InvoiceDocument(BaseModel):
    seller_name: str
    seller_vat_no: str
    seller_address: str = ""
    invoice_no: str
    po_no: str = ""
    invoice_date: date | datetime
    buyer_name: str = ""
    buyer_vat_no: str = ""
    buyer_address: str = ""
    items: list[InvoiceItem] = Field(default_factory=list)


# ─── Footer Output ───────────────────────────────────────────────────────────


class InvoiceTotalsOut(BaseModel):
    total_taxable: Decimal
    total_tax: Decimal
    total_net: Decimal


class InvoiceFooterOut(BaseModel):
    totals: InvoiceTotalsOut
    qr_payload: str  # base64 encoded TLV
    amount_in_words: str
