"""Pydantic schemas for form input and dashboard view models."""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ---------------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------------

class Revenue(BaseModel):
    month: str
    revenue: int


class LatestInvoice(BaseModel):
    id: uuid.UUID
    name: str
    image_url: str
    email: str
    amount: str  # formatted currency


class CardData(BaseModel):
    number_of_customers: int = 0
    number_of_invoices: int = 0
    total_paid_invoices: str = "$0.00"
    total_pending_invoices: str = "$0.00"


class Overview(BaseModel):
    cards: CardData
    latest_invoices: list[LatestInvoice]
    revenue: list[Revenue]


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------

class InvoicesTableRow(BaseModel):
    id: uuid.UUID
    amount: int  # cents
    date: dt.date
    status: str
    name: str
    email: str
    image_url: str


class InvoicesPage(BaseModel):
    invoices: list[InvoicesTableRow]
    current_page: int
    total_pages: int


class InvoiceForm(BaseModel):
    id: uuid.UUID
    customer_id: uuid.UUID
    amount: float  # dollars
    status: str


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------

class CustomerField(BaseModel):
    id: uuid.UUID
    name: str


class CustomersTableRow(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    image_url: str
    total_invoices: int = 0
    total_pending: str = "$0.00"
    total_paid: str = "$0.00"


class InvoiceEdit(BaseModel):
    invoice: InvoiceForm
    customers: list[CustomerField]


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class User(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    password: str  # bcrypt hash


class SessionUser(BaseModel):
    id: str
    name: str
    email: str


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------

class InvoiceFormInput(BaseModel):
    """Fields posted by the create / edit invoice forms."""

    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: float = Field(gt=0, allow_inf_nan=False)
    status: Literal["pending", "paid"]


# Messages shown next to each form field, keyed by the form's field names.
FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


class State(BaseModel):
    """What a failed form submission hands back to the form."""

    errors: dict[str, list[str]] = Field(default_factory=dict)
    message: Optional[str] = None


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)