"""
Form handlers for the invoice pages and the login form.

Handlers take the submitted form (any mapping with ``.get``) and either return
a ``State`` describing what was wrong with the input, or a redirect response
once the write went through. Database failures raise ``DatabaseError``.
"""

from __future__ import annotations

import datetime as dt
import logging
import uuid
from typing import Any, Mapping, Optional, Union

from fastapi import Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy import delete, insert, update

from dashboard.auth import AuthError, sign_in
from dashboard.database import DatabaseError, query_database
from dashboard.models import Invoice
from dashboard.schemas import FIELD_MESSAGES, InvoiceFormInput, State

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"


def redirect(url: str) -> RedirectResponse:
    # 303 so the browser follows a POST with a GET
    return RedirectResponse(url, status_code=303)


def revalidate_path(response, path: str):
    """Make sure whatever renders ``path`` next is read fresh from the database."""
    response.headers["Cache-Control"] = "no-store"
    logger.debug("Revalidated %s", path)
    return response


def _field_errors(err: ValidationError) -> dict[str, list[str]]:
    aliases = {name: (f.alias or name) for name, f in InvoiceFormInput.model_fields.items()}
    errors: dict[str, list[str]] = {}
    for e in err.errors():
        field = str(e["loc"][0]) if e["loc"] else ""
        field = aliases.get(field, field)
        message = FIELD_MESSAGES.get(field, e["msg"])
        if message not in errors.setdefault(field, []):
            errors[field].append(message)
    return errors


def _validate(form: Mapping[str, Any]) -> InvoiceFormInput:
    return InvoiceFormInput.model_validate({
        "customerId": form.get("customerId"),
        "amount": form.get("amount"),
        "status": form.get("status"),
    })


def _to_cents(amount: float) -> int:
    return int(round(amount * 100))


async def create_invoice(form: Mapping[str, Any]) -> Union[State, RedirectResponse]:
    try:
        data = _validate(form)
    except ValidationError as e:
        # If form validation fails, return errors early. Otherwise, continue.
        return State(
            errors=_field_errors(e),
            message="Missing Fields. Failed to Create Invoice.",
        )

    amount_in_cents = _to_cents(data.amount)
    date = dt.datetime.now(dt.timezone.utc).date()
    logger.info(
        "Creating invoice: customer_id=%s amount_in_cents=%s status=%s date=%s",
        data.customer_id, amount_in_cents, data.status, date,
    )

    try:
        stmt = insert(Invoice).values(
            customer_id=uuid.UUID(data.customer_id),
            amount=amount_in_cents,
            status=data.status,
            date=date,
        )
        await query_database(stmt)
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to create invoice.") from e

    return revalidate_path(redirect(INVOICES_PATH), INVOICES_PATH)


async def update_invoice(id: str, form: Mapping[str, Any]) -> Union[State, RedirectResponse]:
    try:
        data = _validate(form)
    except ValidationError as e:
        return State(
            errors=_field_errors(e),
            message="Missing Fields. Failed to Update Invoice.",
        )

    amount_in_cents = _to_cents(data.amount)

    try:
        stmt = (
            update(Invoice)
            .where(Invoice.id == uuid.UUID(str(id)))
            .values(
                customer_id=uuid.UUID(data.customer_id),
                amount=amount_in_cents,
                status=data.status,
            )
        )
        await query_database(stmt)
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to update invoice.") from e

    return revalidate_path(redirect(INVOICES_PATH), INVOICES_PATH)


async def delete_invoice(id: str) -> RedirectResponse:
    try:
        await query_database(delete(Invoice).where(Invoice.id == uuid.UUID(str(id))))
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to delete invoice.") from e

    return revalidate_path(redirect(INVOICES_PATH), INVOICES_PATH)


async def authenticate(request: Request, form: Mapping[str, Any]) -> Union[str, RedirectResponse]:
    """Sign in with the posted email / password; returns an error message on failure."""
    try:
        await sign_in(request, form)
    except AuthError as error:
        if error.type == "CredentialsSignin":
            return "Invalid credentials."
        return "Something went wrong."

    return redirect(_redirect_target(form.get("redirectTo")))


def _redirect_target(value: Optional[str]) -> str:
    # only same-site dashboard paths
    if value and str(value).startswith("/dashboard"):
        return str(value)
    return "/dashboard"
