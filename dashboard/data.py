"""
Dashboard data fetches.

Each fetch issues its own query through ``query_database`` (one pooled
connection per query), maps rows to view models and turns any database failure
into a ``DatabaseError`` carrying a message the UI can show.
"""

from __future__ import annotations

import asyncio
import logging
import math
import uuid
from typing import Optional

from sqlalchemy import String, case, cast, func, or_, select

from dashboard import config_env
from dashboard.database import DatabaseError, gather_queries, query_database
from dashboard.models import Customer, Invoice, User as UserRow
from dashboard.schemas import (
    CardData,
    CustomerField,
    CustomersTableRow,
    InvoiceForm,
    InvoicesTableRow,
    LatestInvoice,
    Revenue,
    User,
)
from dashboard.utils import format_currency

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 5


def _search_pattern(query: str) -> str:
    return f"%{query or ''}%"


def _invoice_search(pattern: str):
    """WHERE clause shared by the invoice listing and its page count."""
    return or_(
        Customer.name.ilike(pattern),
        Customer.email.ilike(pattern),
        cast(Invoice.amount, String).ilike(pattern),
        cast(Invoice.date, String).ilike(pattern),
        Invoice.status.ilike(pattern),
    )


def _sum_by_status(status: str):
    return func.sum(case((Invoice.status == status, Invoice.amount), else_=0))


async def _demo_delay():
    if config_env.DEMO_FETCH_DELAY > 0:
        await asyncio.sleep(config_env.DEMO_FETCH_DELAY)


async def fetch_revenue() -> list[Revenue]:
    try:
        logger.info("Fetching revenue data...")
        await _demo_delay()

        rows = await query_database("SELECT month, revenue FROM revenue")

        logger.info("Data fetch completed after %s seconds.", config_env.DEMO_FETCH_DELAY)
        return [Revenue(**row) for row in rows]
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to fetch revenue data.") from e


async def fetch_latest_invoices() -> list[LatestInvoice]:
    await _demo_delay()

    stmt = (
        select(Invoice.amount, Customer.name, Customer.image_url, Customer.email, Invoice.id)
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc())
        .limit(5)
    )
    try:
        rows = await query_database(stmt)
        return [
            LatestInvoice(**{**row, "amount": format_currency(row["amount"])})
            for row in rows
        ]
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to fetch the latest invoices.") from e


async def fetch_card_data() -> CardData:
    invoice_count = select(func.count().label("count")).select_from(Invoice)
    customer_count = select(func.count().label("count")).select_from(Customer)
    invoice_status = select(
        _sum_by_status("paid").label("paid"),
        _sum_by_status("pending").label("pending"),
    )
    try:
        invoices, customers, status = await gather_queries(
            query_database(invoice_count),
            query_database(customer_count),
            query_database(invoice_status),
        )
        return CardData(
            number_of_customers=int(customers[0]["count"] or 0),
            number_of_invoices=int(invoices[0]["count"] or 0),
            total_paid_invoices=format_currency(status[0]["paid"] or 0),
            total_pending_invoices=format_currency(status[0]["pending"] or 0),
        )
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to fetch card data.") from e


async def fetch_filtered_invoices(query: str, current_page: int) -> list[InvoicesTableRow]:
    offset = (current_page - 1) * ITEMS_PER_PAGE
    stmt = (
        select(
            Invoice.id,
            Invoice.amount,
            Invoice.date,
            Invoice.status,
            Customer.name,
            Customer.email,
            Customer.image_url,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(_invoice_search(_search_pattern(query)))
        .order_by(Invoice.date.desc())
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
    )
    try:
        rows = await query_database(stmt)
        return [InvoicesTableRow(**row) for row in rows]
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to fetch filtered invoices.") from e


async def fetch_invoices_pages(query: str) -> int:
    stmt = (
        select(func.count().label("count"))
        .select_from(Invoice)
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(_invoice_search(_search_pattern(query)))
    )
    try:
        rows = await query_database(stmt)
        return math.ceil(int(rows[0]["count"]) / ITEMS_PER_PAGE)
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to fetch total number of invoice pages.") from e


async def fetch_invoice_by_id(id: str) -> Optional[InvoiceForm]:
    try:
        invoice_id = uuid.UUID(str(id))
    except ValueError:
        return None

    stmt = (
        select(Invoice.id, Invoice.customer_id, Invoice.amount, Invoice.status)
        .where(Invoice.id == invoice_id)
    )
    try:
        rows = await query_database(stmt)
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to fetch invoice by ID.") from e

    if not rows:
        return None
    row = rows[0]
    # stored as cents
    return InvoiceForm(**{**row, "amount": row["amount"] / 100})


async def fetch_customers() -> list[CustomerField]:
    stmt = select(Customer.id, Customer.name).order_by(Customer.name.asc())
    try:
        rows = await query_database(stmt)
        return [CustomerField(**row) for row in rows]
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to fetch all customers.") from e


async def fetch_filtered_customers(query: str) -> list[CustomersTableRow]:
    pattern = _search_pattern(query)
    stmt = (
        select(
            Customer.id,
            Customer.name,
            Customer.email,
            Customer.image_url,
            func.count(Invoice.id).label("total_invoices"),
            _sum_by_status("pending").label("total_pending"),
            _sum_by_status("paid").label("total_paid"),
        )
        .outerjoin(Invoice, Customer.id == Invoice.customer_id)
        .where(or_(Customer.name.ilike(pattern), Customer.email.ilike(pattern)))
        .group_by(Customer.id, Customer.name, Customer.email, Customer.image_url)
        .order_by(Customer.name.asc())
    )
    try:
        rows = await query_database(stmt)
        return [
            CustomersTableRow(
                **{
                    **row,
                    "total_pending": format_currency(row["total_pending"]),
                    "total_paid": format_currency(row["total_paid"]),
                }
            )
            for row in rows
        ]
    except Exception as e:
        logger.error("Database Error: %s", e)
        raise DatabaseError("Failed to fetch filtered customers.") from e


async def get_user(email: str) -> Optional[User]:
    stmt = select(UserRow.id, UserRow.name, UserRow.email, UserRow.password).where(
        UserRow.email == email
    )
    try:
        rows = await query_database(stmt)
    except Exception as e:
        logger.error("Failed to fetch user: %s", e)
        raise DatabaseError("Failed to fetch user.") from e
    return User(**rows[0]) if rows else None
