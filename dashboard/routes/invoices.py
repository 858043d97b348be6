"""Invoice endpoints -- searchable listing, edit form data, create / edit / delete."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from dashboard import actions
from dashboard.data import (
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)
from dashboard.database import gather_queries
from dashboard.routes import DASHBOARD_DEPENDENCIES
from dashboard.schemas import InvoiceEdit, InvoicesPage, State

router = APIRouter(prefix="/dashboard/invoices", tags=["invoices"], dependencies=DASHBOARD_DEPENDENCIES)


def _form_response(result):
    if isinstance(result, State):
        return JSONResponse(result.model_dump(), status_code=422)
    return result


@router.get("", response_model=InvoicesPage)
async def list_invoices(
    query: str = Query(default=""),
    page: int = Query(default=1, ge=1),
):
    invoices, total_pages = await gather_queries(
        fetch_filtered_invoices(query, page),
        fetch_invoices_pages(query),
    )
    return InvoicesPage(invoices=invoices, current_page=page, total_pages=total_pages)


@router.post("/create")
async def create(request: Request):
    form = await request.form()
    return _form_response(await actions.create_invoice(form))


@router.get("/{invoice_id}/edit", response_model=InvoiceEdit)
async def edit_form(invoice_id: str):
    invoice, customers = await gather_queries(
        fetch_invoice_by_id(invoice_id),
        fetch_customers(),
    )
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return InvoiceEdit(invoice=invoice, customers=customers)


@router.post("/{invoice_id}/edit")
async def edit(invoice_id: str, request: Request):
    form = await request.form()
    return _form_response(await actions.update_invoice(invoice_id, form))


@router.post("/{invoice_id}/delete")
async def delete(invoice_id: str):
    return await actions.delete_invoice(invoice_id)
