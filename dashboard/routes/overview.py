"""Overview endpoints -- cards, latest invoices, revenue chart."""

from __future__ import annotations

from fastapi import APIRouter

from dashboard.data import fetch_card_data, fetch_latest_invoices, fetch_revenue
from dashboard.database import gather_queries
from dashboard.routes import DASHBOARD_DEPENDENCIES
from dashboard.schemas import CardData, LatestInvoice, Overview, Revenue

router = APIRouter(prefix="/dashboard", tags=["overview"], dependencies=DASHBOARD_DEPENDENCIES)


@router.get("", response_model=Overview)
async def overview():
    cards, latest, revenue = await gather_queries(
        fetch_card_data(),
        fetch_latest_invoices(),
        fetch_revenue(),
    )
    return Overview(cards=cards, latest_invoices=latest, revenue=revenue)


@router.get("/cards", response_model=CardData)
async def cards():
    return await fetch_card_data()


@router.get("/latest-invoices", response_model=list[LatestInvoice])
async def latest_invoices():
    return await fetch_latest_invoices()


@router.get("/revenue", response_model=list[Revenue])
async def revenue():
    return await fetch_revenue()
