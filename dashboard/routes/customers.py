"""Customer endpoints -- select options and the searchable customers table."""

from __future__ import annotations

from fastapi import APIRouter, Query

from dashboard.data import fetch_customers, fetch_filtered_customers
from dashboard.routes import DASHBOARD_DEPENDENCIES
from dashboard.schemas import CustomerField, CustomersTableRow

router = APIRouter(prefix="/dashboard/customers", tags=["customers"], dependencies=DASHBOARD_DEPENDENCIES)


@router.get("", response_model=list[CustomerField])
async def all_customers():
    return await fetch_customers()


@router.get("/filtered", response_model=list[CustomersTableRow])
async def filtered_customers(query: str = Query(default="")):
    return await fetch_filtered_customers(query)
