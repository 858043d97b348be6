"""Login / logout endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from dashboard import actions
from dashboard.auth import sign_out

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(request: Request):
    form = await request.form()
    result = await actions.authenticate(request, form)
    if isinstance(result, str):
        return JSONResponse({"message": result}, status_code=401)
    return result


@router.post("/logout")
async def logout(request: Request):
    sign_out(request)
    return actions.redirect("/login")
