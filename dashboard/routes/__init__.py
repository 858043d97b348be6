"""Dashboard API routers and the dependencies they share."""

from __future__ import annotations

from fastapi import Depends

from dashboard.auth import require_user

DASHBOARD_DEPENDENCIES = [Depends(require_user)]
