"""Admin token check used by the frontend before showing admin controls."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from marketplace.core.security import require_admin

router = APIRouter()


@router.post(
    "/verify",
    summary="Check an admin token",
    dependencies=[Depends(require_admin)],
)
def verify_admin_token() -> dict[str, bool]:
    """Return 200 when the presented token is accepted, 403 otherwise."""
    return {"authorized": True}
