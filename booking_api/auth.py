# booking_api/auth.py
"""
Tenant authentication via the per-tenant opaque key in `x-api-key`.
"""

import logging

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .database import get_db
from .errors import AuthError
from .models.generated import TenantApiKeys, Tenants

logger = logging.getLogger(__name__)


def get_current_tenant(
    x_api_key: str | None = Header(None),
    db: Session = Depends(get_db),
) -> Tenants:
    if not x_api_key:
        logger.warning("Request without x-api-key header")
        raise AuthError("Missing API key", code="MISSING_API_KEY")

    tenant = (
        db.query(Tenants)
        .join(TenantApiKeys, TenantApiKeys.tenant_id == Tenants.id)
        .filter(TenantApiKeys.api_key == x_api_key)
        .first()
    )
    if tenant is None:
        logger.warning("Invalid API key")
        raise AuthError("Invalid API key", code="INVALID_API_KEY")

    if tenant.status != "active":
        logger.warning(f"Tenant {tenant.id} is not active ({tenant.status})")
        raise AuthError("Account is not active", code="ACCOUNT_INACTIVE", status_code=403)

    return tenant
