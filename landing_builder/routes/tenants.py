"""
Tenant Routes

POST   /api/v1/tenants                  → register tenant
GET    /api/v1/tenants/id/{tenant_id}   → get tenant by id
GET    /api/v1/tenants/{subdomain}      → get tenant by subdomain
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.database import get_db
from landing_builder.exceptions import TenantNotFoundError
from landing_builder.schemas.tenant import TenantCreate, TenantResponse
from landing_builder.services.tenant_service import create_tenant, get_tenant_by_id, require_tenant_by_subdomain

router = APIRouter(tags=["Tenants"])


@router.post("/", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant_route(
    payload: TenantCreate,
    db: AsyncSession = Depends(get_db),
) -> TenantResponse:
    """Register a new tenant under a unique subdomain."""
    tenant = await create_tenant(
        subdomain=payload.subdomain,
        name=payload.name,
        email=payload.email,
        db=db,
        custom_domain=payload.custom_domain,
    )
    return TenantResponse.model_validate(tenant)


@router.get("/{subdomain}", response_model=TenantResponse)
async def get_tenant_route(
    subdomain: str,
    db: AsyncSession = Depends(get_db),
) -> TenantResponse:
    tenant = await require_tenant_by_subdomain(subdomain, db)
    return TenantResponse.model_validate(tenant)


@router.get("/id/{tenant_id}", response_model=TenantResponse)
async def get_tenant_by_id_route(
    tenant_id: str,
    db: AsyncSession = Depends(get_db),
) -> TenantResponse:
    tenant = await get_tenant_by_id(tenant_id, db)
    if tenant is None:
        raise TenantNotFoundError(message=f"Tenant not found with ID: {tenant_id}")
    return TenantResponse.model_validate(tenant)
