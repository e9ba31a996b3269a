from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class TenantCreate(BaseModel):
    subdomain: str = Field(..., min_length=3, max_length=63, pattern=r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    custom_domain: str | None = Field(None, max_length=253)


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    subdomain: str
    name: str
    email: str
    status: str
    custom_domain: str | None
    created_at: datetime
    updated_at: datetime
