from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class BusinessProfileBase(BaseModel):
    business_name: str = Field(..., min_length=2)
    sector: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    employee_count: int = Field(..., ge=0)
    registration_type: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None


class BusinessProfileCreate(BusinessProfileBase):
    pass


class BusinessProfileUpdate(BaseModel):
    business_name: Optional[str] = Field(None, min_length=2)
    sector: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)
    employee_count: Optional[int] = Field(None, ge=0)
    registration_type: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None


class BusinessProfile(BusinessProfileBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
